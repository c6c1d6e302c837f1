"""Sanitizer — strips all markup from untrusted free text before storage.

Invariants:
    - None or "" in → None out
    - Output contains no tags and no attributes; text content and line breaks survive
    - <script>/<style> contents are dropped, not kept as text
    - Total: malformed markup never raises, it degrades to best-effort text

Design Decisions:
    - nh3 with an empty tag allow-list (ammonia keeps the text of removed tags)
    - Output stays entity-escaped ("a < b" → "a &lt; b") so a stored comment
      cannot be re-parsed into markup by any client
"""

import nh3

_STRIP_CONTENT_TAGS = {"script", "style"}


def sanitize_html(dirty: str) -> str:
    """Remove every tag and attribute, keeping text content."""
    return nh3.clean(
        dirty,
        tags=set(),
        attributes={},
        clean_content_tags=_STRIP_CONTENT_TAGS,
        strip_comments=True,
        link_rel=None,
    )


def sanitize(text: str | None) -> str | None:
    """Sanitize user input text (removes markup, preserves line breaks)."""
    if not text:
        return None
    return sanitize_html(text).strip()
