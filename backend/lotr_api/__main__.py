"""`python -m lotr_api` — validate configuration, then serve with uvicorn.

Exits with status 1, listing every offending variable, when the environment
is missing required values or holds malformed ones.
"""

import sys

import uvicorn
from pydantic import ValidationError

from lotr_api.config import get_settings


def main() -> int:
    try:
        settings = get_settings()
    except ValidationError as e:
        print("Invalid environment variables:", file=sys.stderr)
        for err in e.errors():
            field = ".".join(str(p) for p in err["loc"]).upper()
            print(f"  - {field}: {err['msg']}", file=sys.stderr)
        return 1

    uvicorn.run(
        "lotr_api.main:app",
        host="0.0.0.0",  # nosec B104
        port=settings.port,
        log_config=None,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
