"""LOTR API Package — The One API proxy and movie review service.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
