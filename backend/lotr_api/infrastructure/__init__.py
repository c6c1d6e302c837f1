"""Infrastructure Layer — database, upstream HTTP client, logging, rate limiting.

Invariants:
    - Every IO failure is mapped before leaving this package
      (StoreError for the database, UPSTREAM LotrApiError for The One API)
    - No retries: one attempt per call

Design Decisions:
    - Pools and clients are built in the application lifespan and injected
"""
