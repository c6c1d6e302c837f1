"""Services Layer — review business rules on top of the store protocol.

Invariants:
    - Services receive validated, typed values; they never read request state
    - Every StoreError leaving the store is rewrapped as a DATABASE LotrApiError
"""
