"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (user input, upstream API responses)
    - Bounds come from core/domain_types

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
