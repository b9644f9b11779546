"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (user input, API responses)
    - Business rules (required fields, status values) stay in core/enforce_mesa.py

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
