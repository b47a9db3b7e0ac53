"""Pydantic Schemas: request validation at the API boundary.

Invariants:
    - Request bodies accept camelCase aliases and snake_case field names
    - Domain enums from core/domain_types.py used for closed vocabularies
"""
