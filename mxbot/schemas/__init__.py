"""Pydantic Schemas - on-disk shapes of config.toml and the state records.

Invariants:
    - Schemas validate at the file boundary only
    - Cross-field rules belong to core/, not to model validators here
"""
