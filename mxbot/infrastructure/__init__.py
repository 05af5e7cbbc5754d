"""Infrastructure Layer - file access and cross-cutting concerns.

Invariants:
    - Every OSError is mapped to a typed MxBotError before it leaves this layer
    - No config validation rules live here
"""
