"""mxbot - configuration and persisted-state core of a Matrix chat bot.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)

Design Decisions:
    - Empty __init__.py: explicit imports only, no star exports
"""
