"""Core Layer - pure config parsing and resolution, no file IO.

Invariants:
    - No module in core/ imports from infrastructure/ or main
    - Functions take values and return values or raise MxBotError

Design Decisions:
    - Functional core separated from imperative shell: infrastructure/ reads files,
      core/ decides what they mean
"""
