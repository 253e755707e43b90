"""Core Layer — error taxonomy, validation messages, execution context.

Invariants:
    - No module in core/ imports from services/, api/, or infrastructure/
    - No IO: log events are buffered here, delivered by the service layer
"""
