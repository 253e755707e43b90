"""Schemas — pydantic models crossing the adapter boundary (log events, envelope)."""
