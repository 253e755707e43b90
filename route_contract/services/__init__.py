"""Services — the framework-independent validation-and-dispatch runner.

Invariants:
    - Nothing here imports FastAPI or Starlette; api/ binds the runner to requests
"""
