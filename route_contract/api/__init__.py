"""API Layer — binds contracts to Starlette/FastAPI requests and error handlers.

Invariants:
    - Routes are registered by the integrator; this layer only builds endpoints
    - Every response body is an Envelope
"""
