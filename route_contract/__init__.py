"""route_contract — contract-driven request adapter for FastAPI/Starlette.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)

Design Decisions:
    - Empty __init__.py: import from the owning module
      (route_contract.api.contract, route_contract.infrastructure.log_sink)
"""
