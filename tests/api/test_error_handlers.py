"""Error Handlers — envelope shape for routes not built with contract()."""

import pytest
from httpx import ASGITransport, AsyncClient

from route_contract.core.errors import ContractError
from route_contract.main import create_app


@pytest.fixture
def app(settings):
    app = create_app(settings=settings)

    @app.get("/plain/{count}")
    async def plain(count: int, limit: int = 10):
        return {"count": count, "limit": limit}

    @app.get("/refuse")
    async def refuse():
        raise ContractError("not allowed", 403)

    @app.get("/explode")
    async def explode():
        raise RuntimeError("internal detail")

    return app


@pytest.fixture
async def client(app):
    # catch-all handler answers, then Starlette re-raises for the server to log
    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as c:
        yield c


async def test_request_validation_error_uses_envelope(client):
    resp = await client.get("/plain/abc", params={"limit": "many"})
    assert resp.status_code == 400
    body = resp.json()
    assert body["ok"] is False
    assert body["data"] is None
    assert body["errors"] == [
        "Validation error: Input should be a valid integer, "
        'unable to parse string as an integer at "path.count"',
        'Input should be a valid integer, unable to parse string as an integer at "query.limit"',
    ]


async def test_contract_error_outside_contract(client):
    resp = await client.get("/refuse")
    assert resp.status_code == 200
    assert resp.json() == {"ok": False, "data": None, "errors": ["not allowed"]}


async def test_unhandled_exception_is_generic(client):
    resp = await client.get("/explode")
    assert resp.status_code == 500
    assert resp.json() == {"ok": False, "data": None, "errors": ["Something went wrong"]}
    assert "internal detail" not in resp.text


async def test_plain_route_untouched(client):
    resp = await client.get("/plain/3")
    assert resp.json() == {"count": 3, "limit": 10}
