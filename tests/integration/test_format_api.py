"""HTTP contract tests for the formatting endpoints.

Requests go through the full middleware stack and exception handlers, so the
envelope shapes asserted here are the ones real clients see.
"""
import pytest


@pytest.mark.integration
@pytest.mark.asyncio
async def test_format_endpoint(async_client):
    resp = await async_client.post("/api/v1/format", json={"value": 1234.567})
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["status"] == "success"
    assert body["data"] == {"formatted": "1,234.57"}


@pytest.mark.integration
@pytest.mark.asyncio
async def test_format_endpoint_with_camel_case_config(async_client):
    payload = {"value": -1234.56, "config": {"currencySymbol": "$", "negativeBracketsTypeOnBlur": "(,)"}}
    resp = await async_client.post("/api/v1/format", json=payload)
    assert resp.status_code == 200, resp.text
    assert resp.json()["data"]["formatted"] == "($1,234.56)"


@pytest.mark.integration
@pytest.mark.asyncio
async def test_format_endpoint_echoes_unparsable_string(async_client):
    resp = await async_client.post("/api/v1/format", json={"value": "n/a"})
    assert resp.status_code == 200
    assert resp.json()["data"]["formatted"] == "n/a"


@pytest.mark.integration
@pytest.mark.asyncio
async def test_format_uses_settings_defaults(async_client, monkeypatch):
    monkeypatch.setenv("DEFAULT_DECIMAL_PLACES", "0")
    resp = await async_client.post("/api/v1/format", json={"value": 1234.567})
    assert resp.json()["data"]["formatted"] == "1,235"
    # Request config still wins over the settings base
    resp = await async_client.post("/api/v1/format", json={"value": 1234.567, "config": {"decimalPlaces": 1}})
    assert resp.json()["data"]["formatted"] == "1,234.6"


@pytest.mark.integration
@pytest.mark.asyncio
async def test_parse_endpoint(async_client):
    payload = {"value": "1.234,5 EUR", "config": {"digitGroupSeparator": ".", "decimalCharacter": ",", "suffixText": " EUR"}}
    resp = await async_client.post("/api/v1/parse", json=payload)
    assert resp.status_code == 200, resp.text
    assert resp.json()["data"] == {"value": 1234.5}

    resp = await async_client.post("/api/v1/parse", json={"value": "garbage"})
    assert resp.json()["data"] == {"value": 0.0}


@pytest.mark.integration
@pytest.mark.asyncio
async def test_round_endpoint(async_client):
    resp = await async_client.post("/api/v1/round", json={"value": 1.225, "decimals": 2, "mode": "B"})
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["data"] == {"value": 1.22}
    assert body["meta"] == {"mode": "B", "decimals": 2}


@pytest.mark.integration
@pytest.mark.asyncio
async def test_round_endpoint_defaults(async_client):
    resp = await async_client.post("/api/v1/round", json={"value": 2.5})
    assert resp.json()["data"] == {"value": 3.0}


@pytest.mark.integration
@pytest.mark.asyncio
async def test_round_endpoint_validation(async_client):
    resp = await async_client.post("/api/v1/round", json={"value": 1.5, "decimals": -1})
    assert resp.status_code == 422
    body = resp.json()
    assert body["status"] == "error"
    assert body["error"]["code"] == "VALIDATION_ERROR"
    assert body["path"] == "/api/v1/round"

    resp = await async_client.post("/api/v1/round", json={"value": 1.5, "mode": "X"})
    assert resp.status_code == 422


@pytest.mark.integration
@pytest.mark.asyncio
async def test_invalid_config_is_a_validation_error(async_client):
    resp = await async_client.post("/api/v1/format", json={"value": 1, "config": {"digitGroupSpacing": 0}})
    assert resp.status_code == 422
    assert resp.json()["error"]["code"] == "VALIDATION_ERROR"


@pytest.mark.integration
@pytest.mark.asyncio
async def test_pattern_endpoint(async_client):
    resp = await async_client.post(
        "/api/v1/pattern", json={"value": -1234.56, "pattern": "$#,##0.00;($#,##0.00)"}
    )
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["data"] == {"formatted": "($1,234.56)"}
    assert body["meta"] == {"pattern": "$#,##0.00;($#,##0.00)"}


@pytest.mark.integration
@pytest.mark.asyncio
async def test_pattern_catalog(async_client):
    resp = await async_client.get("/api/v1/patterns")
    assert resp.status_code == 200
    catalog = resp.json()["data"]
    assert catalog["accounting"] == "$#,##0.00;($#,##0.00)"
    assert catalog["scientific"] == "0.000E+00"
    assert len(catalog) == 20


@pytest.mark.integration
@pytest.mark.asyncio
async def test_named_pattern_endpoint(async_client):
    resp = await async_client.post("/api/v1/patterns/currencyEuro", json={"value": 1234.5})
    assert resp.status_code == 200, resp.text
    assert resp.json()["data"] == {"formatted": "€1,234.50"}


@pytest.mark.integration
@pytest.mark.asyncio
async def test_unknown_named_pattern_is_404(async_client):
    resp = await async_client.post("/api/v1/patterns/nope", json={"value": 1})
    assert resp.status_code == 404
    body = resp.json()
    assert body["status"] == "error"
    assert body["error"]["code"] == "UNKNOWN_PATTERN"
    assert body["error"]["details"]["name"] == "nope"
    assert "currency" in body["error"]["details"]["available"]
    assert body["path"] == "/api/v1/patterns/nope"


@pytest.mark.integration
@pytest.mark.asyncio
async def test_bulk_format_endpoint(async_client):
    resp = await async_client.post(
        "/api/v1/bulk/format", json={"values": [1, "2.5", "x"], "config": {"currencySymbol": "$"}}
    )
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["data"]["results"] == ["$1.00", "$2.50", "x"]
    assert body["meta"]["count"] == 3
    assert body["meta"]["total_time_ms"] >= 0


@pytest.mark.integration
@pytest.mark.asyncio
async def test_bulk_parse_endpoint(async_client):
    resp = await async_client.post("/api/v1/bulk/parse", json={"values": ["1,000.50", "", "-3"]})
    assert resp.status_code == 200, resp.text
    assert resp.json()["data"]["results"] == [1000.5, 0.0, -3.0]


@pytest.mark.integration
@pytest.mark.asyncio
async def test_specialized_endpoint(async_client):
    resp = await async_client.post(
        "/api/v1/specialized", json={"value": "1430", "options": {"kind": "time", "time_format": "12h"}}
    )
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["data"] == {"formatted": "02:30 PM"}
    assert body["meta"] == {"kind": "time"}


@pytest.mark.integration
@pytest.mark.asyncio
async def test_request_headers(async_client):
    resp = await async_client.get("/api/v1/system/health")
    assert resp.status_code == 200
    assert resp.json()["data"]["ok"] is True
    assert resp.headers["X-Request-ID"]
    assert resp.headers["X-Response-Time"].endswith("ms")

    resp = await async_client.get("/api/v1/system/health", headers={"X-Request-ID": "abc-123"})
    assert resp.headers["X-Request-ID"] == "abc-123"


@pytest.mark.integration
@pytest.mark.asyncio
async def test_unknown_route_uses_error_envelope(async_client):
    resp = await async_client.get("/api/v1/does-not-exist")
    assert resp.status_code == 404
    body = resp.json()
    assert body["error"]["code"] == "HTTP_ERROR"
