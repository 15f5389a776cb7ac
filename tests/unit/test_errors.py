import pytest  # noqa: F401
from numbers_engine.utils.errors import ERROR_CODES, DomainError, UnknownPatternError, error_payload


def test_error_payload_basic():
    p = error_payload(ERROR_CODES["validation"], "Invalid data", details={
                      "field": "x"}, path="/api/v1/format")
    assert p["status"] == "error"
    assert p["error"]["code"] == ERROR_CODES["validation"]
    assert p["error"]["details"] == {"field": "x"}
    assert p["path"] == "/api/v1/format"


def test_error_payload_omits_empty_fields():
    p = error_payload(ERROR_CODES["internal"], "boom")
    assert "details" not in p["error"]
    assert "path" not in p


def test_unknown_pattern_error():
    exc = UnknownPatternError("nope", ["currency", "decimal"])
    assert isinstance(exc, DomainError)
    assert isinstance(exc, LookupError)
    assert exc.code == ERROR_CODES["unknown_pattern"]
    assert "nope" in exc.message
    assert exc.details == {"name": "nope", "available": ["currency", "decimal"]}


def test_unknown_pattern_error_without_catalog():
    assert UnknownPatternError("nope").details == {"name": "nope"}
