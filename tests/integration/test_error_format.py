"""Integration tests for standardized error responses."""

import pytest

pytestmark = pytest.mark.integration


def _assert_standard_format(data):
    assert "type" in data
    assert "errors" in data
    assert isinstance(data["errors"], list)
    assert data["errors"]
    for error in data["errors"]:
        assert "code" in error
        assert "detail" in error
        assert "attr" in error


class TestStandardizedErrors:
    def test_validation_error_has_standard_format(self, api_client, id_tracker):
        response = api_client.post(
            "/api/v1/products/", {"name": "", "quantity": 0}, format="json"
        )
        assert response.status_code == 400
        data = response.json()
        _assert_standard_format(data)
        assert data["type"] == "validation_error"
        attrs = {error["attr"] for error in data["errors"]}
        assert {"name", "quantity", "price"} <= attrs

    def test_malformed_json_has_standard_format(self, api_client):
        response = api_client.post(
            "/api/v1/products/", data="{", content_type="application/json"
        )
        assert response.status_code == 400
        data = response.json()
        _assert_standard_format(data)
        assert data["errors"][0]["code"] == "parse_error"

    def test_not_found_has_standard_format(self, api_client):
        response = api_client.get("/api/v1/products/123456/")
        assert response.status_code == 404
        data = response.json()
        _assert_standard_format(data)
        assert data["type"] == "client_error"

    def test_method_not_allowed_has_standard_format(self, api_client):
        response = api_client.patch("/api/v1/products/123456/", {}, format="json")
        assert response.status_code == 405
        data = response.json()
        _assert_standard_format(data)
        assert data["errors"][0]["code"] == "method_not_allowed"
