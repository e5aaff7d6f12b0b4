"""API tests for the /v1/tax endpoints."""

from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from taxcore.core.config import settings
from taxcore.main import app
from tests.conftest import DEFAULT_TENANT_ID

HEADERS = {"X-Tenant-Id": DEFAULT_TENANT_ID}

PROFILE = {
    "country": "DE",
    "regime": "STANDARD_VAT",
    "vat_id": "DE123456789",
    "currency": "EUR",
    "filing_frequency": "QUARTERLY",
    "effective_from": "2020-01-01T00:00:00Z",
}


@pytest.fixture
def client():
    """Create test client."""
    return TestClient(app)


@pytest.fixture
def with_profile(client: TestClient):
    response = client.put("/v1/tax/profile", json=PROFILE, headers=HEADERS)
    assert response.status_code == 200
    return response.json()


def _lock_body(**overrides):
    body = {
        "source_type": "INVOICE",
        "source_id": "inv-1",
        "document_date": "2025-06-01T00:00:00Z",
        "lines": [{"id": "l1", "net_amount_cents": 10000}],
    }
    body.update(overrides)
    return body


class TestRootEndpoint:
    def test_root(self, client: TestClient):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["app"] == settings.APP_NAME


class TestTenantHeader:
    def test_missing_header_uses_default_tenant(self, client: TestClient, with_profile):
        response = client.get("/v1/tax/profile")
        assert response.status_code == 200
        assert response.json()["profile"] is None

    def test_blank_header_rejected(self, client: TestClient):
        response = client.get("/v1/tax/profile", headers={"X-Tenant-Id": "  "})
        assert response.status_code == 400


class TestProfileAPI:
    def test_get_profile_none(self, client: TestClient):
        response = client.get("/v1/tax/profile", headers=HEADERS)
        assert response.status_code == 200
        assert response.json() == {"profile": None}

    def test_upsert_and_get_profile(self, client: TestClient, with_profile):
        assert with_profile["tenant_id"] == DEFAULT_TENANT_ID
        assert with_profile["regime"] == "STANDARD_VAT"

        response = client.get("/v1/tax/profile", headers=HEADERS)
        assert response.status_code == 200
        assert response.json()["profile"]["id"] == with_profile["id"]

    def test_upsert_same_effective_from_updates(self, client: TestClient, with_profile):
        response = client.put(
            "/v1/tax/profile",
            json={**PROFILE, "regime": "SMALL_BUSINESS"},
            headers=HEADERS,
        )
        assert response.status_code == 200
        assert response.json()["id"] == with_profile["id"]
        assert response.json()["regime"] == "SMALL_BUSINESS"

    def test_upsert_invalid_window(self, client: TestClient):
        response = client.put(
            "/v1/tax/profile",
            json={**PROFILE, "effective_to": "2019-01-01T00:00:00Z"},
            headers=HEADERS,
        )
        assert response.status_code == 422

    def test_upsert_window_with_mixed_offsets(self, client: TestClient):
        response = client.put(
            "/v1/tax/profile",
            json={
                **PROFILE,
                "effective_from": "2024-01-01T00:00:00Z",
                "effective_to": "2024-12-31T00:00:00",
            },
            headers=HEADERS,
        )
        assert response.status_code == 200

        response = client.put(
            "/v1/tax/profile",
            json={
                **PROFILE,
                "effective_from": "2024-06-01T00:00:00",
                "effective_to": "2024-01-01T00:00:00Z",
            },
            headers=HEADERS,
        )
        assert response.status_code == 422

    def test_list_profiles(self, client: TestClient, with_profile):
        client.put(
            "/v1/tax/profile",
            json={**PROFILE, "effective_from": "2026-01-01T00:00:00Z"},
            headers=HEADERS,
        )
        response = client.get("/v1/tax/profiles", headers=HEADERS)
        assert response.status_code == 200
        assert len(response.json()) == 2


class TestCodesAPI:
    def _create(self, client: TestClient, **overrides):
        body = {"code": "REDUCED_7", "kind": "REDUCED", "label": "Reduced 7%"}
        body.update(overrides)
        return client.post("/v1/tax/codes", json=body, headers=HEADERS)

    def test_create_and_list_codes(self, client: TestClient):
        response = self._create(client)
        assert response.status_code == 201
        data = response.json()
        assert data["code"] == "REDUCED_7"
        assert data["kind"] == "REDUCED"
        assert data["is_active"] is True

        listed = client.get("/v1/tax/codes", headers=HEADERS).json()
        assert [c["id"] for c in listed] == [data["id"]]

    def test_create_duplicate_code(self, client: TestClient):
        self._create(client)
        response = self._create(client)
        assert response.status_code == 409

    def test_create_invalid_kind(self, client: TestClient):
        response = self._create(client, kind="SUPER_REDUCED")
        assert response.status_code == 422

    def test_update_code(self, client: TestClient):
        code_id = self._create(client).json()["id"]
        response = client.patch(
            f"/v1/tax/codes/{code_id}", json={"is_active": False}, headers=HEADERS
        )
        assert response.status_code == 200
        assert response.json()["is_active"] is False

    def test_update_code_not_found(self, client: TestClient):
        response = client.patch(f"/v1/tax/codes/{uuid4()}", json={"label": "x"}, headers=HEADERS)
        assert response.status_code == 404

    def test_delete_code(self, client: TestClient):
        code_id = self._create(client).json()["id"]
        assert client.delete(f"/v1/tax/codes/{code_id}", headers=HEADERS).status_code == 204
        assert client.delete(f"/v1/tax/codes/{code_id}", headers=HEADERS).status_code == 404

    def test_create_and_list_rates(self, client: TestClient):
        code_id = self._create(client).json()["id"]
        response = client.post(
            f"/v1/tax/codes/{code_id}/rates",
            json={"rate_bps": 700, "effective_from": "2020-01-01T00:00:00Z"},
            headers=HEADERS,
        )
        assert response.status_code == 201
        rate = response.json()
        assert rate["tax_code_id"] == code_id
        assert rate["rate_bps"] == 700

        rates = client.get(f"/v1/tax/codes/{code_id}/rates", headers=HEADERS).json()
        assert [r["id"] for r in rates] == [rate["id"]]

    def test_create_rate_for_unknown_code(self, client: TestClient):
        response = client.post(
            f"/v1/tax/codes/{uuid4()}/rates",
            json={"rate_bps": 700, "effective_from": "2020-01-01T00:00:00Z"},
            headers=HEADERS,
        )
        assert response.status_code == 404

    def test_create_rate_out_of_range(self, client: TestClient):
        code_id = self._create(client).json()["id"]
        response = client.post(
            f"/v1/tax/codes/{code_id}/rates",
            json={"rate_bps": 10001, "effective_from": "2020-01-01T00:00:00Z"},
            headers=HEADERS,
        )
        assert response.status_code == 422

    def test_update_rate(self, client: TestClient):
        code_id = self._create(client).json()["id"]
        rate_id = client.post(
            f"/v1/tax/codes/{code_id}/rates",
            json={"rate_bps": 700, "effective_from": "2020-01-01T00:00:00Z"},
            headers=HEADERS,
        ).json()["id"]

        response = client.patch(f"/v1/tax/rates/{rate_id}", json={"rate_bps": 500}, headers=HEADERS)
        assert response.status_code == 200
        assert response.json()["rate_bps"] == 500

    def test_update_rate_not_found(self, client: TestClient):
        response = client.patch(f"/v1/tax/rates/{uuid4()}", json={"rate_bps": 5}, headers=HEADERS)
        assert response.status_code == 404


class TestCalculateAPI:
    def test_calculate(self, client: TestClient, with_profile):
        response = client.post(
            "/v1/tax/calculate",
            json={
                "document_date": "2025-06-01T00:00:00Z",
                "lines": [
                    {"id": "l1", "net_amount_cents": 10000},
                    {"id": "l2", "net_amount_cents": 1053},
                ],
            },
            headers=HEADERS,
        )
        assert response.status_code == 200
        breakdown = response.json()["breakdown"]
        assert breakdown["subtotal_amount_cents"] == 11053
        assert breakdown["tax_total_amount_cents"] == 2100
        assert breakdown["total_amount_cents"] == 13153
        assert breakdown["rounding_mode"] == "PER_LINE"
        assert breakdown["totals_by_kind"]["STANDARD"]["net_amount_cents"] == 11053
        assert [line["line_id"] for line in breakdown["lines"]] == ["l1", "l2"]

    def test_calculate_without_profile(self, client: TestClient):
        response = client.post(
            "/v1/tax/calculate",
            json={"document_date": "2025-06-01T00:00:00Z", "lines": [{"net_amount_cents": 100}]},
            headers=HEADERS,
        )
        assert response.status_code == 404
        assert "No active tax profile" in response.json()["detail"]

    def test_calculate_unknown_jurisdiction(self, client: TestClient, with_profile):
        response = client.post(
            "/v1/tax/calculate",
            json={
                "jurisdiction": "FR",
                "document_date": "2025-06-01T00:00:00Z",
                "lines": [{"net_amount_cents": 100}],
            },
            headers=HEADERS,
        )
        assert response.status_code == 404
        assert "FR" in response.json()["detail"]

    def test_calculate_requires_lines(self, client: TestClient, with_profile):
        response = client.post(
            "/v1/tax/calculate",
            json={"document_date": "2025-06-01T00:00:00Z", "lines": []},
            headers=HEADERS,
        )
        assert response.status_code == 422

    def test_calculate_rejects_negative_amount(self, client: TestClient, with_profile):
        response = client.post(
            "/v1/tax/calculate",
            json={"document_date": "2025-06-01T00:00:00Z", "lines": [{"net_amount_cents": -1}]},
            headers=HEADERS,
        )
        assert response.status_code == 422


class TestSnapshotsAPI:
    def test_lock_twice_returns_same_snapshot(self, client: TestClient, with_profile):
        first = client.post("/v1/tax/snapshots/lock", json=_lock_body(), headers=HEADERS)
        second = client.post(
            "/v1/tax/snapshots/lock",
            json=_lock_body(lines=[{"net_amount_cents": 50000}]),
            headers=HEADERS,
        )

        assert first.status_code == 201
        assert second.status_code == 201
        assert first.json()["snapshot"]["id"] == second.json()["snapshot"]["id"]
        assert second.json()["snapshot"]["total_amount_cents"] == 11900

    def test_lock_without_profile(self, client: TestClient):
        response = client.post("/v1/tax/snapshots/lock", json=_lock_body(), headers=HEADERS)
        assert response.status_code == 404

    def test_lock_invalid_source_type(self, client: TestClient, with_profile):
        response = client.post(
            "/v1/tax/snapshots/lock", json=_lock_body(source_type="ORDER"), headers=HEADERS
        )
        assert response.status_code == 422

    def test_get_snapshot(self, client: TestClient, with_profile):
        locked = client.post("/v1/tax/snapshots/lock", json=_lock_body(), headers=HEADERS).json()

        response = client.get("/v1/tax/snapshots/INVOICE/inv-1", headers=HEADERS)
        assert response.status_code == 200
        assert response.json()["id"] == locked["snapshot"]["id"]
        assert response.json()["jurisdiction"] == "DE"

    def test_get_snapshot_not_found(self, client: TestClient):
        response = client.get("/v1/tax/snapshots/INVOICE/missing", headers=HEADERS)
        assert response.status_code == 404

    def test_get_snapshot_other_tenant(self, client: TestClient, with_profile):
        client.post("/v1/tax/snapshots/lock", json=_lock_body(), headers=HEADERS)
        response = client.get(
            "/v1/tax/snapshots/INVOICE/inv-1", headers={"X-Tenant-Id": "tenant-2"}
        )
        assert response.status_code == 404

    def test_list_snapshots(self, client: TestClient, with_profile):
        client.post("/v1/tax/snapshots/lock", json=_lock_body(source_id="inv-1"), headers=HEADERS)
        client.post(
            "/v1/tax/snapshots/lock",
            json=_lock_body(source_type="EXPENSE", source_id="exp-1"),
            headers=HEADERS,
        )

        response = client.get(
            "/v1/tax/snapshots",
            params={"start": "2000-01-01T00:00:00Z", "end": "2100-01-01T00:00:00Z"},
            headers=HEADERS,
        )
        assert response.status_code == 200
        assert len(response.json()) == 2

        response = client.get(
            "/v1/tax/snapshots",
            params={
                "start": "2000-01-01T00:00:00Z",
                "end": "2100-01-01T00:00:00Z",
                "source_type": "EXPENSE",
            },
            headers=HEADERS,
        )
        assert [s["source_id"] for s in response.json()] == ["exp-1"]

    def test_list_snapshots_invalid_period(self, client: TestClient):
        response = client.get(
            "/v1/tax/snapshots",
            params={"start": "2025-01-01T00:00:00Z", "end": "2024-01-01T00:00:00Z"},
            headers=HEADERS,
        )
        assert response.status_code == 400

    def test_list_snapshots_with_mixed_offsets(self, client: TestClient, with_profile):
        client.post("/v1/tax/snapshots/lock", json=_lock_body(), headers=HEADERS)

        response = client.get(
            "/v1/tax/snapshots",
            params={"start": "2000-01-01T00:00:00Z", "end": "2100-01-01T00:00:00"},
            headers=HEADERS,
        )
        assert response.status_code == 200
        assert len(response.json()) == 1

        response = client.get(
            "/v1/tax/snapshots",
            params={"start": "2025-01-01T00:00:00", "end": "2024-01-01T00:00:00Z"},
            headers=HEADERS,
        )
        assert response.status_code == 400
