"""
Integration tests for the identity lifecycle.

Tests the full flow through the application, with the registry built by
the app lifespan from settings and the console ledger.
"""

import logging
from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from src.api.main import app

AUTHORITY = "ST2TEST"
CREATOR = "ST1TEST"
STRANGER = "ST3FAKE"


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    """Create test client; entering the context runs the lifespan (fresh registry)."""
    with TestClient(app) as test_client:
        yield test_client


def caller(principal: str) -> dict:
    return {"X-Caller": principal}


class TestHealth:
    def test_health_check(self, client: TestClient) -> None:
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "identities": 0}


class TestIdentityLifecycle:
    """End-to-end identity lifecycle."""

    def test_full_registration_flow(
        self, client: TestClient, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Authority setup, registration with fee transfer in logs, lookups."""
        early = client.post(
            "/v1/identities",
            json={"pseudonym": "Creator1", "public_key": "pubkey123"},
            headers=caller(CREATOR),
        )
        assert early.status_code == 409
        assert early.json() == {"detail": "AUTHORITY_NOT_VERIFIED", "code": 110}

        assert client.post("/v1/authority", json={"principal": AUTHORITY}).status_code == 200

        with caplog.at_level(logging.INFO):
            response = client.post(
                "/v1/identities",
                json={
                    "pseudonym": "Creator1",
                    "public_key": "pubkey123",
                    "metadata": "Artist Profile",
                },
                headers=caller(CREATOR),
            )

        assert response.status_code == 201
        assert response.json() == {"id": 0}
        assert f"[TRANSFER] amount=500 from={CREATOR} to={AUTHORITY}" in caplog.text

        identity = client.get("/v1/identities/by-pseudonym/Creator1").json()
        assert identity["public_key"] == "pubkey123"
        assert identity["status"] is True
        assert client.get("/v1/identities/count").json() == {"count": 1}

    def test_owner_manages_identity(self, client: TestClient) -> None:
        client.post("/v1/authority", json={"principal": AUTHORITY})
        client.post(
            "/v1/identities",
            json={"pseudonym": "Creator1", "public_key": "pubkey123"},
            headers=caller(CREATOR),
        )

        stolen = client.put(
            "/v1/identities/0",
            json={"pseudonym": "Hijacked", "metadata": ""},
            headers=caller(STRANGER),
        )
        renamed = client.put(
            "/v1/identities/0",
            json={"pseudonym": "Creator2", "metadata": "Designer Profile"},
            headers=caller(CREATOR),
        )
        attribute = client.put(
            "/v1/identities/0/attributes/portfolio",
            json={"value": "https://example.com"},
            headers=caller(CREATOR),
        )
        recovery = client.put(
            "/v1/identities/0/recovery-key",
            json={"recovery_key": "backup-key"},
            headers=caller(CREATOR),
        )
        deactivated = client.post("/v1/identities/0/deactivate", headers=caller(CREATOR))

        assert stolen.status_code == 403
        assert [r.status_code for r in (renamed, attribute, recovery, deactivated)] == [
            200,
            200,
            200,
            200,
        ]
        identity = client.get("/v1/identities/0").json()
        assert identity["pseudonym"] == "Creator2"
        assert identity["metadata"] == "Designer Profile"
        assert identity["status"] is False
        assert client.get("/v1/pseudonyms/Creator1").json()["registered"] is False
        assert client.get("/v1/pseudonyms/Hijacked").json()["registered"] is False

    def test_capacity_enforced(self, client: TestClient) -> None:
        client.post("/v1/authority", json={"principal": AUTHORITY})
        client.put("/v1/config/max-identities", json={"value": 1}, headers=caller(AUTHORITY))

        first = client.post(
            "/v1/identities",
            json={"pseudonym": "A", "public_key": "k"},
            headers=caller(CREATOR),
        )
        second = client.post(
            "/v1/identities",
            json={"pseudonym": "B", "public_key": "k"},
            headers=caller(CREATOR),
        )

        assert first.status_code == 201
        assert second.status_code == 409
        assert second.json() == {"detail": "MAX_IDENTITIES_EXCEEDED", "code": 107}
