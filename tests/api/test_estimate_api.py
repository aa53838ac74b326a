"""
Tests for the preVerificationGas HTTP endpoints.
"""

import pytest
from fastapi.testclient import TestClient

from preverification_gas.api.estimate import get_chain_provider
from preverification_gas.errors import ProviderError
from preverification_gas.main import app


@pytest.fixture
def client_for(make_provider):
    def _client(**provider_kwargs):
        provider = make_provider(**provider_kwargs)
        app.dependency_overrides[get_chain_provider] = lambda: provider
        return TestClient(app), provider

    yield _client
    app.dependency_overrides.clear()


def test_root():
    response = TestClient(app).get("/")

    assert response.status_code == 200
    assert response.json()["estimate"] == "/v1/pre-verification-gas"


def test_estimate_on_optimism(client_for, rpc_user_op):
    client, _ = client_for(chain_id=10, network_name="optimism", l1_base_fee=1000, gas_price=100)

    response = client.post("/v1/pre-verification-gas", json={"userOp": rpc_user_op})

    assert response.status_code == 200
    assert response.json() == {
        "preVerificationGas": 99108,
        "basePreVerificationGas": 42828,
        "l1Gas": 56280,
        "chainId": 10,
        "network": "optimism",
        "rollupFamily": "optimism",
    }
    assert response.headers["x-request-id"]


def test_estimate_with_overheads(client_for, rpc_user_op):
    client, _ = client_for(chain_id=1)

    response = client.post(
        "/v1/pre-verification-gas",
        json={"userOp": rpc_user_op, "overheads": {"bundleSize": 2}},
    )

    assert response.status_code == 200
    assert response.json()["preVerificationGas"] == 42828 - 10500
    assert response.json()["l1Gas"] == 0


def test_base_endpoint_needs_no_provider(rpc_user_op):
    response = TestClient(app).post("/v1/pre-verification-gas/base", json={"userOp": rpc_user_op})

    assert response.status_code == 200
    assert response.json() == {"preVerificationGas": 42828}


def test_missing_field_is_unprocessable(client_for, rpc_user_op):
    client, _ = client_for(chain_id=1)
    del rpc_user_op["callData"]

    response = client.post("/v1/pre-verification-gas", json={"userOp": rpc_user_op})

    assert response.status_code == 422
    assert "callData" in response.json()["detail"]


def test_bad_quantity_is_unprocessable(rpc_user_op):
    rpc_user_op["nonce"] = "0xnothex"

    response = TestClient(app).post("/v1/pre-verification-gas/base", json={"userOp": rpc_user_op})

    assert response.status_code == 422


def test_invalid_overheads_rejected(rpc_user_op):
    response = TestClient(app).post(
        "/v1/pre-verification-gas/base",
        json={"userOp": rpc_user_op, "overheads": {"bundleSize": 0}},
    )

    assert response.status_code == 422


def test_zero_l2_price_is_service_unavailable(client_for, rpc_user_op):
    client, _ = client_for(chain_id=42161, arb_prices=(0, 2000, 0, 0, 0, 0))

    response = client.post("/v1/pre-verification-gas", json={"userOp": rpc_user_op})

    assert response.status_code == 503


def test_provider_failure_is_bad_gateway(client_for, rpc_user_op):
    client, provider = client_for(chain_id=10)

    async def broken_gas_price():
        raise ProviderError("eth_gasPrice request failed")

    provider.get_gas_price = broken_gas_price

    response = client.post("/v1/pre-verification-gas", json={"userOp": rpc_user_op})

    assert response.status_code == 502


def test_health(client_for):
    client, _ = client_for(chain_id=10)

    response = client.get("/healthz")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert response.json()["providers"]["fake"]["chainId"] == 10
