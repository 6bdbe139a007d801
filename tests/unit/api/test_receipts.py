"""Tests for receipt endpoints."""

import json

import pytest
from fastapi.testclient import TestClient

from receipts.audit import AuditLog
from receipts.ledger import MockLedgerClient


def _mint(client: TestClient, **overrides: object) -> dict:
    body = {"recipientId": "0.0.1002", "actionType": "Buy", **overrides}
    response = client.post("/api/mint-receipt", json=body)
    assert response.status_code == 200, response.text
    return response.json()


class TestMintReceipt:
    """Tests for POST /api/mint-receipt."""

    def test_mint_success(self, client: TestClient, audit_log: AuditLog) -> None:
        response = client.post(
            "/api/mint-receipt",
            json={
                "recipientId": "0.0.1001",
                "actionType": "Buy",
                "metadata": '{"item":"widget"}',
            },
        )

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["message"] == "Receipt token created successfully"
        assert data["tokenId"].startswith("0.0.")

        transaction = data["transaction"]
        assert transaction["type"] == "MINT_RECEIPT"
        assert transaction["actionType"] == "Buy"
        assert transaction["tokenId"] == data["tokenId"]
        assert transaction["recipient"] == "0.0.1001"
        assert transaction["metadata"] == '{"item":"widget"}'
        assert transaction["status"] == "SUCCESS"
        assert transaction["transactionId"]
        assert transaction["timestamp"]
        assert len(audit_log) == 1

    def test_metadata_optional(self, client: TestClient) -> None:
        data = _mint(client)
        assert data["transaction"]["metadata"] is None

    def test_token_id_matches_latest_mint_in_logs(self, client: TestClient) -> None:
        _mint(client, actionType="Register")
        data = _mint(client)

        logs = client.get("/api/logs").json()["logs"]
        mints = [entry for entry in logs if entry["type"] == "MINT_RECEIPT"]
        assert mints[-1]["tokenId"] == data["tokenId"]

    @pytest.mark.parametrize(
        ("body", "missing"),
        [
            ({"actionType": "Buy"}, "recipientId"),
            ({"recipientId": "0.0.1002"}, "actionType"),
            ({"recipientId": "", "actionType": "Buy"}, "recipientId"),
            ({}, "recipientId, actionType"),
        ],
    )
    def test_missing_fields_return_400(
        self,
        client: TestClient,
        ledger: MockLedgerClient,
        audit_log: AuditLog,
        body: dict,
        missing: str,
    ) -> None:
        response = client.post("/api/mint-receipt", json=body)

        assert response.status_code == 400
        data = response.json()
        assert data["error"] == f"Missing required fields: {missing}"
        assert data["code"] == "INVALID_REQUEST"
        assert ledger.call_history == []
        assert len(audit_log) == 0

    def test_ledger_failure_returns_500(
        self, client: TestClient, ledger: MockLedgerClient, audit_log: AuditLog
    ) -> None:
        ledger.fail_next("create_token", "INVALID_SIGNATURE")

        response = client.post(
            "/api/mint-receipt", json={"recipientId": "0.0.1002", "actionType": "Buy"}
        )

        assert response.status_code == 500
        assert response.json() == {
            "error": "Failed to mint receipt",
            "details": "INVALID_SIGNATURE",
            "code": "OPERATION_FAILED",
        }
        assert len(audit_log) == 0


class TestTransferReceipt:
    """Tests for POST /api/transfer-receipt."""

    def test_transfer_to_unassociated_account(
        self, client: TestClient, audit_log: AuditLog
    ) -> None:
        token_id = _mint(client)["tokenId"]
        before = len(audit_log)

        response = client.post(
            "/api/transfer-receipt",
            json={"tokenId": token_id, "toAccountId": "0.0.1002", "amount": 1},
        )

        assert response.status_code == 500
        data = response.json()
        assert data["error"] == "Failed to transfer receipt"
        assert "TOKEN_NOT_ASSOCIATED_TO_ACCOUNT" in data["details"]
        assert len(audit_log) == before

    def test_transfer_success(self, client: TestClient) -> None:
        token_id = _mint(client)["tokenId"]
        associated = client.post(
            "/api/associate-token", json={"tokenId": token_id, "accountId": "0.0.1002"}
        )
        assert associated.status_code == 200

        response = client.post(
            "/api/transfer-receipt",
            json={"tokenId": token_id, "toAccountId": "0.0.1002", "amount": 1},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["message"] == "Receipt transferred successfully"
        transaction = data["transaction"]
        assert transaction["type"] == "TRANSFER_RECEIPT"
        assert transaction["tokenId"] == token_id
        assert transaction["fromAccount"] == "0.0.1001"
        assert transaction["toAccount"] == "0.0.1002"
        assert transaction["amount"] == 1

    @pytest.mark.parametrize("amount", [0, -3, "1", 1.5, True, None])
    def test_invalid_amount_returns_400(
        self, client: TestClient, ledger: MockLedgerClient, amount: object
    ) -> None:
        response = client.post(
            "/api/transfer-receipt",
            json={"tokenId": "0.0.500", "toAccountId": "0.0.1002", "amount": amount},
        )

        assert response.status_code == 400
        assert "amount" in response.json()["error"]
        assert ledger.call_history == []

    def test_missing_fields_return_400(self, client: TestClient) -> None:
        response = client.post("/api/transfer-receipt", json={"tokenId": "0.0.500"})

        assert response.status_code == 400
        data = response.json()
        assert data["error"] == "Missing required fields: toAccountId, amount"
        fields = {detail["field"] for detail in data["details"]}
        assert fields == {"toAccountId", "amount"}


class TestAssociateToken:
    """Tests for POST /api/associate-token."""

    def test_associate_success(self, client: TestClient, audit_log: AuditLog) -> None:
        token_id = _mint(client)["tokenId"]

        response = client.post(
            "/api/associate-token", json={"tokenId": token_id, "accountId": "0.0.1003"}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Token associated successfully"
        assert data["transaction"]["type"] == "ASSOCIATE_TOKEN"
        assert data["transaction"]["accountId"] == "0.0.1003"
        assert len(audit_log) == 2

    def test_associate_unknown_token(self, client: TestClient, audit_log: AuditLog) -> None:
        response = client.post(
            "/api/associate-token", json={"tokenId": "0.0.999", "accountId": "0.0.1003"}
        )

        assert response.status_code == 500
        assert response.json()["error"] == "Failed to associate token"
        assert len(audit_log) == 0

    def test_associate_missing_account(self, client: TestClient) -> None:
        response = client.post("/api/associate-token", json={"tokenId": "0.0.500"})

        assert response.status_code == 400
        assert response.json()["error"] == "Missing required fields: accountId"


class TestBalance:
    """Tests for GET /api/balance/{accountId}."""

    def test_balance_success(self, client: TestClient, audit_log: AuditLog) -> None:
        token_id = _mint(client)["tokenId"]
        before = len(audit_log)

        response = client.get("/api/balance/0.0.1001")

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["accountId"] == "0.0.1001"
        assert isinstance(data["hbarBalance"], str)
        assert json.loads(data["tokens"]) == {token_id: "1"}
        assert data["tokenBalances"] == {token_id: 1}
        assert len(audit_log) == before

    def test_nonexistent_account_returns_500(
        self, client: TestClient, audit_log: AuditLog
    ) -> None:
        response = client.get("/api/balance/0.0.4040")

        assert response.status_code == 500
        data = response.json()
        assert data["error"] == "Failed to fetch balance"
        assert "INVALID_ACCOUNT_ID" in data["details"]
        assert len(audit_log) == 0


class TestLogs:
    """Tests for GET /api/logs."""

    def test_empty_after_startup(self, client: TestClient) -> None:
        response = client.get("/api/logs")

        assert response.status_code == 200
        assert response.json() == {"success": True, "logs": [], "count": 0}

    def test_count_tracks_successful_operations(self, client: TestClient) -> None:
        token_id = _mint(client)["tokenId"]
        client.post("/api/associate-token", json={"tokenId": token_id, "accountId": "0.0.1002"})
        client.post(
            "/api/transfer-receipt",
            json={"tokenId": token_id, "toAccountId": "0.0.1002", "amount": 1},
        )
        # Failures, balance queries and log reads do not add records
        client.post(
            "/api/transfer-receipt",
            json={"tokenId": token_id, "toAccountId": "0.0.1003", "amount": 1},
        )
        client.post("/api/mint-receipt", json={"actionType": "Buy"})
        client.get("/api/balance/0.0.1002")
        client.get("/api/logs")

        data = client.get("/api/logs").json()

        assert data["count"] == 3
        assert [entry["type"] for entry in data["logs"]] == [
            "MINT_RECEIPT",
            "ASSOCIATE_TOKEN",
            "TRANSFER_RECEIPT",
        ]
