# This project was developed with assistance from AI tools.
"""Tests for the application wizard endpoints."""

import pytest

BASE = "/api/application"

KYC = {
    "full_name": "Asha Verma",
    "date_of_birth": "1990-06-15",
    "pan": "abcde1234f",
    "aadhaar": "1234 5678 9012",
}


def _advance(client, stage):
    return client.post(f"{BASE}/advance", json={"stage": stage})


def _to_underwriting(client):
    assert _advance(client, "verification").status_code == 200
    assert client.put(f"{BASE}/verification", json=KYC).status_code == 200
    assert client.post(f"{BASE}/verification/salary-slip").status_code == 200
    resp = _advance(client, "underwriting")
    assert resp.status_code == 200
    return resp.json()


def test_get_application_defaults(client):
    resp = client.get(BASE)
    assert resp.status_code == 200
    data = resp.json()
    assert data["current_stage"] == "sales"
    assert data["is_complete"] is False
    assert data["loan"]["amount"] == 500000
    assert data["emi"]["emi"] == 16607
    assert [h["status"] for h in data["history"]] == ["current", "pending", "pending", "pending"]


def test_history_endpoint(client):
    resp = client.get(f"{BASE}/history")
    assert resp.status_code == 200
    data = resp.json()
    assert data["current_stage"] == "sales"
    assert [h["stage"] for h in data["history"]] == ["sales", "verification", "underwriting", "sanction"]


class TestLoanUpdates:
    def test_update_loan(self, client):
        resp = client.put(f"{BASE}/loan", json={"amount": 1000000})
        assert resp.status_code == 200
        assert resp.json()["emi"]["emi"] == 33214

    def test_switch_loan_type_clamps(self, client):
        client.put(f"{BASE}/loan", json={"amount": 100000})
        resp = client.put(f"{BASE}/loan", json={"loan_type": "home"})
        assert resp.status_code == 200
        loan = resp.json()["loan"]
        assert loan["amount"] == 500000
        assert loan["interest_rate"] == 8.5

    def test_amount_out_of_bounds(self, client):
        resp = client.put(f"{BASE}/loan", json={"amount": 10})
        assert resp.status_code == 422
        assert "outside" in resp.json()["detail"]

    def test_failed_update_leaves_state_untouched(self, client):
        resp = client.put(f"{BASE}/loan", json={"amount": 600000, "tenure": 500})
        assert resp.status_code == 422
        assert client.get(BASE).json()["loan"]["amount"] == 500000

    def test_unknown_loan_type(self, client):
        resp = client.put(f"{BASE}/loan", json={"loan_type": "yacht"})
        assert resp.status_code == 404

    def test_non_numeric_amount(self, client):
        resp = client.put(f"{BASE}/loan", json={"amount": "lots"})
        assert resp.status_code == 422

    def test_edit_outside_sales_conflicts(self, client):
        _advance(client, "verification")
        resp = client.put(f"{BASE}/loan", json={"amount": 600000})
        assert resp.status_code == 409
        assert resp.json()["title"] == "Conflict"
        assert resp.json()["type"] == "urn:loan-wizard:problem:stage-conflict"
        assert resp.json()["instance"] == "/api/application/loan"


class TestTransitions:
    def test_unknown_stage(self, client):
        resp = _advance(client, "closing")
        assert resp.status_code == 422

    def test_advance_backwards_is_invalid(self, client):
        _advance(client, "verification")
        resp = _advance(client, "sales")
        assert resp.status_code == 422

    def test_verification_gate(self, client):
        _advance(client, "verification")
        resp = _advance(client, "underwriting")
        assert resp.status_code == 409
        assert "Verification incomplete" in resp.json()["detail"]

    def test_underwriting_offers_plans(self, client):
        data = _to_underwriting(client)
        assert data["current_stage"] == "underwriting"
        assert data["underwriting"]["decision"] == "approved"
        assert data["underwriting"]["credit_score"] == 750
        assert {p["id"] for p in data["underwriting"]["plans"]} == {"economy", "standard", "premium"}

    def test_select_unknown_plan(self, client):
        _to_underwriting(client)
        resp = client.post(f"{BASE}/select-plan", json={"plan_id": "gold"})
        assert resp.status_code == 404

    def test_go_back_clears_outcome(self, client):
        _to_underwriting(client)
        client.post(f"{BASE}/select-plan", json={"plan_id": "standard"})
        resp = client.post(f"{BASE}/go-back", json={"stage": "verification"})
        assert resp.status_code == 200
        data = resp.json()
        assert data["current_stage"] == "verification"
        assert data["underwriting"]["decision"] == "pending"
        assert data["underwriting"]["selected_plan"] is None

    def test_go_back_to_current_stage_is_a_no_op(self, client):
        before = _to_underwriting(client)
        resp = client.post(f"{BASE}/go-back", json={"stage": "underwriting"})
        assert resp.status_code == 200
        assert resp.json()["underwriting"] == before["underwriting"]
        assert resp.json()["history"] == before["history"]

    def test_go_back_forward_is_invalid(self, client):
        resp = client.post(f"{BASE}/go-back", json={"stage": "sanction"})
        assert resp.status_code == 422


class TestSanction:
    def test_sanction_letter_before_confirmation(self, client):
        resp = client.get(f"{BASE}/sanction-letter")
        assert resp.status_code == 409

    def test_confirm_sanction_outside_stage(self, client):
        resp = client.post(f"{BASE}/sanction")
        assert resp.status_code == 409

    def test_full_sanction(self, client):
        _to_underwriting(client)
        client.post(f"{BASE}/select-plan", json={"plan_id": "standard"})
        assert _advance(client, "sanction").status_code == 200

        resp = client.post(f"{BASE}/sanction")
        assert resp.status_code == 200
        assert resp.json()["is_complete"] is True

        letter = client.get(f"{BASE}/sanction-letter").json()
        assert letter["applicant_name"] == "Asha Verma"
        assert letter["emi"] == 16607
        assert letter["processing_fee"] == 10000
        assert letter["reference"].startswith("SL-")


@pytest.mark.parametrize("stage", ["sales", "verification", "underwriting"])
def test_reset_from_any_stage(client, stage):
    if stage != "sales":
        _advance(client, "verification")
    if stage == "underwriting":
        client.put(f"{BASE}/verification", json=KYC)
        client.post(f"{BASE}/verification/salary-slip")
        _advance(client, "underwriting")

    resp = client.post(f"{BASE}/reset")
    assert resp.status_code == 200
    data = resp.json()
    assert data["current_stage"] == "sales"
    assert data["verification"]["full_name"] == ""
    assert data["underwriting"]["decision"] == "pending"
