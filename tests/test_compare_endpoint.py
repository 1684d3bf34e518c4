import pytest
from fastapi.testclient import TestClient

from takehome.main import app
from tests.fixtures.scenarios import make_comparison_payload, make_contractor_payload

client = TestClient(app)


def test_compare_reference_scenario():
    response = client.post("/compare", json=make_comparison_payload())
    assert response.status_code == 200
    body = response.json()
    assert body["w2"]["net"] == 125_618.78
    assert body["contract"]["net"] == 107_601.58
    assert body["summary"]["winner"] == "W-2 wins"
    assert [row["label"] for row in body["rows"]][-3:] == [
        "Net Take-Home",
        "Effective Tax Rate",
        "Monthly Take-Home",
    ]


def test_compare_accepts_snake_case():
    response = client.post("/compare", json={"w2_rate": 67, "contract_rate": 75, "filing_status": "mfj"})
    assert response.status_code == 200
    assert response.json()["inputs"]["filing_status"] == "mfj"


@pytest.mark.parametrize(
    "overrides",
    [{"w2Rate": -1}, {"filingStatus": "hoh"}, {"benefitMode": "lavish"}, {"extra": True}],
)
def test_compare_rejects_bad_payloads(overrides):
    response = client.post("/compare", json=make_comparison_payload(**overrides))
    assert response.status_code == 422


def test_unknown_benefit_key_is_bad_request():
    payload = make_comparison_payload(benefitMode="custom", benefitOverrides={"gym": {"amount": 10}})
    response = client.post("/compare", json=payload)
    assert response.status_code == 400
    assert "gym" in response.json()["detail"]


def test_tax_table_lookups():
    federal = client.get("/tax/federal", params={"taxable": 123_610, "filing": "single"})
    assert federal.status_code == 200
    assert federal.json()["tax"] == 22_513.40
    state = client.get("/tax/state", params={"taxable": 133_654})
    assert state.json() == {
        "tax_year": 2025,
        "filing_status": "single",
        "taxable": 133_654,
        "tax": 8_868.46,
    }


def test_tax_table_unknown_filing():
    response = client.get("/tax/federal", params={"taxable": 50_000, "filing": "widow"})
    assert response.status_code == 400


def test_scenario_endpoints():
    w2 = client.post("/w2", json={"w2Rate": 67, "filingStatus": "single"})
    assert w2.json()["w2"]["net"] == 125_618.78

    contract = client.post("/1099", json=make_contractor_payload())
    assert contract.json()["contract"]["net"] == 107_601.58

    breakeven = client.post("/breakeven", json={"targetNet": 125_618.78, "laBizTaxClass": "exempt"})
    assert breakeven.status_code == 200
    assert 75 < breakeven.json()["breakeven_rate"] < 120

    benefits = client.post("/benefits", json={"benefitMode": "off"})
    assert benefits.json()["items"] == []
    assert benefits.json()["total_enabled"] == 0


def test_breakeven_requires_target():
    assert client.post("/breakeven", json={}).status_code == 422


def test_health_runs_table_check(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("BUILD_VERSION", "1.2.3")
    with TestClient(app) as live:
        body = live.get("/health").json()
        assert body["status"] == "ok"
        assert body["tax_year"] == 2025
        assert body["build"]["version"] == "1.2.3"
        assert set(body["tables"]) == {"single", "mfj"}
    assert (tmp_path / "logs" / "api.log").exists()
    assert not hasattr(app.state, "table_drift")


@pytest.mark.parametrize("path", ["/tax/federal", "/tax/state"])
@pytest.mark.parametrize("taxable", ["inf", "-inf", "nan"])
def test_tax_table_rejects_non_finite_income(path, taxable):
    response = client.get(path, params={"taxable": taxable, "filing": "single"})
    assert response.status_code == 400
    assert "taxable" in response.json()["detail"]
