import json

import pytest
from fastapi.testclient import TestClient

import scraper
from app import app
from sw_career_pkg import config
from sw_career_pkg.models import AccountType, SessionRequest


ROWS = [
    {"cells": ["1", "2024-03-04", "1", "V9", "", "퀵서비스(착불)", ""], "href": "javascript:view('R1')"},
]


def make_request(**overrides):
    payload = {"user_id": "hong", "password": "secret"}
    payload.update(overrides)
    return SessionRequest(**payload)


async def test_run_session_success(launched_browser):
    launched_browser.page.globals = {"skillCert": ["정보처리기사"]}
    launched_browser.page.rows = ROWS

    result = await scraper.run_session(make_request(page=1, page_size=5))

    assert result["signed_in"] is True
    assert result["account_type"] == "personal"
    assert result["expertises"]["skillCert"] == ["정보처리기사"]
    assert result["total_requests"] == 1
    assert result["certificate_issue_requests"][0] == {
        "index": 1,
        "request_id": "R1",
        "request_date": "2024-03-04",
        "copies": 1,
        "verifiable_id": "V9",
        "print_date": None,
        "takeout_method": "3",
        "print_status": None,
    }
    assert "LOGIN_OK" in result["debug"]
    assert "secret" not in json.dumps(result)
    assert launched_browser.closed


async def test_run_session_skips_unrequested_fetches(launched_browser):
    result = await scraper.run_session(make_request(expertises=False, issue_requests=False))

    assert result["expertises"] is None
    assert result["certificate_issue_requests"] is None
    assert result["total_requests"] == 0
    assert not any(action[0] == "evaluate" for action in launched_browser.page.actions)


async def test_run_session_login_failure(launched_browser):
    launched_browser.page.after_login_url = config.LOGIN_URL

    result = await scraper.run_session(make_request(account_type=AccountType.BUSINESS))

    assert result["signed_in"] is False
    assert result["error"] == "Failed to sign in"
    assert "LOGIN_FAILED" in result["debug"]
    assert launched_browser.closed


async def test_run_session_bad_row_reports_error_and_still_finalizes(launched_browser):
    launched_browser.page.rows = [{"cells": ["-", "2024-03-04", "1"], "href": None}]

    result = await scraper.run_session(make_request(expertises=False))

    assert result["signed_in"] is True
    assert "index" in result["error"]
    assert launched_browser.page.closed
    assert launched_browser.closed


def test_parse_args_defaults(monkeypatch):
    monkeypatch.delenv("SWCAREER_USER_ID", raising=False)
    args = scraper.parse_args(["--user-id", "hong", "--page", "2", "--page-size", "25"])
    assert args.user_id == "hong"
    assert args.account_type == "personal"
    assert (args.page, args.page_size) == (2, 25)
    assert args.headless is None
    assert not args.no_expertises


def test_main_requires_user_id(monkeypatch):
    monkeypatch.delenv("SWCAREER_USER_ID", raising=False)
    with pytest.raises(SystemExit) as exc_info:
        scraper.main([])
    assert exc_info.value.code == 2


def test_main_writes_output_file(monkeypatch, tmp_path):
    seen = {}

    async def fake_run_session(data):
        seen["request"] = data
        return {"user_id": data.user_id, "signed_in": True}

    monkeypatch.setenv("SWCAREER_PASSWORD", "secret")
    monkeypatch.setattr(scraper, "run_session", fake_run_session)
    out = tmp_path / "result.json"

    with pytest.raises(SystemExit) as exc_info:
        scraper.main(["--user-id", "acme", "--account-type", "business", "--no-requests", "-o", str(out)])

    assert exc_info.value.code == 0
    assert json.loads(out.read_text(encoding="utf-8")) == {"user_id": "acme", "signed_in": True}
    assert seen["request"].account_type == AccountType.BUSINESS
    assert seen["request"].issue_requests is False


def test_api_health():
    client = TestClient(app)
    assert client.get("/health").json() == {"status": "ok"}


def test_api_scrape(launched_browser):
    launched_browser.page.rows = ROWS
    client = TestClient(app)

    response = client.post(
        "/scrape/sw-career",
        json={"user_id": "hong", "password": "secret", "account_type": "2", "expertises": False},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["account_type"] == "business"
    assert body["certificate_issue_requests"][0]["request_id"] == "R1"


def test_api_rejects_negative_page():
    client = TestClient(app)
    response = client.post("/scrape/sw-career", json={"user_id": "hong", "password": "x", "page": -1})
    assert response.status_code == 422
