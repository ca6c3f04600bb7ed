import pytest

from hackhub.auth.gate import ALLOW, DENY, REDIRECT, authorize, required_role
from hackhub.auth.roles import Role


def session(role):
    return {"user_id": "u-1", "email": "u@hackhub.dev", "role": role}


@pytest.mark.parametrize("path", ["/", "/login", "/register", "/events", "/verify", "/profile"])
def test_public_routes_allow_anonymous(path):
    assert authorize(path, None).outcome == ALLOW


def test_anonymous_is_denied_elsewhere():
    assert authorize("/organizer", None).outcome == DENY
    assert authorize("/some/page", None).outcome == DENY


def test_matching_role_is_allowed():
    assert authorize("/judge/scores", session("judge")).allowed


def test_mismatched_role_redirects_to_own_dashboard():
    decision = authorize("/admin/users", session("mentor"))
    assert decision.outcome == REDIRECT
    assert decision.target == "/mentor"


def test_unknown_role_is_treated_as_participant():
    decision = authorize("/organizer", session("wizard"))
    assert decision.outcome == REDIRECT
    assert decision.target == "/participant"


def test_prefix_match_respects_segments():
    assert required_role("/administrator") is None
    assert required_role("/admin") == Role.ADMIN
    assert authorize("/administrator", session("mentor")).outcome == ALLOW


def test_middleware_redirects_other_roles(client, make_user):
    mentor = make_user("mentor")
    resp = client.get("/admin", headers=mentor["headers"], follow_redirects=False)
    assert resp.status_code == 307
    assert resp.headers["location"] == "/mentor"


def test_middleware_sends_anonymous_to_login(client):
    resp = client.get("/organizer", follow_redirects=False)
    assert resp.status_code == 307
    assert resp.headers["location"] == "/login"


def test_middleware_serves_own_dashboard(client, make_user):
    participant = make_user("participant")
    resp = client.get("/participant", headers=participant["headers"])
    assert resp.status_code == 200
    assert 'data-role="participant"' in resp.text
    assert resp.headers["cache-control"].startswith("no-cache")


def test_public_page_and_api_are_not_gated(client):
    assert client.get("/").status_code == 200
    assert client.get("/api/health").json()["status"] == "healthy"


def test_session_cookie_is_honoured(client, make_user):
    judge = make_user("judge")
    resp = client.get(
        "/participant",
        headers={"Cookie": f"access_token={judge['token']}"},
        follow_redirects=False,
    )
    assert resp.status_code == 307
    assert resp.headers["location"] == "/judge"


def test_own_dashboard_subpaths_are_allowed():
    assert authorize("/mentor/sessions", session("mentor")).allowed
    assert authorize("/mentor", session("mentor")).allowed
