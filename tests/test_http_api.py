import pytest
from fastapi.testclient import TestClient

from shield_api.main import app
from shield_api.models.enums import AccountState
from shield_api.services import authentication, sessions

from conftest import DEFAULT_PASSWORD, b64

DEVICE_HEADERS = {"x-rpc-device_id": "device-0001"}
REGIONS = ("/hk4e_global", "/hk4e_cn")


def _login(client, region="/hk4e_global", headers=None, **payload):
    body = {"account": "traveler", "password": b64(DEFAULT_PASSWORD), "is_crypto": False}
    body.update(payload)
    return client.post(
        f"{region}/mdk/shield/api/login",
        json=body,
        headers=DEVICE_HEADERS if headers is None else headers,
    )


def _register(client, query="", **fields):
    form = {
        "username": "newcomer",
        "email": "newcomer@example.com",
        "passwordv1": DEFAULT_PASSWORD,
        "passwordv2": DEFAULT_PASSWORD,
    }
    form.update(fields)
    return client.post(f"/account/register{query}", data=form, follow_redirects=False)


@pytest.mark.parametrize("region", REGIONS)
def test_login_success_envelope(api_client, create_account, region):
    uid = create_account()
    resp = _login(api_client, region=region)

    assert resp.status_code == 200
    body = resp.json()
    assert body["retcode"] == 0
    assert body["message"] == "OK"
    data = body["data"]
    assert data["account"]["uid"] == uid
    assert data["account"]["name"] == "t****er"
    assert data["account"]["country"] == "ZZ"
    assert len(data["account"]["token"]) == 32
    assert data["device_grant_required"] is False
    assert data["reactivate_required"] is False
    assert data["realname_operation"] == "None"
    assert resp.headers["X-Request-Id"]
    assert "X-Process-Time-Ms" in resp.headers


@pytest.mark.parametrize(
    "payload",
    [
        {"password": b64("wrong-password")},
        {"account": "nobody"},
        {"password": "not base64!"},
        {"password": b64("x"), "is_crypto": True},
    ],
)
def test_login_rejections_are_indistinguishable(api_client, create_account, payload):
    create_account()
    resp = _login(api_client, **payload)

    assert resp.status_code == 400
    assert resp.json() == {"retcode": -101, "message": "Incorrect username or password.", "data": None}


@pytest.mark.parametrize("state", [AccountState.DELETED, AccountState.LEGAL_HOLD])
def test_login_rejects_locked_accounts(api_client, create_account, state):
    create_account(state=state)
    resp = _login(api_client)

    assert resp.status_code == 400
    assert resp.json()["retcode"] == -101


def test_login_requires_device_header(api_client, create_account):
    create_account()
    resp = _login(api_client, headers={})

    assert resp.status_code == 400
    body = resp.json()
    assert body["retcode"] == -1
    assert "x-rpc-device_id" in body["message"]


def test_login_rejects_invalid_body(api_client):
    resp = api_client.post("/hk4e_global/mdk/shield/api/login", json={"account": "traveler"}, headers=DEVICE_HEADERS)

    assert resp.status_code == 400
    assert resp.json() == {"retcode": -1, "message": "Invalid request.", "data": None}


def test_client_ip_prefers_cdn_header(api_client, create_account, monkeypatch):
    seen: list[str] = []

    def fake_country(ip):
        seen.append(ip)
        return "JP"

    monkeypatch.setattr(sessions, "ip_to_country", fake_country)
    create_account()

    headers = {**DEVICE_HEADERS, "CF-Connecting-IP": "203.0.113.1", "X-Real-IP": "198.51.100.2"}
    assert _login(api_client, headers=headers).json()["data"]["account"]["country"] == "JP"
    _login(api_client, headers={**DEVICE_HEADERS, "X-Real-IP": "198.51.100.2"})

    assert seen == ["203.0.113.1", "198.51.100.2"]


def test_pending_delete_login(api_client, create_account):
    create_account(state=AccountState.PENDING_DELETE)
    data = _login(api_client).json()["data"]

    assert data["reactivate_required"] is True
    assert len(data["account"]["reactivate_ticket"]) == 32


def test_second_device_requires_grant(api_client, create_account):
    create_account()
    _login(api_client)
    data = _login(api_client, headers={"x-rpc-device_id": "device-0002"}).json()["data"]

    assert data["device_grant_required"] is True
    assert len(data["account"]["device_grant_ticket"]) == 32


@pytest.mark.parametrize("region", REGIONS)
def test_verify_flow(api_client, create_account, region):
    uid = create_account()
    token = _login(api_client).json()["data"]["account"]["token"]
    url = f"{region}/mdk/shield/api/verify"

    ok = api_client.post(url, json={"uid": uid, "token": token}, headers=DEVICE_HEADERS)
    assert ok.status_code == 200
    assert ok.json()["data"]["account"]["token"] == token

    bad = api_client.post(url, json={"uid": uid, "token": "nope"}, headers=DEVICE_HEADERS)
    assert bad.status_code == 400
    assert bad.json()["retcode"] == -111

    other = api_client.post(url, json={"uid": uid, "token": token}, headers={"x-rpc-device_id": "device-9"})
    assert other.status_code == 400
    assert other.json()["retcode"] == -112


def test_health_endpoints(api_client):
    live = api_client.get("/health/live")
    ready = api_client.get("/health/ready")

    assert live.json() == {"retcode": 0, "message": "OK", "data": {"status": "ok"}}
    assert ready.status_code == 200
    assert ready.json()["data"]["status"] == "ready"


def test_unknown_route_uses_envelope(api_client):
    resp = api_client.get("/hk4e_global/mdk/shield/api/nothing")

    assert resp.status_code == 404
    assert resp.json()["retcode"] == -1


def test_unexpected_error_is_hidden(api_client, monkeypatch):
    def explode(*_args, **_kwargs):
        raise RuntimeError("boom")

    monkeypatch.setattr(authentication, "login", explode)
    # 未捕获异常经处理器返回后仍会被测试客户端重新抛出，这里关闭该行为。
    with TestClient(app, raise_server_exceptions=False) as client:
        resp = _login(client)

    assert resp.status_code == 500
    assert resp.json() == {"retcode": -1, "message": "An internal server error has occurred.", "data": None}


def test_register_page(api_client):
    resp = api_client.get("/account/register")

    assert resp.status_code == 200
    assert "text/html" in resp.headers["content-type"]
    assert 'name="passwordv2"' in resp.text


def test_register_then_login(api_client):
    resp = _register(api_client, passwordv1=f"{DEFAULT_PASSWORD}  ")

    assert resp.status_code == 200
    assert resp.text == "Account created. Please close this page and login in the game."
    assert _login(api_client, account="newcomer").json()["retcode"] == 0


def test_register_sdk_redirect(api_client):
    resp = _register(api_client, query="?type=sdk", passwordv1="p@ss word&1", passwordv2="p@ss word&1")

    assert resp.status_code == 302
    assert resp.headers["location"] == "uniwebview://register?username=newcomer&password=p%40ss%20word%261"


def test_register_rejects_duplicate(api_client, create_account):
    create_account(name="newcomer", email="someone@example.com")
    resp = _register(api_client)

    assert resp.status_code == 400
    assert resp.text == "An account with that username or email already exists."


@pytest.mark.parametrize(
    ("fields", "message"),
    [
        ({"passwordv2": "different-password"}, "The passwords do not match."),
        ({"email": "not-an-email"}, "Invalid account data specified."),
        ({"username": "x"}, "Invalid account data specified."),
        ({"passwordv1": "short", "passwordv2": "short"}, "Invalid account data specified."),
    ],
)
def test_register_rejects_invalid_form(api_client, fields, message):
    resp = _register(api_client, **fields)

    assert resp.status_code == 400
    assert resp.text == message


@pytest.mark.parametrize("password", ["A" * 100, "旅行者" * 25])
def test_register_and_login_with_long_password(api_client, password):
    resp = _register(api_client, passwordv1=password, passwordv2=password)
    assert resp.status_code == 200

    login = _login(api_client, account="newcomer", password=b64(password))
    assert login.json()["retcode"] == 0
