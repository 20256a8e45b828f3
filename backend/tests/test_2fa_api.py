"""/rest/user/login・/api/Users・/rest/2fa/* のHTTPシナリオ"""

import pytest
from jose import jwt

from app.core.security.jwt import SetupTokenPayload, TemporaryTokenPayload, TokenType
from app.core.security.mfa.service import MFAService

WURSTBROT_SECRET = "IFTXE3SPOEYVURT2MRYGI52TKJ4HC3KH"
WURSTBROT_PASSWORD = "EinBelegtesBrotMitSchinkenSCHINKEN!"
J12934_PASSWORD = "0Y8rMnww$*9VFYE§59-!Fg1L6t&6lB"


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def wurstbrot(make_user):
    return make_user("wurstbrot@juice-sh.op", WURSTBROT_PASSWORD, totp_secret=WURSTBROT_SECRET, user_id=10)


@pytest.fixture
def j12934(make_user):
    return make_user("J12934@juice-sh.op", J12934_PASSWORD)


def register(client, email, password):
    resp = client.post(
        "/api/Users/",
        json={
            "email": email,
            "password": password,
            "passwordRepeat": password,
            "securityQuestion": None,
            "securityAnswer": None,
        },
    )
    assert resp.status_code == 201
    return resp.json()


def login(client, email, password, totp_secret=None):
    resp = client.post("/rest/user/login", json={"email": email, "password": password})
    assert resp.status_code == 200
    body = resp.json()
    if body.get("status") == "totp_token_required":
        resp = client.post(
            "/rest/2fa/verify",
            json={
                "tmpToken": body["data"]["tmpToken"],
                "totpToken": MFAService.generate_totp_code(totp_secret),
            },
        )
        assert resp.status_code == 200
        body = resp.json()
    return body["authentication"]


def setup_two_factor(client, codec, token, password, secret):
    return client.post(
        "/rest/2fa/setup",
        headers=bearer(token),
        json={
            "password": password,
            "setupToken": codec.issue(SetupTokenPayload(secret=secret)),
            "initialToken": MFAService.generate_totp_code(secret),
        },
    )


class TestVerify:
    def test_valid_tmp_token_and_totp_return_authentication(self, client, codec, wurstbrot):
        tmp_token = codec.issue(TemporaryTokenPayload(user_id=10))

        resp = client.post(
            "/rest/2fa/verify",
            json={"tmpToken": tmp_token, "totpToken": MFAService.generate_totp_code(WURSTBROT_SECRET)},
        )

        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("application/json")
        authentication = resp.json()["authentication"]
        assert authentication["umail"] == "wurstbrot@juice-sh.op"
        assert isinstance(authentication["token"], str)
        assert isinstance(authentication["bid"], int)

    def test_invalid_totp_is_rejected(self, client, codec, wurstbrot):
        tmp_token = codec.issue(TemporaryTokenPayload(user_id=10))

        resp = client.post(
            "/rest/2fa/verify",
            json={"tmpToken": tmp_token, "totpToken": MFAService.generate_totp_code("INVALIDSECRET")},
        )

        assert resp.status_code == 401

    def test_unsigned_tmp_token_is_rejected(self, client, wurstbrot):
        tmp_token = jwt.encode(
            {"userId": 10, "type": "password_valid_needs_second_factor_token"}, "invalid_key", algorithm="HS256"
        )

        resp = client.post(
            "/rest/2fa/verify",
            json={"tmpToken": tmp_token, "totpToken": MFAService.generate_totp_code(WURSTBROT_SECRET)},
        )

        assert resp.status_code == 401

    def test_missing_totp_is_rejected_without_echoing_input(self, client, codec, wurstbrot):
        tmp_token = codec.issue(TemporaryTokenPayload(user_id=10))

        resp = client.post("/rest/2fa/verify", json={"tmpToken": tmp_token})

        assert resp.status_code == 401
        assert resp.headers["www-authenticate"] == "Bearer"
        assert resp.json() == {"status": "error", "message": "Unauthorized"}
        assert tmp_token not in resp.text


class TestLogin:
    def test_two_factor_account_gets_tmp_token(self, client, codec, wurstbrot):
        resp = client.post("/rest/user/login", json={"email": "wurstbrot@juice-sh.op", "password": WURSTBROT_PASSWORD})

        assert resp.status_code == 200
        body = resp.json()
        assert body["status"] == "totp_token_required"
        assert "authentication" not in body
        assert codec.verify(body["data"]["tmpToken"], TokenType.TEMPORARY).user_id == 10

    def test_plain_account_gets_session(self, client, codec, j12934):
        authentication = login(client, "J12934@juice-sh.op", J12934_PASSWORD)

        assert authentication["umail"] == "J12934@juice-sh.op"
        assert codec.verify(authentication["token"], TokenType.SESSION).user_id == j12934.id

    def test_login_then_verify_yields_session(self, client, codec, wurstbrot):
        authentication = login(client, "wurstbrot@juice-sh.op", WURSTBROT_PASSWORD, WURSTBROT_SECRET)

        assert codec.verify(authentication["token"], TokenType.SESSION).email == "wurstbrot@juice-sh.op"

    def test_failures_are_indistinguishable(self, client, codec, wurstbrot):
        bad_password = client.post("/rest/user/login", json={"email": "wurstbrot@juice-sh.op", "password": "nope"})
        bad_totp = client.post(
            "/rest/2fa/verify",
            json={"tmpToken": codec.issue(TemporaryTokenPayload(user_id=10)), "totpToken": "000000x"},
        )
        no_session = client.get("/rest/2fa/status")

        assert bad_password.status_code == bad_totp.status_code == no_session.status_code == 401
        assert bad_password.json() == bad_totp.json() == no_session.json()

    @pytest.mark.parametrize(
        "body",
        [
            {"email": "wurstbrot@juice-sh.op", "password": 123456},
            {"email": "wurstbrot@juice-sh.op"},
            {},
        ],
    )
    def test_malformed_body_is_rejected_like_bad_credentials(self, client, wurstbrot, body):
        resp = client.post("/rest/user/login", json=body)

        assert resp.status_code == 401
        assert resp.json() == {"status": "error", "message": "Unauthorized"}


class TestStatus:
    def test_enabled_account(self, client, wurstbrot):
        token = login(client, "wurstbrot@juice-sh.op", WURSTBROT_PASSWORD, WURSTBROT_SECRET)["token"]

        resp = client.get("/rest/2fa/status", headers=bearer(token))

        assert resp.status_code == 200
        assert resp.json() == {"setup": True, "email": "wurstbrot@juice-sh.op"}

    def test_account_without_two_factor(self, client, j12934):
        token = login(client, "J12934@juice-sh.op", J12934_PASSWORD)["token"]

        resp = client.get("/rest/2fa/status", headers=bearer(token))

        assert resp.status_code == 200
        body = resp.json()
        assert body["setup"] is False
        assert body["email"] == "J12934@juice-sh.op"
        assert body["setupToken"]

    def test_unauthenticated(self, client):
        assert client.get("/rest/2fa/status").status_code == 401

    def test_tmp_token_is_not_a_session(self, client, codec, wurstbrot):
        tmp_token = codec.issue(TemporaryTokenPayload(user_id=10))

        assert client.get("/rest/2fa/status", headers=bearer(tmp_token)).status_code == 401


class TestSetup:
    def test_enables_two_factor_for_new_account(self, client, codec):
        email, password, secret = "fooooo1@bar.com", "123456", "ASDVAJSDUASZGDIADBJS"
        register(client, email, password)
        token = login(client, email, password)["token"]

        resp = setup_two_factor(client, codec, token, password, secret)

        assert resp.status_code == 200
        assert client.get("/rest/2fa/status", headers=bearer(token)).json() == {"setup": True, "email": email}

    def test_setup_from_status_material(self, client, j12934):
        token = login(client, "J12934@juice-sh.op", J12934_PASSWORD)["token"]
        status = client.get("/rest/2fa/status", headers=bearer(token)).json()

        resp = client.post(
            "/rest/2fa/setup",
            headers=bearer(token),
            json={
                "password": J12934_PASSWORD,
                "setupToken": status["setupToken"],
                "initialToken": MFAService.generate_totp_code(status["secret"]),
            },
        )

        assert resp.status_code == 200
        assert login(client, "J12934@juice-sh.op", J12934_PASSWORD, status["secret"])["umail"] == "J12934@juice-sh.op"

    def test_wrong_password_is_rejected(self, client, codec, j12934):
        token = login(client, "J12934@juice-sh.op", J12934_PASSWORD)["token"]

        resp = setup_two_factor(client, codec, token, "wrong", "ASDVAJSDUASZGDIADBJS")

        assert resp.status_code == 401
        assert client.get("/rest/2fa/status", headers=bearer(token)).json()["setup"] is False

    def test_requires_session(self, client, codec):
        resp = client.post(
            "/rest/2fa/setup",
            json={"password": "123456", "setupToken": "x", "initialToken": "123456"},
        )

        assert resp.status_code == 401


class TestDisable:
    def test_disables_two_factor(self, client, codec):
        email, password, secret = "fooooodisable1@bar.com", "123456", "ASDVAJSDUASZGDIADBJS"
        register(client, email, password)
        first_token = login(client, email, password)["token"]
        assert setup_two_factor(client, codec, first_token, password, secret).status_code == 200

        token = login(client, email, password, secret)["token"]
        assert client.get("/rest/2fa/status", headers=bearer(token)).json()["setup"] is True

        resp = client.post("/rest/2fa/disable", headers=bearer(token), json={"password": password})

        assert resp.status_code == 200
        assert client.get("/rest/2fa/status", headers=bearer(token)).json()["setup"] is False

    def test_wrong_password_is_rejected(self, client, wurstbrot):
        token = login(client, "wurstbrot@juice-sh.op", WURSTBROT_PASSWORD, WURSTBROT_SECRET)["token"]

        resp = client.post("/rest/2fa/disable", headers=bearer(token), json={"password": "wrong"})

        assert resp.status_code == 401
        assert client.get("/rest/2fa/status", headers=bearer(token)).json()["setup"] is True

    def test_disable_without_two_factor_succeeds(self, client, j12934):
        token = login(client, "J12934@juice-sh.op", J12934_PASSWORD)["token"]

        resp = client.post("/rest/2fa/disable", headers=bearer(token), json={"password": J12934_PASSWORD})

        assert resp.status_code == 200


class TestRegister:
    def test_duplicate_email_is_rejected(self, client):
        register(client, "twice@bar.com", "123456")

        resp = client.post("/api/Users", json={"email": "twice@bar.com", "password": "123456", "passwordRepeat": "123456"})

        assert resp.status_code == 400

    def test_password_repeat_must_match(self, client):
        resp = client.post("/api/Users", json={"email": "typo@bar.com", "password": "123456", "passwordRepeat": "654321"})

        assert resp.status_code == 400

    def test_invalid_email_keeps_validation_error(self, client):
        resp = client.post("/api/Users", json={"email": "not-an-email", "password": "123456", "passwordRepeat": "123456"})

        assert resp.status_code == 422

    def test_response_omits_password(self, client):
        body = register(client, "clean@bar.com", "123456")

        assert body["status"] == "success"
        assert body["data"]["email"] == "clean@bar.com"
        assert "password" not in str(body["data"])
