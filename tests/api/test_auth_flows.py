"""End-to-end auth flows against a throwaway SQLite database.

Only the database session dependency is overridden; handlers, services,
crypto and repositories are the real ones.
"""

from urllib.parse import parse_qs, urlsplit

import pyotp
import pytest
from fastapi import status
from fastapi.testclient import TestClient
from sqlalchemy import func, select

from src.core.container import get_db_session
from src.infrastructure.email import StubEmailService
from src.infrastructure.persistence.database import Database
from src.infrastructure.persistence.models import Session as SessionModel
from src.main import app

PASSWORD = "SecurePass123"


@pytest.fixture
def live_client(tmp_path):
    """TestClient whose requests share one SQLite file.

    Tables are created lazily on the client's own event loop.
    """
    db = Database(database_url=f"sqlite+aiosqlite:///{tmp_path / 'api.db'}")
    state = {"ready": False}

    async def override_get_db_session():
        if not state["ready"]:
            await db.create_all()
            state["ready"] = True
        async with db.get_session() as session:
            yield session

    app.dependency_overrides[get_db_session] = override_get_db_session
    with TestClient(app, raise_server_exceptions=False) as client:
        yield client
        client.portal.call(db.close)
    app.dependency_overrides.clear()


def register(client, email="owner@example.com", device_id="laptop"):
    return client.post(
        "/api/v1/auth/register",
        json={
            "email": email,
            "password": PASSWORD,
            "name": "Sam Rivera",
            "device_info": {"device_id": device_id},
        },
    )


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


async def count_sessions(db_path) -> int:
    db = Database(database_url=f"sqlite+aiosqlite:///{db_path}")
    try:
        async with db.get_session() as session:
            result = await session.execute(select(func.count()).select_from(SessionModel))
            return result.scalar_one()
    finally:
        await db.close()


@pytest.fixture
def sent_reset_urls(monkeypatch):
    """Reset links handed to the stub email service, in send order."""
    urls: list[str] = []

    async def capture(self, to_email: str, reset_url: str) -> None:
        urls.append(reset_url)

    monkeypatch.setattr(StubEmailService, "send_password_reset_email", capture)
    return urls


@pytest.mark.api
class TestRegistrationAndLogin:
    """Register, duplicate, login, /me."""

    def test_register_then_duplicate_conflicts(self, live_client):
        # Act
        first = register(live_client)
        second = register(live_client, email="OWNER@example.com")

        # Assert
        assert first.status_code == status.HTTP_201_CREATED
        assert first.json()["user"]["subscription_status"] == "TRIAL"
        assert second.status_code == status.HTTP_409_CONFLICT

    def test_login_and_me(self, live_client):
        register(live_client)

        login = live_client.post(
            "/api/v1/auth/login",
            json={"email": "Owner@Example.com", "password": PASSWORD},
        )
        access = login.json()["tokens"]["access_token"]
        me = live_client.get("/api/v1/auth/me", headers=bearer(access))

        assert login.status_code == status.HTTP_200_OK
        assert login.json()["requires_mfa"] is False
        assert me.status_code == status.HTTP_200_OK
        assert me.json()["user"]["email"] == "owner@example.com"

    def test_unknown_email_and_wrong_password_look_the_same(self, live_client):
        register(live_client)

        unknown = live_client.post(
            "/api/v1/auth/login",
            json={"email": "ghost@example.com", "password": PASSWORD},
        )
        wrong = live_client.post(
            "/api/v1/auth/login",
            json={"email": "owner@example.com", "password": "Wrong123456"},
        )

        assert unknown.status_code == wrong.status_code == status.HTTP_401_UNAUTHORIZED
        assert unknown.json()["detail"] == wrong.json()["detail"]


@pytest.mark.api
class TestRefreshRotation:
    """Refresh tokens work exactly once."""

    def test_refresh_token_is_single_use(self, live_client):
        refresh_token = register(live_client).json()["tokens"]["refresh_token"]

        first = live_client.post("/api/v1/auth/refresh", json={"refresh_token": refresh_token})
        replay = live_client.post("/api/v1/auth/refresh", json={"refresh_token": refresh_token})
        rotated = first.json()["refresh_token"]
        second = live_client.post("/api/v1/auth/refresh", json={"refresh_token": rotated})

        assert first.status_code == status.HTTP_200_OK
        assert rotated != refresh_token
        assert replay.status_code == status.HTTP_401_UNAUTHORIZED
        assert second.status_code == status.HTTP_200_OK

    def test_logout_all_kills_refresh(self, live_client):
        tokens = register(live_client).json()["tokens"]

        logout = live_client.post(
            "/api/v1/auth/logout-all", headers=bearer(tokens["access_token"])
        )
        refresh = live_client.post(
            "/api/v1/auth/refresh", json={"refresh_token": tokens["refresh_token"]}
        )

        assert logout.status_code == status.HTTP_200_OK
        assert refresh.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.api
class TestMfaFlow:
    """Setup, enable, MFA login, backup code single use, disable."""

    def test_full_mfa_lifecycle(self, live_client):
        # Arrange: account with MFA enabled
        access = register(live_client).json()["tokens"]["access_token"]
        setup = live_client.post("/api/v1/auth/mfa/setup", headers=bearer(access))
        secret = setup.json()["secret"]
        enable = live_client.post(
            "/api/v1/auth/mfa/enable",
            headers=bearer(access),
            json={"code": pyotp.TOTP(secret).now()},
        )
        backup_codes = enable.json()["backup_codes"]

        # Act: password step returns only a temp token
        login = live_client.post(
            "/api/v1/auth/login",
            json={"email": "owner@example.com", "password": PASSWORD},
        )
        temp_token = login.json()["temp_token"]

        # Assert
        assert setup.status_code == status.HTTP_200_OK
        assert enable.status_code == status.HTTP_200_OK
        assert len(backup_codes) == 10
        assert login.json()["requires_mfa"] is True
        assert "tokens" not in login.json()

        # A temp token is not an access token
        me = live_client.get("/api/v1/auth/me", headers=bearer(temp_token))
        assert me.status_code == status.HTTP_401_UNAUTHORIZED

        # Backup code works once
        verified = live_client.post(
            "/api/v1/auth/mfa/verify",
            json={"temp_token": temp_token, "code": backup_codes[0].lower()},
        )
        reused = live_client.post(
            "/api/v1/auth/mfa/verify",
            json={"temp_token": temp_token, "code": backup_codes[0]},
        )
        assert verified.status_code == status.HTTP_200_OK
        assert verified.json()["tokens"]["access_token"]
        assert reused.status_code == status.HTTP_401_UNAUTHORIZED

        # Disable needs password and a code
        disabled = live_client.post(
            "/api/v1/auth/mfa/disable",
            headers=bearer(access),
            json={"password": PASSWORD, "code": pyotp.TOTP(secret).now()},
        )
        login_again = live_client.post(
            "/api/v1/auth/login",
            json={"email": "owner@example.com", "password": PASSWORD},
        )
        assert disabled.status_code == status.HTTP_200_OK
        assert login_again.json()["requires_mfa"] is False

    def test_enable_without_setup_is_400(self, live_client):
        access = register(live_client).json()["tokens"]["access_token"]

        response = live_client.post(
            "/api/v1/auth/mfa/enable", headers=bearer(access), json={"code": "123456"}
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.api
class TestPasswordFlows:
    """Reset request privacy and password change."""

    def test_reset_request_identical_for_unknown_email(self, live_client):
        register(live_client)

        known = live_client.post(
            "/api/v1/auth/password/reset", json={"email": "owner@example.com"}
        )
        unknown = live_client.post(
            "/api/v1/auth/password/reset", json={"email": "ghost@example.com"}
        )

        assert known.status_code == unknown.status_code == status.HTTP_200_OK
        assert known.json() == unknown.json()

    def test_reset_confirm_with_unknown_token_is_400(self, live_client):
        response = live_client.post(
            "/api/v1/auth/password/reset/confirm",
            json={"token": "ab" * 32, "password": "NewSecure456"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["errors"][0]["field"] == "token"

    def test_reset_confirm_revokes_every_session(
        self, live_client, sent_reset_urls, tmp_path
    ):
        # Arrange: one session from registration, two more from logins
        register(live_client)
        logins = [
            live_client.post(
                "/api/v1/auth/login",
                json={"email": "owner@example.com", "password": PASSWORD},
            ).json()["tokens"]
            for _ in range(2)
        ]
        live_client.post("/api/v1/auth/password/reset", json={"email": "owner@example.com"})
        token = parse_qs(urlsplit(sent_reset_urls[-1]).query)["token"][0]

        # Act
        confirmed = live_client.post(
            "/api/v1/auth/password/reset/confirm",
            json={"token": token, "password": "NewSecure456"},
        )
        reused = live_client.post(
            "/api/v1/auth/password/reset/confirm",
            json={"token": token, "password": "OtherSecure789"},
        )
        refreshes = [
            live_client.post(
                "/api/v1/auth/refresh", json={"refresh_token": t["refresh_token"]}
            )
            for t in logins
        ]
        sessions_left = live_client.portal.call(count_sessions, tmp_path / "api.db")
        new_login = live_client.post(
            "/api/v1/auth/login",
            json={"email": "owner@example.com", "password": "NewSecure456"},
        )

        # Assert
        assert len(sent_reset_urls) == 1
        assert confirmed.status_code == status.HTTP_200_OK
        assert reused.status_code == status.HTTP_400_BAD_REQUEST
        assert [r.status_code for r in refreshes] == [status.HTTP_401_UNAUTHORIZED] * 2
        assert sessions_left == 0
        assert new_login.status_code == status.HTTP_200_OK

    def test_change_password_keeps_sessions(self, live_client):
        tokens = register(live_client).json()["tokens"]

        changed = live_client.post(
            "/api/v1/auth/password/change",
            headers=bearer(tokens["access_token"]),
            json={"current_password": PASSWORD, "new_password": "NewSecure456"},
        )
        refresh = live_client.post(
            "/api/v1/auth/refresh", json={"refresh_token": tokens["refresh_token"]}
        )
        old_login = live_client.post(
            "/api/v1/auth/login",
            json={"email": "owner@example.com", "password": PASSWORD},
        )

        assert changed.status_code == status.HTTP_200_OK
        assert refresh.status_code == status.HTTP_200_OK
        assert old_login.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.api
class TestDevices:
    """Device list and removal."""

    def test_devices_listed_and_removed(self, live_client):
        # Arrange: same account on two devices
        laptop = register(live_client, device_id="laptop").json()["tokens"]
        live_client.post(
            "/api/v1/auth/login",
            json={
                "email": "owner@example.com",
                "password": PASSWORD,
                "device_info": {"device_id": "phone"},
            },
        )
        headers = {**bearer(laptop["access_token"]), "X-Device-Id": "laptop"}

        # Act
        listed = live_client.get("/api/v1/auth/devices", headers=headers)
        removed = live_client.delete("/api/v1/auth/devices/phone", headers=headers)
        after = live_client.get("/api/v1/auth/devices", headers=headers)
        removed_again = live_client.delete("/api/v1/auth/devices/phone", headers=headers)

        # Assert
        assert listed.status_code == status.HTTP_200_OK
        assert listed.json()["total_count"] == 2
        current = {d["device_id"]: d["is_current"] for d in listed.json()["devices"]}
        assert current == {"laptop": True, "phone": False}
        assert removed.status_code == status.HTTP_200_OK
        assert [d["device_id"] for d in after.json()["devices"]] == ["laptop"]
        assert removed_again.status_code == status.HTTP_200_OK

    def test_client_platform_and_name_override_user_agent(self, live_client):
        tokens = live_client.post(
            "/api/v1/auth/register",
            headers={"User-Agent": "Mozilla/5.0 (Macintosh; Intel Mac OS X 14_0)"},
            json={
                "email": "owner@example.com",
                "password": PASSWORD,
                "device_info": {
                    "device_id": "tablet",
                    "platform": "android",
                    "name": "Shop Tablet",
                },
            },
        ).json()["tokens"]

        listed = live_client.get(
            "/api/v1/auth/devices", headers=bearer(tokens["access_token"])
        )

        [device] = listed.json()["devices"]
        assert device["platform"] == "android"
        assert device["name"] == "Shop Tablet"

    def test_unknown_platform_rejected(self, live_client):
        response = live_client.post(
            "/api/v1/auth/register",
            json={
                "email": "owner@example.com",
                "password": PASSWORD,
                "device_info": {"device_id": "x", "platform": "blackberry"},
            },
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["errors"][0]["field"] == "device_info.platform"
