"""Unit tests for MfaVerifier.

Tests cover:
- TOTP acceptance
- Backup code fallback and single-use consumption
- Lost compare-and-set race
- Unreadable secret
"""

from unittest.mock import AsyncMock, Mock

import pytest

from src.application.services.mfa_verifier import MfaVerifier
from src.core.enums import ErrorCode
from src.core.errors import DecryptError
from src.core.result import Failure, Success
from src.domain.protocols import LOGIN_WINDOW
from tests.conftest import create_user


def fake_encryption() -> Mock:
    """Encryption double: 'enc:<plain>' decrypts to '<plain>'."""
    encryption = Mock()

    def decrypt(blob: str):
        if not blob.startswith("enc:"):
            return Failure(
                error=DecryptError(code=ErrorCode.DECRYPTION_FAILED, message="bad blob")
            )
        return Success(value=blob.removeprefix("enc:"))

    encryption.decrypt.side_effect = decrypt
    return encryption


def build_verifier(mock_logger, totp_ok=False, cas_result=True):
    user_repo = AsyncMock()
    user_repo.replace_backup_codes.return_value = cas_result
    totp = Mock()
    totp.verify_code.return_value = totp_ok
    verifier = MfaVerifier(
        user_repo=user_repo,
        encryption_service=fake_encryption(),
        totp_service=totp,
        logger=mock_logger,
    )
    return verifier, user_repo, totp


def mfa_user(codes=None):
    return create_user(
        mfa_enabled=True,
        mfa_secret="enc:JBSWY3DPEHPK3PXP",
        backup_codes=codes if codes is not None else ["enc:AAAA1111", "enc:BBBB2222"],
    )


@pytest.mark.unit
class TestTotpPath:
    """Test TOTP verification."""

    @pytest.mark.asyncio
    async def test_valid_totp_accepted_without_touching_backup_codes(self, mock_logger):
        # Arrange
        verifier, user_repo, totp = build_verifier(mock_logger, totp_ok=True)
        user = mfa_user()

        # Act
        result = await verifier.verify(user, "123456", LOGIN_WINDOW)

        # Assert
        assert result == Success(value=True)
        totp.verify_code.assert_called_once_with("JBSWY3DPEHPK3PXP", "123456", LOGIN_WINDOW)
        user_repo.replace_backup_codes.assert_not_called()

    @pytest.mark.asyncio
    async def test_unreadable_secret_is_failure(self, mock_logger):
        verifier, _, _ = build_verifier(mock_logger)
        user = create_user(mfa_enabled=True, mfa_secret="corrupted")

        result = await verifier.verify(user, "123456", LOGIN_WINDOW)

        assert isinstance(result, Failure)
        assert isinstance(result.error, DecryptError)

    @pytest.mark.asyncio
    async def test_missing_secret_is_failure(self, mock_logger):
        verifier, _, _ = build_verifier(mock_logger)

        result = await verifier.decrypt_secret(create_user())

        assert isinstance(result, Failure)


@pytest.mark.unit
class TestBackupCodes:
    """Test backup code consumption."""

    @pytest.mark.asyncio
    async def test_matching_backup_code_is_consumed(self, mock_logger):
        """The matched code leaves the stored list through a CAS update."""
        # Arrange
        verifier, user_repo, _ = build_verifier(mock_logger)
        user = mfa_user()

        # Act
        result = await verifier.verify(user, "bbbb2222", LOGIN_WINDOW)

        # Assert
        assert result == Success(value=True)
        user_repo.replace_backup_codes.assert_awaited_once_with(
            user.id,
            expected=["enc:AAAA1111", "enc:BBBB2222"],
            remaining=["enc:AAAA1111"],
        )
        assert user.backup_codes == ["enc:AAAA1111"]

    @pytest.mark.asyncio
    async def test_unknown_code_rejected(self, mock_logger):
        verifier, user_repo, _ = build_verifier(mock_logger)

        result = await verifier.verify(mfa_user(), "CCCC3333", LOGIN_WINDOW)

        assert result == Success(value=False)
        user_repo.replace_backup_codes.assert_not_called()

    @pytest.mark.asyncio
    async def test_lost_cas_race_rejects_code(self, mock_logger):
        """A concurrent request that consumed the same code first wins."""
        verifier, _, _ = build_verifier(mock_logger, cas_result=False)
        user = mfa_user()

        result = await verifier.verify(user, "AAAA1111", LOGIN_WINDOW)

        assert result == Success(value=False)
        assert user.backup_codes == ["enc:AAAA1111", "enc:BBBB2222"]

    @pytest.mark.asyncio
    async def test_undecryptable_backup_code_is_skipped(self, mock_logger):
        verifier, user_repo, _ = build_verifier(mock_logger)
        user = mfa_user(codes=["garbage", "enc:BBBB2222"])

        result = await verifier.verify(user, "BBBB2222", LOGIN_WINDOW)

        assert result == Success(value=True)
        mock_logger.warning.assert_called_once()
        user_repo.replace_backup_codes.assert_awaited_once_with(
            user.id, expected=["garbage", "enc:BBBB2222"], remaining=["garbage"]
        )

    @pytest.mark.asyncio
    async def test_no_backup_codes(self, mock_logger):
        verifier, _, _ = build_verifier(mock_logger)

        result = await verifier.verify(mfa_user(codes=[]), "AAAA1111", LOGIN_WINDOW)

        assert result == Success(value=False)
