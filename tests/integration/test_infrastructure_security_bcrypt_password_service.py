"""Integration tests for the bcrypt password service.

Runs real bcrypt at the minimum cost factor so the suite stays fast.
"""

import pytest

from src.infrastructure.security.bcrypt_password_service import BcryptPasswordService


@pytest.mark.integration
class TestBcryptPasswordServiceIntegration:
    """Integration tests for BcryptPasswordService."""

    def test_hash_password_creates_bcrypt_hash(self):
        service = BcryptPasswordService(cost_factor=4)

        password_hash = service.hash_password("SecurePass123")

        assert password_hash.startswith("$2b$04$")
        assert len(password_hash) == 60

    def test_salt_is_unique_per_hash(self):
        service = BcryptPasswordService(cost_factor=4)

        assert service.hash_password("SecurePass123") != service.hash_password(
            "SecurePass123"
        )

    def test_verify_round_trip(self):
        service = BcryptPasswordService(cost_factor=4)
        password_hash = service.hash_password("SecurePass123")

        assert service.verify_password("SecurePass123", password_hash) is True
        assert service.verify_password("SecurePass124", password_hash) is False

    def test_unicode_password(self):
        service = BcryptPasswordService(cost_factor=4)
        password_hash = service.hash_password("Pässwörd123")

        assert service.verify_password("Pässwörd123", password_hash) is True

    @pytest.mark.parametrize("bad_hash", ["not-a-hash", "", None])
    def test_malformed_or_missing_hash_returns_false(self, bad_hash):
        """Bad stored hashes never raise, they just fail verification."""
        service = BcryptPasswordService(cost_factor=4)

        assert service.verify_password("SecurePass123", bad_hash) is False

    def test_empty_password_returns_false(self):
        service = BcryptPasswordService(cost_factor=4)
        password_hash = service.hash_password("SecurePass123")

        assert service.verify_password("", password_hash) is False

    def test_dummy_verify_does_not_raise(self):
        BcryptPasswordService(cost_factor=4).dummy_verify("anything" * 20)

    @pytest.mark.parametrize("cost", [3, 21])
    def test_cost_factor_bounds(self, cost):
        with pytest.raises(ValueError):
            BcryptPasswordService(cost_factor=cost)
