"""
Tests for ECDSA public key recovery.

Tests cover:
- Recovery id derivation for all three v encodings
- Compact signature layout and padding
- Public key / address recovery against a real signature
- Malformed input handling
"""

import pytest
from eth_keys import keys
from eth_utils import keccak

from ethtx.errors import InvalidSignatureError
from ethtx.recovery import build_signature, get_recovery_id, recover_address, recover_pubkey


PRIVATE_KEY = keys.PrivateKey(b"\x11" * 32)
MSG_HASH = keccak(text="ethtx recovery test")
SIGNATURE = PRIVATE_KEY.sign_msg_hash(MSG_HASH)
EXPECTED_PUBKEY = b"\x04" + PRIVATE_KEY.public_key.to_bytes()


# =============================================================================
# Recovery Id Tests
# =============================================================================


class TestGetRecoveryId:
    """Tests for get_recovery_id."""

    @pytest.mark.parametrize("v", [0, 1])
    def test_eip2718_values_pass_through(self, v: int) -> None:
        assert get_recovery_id(v) == v

    @pytest.mark.parametrize("v, expected", [(27, 0), (28, 1)])
    def test_legacy_values(self, v: int, expected: int) -> None:
        assert get_recovery_id(v) == expected

    @pytest.mark.parametrize("k", [0, 1, 2, 5, 137, 8453, 11155111])
    def test_eip155_even_offsets_are_zero(self, k: int) -> None:
        assert get_recovery_id(35 + 2 * k) == 0

    @pytest.mark.parametrize("k", [0, 1, 2, 5, 137, 8453, 11155111])
    def test_eip155_odd_offsets_are_one(self, k: int) -> None:
        assert get_recovery_id(36 + 2 * k) == 1

    def test_always_zero_or_one(self) -> None:
        """Any integer maps to a valid recovery id."""
        for v in range(-10, 500):
            assert get_recovery_id(v) in (0, 1)


# =============================================================================
# Compact Signature Tests
# =============================================================================


class TestBuildSignature:
    """Tests for the 65-byte compact signature layout."""

    def test_layout(self) -> None:
        sig = build_signature(28, 1, 2**255)

        assert len(sig) == 65
        assert sig[:32] == b"\x00" * 31 + b"\x01"
        assert sig[32:64] == (2**255).to_bytes(32, "big")
        assert sig[64] == 1

    @pytest.mark.parametrize("r, s", [(0, 0), (0xFF, 0xABCD), (2**256 - 1, 1), (1, 2**256 - 1)])
    def test_components_are_right_aligned(self, r: int, s: int) -> None:
        sig = build_signature(0, r, s)

        assert int.from_bytes(sig[:32], "big") == r
        assert int.from_bytes(sig[32:64], "big") == s
        assert sig[64] == 0

    def test_eip155_recovery_id_is_last_byte(self) -> None:
        sig = build_signature(35 + 2 * 1 + 1, 5, 6)
        assert sig[64] == 1

    @pytest.mark.parametrize("r, s", [(2**256, 1), (1, 2**256), (-1, 1)])
    def test_rejects_oversized_components(self, r: int, s: int) -> None:
        with pytest.raises(InvalidSignatureError):
            build_signature(27, r, s)


# =============================================================================
# Recovery Tests
# =============================================================================


class TestRecoverPubkey:
    """Tests for recover_pubkey and recover_address."""

    @pytest.mark.parametrize(
        "v",
        [
            SIGNATURE.v,  # 0/1
            SIGNATURE.v + 27,  # legacy
            SIGNATURE.v + 35 + 2 * 1,  # EIP-155 mainnet
            SIGNATURE.v + 35 + 2 * 11155111,  # EIP-155 sepolia
        ],
    )
    def test_recovers_same_key_for_every_v_encoding(self, v: int) -> None:
        pubkey = recover_pubkey(v, SIGNATURE.r, SIGNATURE.s, MSG_HASH)

        assert len(pubkey) == 65
        assert pubkey == EXPECTED_PUBKEY

    def test_recover_address(self) -> None:
        address = recover_address(SIGNATURE.v + 27, SIGNATURE.r, SIGNATURE.s, MSG_HASH)
        assert address == PRIVATE_KEY.public_key.to_checksum_address()

    def test_flipped_recovery_id_gives_different_key(self) -> None:
        pubkey = recover_pubkey(1 - SIGNATURE.v, SIGNATURE.r, SIGNATURE.s, MSG_HASH)
        assert pubkey != EXPECTED_PUBKEY

    def test_rejects_short_hash(self) -> None:
        with pytest.raises(InvalidSignatureError):
            recover_pubkey(SIGNATURE.v, SIGNATURE.r, SIGNATURE.s, MSG_HASH[:31])

    def test_rejects_r_above_curve_order(self) -> None:
        with pytest.raises(InvalidSignatureError):
            recover_pubkey(0, 2**256 - 1, SIGNATURE.s, MSG_HASH)
