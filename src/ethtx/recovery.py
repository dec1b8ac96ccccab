"""ECDSA public key recovery from raw (v, r, s) components.

``v`` shows up in three encodings depending on where the signature came from:

- 0 / 1: already a recovery id (typed EIP-2718 transactions)
- 27 / 28: pre-EIP-155 legacy signatures
- 35 + 2 * chain_id + recovery_id: EIP-155 chain-bound signatures

The curve arithmetic is done by ``eth_keys``; this module only normalises
the inputs into the 65-byte compact form it expects.
"""

from eth_keys import keys
from eth_keys.exceptions import BadSignature, ValidationError as EthKeysValidationError

from .constants import HASH_LENGTH, MAX_UINT256
from .errors import InvalidSignatureError

__all__ = ["get_recovery_id", "build_signature", "recover_pubkey", "recover_address"]


def get_recovery_id(v: int) -> int:
    """Derive the recovery id (0 or 1) from ``v``.

    Args:
        v: Signature ``v`` value in any of the three encodings

    Returns:
        Recovery id, always 0 or 1
    """
    if v in (0, 1):
        return v
    if v in (27, 28):
        return v - 27
    chain_id = (v - 35) // 2
    return v - 35 - 2 * chain_id


def build_signature(v: int, r: int, s: int) -> bytes:
    """Build a 65-byte compact signature: r (32) || s (32) || recovery id (1).

    r and s are left-padded with zeros to exactly 32 bytes.

    Raises:
        InvalidSignatureError: If r or s does not fit in 32 bytes
    """
    for name, component in (("r", r), ("s", s)):
        if component < 0 or component > MAX_UINT256:
            raise InvalidSignatureError(f"{name} must fit in 32 bytes")
    return r.to_bytes(32, "big") + s.to_bytes(32, "big") + bytes([get_recovery_id(v)])


def _recover(v: int, r: int, s: int, msg_hash: bytes) -> keys.PublicKey:
    if len(msg_hash) != HASH_LENGTH:
        raise InvalidSignatureError(f"message hash must be {HASH_LENGTH} bytes, got {len(msg_hash)}")
    signature_bytes = build_signature(v, r, s)
    try:
        signature = keys.Signature(signature_bytes=signature_bytes)
        return signature.recover_public_key_from_msg_hash(msg_hash)
    except (BadSignature, EthKeysValidationError) as e:
        raise InvalidSignatureError(f"cannot recover public key: {e}") from e


def recover_pubkey(v: int, r: int, s: int, msg_hash: bytes) -> bytes:
    """Recover the 65-byte uncompressed public key (0x04 prefix) that produced a signature.

    Args:
        v: Signature ``v`` (0/1, 27/28 or EIP-155 encoded)
        r: Signature ``r``
        s: Signature ``s``
        msg_hash: 32-byte hash that was signed

    Returns:
        Uncompressed public key bytes

    Raises:
        InvalidSignatureError: If inputs are malformed or no key can be recovered
    """
    public_key = _recover(v, r, s, msg_hash)
    return b"\x04" + public_key.to_bytes()


def recover_address(v: int, r: int, s: int, msg_hash: bytes) -> str:
    """Recover the checksum address of the signer."""
    return _recover(v, r, s, msg_hash).to_checksum_address()
