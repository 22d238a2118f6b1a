"""
Ed25519 key handling for the ledger.

A PublicKey is the credential that owns a transaction output; spending the
output requires a signature that verifies against it.
"""

from typing import Any, Optional

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey, Ed25519PublicKey
from cryptography.hazmat.primitives.serialization import Encoding, NoEncryption, PrivateFormat, PublicFormat

KEY_SIZE = 32


class PublicKey:
    """
    Credential owning a transaction output.

    Attributes:
        key_bytes (bytes): Raw 32-byte Ed25519 public key
    """

    def __init__(self, key_bytes: bytes):
        if len(key_bytes) != KEY_SIZE:
            raise ValueError(f"Public key must be {KEY_SIZE} bytes, got {len(key_bytes)}")
        self.key_bytes = bytes(key_bytes)

    @classmethod
    def from_hex(cls, public_hex: str) -> 'PublicKey':
        return cls(bytes.fromhex(public_hex))

    def to_bytes(self) -> bytes:
        return self.key_bytes

    def hex(self) -> str:
        return self.key_bytes.hex()

    def verify(self, message: bytes, signature: Optional[bytes]) -> bool:
        """
        Check an Ed25519 signature over message.

        Args:
            message: Data that was signed
            signature: Raw signature bytes, or None for an unsigned input

        Returns:
            bool: True only if the signature is well-formed and valid
        """
        if not signature:
            return False
        try:
            Ed25519PublicKey.from_public_bytes(self.key_bytes).verify(signature, message)
            return True
        except (InvalidSignature, ValueError, TypeError):
            return False

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PublicKey):
            return NotImplemented
        return self.key_bytes == other.key_bytes

    def __hash__(self) -> int:
        return hash(self.key_bytes)

    def __repr__(self) -> str:
        return f"PublicKey({self.hex()[:16]}...)"


class PrivateKey:
    """Ed25519 signing key; kept out of the pool and transactions."""

    def __init__(self, key: Ed25519PrivateKey):
        self._key = key

    @classmethod
    def generate(cls) -> 'PrivateKey':
        return cls(Ed25519PrivateKey.generate())

    @classmethod
    def from_hex(cls, private_hex: str) -> 'PrivateKey':
        return cls(Ed25519PrivateKey.from_private_bytes(bytes.fromhex(private_hex)))

    def hex(self) -> str:
        raw = self._key.private_bytes(Encoding.Raw, PrivateFormat.Raw, NoEncryption())
        return raw.hex()

    def public_key(self) -> PublicKey:
        return PublicKey(self._key.public_key().public_bytes(Encoding.Raw, PublicFormat.Raw))

    def sign(self, message: bytes) -> bytes:
        return self._key.sign(message)


def verify_signature(credential: Any, message: bytes, signature: Optional[bytes]) -> bool:
    """
    Default signature verifier.

    Works with any credential exposing verify(message, signature).
    """
    return bool(credential.verify(message, signature))
