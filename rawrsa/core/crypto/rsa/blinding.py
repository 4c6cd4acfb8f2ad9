"""
Blind RSA signature helpers.

The requester hashes a random token, multiplies the hash by a random
factor raised to the public exponent, and has the blinded value signed
with raw RSA. Dividing the blind signature by the factor yields a plain
signature on the token hash that the signer has never seen.
"""
import json
from dataclasses import dataclass
from typing import Any, Dict

from Crypto.Hash import SHA512
from Crypto.Random import get_random_bytes

from .keys import PublicKey
from .primitives import verify
from ..utils.encoding import HexIntEncoder
from ...exceptions import BlindingError

TOKEN_SIZE = 16
BLINDING_SIZE = 256


def generate_token(size: int = TOKEN_SIZE) -> bytes:
    """Generate a random token."""
    return get_random_bytes(size)


def hash_token(token: bytes) -> int:
    """Return the SHA-512 digest of a token as a big-endian integer."""
    return int.from_bytes(SHA512.new(token).digest(), byteorder='big')


def generate_blinding_factor(pub: PublicKey, size: int = BLINDING_SIZE) -> int:
    """
    Draw a random blinding factor that is invertible modulo n.

    Args:
        pub: Signer's public key
        size: Number of random bytes per draw
    """
    if pub.n <= 2:
        raise BlindingError(f"modulus {pub.n} admits no blinding factor")
    while True:
        r = int.from_bytes(get_random_bytes(size), byteorder='big') % pub.n
        if r > 1 and _is_invertible(r, pub.n):
            return r


def _is_invertible(r: int, n: int) -> bool:
    try:
        pow(r, -1, n)
    except ValueError:
        return False
    return True


def blind(pub: PublicKey, m: int, r: int) -> int:
    """Blind a message: (m * r^e) mod n."""
    return (m * pow(r, pub.e, pub.n)) % pub.n


def unblind(pub: PublicKey, blind_sig: int, r: int) -> int:
    """
    Remove the blinding factor from a blind signature: s * r^-1 mod n.

    Raises:
        BlindingError: If r has no inverse modulo n
    """
    try:
        r_inv = pow(r, -1, pub.n)
    except ValueError as e:
        raise BlindingError("blinding factor is not invertible") from e
    return blind_sig * r_inv % pub.n


@dataclass
class Credential:
    """
    A token together with the signer's signature on its hash.

    Attributes:
        token: Random token bytes
        signature: Unblinded signature on hash_token(token)
    """
    token: bytes
    signature: int

    def verify(self, pub: PublicKey) -> bool:
        """Check the signature against the signer's public key."""
        return verify(pub, hash_token(self.token), self.signature)

    def to_dict(self) -> Dict[str, str]:
        """
        Convert to dictionary for serialization.

        Returns:
            Dictionary with hex encoded token and signature
        """
        return {
            'token': self.token.hex(),
            'signature': HexIntEncoder.encode(self.signature),
        }

    def to_json(self) -> str:
        """Serialize to JSON string."""
        return json.dumps(self.to_dict())

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Credential':
        """
        Create from dictionary.

        Raises:
            BlindingError: If a field is missing or not hex
        """
        try:
            return cls(
                token=bytes.fromhex(data['token']),
                signature=HexIntEncoder.decode(data['signature']),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise BlindingError(f"malformed credential: {e}") from e
