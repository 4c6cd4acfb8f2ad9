"""RSA signing service."""
from pathlib import Path
from typing import Optional, Tuple, Union

from .keys import PrivateKey, PublicKey
from .primitives import sign as raw_sign, verify as raw_verify
from .rsa_key_decoder import RSAKeyDecoder
from ...exceptions import RawRSAError
from ...logging import get_logger

logger = get_logger('rawrsa.crypto.service')


class RSAService:
    """
    Raw RSA signing service bound to one private key.

    The key is immutable, so a single instance can be shared by any
    number of concurrent callers without locking.

    Example:
        >>> service = RSAService.from_pem_file("private.pem")
        >>> e, n = service.get_public_key()
        >>> sig = service.sign(msg)
        >>> service.verify(msg, sig)
        True
    """

    def __init__(self, private_key: PrivateKey):
        """
        Initialize the service.

        Args:
            private_key: Key used for every signature
        """
        self._private_key = private_key
        self._public_key = private_key.public_key

    @classmethod
    def from_pem_file(
        cls,
        path: Union[str, Path],
        decoder: Optional[RSAKeyDecoder] = None
    ) -> 'RSAService':
        """Load the private key from a file and build the service."""
        decoder = decoder or RSAKeyDecoder()
        return cls(decoder.load_file(path))

    @property
    def public_key(self) -> PublicKey:
        """Public half of the service key."""
        return self._public_key

    def get_public_key(self) -> Tuple[int, int]:
        """Return the public exponent and the modulus, as (e, n)."""
        return self._public_key.e, self._public_key.n

    def sign(self, msg: int) -> int:
        """
        Sign an integer message.

        Raises:
            InvalidModulusError: If the key modulus is not positive
            CiphertextTooLargeError: If msg is not smaller than the modulus
        """
        try:
            return raw_sign(self._private_key, msg)
        except RawRSAError as e:
            logger.warning(f"Signing rejected: {e}")
            raise

    def verify(self, msg: int, sig: int) -> bool:
        """Verify a signature against the service's public key."""
        return raw_verify(self._public_key, msg, sig)
