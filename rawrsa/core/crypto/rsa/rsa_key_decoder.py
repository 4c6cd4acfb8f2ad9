"""RSA private key decoder for PEM and DER files."""
import re
from pathlib import Path
from typing import Optional, Union

from Crypto.PublicKey import RSA
from cryptography.hazmat.primitives.asymmetric import rsa as crypto_rsa

from .keys import CRTValues, PrivateKey
from ...exceptions import InvalidKeyError, KeyLoadError
from ...logging import get_logger

logger = get_logger('rawrsa.crypto.decoder')

_PEM_END = re.compile(rb'-----END [A-Z0-9 ]+-----')


class RSAKeyDecoder:
    """Decodes RSA private keys into PrivateKey values."""

    @staticmethod
    def check_trailing_data(data: bytes) -> None:
        """
        Reject PEM input that carries anything after its first block.

        Raises:
            KeyLoadError: If non-whitespace data follows the END line
        """
        match = _PEM_END.search(data)
        if match is None:
            return
        rest = data[match.end():]
        if rest.strip():
            logger.debug(f"  {len(rest.strip())} bytes after PEM block")
            raise KeyLoadError("trailing PEM data")

    @staticmethod
    def from_key_object(key) -> PrivateKey:
        """
        Convert a library key object into a PrivateKey.

        Args:
            key: pycryptodome RsaKey or cryptography RSAPrivateKey

        Returns:
            PrivateKey carrying CRT values
        """
        if isinstance(key, crypto_rsa.RSAPrivateKey):
            numbers = key.private_numbers()
            public = numbers.public_numbers
            logger.debug(f"build from cryptography key, bits={public.n.bit_length()}")
            crt = CRTValues(dp=numbers.dmp1, dq=numbers.dmq1, qinv=numbers.iqmp)
            return PrivateKey(
                n=public.n,
                e=public.e,
                d=numbers.d,
                primes=(numbers.p, numbers.q),
                precomputed=crt
            )

        if isinstance(key, RSA.RsaKey):
            if not key.has_private():
                raise KeyLoadError("key does not contain private components")
            n, e, d = int(key.n), int(key.e), int(key.d)
            p, q = int(key.p), int(key.q)
            logger.debug(f"build from pycryptodome key, bits={n.bit_length()}")
            # RsaKey.u is p^-1 mod q; derive q^-1 mod p instead
            return PrivateKey.from_components(n, e, d, p, q)

        raise KeyLoadError(f"unsupported key object: {type(key).__name__}")

    def decode(self, data: bytes, passphrase: Optional[str] = None) -> PrivateKey:
        """
        Decode a PEM or DER encoded private key.

        Args:
            data: Encoded key (PKCS#1 or PKCS#8)
            passphrase: Passphrase for encrypted keys

        Returns:
            Validated PrivateKey carrying CRT values

        Raises:
            KeyLoadError: If the data is not a usable private key
        """
        logger.debug(f"decode() called, total length={len(data)}")
        if data.lstrip().startswith(b'-----BEGIN'):
            self.check_trailing_data(data)

        try:
            rsa_key = RSA.import_key(data, passphrase=passphrase)
        except (ValueError, IndexError, TypeError) as e:
            raise KeyLoadError(f"cannot parse RSA key: {e}") from e

        key = self.from_key_object(rsa_key)
        try:
            key.validate()
        except InvalidKeyError as e:
            raise KeyLoadError(str(e)) from e
        return key

    def load_file(self, path: Union[str, Path], passphrase: Optional[str] = None) -> PrivateKey:
        """
        Read and decode a private key file.

        Raises:
            KeyLoadError: If the file cannot be read or decoded
        """
        path = Path(path)
        try:
            data = path.read_bytes()
        except OSError as e:
            raise KeyLoadError(f"cannot read key file {path}: {e}") from e

        key = self.decode(data, passphrase=passphrase)
        logger.info(f"Loaded {key.n.bit_length()}-bit RSA key from {path}")
        return key
