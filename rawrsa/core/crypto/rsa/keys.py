"""
RSA key models.

Keys are immutable values: they are built once (usually by the key
decoder at startup) and then shared read-only between every caller.
A private key optionally carries CRT values; when they are absent the
decryption falls back to a single exponentiation over the full modulus.
"""
from dataclasses import dataclass, field, replace
from typing import Optional, Tuple

from ...exceptions import InvalidKeyError


def _require_int(name: str, value) -> None:
    """Raise InvalidKeyError unless value is a plain integer."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidKeyError(f"{name} must be an integer, got {type(value).__name__}")


@dataclass(frozen=True)
class PublicKey:
    """
    RSA public key.

    Attributes:
        n: Modulus
        e: Public exponent
    """
    n: int
    e: int

    def __post_init__(self):
        _require_int('n', self.n)
        _require_int('e', self.e)

    @property
    def size_in_bits(self) -> int:
        """Bit length of the modulus."""
        return self.n.bit_length()

    @property
    def size_in_bytes(self) -> int:
        """Byte length of the modulus."""
        return (self.n.bit_length() + 7) // 8

    def validate(self) -> 'PublicKey':
        """
        Check the key is usable.

        Returns:
            The key itself, for chaining

        Raises:
            InvalidKeyError: If n <= 1 or e < 1
        """
        if self.n <= 1:
            raise InvalidKeyError("modulus must be greater than 1")
        if self.e < 1:
            raise InvalidKeyError("public exponent must be at least 1")
        return self


@dataclass(frozen=True)
class CRTValues:
    """
    Precomputed Chinese Remainder Theorem values for a two-prime key.

    Attributes:
        dp: d mod (p - 1)
        dq: d mod (q - 1)
        qinv: q^-1 mod p
    """
    dp: int
    dq: int
    qinv: int

    def __post_init__(self):
        _require_int('dp', self.dp)
        _require_int('dq', self.dq)
        _require_int('qinv', self.qinv)

    @classmethod
    def compute(cls, d: int, p: int, q: int) -> 'CRTValues':
        """
        Derive CRT values from the private exponent and the two primes.

        Raises:
            InvalidKeyError: If q has no inverse modulo p
        """
        try:
            qinv = pow(q, -1, p)
        except ValueError as e:
            raise InvalidKeyError("q is not invertible modulo p") from e
        return cls(dp=d % (p - 1), dq=d % (q - 1), qinv=qinv)


@dataclass(frozen=True)
class PrivateKey:
    """
    RSA private key.

    The primes tuple is canonically (p, q). When precomputed is set the
    key has exactly two primes and decryption takes the CRT path.

    Attributes:
        n: Modulus
        e: Public exponent
        d: Private exponent
        primes: Prime factors of n (may be empty)
        precomputed: Optional CRT values derived from d and the primes
    """
    n: int
    e: int
    d: int
    primes: Tuple[int, ...] = field(default=())
    precomputed: Optional[CRTValues] = None

    def __post_init__(self):
        _require_int('n', self.n)
        _require_int('e', self.e)
        _require_int('d', self.d)
        # Frozen: normalize lists passed by callers into a tuple
        object.__setattr__(self, 'primes', tuple(self.primes))
        for index, prime in enumerate(self.primes):
            _require_int(f'primes[{index}]', prime)
        if self.precomputed is not None:
            if not isinstance(self.precomputed, CRTValues):
                raise InvalidKeyError("precomputed must be a CRTValues instance")
            if len(self.primes) != 2:
                raise InvalidKeyError(
                    f"CRT values require exactly two primes, got {len(self.primes)}"
                )

    def __repr__(self) -> str:
        return (
            f"PrivateKey(bits={self.n.bit_length()}, e={self.e}, "
            f"primes={len(self.primes)}, crt={self.uses_crt})"
        )

    @classmethod
    def from_components(
        cls,
        n: int,
        e: int,
        d: int,
        p: Optional[int] = None,
        q: Optional[int] = None,
        precompute: bool = True
    ) -> 'PrivateKey':
        """
        Build a private key from its integer components.

        Args:
            n: Modulus
            e: Public exponent
            d: Private exponent
            p: First prime factor (optional)
            q: Second prime factor (optional)
            precompute: Derive CRT values when both primes are given

        Returns:
            PrivateKey instance
        """
        if (p is None) != (q is None):
            raise InvalidKeyError("both primes must be given, or neither")
        primes = () if p is None else (p, q)
        key = cls(n=n, e=e, d=d, primes=primes)
        return key.precompute() if precompute else key

    @property
    def public_key(self) -> PublicKey:
        """Public half of this key."""
        return PublicKey(n=self.n, e=self.e)

    @property
    def uses_crt(self) -> bool:
        """True when decryption takes the CRT path."""
        return self.precomputed is not None

    def precompute(self) -> 'PrivateKey':
        """
        Return a key carrying CRT values.

        Keys that already carry them, or that do not have exactly two
        primes, are returned unchanged.
        """
        if self.precomputed is not None or len(self.primes) != 2:
            return self
        p, q = self.primes
        return replace(self, precomputed=CRTValues.compute(self.d, p, q))

    def without_precomputed(self) -> 'PrivateKey':
        """Return a copy of this key that decrypts through the direct path."""
        if self.precomputed is None:
            return self
        return replace(self, precomputed=None)

    def validate(self) -> 'PrivateKey':
        """
        Check the key is usable.

        This is a shape check only: primality and the relation between
        e and d are not verified.

        Returns:
            The key itself, for chaining

        Raises:
            InvalidKeyError: If a component is out of range
        """
        self.public_key.validate()
        if self.d < 1:
            raise InvalidKeyError("private exponent must be at least 1")
        if self.primes:
            product = 1
            for prime in self.primes:
                if prime <= 1:
                    raise InvalidKeyError("prime factors must be greater than 1")
                product *= prime
            if product != self.n:
                raise InvalidKeyError("prime factors do not multiply to the modulus")
        return self
