"""Tests for RSA key models."""
import dataclasses

import pytest

from rawrsa.core.crypto.rsa.keys import PublicKey, PrivateKey, CRTValues
from rawrsa.core.exceptions import InvalidKeyError


class TestPublicKey:
    """Test suite for PublicKey."""

    def test_fields(self):
        """Test key stores modulus and exponent."""
        pub = PublicKey(n=3233, e=17)

        assert pub.n == 3233
        assert pub.e == 17

    def test_size(self):
        """Test bit and byte sizes of the modulus."""
        pub = PublicKey(n=3233, e=17)

        assert pub.size_in_bits == 12
        assert pub.size_in_bytes == 2

    def test_is_immutable(self):
        """Test keys cannot be modified after construction."""
        pub = PublicKey(n=3233, e=17)

        with pytest.raises(dataclasses.FrozenInstanceError):
            pub.n = 1

    def test_rejects_non_integers(self):
        """Test construction rejects non-integer components."""
        with pytest.raises(InvalidKeyError):
            PublicKey(n="3233", e=17)
        with pytest.raises(InvalidKeyError):
            PublicKey(n=3233, e=True)

    def test_validate_ok(self):
        """Test validate returns the key itself."""
        pub = PublicKey(n=3233, e=17)

        assert pub.validate() is pub

    @pytest.mark.parametrize("n, e", [(1, 17), (0, 17), (-3233, 17), (3233, 0)])
    def test_validate_rejects_out_of_range(self, n, e):
        """Test validate enforces n > 1 and e >= 1."""
        with pytest.raises(InvalidKeyError):
            PublicKey(n=n, e=e).validate()

    def test_zero_modulus_is_representable(self):
        """Test a zero modulus can be constructed without validation."""
        pub = PublicKey(n=0, e=17)

        assert pub.n == 0


class TestCRTValues:
    """Test suite for CRTValues."""

    def test_compute_textbook_values(self):
        """Test CRT values of the p=61, q=53 key."""
        crt = CRTValues.compute(d=2753, p=61, q=53)

        assert crt.dp == 53
        assert crt.dq == 49
        assert crt.qinv == 38
        assert (crt.qinv * 53) % 61 == 1

    def test_compute_rejects_non_invertible_q(self):
        """Test q sharing a factor with p cannot produce CRT values."""
        with pytest.raises(InvalidKeyError):
            CRTValues.compute(d=7, p=6, q=4)


class TestPrivateKey:
    """Test suite for PrivateKey."""

    def test_from_components_precomputes(self, small_key):
        """Test from_components derives CRT values for two primes."""
        assert small_key.primes == (61, 53)
        assert small_key.uses_crt
        assert small_key.precomputed == CRTValues(dp=53, dq=49, qinv=38)

    def test_from_components_without_precompute(self):
        """Test precompute=False keeps the direct path."""
        key = PrivateKey.from_components(3233, 17, 2753, 61, 53, precompute=False)

        assert key.primes == (61, 53)
        assert not key.uses_crt

    def test_from_components_without_primes(self):
        """Test keys without primes use the direct path."""
        key = PrivateKey.from_components(3233, 17, 2753)

        assert key.primes == ()
        assert not key.uses_crt

    def test_from_components_requires_both_primes(self):
        """Test a single prime is rejected."""
        with pytest.raises(InvalidKeyError):
            PrivateKey.from_components(3233, 17, 2753, p=61)

    def test_primes_list_normalized_to_tuple(self):
        """Test primes given as a list are stored as a tuple."""
        key = PrivateKey(n=3233, e=17, d=2753, primes=[61, 53])

        assert key.primes == (61, 53)

    def test_precomputed_requires_two_primes(self):
        """Test CRT values are rejected for keys without two primes."""
        with pytest.raises(InvalidKeyError):
            PrivateKey(n=3233, e=17, d=2753, precomputed=CRTValues(53, 49, 38))

        with pytest.raises(InvalidKeyError):
            PrivateKey(
                n=3233, e=17, d=2753,
                primes=(61, 53, 1),
                precomputed=CRTValues(53, 49, 38)
            )

    def test_precomputed_type_checked(self):
        """Test precomputed must be a CRTValues instance."""
        with pytest.raises(InvalidKeyError):
            PrivateKey(n=3233, e=17, d=2753, primes=(61, 53), precomputed=(53, 49, 38))

    def test_public_key(self, small_key):
        """Test the public half of a private key."""
        assert small_key.public_key == PublicKey(n=3233, e=17)

    def test_precompute_returns_new_key(self):
        """Test precompute leaves the original key untouched."""
        key = PrivateKey(n=3233, e=17, d=2753, primes=(61, 53))
        derived = key.precompute()

        assert derived is not key
        assert derived.uses_crt
        assert not key.uses_crt

    def test_precompute_noop_for_multi_prime(self):
        """Test keys without exactly two primes are returned unchanged."""
        key = PrivateKey(n=105, e=5, d=5, primes=(3, 5, 7))

        assert key.precompute() is key

    def test_without_precomputed(self, small_key):
        """Test stripping CRT values keeps the other components."""
        direct = small_key.without_precomputed()

        assert not direct.uses_crt
        assert direct.n == small_key.n
        assert direct.d == small_key.d
        assert direct.primes == small_key.primes

    def test_validate_ok(self, small_key):
        """Test a well-formed key validates."""
        assert small_key.validate() is small_key

    def test_validate_rejects_wrong_primes(self):
        """Test primes must multiply to the modulus."""
        key = PrivateKey(n=3233, e=17, d=2753, primes=(61, 59))

        with pytest.raises(InvalidKeyError):
            key.validate()

    def test_validate_rejects_bad_exponent(self):
        """Test validate rejects d < 1."""
        with pytest.raises(InvalidKeyError):
            PrivateKey(n=3233, e=17, d=0).validate()

    def test_repr_hides_components(self, small_key):
        """Test repr does not expose the private exponent."""
        text = repr(small_key)

        assert '2753' not in text
        assert 'bits=12' in text

    def test_keys_are_hashable(self, small_key):
        """Test frozen keys can be shared as dictionary keys."""
        other = PrivateKey.from_components(n=3233, e=17, d=2753, p=61, q=53)

        assert {small_key: 1}[other] == 1
