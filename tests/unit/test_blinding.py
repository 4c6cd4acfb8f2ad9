"""Tests for blind signature helpers."""
import json

import pytest
from Crypto.Hash import SHA512

from rawrsa.core.crypto.rsa import PublicKey, sign, verify
from rawrsa.core.crypto.rsa.blinding import (
    Credential,
    blind,
    generate_blinding_factor,
    generate_token,
    hash_token,
    unblind,
)
from rawrsa.core.exceptions import BlindingError


class TestTokens:
    """Test suite for token generation and hashing."""

    def test_generate_token_size(self):
        """Test default and custom token sizes."""
        assert len(generate_token()) == 16
        assert len(generate_token(32)) == 32

    def test_tokens_are_random(self):
        """Test two tokens differ."""
        assert generate_token() != generate_token()

    def test_hash_token(self):
        """Test the hash is the big-endian SHA-512 digest."""
        token = b"\x00" * 16
        expected = int.from_bytes(SHA512.new(token).digest(), 'big')

        assert hash_token(token) == expected
        assert hash_token(token).bit_length() <= 512


class TestBlinding:
    """Test suite for blinding and unblinding."""

    def test_blinding_factor_is_invertible(self, small_public_key):
        """Test drawn factors have an inverse modulo n."""
        for _ in range(20):
            r = generate_blinding_factor(small_public_key)
            assert 1 < r < small_public_key.n
            assert (r * pow(r, -1, small_public_key.n)) % small_public_key.n == 1

    @pytest.mark.parametrize("n", [0, 1, 2, -3233])
    def test_blinding_factor_rejects_tiny_modulus(self, n):
        """Test a modulus with no usable factor raises BlindingError."""
        with pytest.raises(BlindingError, match="modulus"):
            generate_blinding_factor(PublicKey(n=n, e=17))

    def test_blind_sign_unblind_small_key(self, small_key, small_public_key):
        """Test unblinding a blind signature gives the plain signature."""
        m, r = 65, 7

        blinded = blind(small_public_key, m, r)
        signature = unblind(small_public_key, sign(small_key, blinded), r)

        assert signature == sign(small_key, m) == 588
        assert verify(small_public_key, m, signature)

    def test_blinded_message_hides_message(self, small_public_key):
        """Test the blinded value differs from the message."""
        assert blind(small_public_key, 65, 7) != 65

    def test_blind_sign_unblind_large_key(self, private_key):
        """Test the protocol with a token hash on a 1024-bit key."""
        pub = private_key.public_key
        m = hash_token(generate_token())
        r = generate_blinding_factor(pub)

        signature = unblind(pub, sign(private_key, blind(pub, m, r)), r)

        assert verify(pub, m, signature)

    def test_unblind_rejects_non_invertible_factor(self, small_public_key):
        """Test a factor sharing a prime with n raises BlindingError."""
        with pytest.raises(BlindingError):
            unblind(small_public_key, 100, 61)


class TestCredential:
    """Test suite for Credential."""

    @pytest.fixture
    def credential(self, private_key):
        """Create a credential signed by the 1024-bit key."""
        token = bytes(range(16))
        return Credential(token=token, signature=sign(private_key, hash_token(token)))

    def test_verify(self, credential, private_key):
        """Test a correctly signed credential verifies."""
        assert credential.verify(private_key.public_key)

    def test_verify_tampered(self, credential, private_key):
        """Test a modified token does not verify."""
        tampered = Credential(token=b"\xff" + credential.token[1:], signature=credential.signature)

        assert not tampered.verify(private_key.public_key)

    def test_to_dict(self, credential):
        """Test converting to dictionary."""
        result = credential.to_dict()

        assert result['token'] == '000102030405060708090a0b0c0d0e0f'
        assert int(result['signature'], 16) == credential.signature

    def test_json_round_trip(self, credential):
        """Test serializing and reading back."""
        restored = Credential.from_dict(json.loads(credential.to_json()))

        assert restored == credential

    @pytest.mark.parametrize("data", [
        {},
        {'token': '00'},
        {'token': 'zz', 'signature': '1'},
        {'token': '00', 'signature': '0x1'},
        {'token': None, 'signature': '1'},
    ])
    def test_from_dict_malformed(self, data):
        """Test malformed dictionaries raise BlindingError."""
        with pytest.raises(BlindingError):
            Credential.from_dict(data)
