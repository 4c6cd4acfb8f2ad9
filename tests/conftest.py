"""Pytest fixtures for rawrsa tests."""
import pytest
from Crypto.PublicKey import RSA
from cryptography.hazmat.primitives.asymmetric import rsa as crypto_rsa

from rawrsa.core.crypto.rsa import PrivateKey, RSAService, RSAKeyDecoder


@pytest.fixture
def small_key():
    """Returns the textbook key p=61, q=53, e=17, d=2753 with CRT values."""
    return PrivateKey.from_components(n=3233, e=17, d=2753, p=61, q=53)


@pytest.fixture
def small_public_key(small_key):
    """Returns the public half of the textbook key."""
    return small_key.public_key


@pytest.fixture
def small_service(small_key):
    """Returns a signing service bound to the textbook key."""
    return RSAService(small_key)


@pytest.fixture(scope="session")
def rsa_key():
    """Generates a 1024-bit pycryptodome RSA key once per session."""
    return RSA.generate(1024)


@pytest.fixture
def rsa_pem(rsa_key):
    """Returns the session key as a PKCS#1 PEM document."""
    return rsa_key.export_key(format='PEM')


@pytest.fixture
def private_key(rsa_key):
    """Returns the session key converted to a PrivateKey."""
    return RSAKeyDecoder.from_key_object(rsa_key)


@pytest.fixture
def service(private_key):
    """Returns a signing service bound to the 1024-bit key."""
    return RSAService(private_key)


@pytest.fixture
def key_file(tmp_path, rsa_pem):
    """Writes the session key to a PEM file and returns its path."""
    path = tmp_path / "private.pem"
    path.write_bytes(rsa_pem)
    return path


@pytest.fixture(scope="session")
def cryptography_key():
    """Generates a 2048-bit key with the cryptography library."""
    return crypto_rsa.generate_private_key(public_exponent=65537, key_size=2048)
