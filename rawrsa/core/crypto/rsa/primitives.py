"""
Raw ("textbook") RSA signing and verification.

These functions exponentiate an integer representative directly, with
no padding and no hashing. On their own they form an insecure signature
scheme; they exist to build protocols such as blind signatures, where
the caller applies its own encoding to the message.

Arithmetic uses Python's built-in integers. Three-argument pow() is not
constant time: a port that needs protection against timing attacks must
use a constant-time big-integer backend instead.
"""
from .keys import PrivateKey, PublicKey
from ...exceptions import CiphertextTooLargeError, InvalidModulusError
from ...logging import get_logger

logger = get_logger('rawrsa.crypto.rsa')


def encrypt(pub: PublicKey, m: int) -> int:
    """
    Perform an RSA encryption, returning the ciphertext m^e mod n.

    Inputs of n or more are reduced by the exponentiation, but only
    values below n can be recovered by decrypt().

    Raises:
        InvalidModulusError: If the modulus is not positive
    """
    if pub.n <= 0:
        raise InvalidModulusError(pub.n)
    return pow(m, pub.e, pub.n)


def decrypt(priv: PrivateKey, c: int) -> int:
    """
    Perform an RSA decryption, returning the plaintext c^d mod n.

    Keys carrying CRT values take the CRT path, other keys exponentiate
    over the full modulus. Both give the same result.

    Raises:
        InvalidModulusError: If the modulus is not positive
        CiphertextTooLargeError: If c is not smaller than the modulus
    """
    if priv.n <= 0:
        raise InvalidModulusError(priv.n)
    if c >= priv.n:
        raise CiphertextTooLargeError(c.bit_length(), priv.n.bit_length())

    if priv.precomputed is None:
        return _decrypt_direct(priv, c)
    return _decrypt_crt(priv, c)


def _decrypt_direct(priv: PrivateKey, c: int) -> int:
    logger.debug(f"Direct decryption over {priv.n.bit_length()}-bit modulus")
    return pow(c, priv.d, priv.n)


def _decrypt_crt(priv: PrivateKey, c: int) -> int:
    logger.debug(f"CRT decryption over {priv.n.bit_length()}-bit modulus")
    p, q = priv.primes
    crt = priv.precomputed

    m1 = pow(c, crt.dp, p)
    m2 = pow(c, crt.dq, q)
    h = m1 - m2
    if h < 0:
        h += p
    h = (h * crt.qinv) % p
    return m2 + h * q


def sign(priv: PrivateKey, msg: int) -> int:
    """
    Sign a message with the textbook RSA signature scheme.

    The message must already encode whatever padding or blinding the
    calling protocol requires.

    Raises:
        InvalidModulusError: If the modulus is not positive
        CiphertextTooLargeError: If msg is not smaller than the modulus
    """
    return decrypt(priv, msg)


def verify(pub: PublicKey, msg: int, sig: int) -> bool:
    """
    Verify that sig is a valid textbook RSA signature for msg.

    Never raises: malformed input, including a non-positive exponent or a
    signature outside [0, n), simply does not verify.
    """
    if pub.n <= 0 or pub.e < 1 or not 0 <= sig < pub.n:
        return False
    return encrypt(pub, sig) == msg
