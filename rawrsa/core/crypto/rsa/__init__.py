"""Raw RSA signing module."""
from .keys import PublicKey, PrivateKey, CRTValues
from .primitives import encrypt, decrypt, sign, verify
from .rsa_service import RSAService
from .rsa_key_decoder import RSAKeyDecoder
from .blinding import (
    Credential,
    generate_token,
    hash_token,
    generate_blinding_factor,
    blind,
    unblind,
)

__all__ = [
    'PublicKey',
    'PrivateKey',
    'CRTValues',
    'encrypt',
    'decrypt',
    'sign',
    'verify',
    'RSAService',
    'RSAKeyDecoder',
    'Credential',
    'generate_token',
    'hash_token',
    'generate_blinding_factor',
    'blind',
    'unblind',
]
