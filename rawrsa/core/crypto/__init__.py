"""Crypto module: raw RSA primitives, key decoding and blinding."""
from .utils import HexIntEncoder
from .rsa import (
    PublicKey,
    PrivateKey,
    CRTValues,
    RSAService,
    RSAKeyDecoder,
    Credential,
    encrypt,
    decrypt,
    sign,
    verify,
    blind,
    unblind,
)

__all__ = [
    'HexIntEncoder',
    'PublicKey',
    'PrivateKey',
    'CRTValues',
    'RSAService',
    'RSAKeyDecoder',
    'Credential',
    'encrypt',
    'decrypt',
    'sign',
    'verify',
    'blind',
    'unblind',
]
