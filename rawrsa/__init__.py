"""
rawrsa - Textbook RSA signing for blind-signature services.

Usage:
    >>> from rawrsa import PrivateKey, sign, verify
    >>>
    >>> key = PrivateKey.from_components(n=3233, e=17, d=2753, p=61, q=53)
    >>> s = sign(key, 65)
    >>> verify(key.public_key, 65, s)
    True
"""
import logging

from .core.crypto.rsa import (
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
)
from .core.config import ServerConfig, ClientConfig, TimeoutConfig
from .core.exceptions import (
    RawRSAError,
    DecryptionError,
    InvalidModulusError,
    CiphertextTooLargeError,
    InvalidKeyError,
    KeyLoadError,
    BlindingError,
    SigningRequestError,
)

__version__ = '1.0.0'


def setup_logging(level=logging.INFO):
    """
    Configure logging for rawrsa modules.

    This ensures that all rawrsa loggers are properly configured
    to show log messages at the specified level.

    Args:
        level: Logging level (default: logging.INFO)
    """
    loggers = [
        'rawrsa',
        'rawrsa.crypto.rsa',
        'rawrsa.crypto.service',
        'rawrsa.crypto.decoder',
        'rawrsa.server',
        'rawrsa.client',
    ]

    for logger_name in loggers:
        logger = logging.getLogger(logger_name)
        logger.setLevel(level)
        # Ensure propagation is enabled
        logger.propagate = True


__all__ = [
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
    'ServerConfig',
    'ClientConfig',
    'TimeoutConfig',
    'RawRSAError',
    'DecryptionError',
    'InvalidModulusError',
    'CiphertextTooLargeError',
    'InvalidKeyError',
    'KeyLoadError',
    'BlindingError',
    'SigningRequestError',
    'setup_logging',
]
