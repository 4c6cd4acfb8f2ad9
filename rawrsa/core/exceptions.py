"""
Custom exceptions for raw RSA operations.

This module defines the exception classes raised by the signing core,
the key decoder and the blind-signature client.
"""
from typing import Optional


class RawRSAError(Exception):
    """Base exception for all rawrsa errors."""

    def __init__(self, message: str, error_code: Optional[int] = None) -> None:
        """
        Initialize the exception.

        Args:
            message: Error message
            error_code: Numeric error code (if available)
        """
        self.error_code = error_code
        super().__init__(message)


class DecryptionError(RawRSAError):
    """Exception raised when a private-key operation rejects its input."""
    pass


class InvalidModulusError(DecryptionError):
    """Exception raised when a key modulus is not positive."""

    def __init__(self, modulus: int) -> None:
        """
        Initialize the exception.

        Args:
            modulus: The offending modulus value
        """
        self.modulus = modulus
        super().__init__("decryption error: modulus must be positive")


class CiphertextTooLargeError(DecryptionError):
    """Exception raised when an input is not a residue of the modulus."""

    def __init__(self, bit_length: int, modulus_bits: int) -> None:
        """
        Initialize the exception.

        Args:
            bit_length: Bit length of the rejected input
            modulus_bits: Bit length of the key modulus
        """
        self.bit_length = bit_length
        self.modulus_bits = modulus_bits
        super().__init__("decryption error: input is not smaller than the modulus")


class InvalidKeyError(RawRSAError):
    """Exception raised for structurally invalid key material."""
    pass


class KeyLoadError(InvalidKeyError):
    """Exception raised when a key file cannot be read or parsed."""
    pass


class BlindingError(RawRSAError):
    """Exception raised by the blind-signature protocol."""
    pass


class SigningRequestError(RawRSAError):
    """Exception raised when the signing service rejects a request."""

    def __init__(self, message: str, status: Optional[int] = None) -> None:
        """
        Initialize the exception.

        Args:
            message: Error text returned by the service
            status: HTTP status code
        """
        super().__init__(message, error_code=status)

    @property
    def status(self) -> Optional[int]:
        """HTTP status of the failed request."""
        return self.error_code
