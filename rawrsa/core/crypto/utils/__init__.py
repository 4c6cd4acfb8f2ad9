"""Shared utilities for the crypto module."""
from .encoding import HexIntEncoder

__all__ = [
    'HexIntEncoder',
]
