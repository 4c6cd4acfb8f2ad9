"""Blind-signature client."""
from .async_client import AsyncSigningClient

__all__ = [
    'AsyncSigningClient',
]
