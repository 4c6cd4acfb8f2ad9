"""
Async blind-signature client.

Talks to the signing server and runs the blind-signature protocol end
to end, so the server signs a token hash it never sees.
"""
from typing import Any, Dict, Optional

import aiohttp

from ..core.config import ClientConfig
from ..core.crypto.rsa import PublicKey
from ..core.crypto.rsa.blinding import (
    Credential,
    blind,
    generate_blinding_factor,
    generate_token,
    hash_token,
    unblind,
)
from ..core.crypto.utils import HexIntEncoder
from ..core.exceptions import BlindingError, SigningRequestError
from ..core.logging import get_logger


class AsyncSigningClient:
    """
    Asynchronous client for the signing server.

    Example:
        >>> config = ClientConfig(base_url="http://localhost:8080")
        >>> async with AsyncSigningClient(config) as client:
        ...     credential = await client.obtain_credential()
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        session: Optional[aiohttp.ClientSession] = None
    ):
        """
        Initialize the client.

        Args:
            config: Client configuration (uses defaults if not provided)
            session: Existing session to use instead of creating one
        """
        self._config = config or ClientConfig.default()
        self._session = session
        self._owns_session = session is None
        self._hex = HexIntEncoder()
        self._logger = get_logger('rawrsa.client')

    @property
    def config(self) -> ClientConfig:
        """Get current configuration."""
        return self._config

    async def __aenter__(self) -> 'AsyncSigningClient':
        """Async context manager entry."""
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure session is created and open."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(**self._config.get_session_kwargs())
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        """Close the HTTP session if this client created it."""
        if self._session is not None and self._owns_session and not self._session.closed:
            await self._session.close()
        self._session = None

    async def _request(self, method: str, path: str, payload: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        session = await self._ensure_session()
        url = self._config.url(path)
        self._logger.debug(f"{method} {url}")

        try:
            async with session.request(method, url, json=payload) as response:
                if response.status != 200:
                    text = (await response.text()).strip()
                    raise SigningRequestError(text or response.reason, status=response.status)
                data = await response.json(content_type=None)
        except aiohttp.ClientError as e:
            raise SigningRequestError(f"request to {url} failed: {e}") from e
        except ValueError as e:
            raise SigningRequestError(f"invalid JSON from {url}: {e}") from e

        if not isinstance(data, dict):
            raise SigningRequestError(f"unexpected response from {url}")
        return data

    async def get_public_key(self) -> PublicKey:
        """Fetch the signer's public key."""
        data = await self._request('GET', '/pkey')
        try:
            return PublicKey(n=self._hex.decode(data['n']), e=self._hex.decode(data['e']))
        except (KeyError, ValueError) as e:
            raise SigningRequestError(f"malformed public key response: {e}") from e

    async def sign_blinded(self, m: int) -> int:
        """Have the server sign an already blinded message."""
        data = await self._request('POST', '/sign', {'m': self._hex.encode(m)})
        try:
            return self._hex.decode(data['s'])
        except (KeyError, ValueError) as e:
            raise SigningRequestError(f"malformed signature response: {e}") from e

    async def obtain_credential(self, public_key: Optional[PublicKey] = None) -> Credential:
        """
        Run the full blind-signature protocol.

        Args:
            public_key: Signer's key; fetched from the server when omitted

        Returns:
            Credential whose signature verifies under the public key

        Raises:
            BlindingError: If the modulus is too small for the token hash,
                or the unblinded signature does not verify
            SigningRequestError: If the server rejects a request
        """
        pub = public_key or await self.get_public_key()

        token = generate_token(self._config.token_size)
        m = hash_token(token)
        if m >= pub.n:
            raise BlindingError(
                f"{pub.n.bit_length()}-bit modulus is too small for the token hash"
            )

        r = generate_blinding_factor(pub, self._config.blinding_size)
        blind_sig = await self.sign_blinded(blind(pub, m, r))
        credential = Credential(token=token, signature=unblind(pub, blind_sig, r))

        if not credential.verify(pub):
            raise BlindingError("unblinded signature does not verify")
        self._logger.info(f"Obtained credential from {self._config.base_url}")
        return credential
