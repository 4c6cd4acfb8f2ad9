"""
Configuration module.

Provides configuration for the signing server and the blind-signature
client. Open for extension through custom configurations.
"""
import logging
from dataclasses import dataclass, field
from typing import Dict, Any


@dataclass
class ServerConfig:
    """
    Signing server configuration.

    Attributes:
        host: Interface to bind
        port: TCP port to listen on
        key_path: PEM or DER private key file, read once at startup
        static_dir: Directory served for every other path
        log_level: Level for the rawrsa loggers
    """
    host: str = '0.0.0.0'
    port: int = 80
    key_path: str = 'private.pem'
    static_dir: str = 'static'
    log_level: int = logging.INFO

    @classmethod
    def default(cls) -> 'ServerConfig':
        """Create default configuration."""
        return cls()


@dataclass
class TimeoutConfig:
    """
    Timeout configuration.

    Granular control over different timeout types.
    """
    total: float = 60.0  # Total request timeout
    connect: float = 10.0  # Connection timeout
    sock_read: float = 30.0  # Socket read timeout
    sock_connect: float = 10.0  # Socket connect timeout

    def to_aiohttp_timeout(self):
        """Convert to aiohttp ClientTimeout."""
        import aiohttp
        return aiohttp.ClientTimeout(
            total=self.total,
            connect=self.connect,
            sock_read=self.sock_read,
            sock_connect=self.sock_connect
        )


@dataclass
class ClientConfig:
    """
    Blind-signature client configuration.

    Attributes:
        base_url: Root URL of the signing server
        user_agent: User-Agent header sent with every request
        timeout: Request timeouts
        extra_headers: Additional headers
        token_size: Random token length in bytes
        blinding_size: Random bytes drawn per blinding factor
    """
    base_url: str = 'http://localhost'
    user_agent: str = 'rawrsa/1.0.0'
    timeout: TimeoutConfig = field(default_factory=TimeoutConfig)
    extra_headers: Dict[str, str] = field(default_factory=dict)
    token_size: int = 16
    blinding_size: int = 256

    @classmethod
    def default(cls) -> 'ClientConfig':
        """Create default configuration."""
        return cls()

    def url(self, path: str) -> str:
        """Join a request path onto the base URL."""
        return self.base_url.rstrip('/') + '/' + path.lstrip('/')

    def get_session_kwargs(self) -> Dict[str, Any]:
        """Get kwargs for aiohttp ClientSession."""
        headers = {
            'User-Agent': self.user_agent,
            **self.extra_headers
        }

        return {
            'headers': headers,
            'timeout': self.timeout.to_aiohttp_timeout(),
        }
