"""
HTTP signing service.

Exposes the server's public key and a raw RSA signing endpoint for
blind-signature clients:

    GET  /pkey   -> {"e": "<hex>", "n": "<hex>"}
    POST /sign   {"m": "<hex>"} -> {"s": "<hex>"}

Every other path is served from the static directory.
"""
from pathlib import Path
from typing import Optional

from aiohttp import web

from .. import setup_logging
from ..core.config import ServerConfig
from ..core.crypto.rsa import RSAService
from ..core.crypto.utils import HexIntEncoder
from ..core.exceptions import RawRSAError
from ..core.logging import get_logger

logger = get_logger('rawrsa.server')

SERVICE_KEY = web.AppKey('rawrsa_service', RSAService)
STATIC_DIR_KEY = web.AppKey('rawrsa_static_dir', Path)

_hex = HexIntEncoder()


def _bad_request(text: str) -> web.Response:
    return web.Response(status=400, text=text)


async def handle_public_key(request: web.Request) -> web.Response:
    """Return the signing key's public exponent and modulus in hex."""
    e, n = request.app[SERVICE_KEY].get_public_key()
    return web.json_response({'e': _hex.encode(e), 'n': _hex.encode(n)})


async def handle_sign(request: web.Request) -> web.Response:
    """Sign a hex encoded integer with the server's private key."""
    try:
        payload = await request.json()
    except ValueError:
        return _bad_request('bad request')
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        return _bad_request('bad request')

    message = payload.get('m', '')
    if not isinstance(message, str):
        return _bad_request('bad request')

    try:
        m = _hex.decode(message)
    except ValueError:
        return _bad_request('m is not a hex integer')

    try:
        s = request.app[SERVICE_KEY].sign(m)
    except RawRSAError as e:
        return _bad_request(str(e))

    return web.json_response({'s': _hex.encode(s)})


async def handle_index(request: web.Request) -> web.StreamResponse:
    """Serve index.html from the static directory."""
    index = request.app[STATIC_DIR_KEY] / 'index.html'
    if not index.is_file():
        raise web.HTTPNotFound()
    return web.FileResponse(index)


def create_app(
    config: Optional[ServerConfig] = None,
    service: Optional[RSAService] = None
) -> web.Application:
    """
    Build the signing application.

    Args:
        config: Server configuration (uses defaults if not provided)
        service: Signing service; loaded from config.key_path when omitted

    Returns:
        aiohttp Application
    """
    config = config or ServerConfig.default()
    if service is None:
        service = RSAService.from_pem_file(config.key_path)

    app = web.Application()
    app[SERVICE_KEY] = service
    app.router.add_get('/pkey', handle_public_key)
    app.router.add_post('/sign', handle_sign)

    static_dir = Path(config.static_dir)
    if static_dir.is_dir():
        app[STATIC_DIR_KEY] = static_dir
        app.router.add_get('/', handle_index)
        app.router.add_static('/', static_dir)
    else:
        logger.debug(f"Static directory {static_dir} not found, not serving files")

    return app


def run_server(
    config: Optional[ServerConfig] = None,
    service: Optional[RSAService] = None
) -> None:
    """Load the key, build the application and serve it until interrupted."""
    config = config or ServerConfig.default()
    setup_logging(config.log_level)
    app = create_app(config, service=service)
    e, n = app[SERVICE_KEY].get_public_key()
    logger.info(
        f"Serving {n.bit_length()}-bit key (e={e}) on {config.host}:{config.port}"
    )
    web.run_app(app, host=config.host, port=config.port, print=None)
