"""HTTP signing server."""
from .app import create_app, run_server, SERVICE_KEY

__all__ = [
    'create_app',
    'run_server',
    'SERVICE_KEY',
]
