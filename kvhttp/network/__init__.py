"""Network module for kvhttp."""

from .http_server import KVServer, create_app

__all__ = ["KVServer", "create_app"]
