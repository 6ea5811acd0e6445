"""Flask JSON API for charforge."""

from .server import create_app

__all__ = ['create_app']
