"""HTTP surface of the playground."""

from playground.api.app import create_app

__all__ = ["create_app"]
