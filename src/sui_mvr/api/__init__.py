"""HTTP API for the MVR resolver."""

from sui_mvr.api.app import create_app

__all__ = ["create_app"]
