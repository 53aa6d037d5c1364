"""HTTP API for tenantscope."""

from tenantscope.api.app import create_app

__all__ = ["create_app"]
