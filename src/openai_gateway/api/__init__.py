"""
HTTP API for the OpenAI gateway.
"""

from .routes import router, set_dependencies

__all__ = ["router", "set_dependencies"]
