"""
Application package: FastAPI app, routers, services and the record
store they share.
"""

from .main import app  # noqa: F401
