"""
Endpoint modules for API v1.  Each module exposes a ``router``.
"""
