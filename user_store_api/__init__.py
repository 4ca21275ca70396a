"""
Top-level package for the User Records API.

All functionality lives in submodules under ``app``.
"""

__all__ = []
