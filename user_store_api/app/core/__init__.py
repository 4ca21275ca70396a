"""
Core infrastructure: settings, logging setup, error types and the
flat-file record store.
"""
