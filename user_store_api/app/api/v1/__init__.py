"""
Version 1 of the API.

Breaking changes to the HTTP surface belong in a new version
subpackage (e.g. ``v2``) with its own ``router``.
"""
