"""
Service layer.

Services translate domain calls into record store operations and
re-describe storage failures for the API layer.
"""
