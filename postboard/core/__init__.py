"""
Core utilities shared across the postboard service.

This package hosts configuration helpers, logging setup and the password
hashing primitives. Routers and services import from here instead of reading
os.environ directly.
"""
