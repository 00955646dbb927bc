"""postboard: users and posts over a single JSON document, served by FastAPI."""

__version__ = "0.1.0"
