"""Domain records and helpers shared by the store and the HTTP layer."""

from .models import Post, User, format_timestamp, parse_timestamp, utcnow

__all__ = ["Post", "User", "format_timestamp", "parse_timestamp", "utcnow"]
