"""Records persisted in the JSON document.

Field names on disk use camelCase (``createdAt``, ``userEmail``) so documents
written by earlier deployments of the service load unchanged.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Any, Mapping

_RFC3339 = re.compile(
    r"(?P<base>\d{4}-\d{2}-\d{2}[Tt]\d{2}:\d{2}:\d{2})"
    r"(?:\.(?P<frac>\d+))?"
    r"(?P<tz>[Zz]|[+-]\d{2}:\d{2})"
)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(value: datetime) -> str:
    """Render ``value`` as RFC 3339 in UTC, trimming trailing zero fractions."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    text = value.strftime("%Y-%m-%dT%H:%M:%S")
    if value.microsecond:
        text += "." + f"{value.microsecond:06d}".rstrip("0")
    return text + "Z"


def parse_timestamp(text: str) -> datetime:
    """Parse an RFC 3339 timestamp and normalize it to UTC.

    Fractions finer than microseconds are truncated.
    """
    if not isinstance(text, str):
        raise ValueError(f"timestamp must be a string, got {type(text).__name__}")
    match = _RFC3339.fullmatch(text.strip())
    if not match:
        raise ValueError(f"invalid RFC 3339 timestamp: {text!r}")
    frac = (match.group("frac") or "")[:6].ljust(6, "0")
    tz = match.group("tz")
    offset = "+00:00" if tz in ("Z", "z") else tz
    base = match.group("base").replace("t", "T")
    parsed = datetime.fromisoformat(f"{base}.{frac}{offset}")
    return parsed.astimezone(timezone.utc)


def _require_str(data: Mapping[str, Any], key: str) -> str:
    value = data[key]
    if not isinstance(value, str):
        raise ValueError(f"{key} must be a string")
    return value


@dataclass(frozen=True)
class User:
    email: str
    password: str
    name: str
    age: int
    created_at: datetime

    def to_dict(self) -> dict:
        return {
            "createdAt": format_timestamp(self.created_at),
            "email": self.email,
            "password": self.password,
            "name": self.name,
            "age": self.age,
        }

    def public_dict(self) -> dict:
        """Same as :meth:`to_dict` without the password field."""
        data = self.to_dict()
        data.pop("password", None)
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "User":
        age = data["age"]
        if isinstance(age, bool) or not isinstance(age, int):
            raise ValueError("age must be an integer")
        return cls(
            email=_require_str(data, "email"),
            password=_require_str(data, "password"),
            name=_require_str(data, "name"),
            age=age,
            created_at=parse_timestamp(data["createdAt"]),
        )

    def with_changes(self, **changes: Any) -> "User":
        return replace(self, **changes)


@dataclass(frozen=True)
class Post:
    id: str
    user_email: str
    text: str
    created_at: datetime

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "createdAt": format_timestamp(self.created_at),
            "userEmail": self.user_email,
            "text": self.text,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Post":
        return cls(
            id=_require_str(data, "id"),
            user_email=_require_str(data, "userEmail"),
            text=_require_str(data, "text"),
            created_at=parse_timestamp(data["createdAt"]),
        )
