"""
JSON-backed record store for users and posts.

The whole state lives in one document with two maps::

    {"users": {<email>: {...}}, "posts": {<id>: {...}}}

Every public call re-reads the file, applies its change in memory and replaces
the file with the full serialized document. Nothing is cached between calls.
A per-instance lock serializes the read-modify-write cycle inside a process;
separate processes (or separate instances on the same path) still race and the
last writer wins.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional
import json
import logging
import os
import tempfile
import threading
import uuid

from postboard.domain.models import Post, User, utcnow

from .errors import AlreadyExists, CorruptStore, InvalidRecord, NotFound, StoreIOError

logger = logging.getLogger(__name__)


@dataclass
class _Document:
    users: Dict[str, User] = field(default_factory=dict)
    posts: Dict[str, Post] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "users": {email: user.to_dict() for email, user in self.users.items()},
            "posts": {post_id: post.to_dict() for post_id, post in self.posts.items()},
        }


class JSONStore:
    """Durable storage for :class:`User` and :class:`Post` records."""

    def __init__(self, path: str | os.PathLike) -> None:
        self.path = Path(path)
        self._lock = threading.RLock()

    def __repr__(self) -> str:
        return f"JSONStore({str(self.path)!r})"

    # ------------------------------------------------------------------ #
    # Document I/O
    # ------------------------------------------------------------------ #
    def ensure(self) -> None:
        """Create an empty document if none exists, otherwise validate it.

        Idempotent: an existing, parseable document is left untouched.
        """
        with self._lock:
            try:
                raw = self.path.read_bytes()
            except FileNotFoundError:
                try:
                    self.path.parent.mkdir(parents=True, exist_ok=True)
                except OSError as exc:
                    raise StoreIOError(f"cannot create directory for {self.path}: {exc}") from exc
                self._save(_Document())
                logger.info("Created empty store at %s", self.path)
                return
            except OSError as exc:
                logger.error("Store %s is unreadable: %s", self.path, exc)
                raise StoreIOError(f"cannot read {self.path}: {exc}") from exc
            self._parse(raw)

    def _load(self) -> _Document:
        try:
            raw = self.path.read_bytes()
        except OSError as exc:
            logger.error("Store %s is unreadable: %s", self.path, exc)
            raise StoreIOError(f"cannot read {self.path}: {exc}") from exc
        return self._parse(raw)

    def _parse(self, raw: bytes) -> _Document:
        try:
            data = json.loads(raw.decode("utf-8"))
            if not isinstance(data, dict):
                raise ValueError("top-level value must be an object")
            users = data["users"]
            posts = data["posts"]
            if not isinstance(users, dict) or not isinstance(posts, dict):
                raise ValueError("'users' and 'posts' must be objects")
            doc = _Document(
                users={email: User.from_dict(item) for email, item in users.items()},
                posts={post_id: Post.from_dict(item) for post_id, item in posts.items()},
            )
        except (ValueError, KeyError, TypeError, RecursionError) as exc:
            logger.error("Store %s is corrupt: %s", self.path, exc)
            raise CorruptStore(f"{self.path} is not a valid store document: {exc}") from exc
        return doc

    def _save(self, doc: _Document) -> None:
        payload = json.dumps(doc.to_dict(), ensure_ascii=False, indent=2)
        directory = self.path.parent
        try:
            fd, tmp_name = tempfile.mkstemp(prefix=f".{self.path.name}.", suffix=".tmp", dir=directory)
        except OSError as exc:
            logger.error("Failed to write store %s: %s", self.path, exc)
            raise StoreIOError(f"cannot write {self.path}: {exc}") from exc
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(payload)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_name, self.path)
        except OSError as exc:
            try:
                os.unlink(tmp_name)
            except FileNotFoundError:
                pass
            logger.error("Failed to write store %s: %s", self.path, exc)
            raise StoreIOError(f"cannot write {self.path}: {exc}") from exc

    # ------------------------------------------------------------------ #
    # Users
    # ------------------------------------------------------------------ #
    def create_user(self, email: str, password: str, name: str, age: int) -> User:
        with self._lock:
            user = _checked(User(email=email, password=password, name=name, age=age, created_at=utcnow()))
            doc = self._load()
            if email in doc.users:
                raise AlreadyExists(f"user with email {email} already exists")
            doc.users[email] = user
            self._save(doc)
        logger.debug("Created user %s", email)
        return user

    def update_user(
        self,
        email: str,
        password: str,
        name: str,
        age: int,
        new_email: Optional[str] = None,
    ) -> User:
        """Replace password/name/age of ``email``.

        When ``new_email`` is given and differs from ``email`` the record is
        moved to the new key; ``createdAt`` always survives.
        """
        target = new_email or email
        with self._lock:
            doc = self._load()
            current = doc.users.get(email)
            if current is None:
                raise NotFound(f"user with email {email} doesn't exist")
            if target != email and target in doc.users:
                raise AlreadyExists(f"user with email {target} already exists")
            user = _checked(current.with_changes(email=target, password=password, name=name, age=age))
            if target != email:
                del doc.users[email]
            doc.users[target] = user
            self._save(doc)
        if target != email:
            logger.debug("Renamed user %s -> %s", email, target)
        else:
            logger.debug("Updated user %s", email)
        return user

    def get_user(self, email: str) -> User:
        with self._lock:
            doc = self._load()
        user = doc.users.get(email)
        if user is None:
            raise NotFound(f"user with email {email} doesn't exist")
        return user

    def user_exists(self, email: str) -> bool:
        with self._lock:
            return email in self._load().users

    def delete_user(self, email: str) -> None:
        with self._lock:
            doc = self._load()
            if email not in doc.users:
                raise NotFound(f"user with email {email} doesn't exist")
            del doc.users[email]
            self._save(doc)
        logger.debug("Deleted user %s", email)

    # ------------------------------------------------------------------ #
    # Posts
    # ------------------------------------------------------------------ #
    def create_post(self, user_email: str, text: str) -> Post:
        with self._lock:
            doc = self._load()
            if user_email not in doc.users:
                raise NotFound(f"user with email {user_email} doesn't exist")
            post_id = _new_post_id(doc.posts)
            post = _checked(Post(id=post_id, user_email=user_email, text=text, created_at=utcnow()))
            doc.posts[post_id] = post
            self._save(doc)
        logger.debug("Created post %s for %s", post_id, user_email)
        return post

    def get_post(self, post_id: str) -> Post:
        with self._lock:
            doc = self._load()
        post = doc.posts.get(post_id)
        if post is None:
            raise NotFound(f"post with id {post_id} doesn't exist")
        return post

    def list_posts_by_user(self, user_email: str) -> List[Post]:
        """Posts authored by ``user_email``, in no particular order."""
        with self._lock:
            doc = self._load()
        return [post for post in doc.posts.values() if post.user_email == user_email]

    def delete_post(self, post_id: str) -> None:
        with self._lock:
            doc = self._load()
            if post_id not in doc.posts:
                raise NotFound(f"post with id {post_id} doesn't exist")
            del doc.posts[post_id]
            self._save(doc)
        logger.debug("Deleted post %s", post_id)


def _checked(record):
    """Return ``record`` if it survives the same decoding used when loading."""
    try:
        type(record).from_dict(record.to_dict())
    except (ValueError, KeyError, TypeError) as exc:
        raise InvalidRecord(f"invalid {type(record).__name__.lower()}: {exc}") from exc
    return record


def _new_post_id(existing: Dict[str, Post]) -> str:
    while True:
        candidate = str(uuid.uuid4())
        if candidate not in existing:
            return candidate


def ensure_store(path: str | os.PathLike) -> JSONStore:
    """Build a store for ``path`` and make sure its document is usable."""
    store = JSONStore(path)
    store.ensure()
    return store
