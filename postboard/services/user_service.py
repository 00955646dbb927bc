"""
Account use cases: registration, profile updates, lookups and removal.
"""

from __future__ import annotations

from typing import Optional

from postboard.core.config import get_settings
from postboard.core.security import hash_password, verify_password
from postboard.domain.models import User
from postboard.repositories.errors import NotFound
from postboard.repositories.json_storage import JSONStore


class UserService:
    """Wraps the store with the password boundary.

    With ``hash_passwords`` enabled the store only ever sees Argon2 hashes;
    otherwise passwords are kept verbatim for interchange with legacy stores.
    """

    def __init__(self, store: JSONStore, *, hash_passwords: Optional[bool] = None) -> None:
        self.store = store
        if hash_passwords is None:
            hash_passwords = get_settings().hash_passwords
        self.hash_passwords = hash_passwords

    def _protect(self, password: str) -> str:
        return hash_password(password) if self.hash_passwords else password

    def register(self, email: str, password: str, name: str, age: int) -> User:
        return self.store.create_user(email, self._protect(password), name, age)

    def update(
        self,
        email: str,
        password: str,
        name: str,
        age: int,
        new_email: Optional[str] = None,
    ) -> User:
        return self.store.update_user(email, self._protect(password), name, age, new_email=new_email)

    def get(self, email: str) -> User:
        return self.store.get_user(email)

    def delete(self, email: str) -> None:
        self.store.delete_user(email)

    def verify_credentials(self, email: str, password: str) -> bool:
        """True when ``email`` exists and ``password`` matches its stored value."""
        try:
            user = self.store.get_user(email)
        except NotFound:
            return False
        return verify_password(password, user.password)
