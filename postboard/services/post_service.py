"""Post use cases."""

from __future__ import annotations

from typing import List

from postboard.domain.models import Post
from postboard.repositories.json_storage import JSONStore


class PostService:
    def __init__(self, store: JSONStore) -> None:
        self.store = store

    def publish(self, user_email: str, text: str) -> Post:
        return self.store.create_post(user_email, text)

    def get(self, post_id: str) -> Post:
        return self.store.get_post(post_id)

    def list_for_user(self, user_email: str) -> List[Post]:
        """Newest first; the store itself gives no ordering."""
        posts = self.store.list_posts_by_user(user_email)
        return sorted(posts, key=lambda post: post.created_at, reverse=True)

    def delete(self, post_id: str) -> None:
        self.store.delete_post(post_id)
