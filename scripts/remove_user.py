#!/usr/bin/env python3
"""
Remove a user from the JSON store, optionally purging the posts they authored.

Deleting through the API leaves posts behind; ``--purge-posts`` cleans them up.

Usage:
  python scripts/remove_user.py --email ann@example.com [--purge-posts] [--db ./db.json]
"""
from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence

from postboard.core.config import get_settings
from postboard.repositories.errors import StoreError
from postboard.repositories.json_storage import JSONStore, ensure_store


def purge_posts(store: JSONStore, email: str) -> int:
    removed = 0
    for post in store.list_posts_by_user(email):
        try:
            store.delete_post(post.id)
        except StoreError as exc:
            raise SystemExit(
                f"purge stopped after {removed} post(s): {exc.message}; user '{email}' was kept"
            ) from exc
        removed += 1
    return removed


def main(argv: Optional[Sequence[str]] = None) -> None:
    ap = argparse.ArgumentParser(description="Remove a user from the JSON store")
    ap.add_argument("--email", required=True, help="account e-mail")
    ap.add_argument("--purge-posts", action="store_true", help="also delete the user's posts")
    ap.add_argument("--db", default=get_settings().db_path, help="store location")
    args = ap.parse_args(argv)

    store = ensure_store(args.db)
    email = (args.email or "").strip()
    if not store.user_exists(email):
        raise SystemExit(f"user '{email}' not found")
    # posts go first; the account survives a failed purge
    removed = purge_posts(store, email) if args.purge_posts else 0
    store.delete_user(email)

    print("OK: user removed")
    print(f"  Email: {email}")
    if args.purge_posts:
        print(f"  Posts removed: {removed}")


if __name__ == "__main__":
    try:
        main()
    except SystemExit:
        raise
    except Exception as exc:  # pragma: no cover
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
