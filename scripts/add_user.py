#!/usr/bin/env python3
"""
Register a user directly in the JSON store (no HTTP server needed).

Usage:
  python scripts/add_user.py --email ann@example.com --name Ann --age 30 [--password s3cret] [--db ./db.json]
"""
from __future__ import annotations

import argparse
import secrets
import sys
from typing import Optional, Sequence

from postboard.core.config import get_settings
from postboard.repositories.json_storage import ensure_store
from postboard.services.user_service import UserService


def gen_password(length: int = 16) -> str:
    return secrets.token_urlsafe(length)[:length]


def main(argv: Optional[Sequence[str]] = None) -> None:
    ap = argparse.ArgumentParser(description="Register a user in the JSON store")
    ap.add_argument("--email", required=True, help="account e-mail (primary key)")
    ap.add_argument("--name", required=True, help="display name")
    ap.add_argument("--age", required=True, type=int, help="age in years")
    ap.add_argument("--password", help="password (default: random)")
    ap.add_argument("--db", default=get_settings().db_path, help="store location")
    args = ap.parse_args(argv)

    email = (args.email or "").strip()
    if not email or "@" not in email:
        raise SystemExit("invalid e-mail")
    if args.age < 0:
        raise SystemExit("age must be non-negative")
    password = args.password or gen_password()

    store = ensure_store(args.db)
    svc = UserService(store)
    if store.user_exists(email):
        raise SystemExit(f"user '{email}' already exists")
    user = svc.register(email, password, args.name, args.age)

    print("OK: user created")
    print(f"  Email: {user.email}")
    print(f"  Name: {user.name}")
    if not args.password:
        print(f"  Password: {password}")


if __name__ == "__main__":
    try:
        main()
    except SystemExit:
        raise
    except Exception as exc:  # pragma: no cover - CLI usage
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
