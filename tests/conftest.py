from __future__ import annotations

import sys
from dataclasses import replace
from pathlib import Path

import pytest

# Make the postboard package importable when running tests from a checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from postboard.core import config as core_config  # noqa: E402
from postboard.repositories.json_storage import JSONStore, ensure_store  # noqa: E402


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Settings are cached per process; reset around every test."""
    core_config.get_settings.cache_clear()
    yield
    core_config.get_settings.cache_clear()


@pytest.fixture()
def db_path(tmp_path) -> Path:
    return tmp_path / "db.json"


@pytest.fixture()
def store(db_path) -> JSONStore:
    return ensure_store(db_path)


@pytest.fixture()
def settings(db_path):
    return replace(core_config.get_settings(), db_path=str(db_path), hash_passwords=True)
