"""
Operator scripts: demo reset, JSON -> SQL migration, schema creation, server launcher.
"""
from __future__ import annotations

import importlib.util
import os
import subprocess
import sys
from pathlib import Path

import pytest

# Make the userapi package importable during local test runs
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from sqlalchemy import inspect  # noqa: E402

from userapi.core.config import get_settings  # noqa: E402
from userapi.db import session as db_session  # noqa: E402
from userapi.db.create_tables import create_all  # noqa: E402
from userapi.repositories.json_storage import JsonUserStore  # noqa: E402
from userapi.repositories.sql_repository import SQLUserStore  # noqa: E402


def _load_script(name: str):
    path = ROOT / "scripts" / f"{name}.py"
    spec = importlib.util.spec_from_file_location(f"scripts_{name}", path)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture()
def db_url(tmp_path):
    url = f"sqlite:///{tmp_path / 'users.db'}"
    yield url
    try:
        db_session.get_engine(url).dispose()
    except Exception:
        pass
    db_session.get_engine.cache_clear()
    db_session._get_sessionmaker.cache_clear()  # type: ignore[attr-defined]


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    monkeypatch.delenv("USER_STORE_BACKEND", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_seed_users_writes_roster(tmp_path, capsys):
    seed = _load_script("seed_users")
    data_file = tmp_path / "seeded.json"

    assert seed.main(["--backend", "json", "--data-file", str(data_file)]) == 0

    assert JsonUserStore(data_file).count() == 100
    assert "100 demo users" in capsys.readouterr().out


def test_migrate_copies_in_insertion_order(tmp_path, db_url):
    seed = _load_script("seed_users")
    migrate = _load_script("migrate_json_to_sql")
    data_file = tmp_path / "users.json"
    seed.main(["--backend", "json", "--data-file", str(data_file)])

    assert migrate.migrate(data_file, db_url) == 100

    source = JsonUserStore(data_file).snapshot()
    target = SQLUserStore(db_url).snapshot()
    assert target == source


def test_migrate_missing_file_exits(tmp_path, db_url):
    migrate = _load_script("migrate_json_to_sql")
    with pytest.raises(SystemExit):
        migrate.migrate(tmp_path / "missing.json", db_url)


def test_create_all_builds_users_table(db_url):
    create_all(db_url)
    assert "users" in inspect(db_session.get_engine(db_url)).get_table_names()


def test_serve_passes_host_and_port(monkeypatch):
    monkeypatch.setenv("HOST", "0.0.0.0")
    monkeypatch.setenv("PORT", "9001")
    serve = _load_script("serve")
    calls = []
    monkeypatch.setattr(serve.uvicorn, "run", lambda *a, **kw: calls.append((a, kw)))

    serve.main()

    assert calls == [(("userapi.app:app",), {"host": "0.0.0.0", "port": 9001, "log_level": "info"})]


def test_seed_users_runs_as_a_plain_script(tmp_path):
    data_file = tmp_path / "seeded.json"
    env = {k: v for k, v in os.environ.items() if k != "PYTHONPATH"}
    result = subprocess.run(
        [sys.executable, str(ROOT / "scripts" / "seed_users.py"), "--backend", "json", "--data-file", str(data_file)],
        cwd=tmp_path,
        env=env,
        capture_output=True,
        text=True,
    )
    assert result.returncode == 0, result.stderr
    assert JsonUserStore(data_file).count() == 100
