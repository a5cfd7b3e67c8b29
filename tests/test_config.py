from __future__ import annotations

from pathlib import Path

import pytest

from messenger_directory.config import DBConfig, SecurityConfig, load_config

ENV_KEYS = [
    "SECRET_KEY",
    "JWT_ALGORITHM",
    "ACCESS_TOKEN_EXPIRE_MINUTES",
    "DB_HOST",
    "DB_PORT",
    "DB_NAME",
    "DB_USER",
    "DB_PASSWORD",
    "DB_PATH",
    "DB_ECHO",
    "BCRYPT_WORK_FACTOR",
    "LOG_LEVEL",
]


@pytest.fixture()
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_load_config_from_env_file(tmp_path: Path, clean_env: None) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text(
        "SECRET_KEY=abc123\n"
        "BCRYPT_WORK_FACTOR=10\n"
        "DB_PATH=/tmp/messenger-test.db\n"
        "LOG_LEVEL=DEBUG\n"
    )

    config = load_config(str(env_file))

    assert config.jwt.secret_key == "abc123"
    assert config.jwt.algorithm == "HS256"
    assert config.jwt.access_token_expire_minutes == 480
    assert config.security.bcrypt_work_factor == 10
    assert config.db.path == "/tmp/messenger-test.db"
    assert config.db.is_sqlite
    assert config.logging.level == "DEBUG"


def test_default_work_factor(tmp_path: Path, clean_env: None) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("SECRET_KEY=abc123\n")

    assert load_config(str(env_file)).security.bcrypt_work_factor == 12


@pytest.mark.parametrize("work_factor", [3, 32])
def test_work_factor_out_of_range(work_factor: int) -> None:
    with pytest.raises(ValueError):
        SecurityConfig(bcrypt_work_factor=work_factor)


def test_database_urls() -> None:
    assert DBConfig(path="data/x.db").url == "sqlite+aiosqlite:///data/x.db"

    postgres = DBConfig(host="db", port=5432, name="messenger", user="app", password="pw")
    assert not postgres.is_sqlite
    assert postgres.url == "postgresql+asyncpg://app:pw@db:5432/messenger"
