"""Tests for configuration loading."""

from __future__ import annotations

import pytest
from sqlalchemy.pool import StaticPool

from wellnest import create_app
from wellnest.config import BaseConfig, TestConfig


@pytest.fixture(autouse=True)
def data_dir(tmp_path, monkeypatch):
    monkeypatch.setenv("WELLNEST_DATA_DIR", str(tmp_path))
    for name in ("WELLNEST_DATABASE_URL", "WELLNEST_TIMEZONE", "WELLNEST_SECRET_KEY"):
        monkeypatch.delenv(name, raising=False)
    return tmp_path


def test_defaults(data_dir):
    config = BaseConfig()

    assert config.DATA_DIR == data_dir.resolve()
    assert config.DATABASE_URL == f"sqlite:///{data_dir.resolve() / 'wellnest.db'}"
    assert config.ERROR_DISMISS_SECONDS == 3
    assert config.STREAK_LOOKBACK == 30
    assert config.INSIGHTS_TIMEOUT == 10.0


def test_secret_required_outside_dev_mode(monkeypatch):
    monkeypatch.setenv("WELLNEST_DEV_MODE", "false")
    with pytest.raises(ValueError):
        BaseConfig()

    monkeypatch.setenv("WELLNEST_SECRET_KEY", "s3cret")
    assert BaseConfig().SECRET_KEY == "s3cret"


def test_bad_timeout(monkeypatch):
    monkeypatch.setenv("WELLNEST_INSIGHTS_TIMEOUT", "soon")
    with pytest.raises(ValueError, match="WELLNEST_INSIGHTS_TIMEOUT"):
        BaseConfig()


def test_memory_database_shares_one_connection(monkeypatch):
    monkeypatch.delenv("WELLNEST_TEST_DATABASE_URL", raising=False)
    config = TestConfig()

    assert config.DATABASE_URL == "sqlite://"
    assert config.sqlalchemy_engine_options()["poolclass"] is StaticPool
    assert config.INSIGHTS_URL is None


def test_create_app_with_memory_database(monkeypatch):
    monkeypatch.delenv("WELLNEST_TEST_DATABASE_URL", raising=False)
    app = create_app("testing")

    assert app.config["TESTING"] is True
    assert app.extensions["wellnest"].config.DATABASE_URL == "sqlite://"
    assert app.test_client().get("/login").status_code == 200
