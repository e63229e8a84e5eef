import pytest
from pydantic import ValidationError

from cqrs.core.config import Settings


def test_defaults(monkeypatch):
    for name in ("CACHE_DRIVER", "CACHE_DEFAULT_TTL", "CACHE_PREFIX", "QUEUE_DEFAULT"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(_env_file=None)

    assert settings.CACHE_DRIVER == "memory"
    assert settings.CACHE_DEFAULT_TTL == 60
    assert settings.CACHE_PREFIX == "cqrs"
    assert settings.QUEUE_DEFAULT == "default"


def test_cache_driver_is_normalized(monkeypatch):
    monkeypatch.setenv("CACHE_DRIVER", " Redis ")

    assert Settings(_env_file=None).CACHE_DRIVER == "redis"


def test_cache_ttl_must_be_positive(monkeypatch):
    monkeypatch.setenv("CACHE_DEFAULT_TTL", "0")

    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_broker_falls_back_to_redis_url(monkeypatch):
    monkeypatch.delenv("CELERY_BROKER_URL", raising=False)
    monkeypatch.setenv("REDIS_URL", "redis://cache:6379/1")

    assert Settings(_env_file=None).CELERY_BROKER_URL == "redis://cache:6379/1"
