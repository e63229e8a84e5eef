import os
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
TESTS_ROOT = Path(__file__).resolve().parent
for path in (PROJECT_ROOT, TESTS_ROOT):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

os.environ.setdefault("CACHE_DRIVER", "memory")
os.environ.setdefault("LOG_JSON", "false")

from cqrs.builder import Builder  # noqa: E402
from cqrs.core.celery_app import celery_app  # noqa: E402
from cqrs.dispatcher import Dispatcher  # noqa: E402
from cqrs.infrastructure.database import DatabaseConnection  # noqa: E402
from cqrs.infrastructure.di import Container, get_configured_container  # noqa: E402
from cqrs.infrastructure.event_bus import EventBus  # noqa: E402

from fakes.database import FakeConnection  # noqa: E402

celery_app.conf.task_always_eager = True
celery_app.conf.task_eager_propagates = True


@pytest.fixture(autouse=True)
def container():
    Container.reset()
    container = get_configured_container()
    yield container
    Container.reset()
    Builder.flush_macros()


@pytest.fixture
def dispatcher(container):
    return Dispatcher(container)


@pytest.fixture
def bus(container):
    return container.resolve(EventBus)


@pytest.fixture
def connection(container):
    database = FakeConnection()
    container.instance(DatabaseConnection, database)
    return database


@pytest.fixture
def fired(bus):
    """Record every event published for the given names."""
    events = []

    def listen(*names):
        for name in names:
            bus.subscribe(name, lambda event, payload: events.append(event))
        return events

    return listen
