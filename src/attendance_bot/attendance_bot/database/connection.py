from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy import create_engine
from sqlalchemy.engine import Connection, Engine, make_url


@dataclass
class DBConfig:
    url: str
    echo: bool = False


class DatabaseConnection:
    """Engine-backed connection factory.

    Note: One instance per process, built by the container. Each repository call
    borrows a pooled connection for a single transaction.
    """

    def __init__(self, config: DBConfig):
        self._config = config
        self._engine = create_engine(config.url, echo=config.echo, connect_args=_connect_args(config.url))

    @property
    def engine(self) -> Engine:
        return self._engine

    @property
    def backend(self) -> str:
        return self._engine.url.get_backend_name()

    def connect(self) -> Connection:
        return self._engine.connect()

    def dispose(self) -> None:
        self._engine.dispose()


def _connect_args(url: str) -> dict:
    # Handler calls run on a worker thread, not the thread that opened the pool.
    if make_url(url).get_backend_name() == "sqlite":
        return {"check_same_thread": False}
    return {}


def redacted_url(url: str) -> str:
    return make_url(url).render_as_string(hide_password=True)
