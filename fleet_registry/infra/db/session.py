# Copyright 2026 Dell Inc. or its subsidiaries. All Rights Reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Database session management.

Engines and session factories are built from an explicit DatabaseConfig
and handed to callers; there is no process-wide session.
"""

from contextlib import contextmanager
from typing import Callable, Generator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from .config import DatabaseConfig
from .models import Base


def build_engine(config: DatabaseConfig) -> Engine:
    """Create an engine for the given configuration.

    SQLite engines get foreign key enforcement; in-memory SQLite shares a
    single connection so every session sees the same database.

    Raises:
        ValueError: If DATABASE_URL is not configured.
    """
    config.validate()
    if config.is_sqlite:
        kwargs = {"connect_args": {"check_same_thread": False}}
        if config.database_url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        engine = create_engine(config.database_url, echo=config.echo, **kwargs)
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        return engine
    return create_engine(
        config.database_url,
        pool_size=config.pool_size,
        max_overflow=config.max_overflow,
        pool_recycle=config.pool_recycle,
        echo=config.echo,
    )


def build_session_factory(engine: Engine) -> sessionmaker:
    """Create a session factory bound to an engine."""
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def _enable_sqlite_foreign_keys(dbapi_connection, _connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@contextmanager
def transaction(
    session_factory: Callable[[], Session],
) -> Generator[Session, None, None]:
    """Run a block inside one transaction.

    Commits when the block finishes, rolls back when it raises.

    Usage:
        with transaction(factory) as session:
            session.add(obj)
    """
    session = session_factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def create_schema(engine: Engine) -> Engine:
    """Create all tables on an engine (development and tests only)."""
    Base.metadata.create_all(engine)
    return engine
