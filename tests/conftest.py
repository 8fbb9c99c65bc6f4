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

"""Shared pytest fixtures for fleet registry tests.

Database fixtures run against in-memory SQLite unless TEST_DATABASE_URL
points at another engine.
"""

# pylint: disable=redefined-outer-name

import os
import uuid
from typing import Generator

import pytest
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from fleet_registry.core.device_groups.validators import DeviceGroupValidator
from fleet_registry.infra.db.config import DatabaseConfig
from fleet_registry.infra.db.models import Base
from fleet_registry.infra.db.session import build_engine, build_session_factory
from fleet_registry.infra.db.unit_of_work import SqlUnitOfWork


@pytest.fixture
def org_id() -> str:
    """Tenant identifier for the test."""
    return f"org-{uuid.uuid4().hex[:12]}"


@pytest.fixture
def other_org_id() -> str:
    """A second, unrelated tenant."""
    return f"org-{uuid.uuid4().hex[:12]}"


@pytest.fixture
def validator() -> DeviceGroupValidator:
    """Validator with the default policy."""
    return DeviceGroupValidator()


@pytest.fixture
def db_engine() -> Generator[Engine, None, None]:
    """Fresh schema for each test."""
    config = DatabaseConfig()
    config.database_url = os.getenv("TEST_DATABASE_URL", "sqlite://")
    engine = build_engine(config)
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session_factory(db_engine: Engine) -> sessionmaker:
    """Session factory bound to the test engine."""
    return build_session_factory(db_engine)


@pytest.fixture
def db_session(session_factory: sessionmaker) -> Generator[Session, None, None]:
    """Session rolled back after the test."""
    session = session_factory()
    yield session
    session.rollback()
    session.close()


@pytest.fixture
def uow_factory(session_factory: sessionmaker):
    """Callable returning a new SqlUnitOfWork."""
    return lambda: SqlUnitOfWork(session_factory)
