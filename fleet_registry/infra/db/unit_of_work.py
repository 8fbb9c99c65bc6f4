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

"""SQL unit of work.

Opens one session per logical operation and exposes the SQL repositories
bound to it. The transaction commits when the block completes and rolls back
when it raises, so a failing hook or cascade leaves no partial state.
"""

from types import TracebackType
from typing import Callable, Optional, Type

from sqlalchemy.orm import Session

from fleet_registry.core.lifecycle import LifecycleHooks
from .relationships import SqlCommitPackages, SqlDeviceGroupMembership
from .repositories import (
    SqlCommitRepository,
    SqlDeviceGroupRepository,
    SqlDeviceRepository,
    SqlRepoRepository,
)


class SqlUnitOfWork:  # pylint: disable=too-many-instance-attributes
    """SQL implementation of FleetUnitOfWork protocol.

    Usage:
        with SqlUnitOfWork(session_factory) as uow:
            uow.device_groups.delete(group_id, org_id)
    """

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        """Initialize with a session factory.

        Args:
            session_factory: Callable returning a new SQLAlchemy session.
        """
        self._session_factory = session_factory
        self.session: Optional[Session] = None

    def __enter__(self) -> "SqlUnitOfWork":
        self.session = self._session_factory()
        self.memberships = SqlDeviceGroupMembership(self.session)
        hooks = LifecycleHooks(self.memberships)
        self.devices = SqlDeviceRepository(self.session, hooks)
        self.device_groups = SqlDeviceGroupRepository(self.session, hooks)
        self.commits = SqlCommitRepository(self.session, hooks)
        self.repos = SqlRepoRepository(self.session, hooks)
        self.commit_packages = SqlCommitPackages(self.session)
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        traceback: Optional[TracebackType],
    ) -> None:
        try:
            if exc_type is None:
                self.session.commit()
            else:
                self.session.rollback()
        except Exception:
            self.session.rollback()
            raise
        finally:
            self.session.close()
            self.session = None
