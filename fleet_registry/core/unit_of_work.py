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

"""Unit of work port.

One unit of work spans one logical operation: every repository it exposes
shares a single transaction that commits on success and rolls back when the
block raises.
"""

from types import TracebackType
from typing import Optional, Protocol, Type

from fleet_registry.core.commits.repositories import (
    CommitPackageRepository,
    CommitRepository,
    RepoRepository,
)
from fleet_registry.core.device_groups.repositories import (
    DeviceGroupMembershipRepository,
    DeviceGroupRepository,
)
from fleet_registry.core.devices.repositories import DeviceRepository


class FleetUnitOfWork(Protocol):
    """Transactional access to the fleet repositories."""

    devices: DeviceRepository
    device_groups: DeviceGroupRepository
    memberships: DeviceGroupMembershipRepository
    commits: CommitRepository
    repos: RepoRepository
    commit_packages: CommitPackageRepository

    def __enter__(self) -> "FleetUnitOfWork":
        ...

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        traceback: Optional[TracebackType],
    ) -> None:
        ...
