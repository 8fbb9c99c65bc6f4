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

"""Database infrastructure package.

Provides ORM models, mappers, SQL repository implementations, the
relationship (join table) repositories, the unit of work and session
management.
"""

from .models import (
    Base,
    CommitModel,
    DeviceGroupModel,
    DeviceModel,
    InstalledPackageModel,
    RepoModel,
)
from .mappers import (
    CommitMapper,
    DeviceGroupMapper,
    DeviceMapper,
    InstalledPackageMapper,
    RepoMapper,
)
from .relationships import SqlCommitPackages, SqlDeviceGroupMembership
from .repositories import (
    SqlCommitRepository,
    SqlDeviceGroupRepository,
    SqlDeviceRepository,
    SqlRepoRepository,
)
from .session import (
    build_engine,
    build_session_factory,
    create_schema,
    transaction,
)
from .unit_of_work import SqlUnitOfWork

__all__ = [
    "Base",
    "CommitModel",
    "DeviceGroupModel",
    "DeviceModel",
    "InstalledPackageModel",
    "RepoModel",
    "CommitMapper",
    "DeviceGroupMapper",
    "DeviceMapper",
    "InstalledPackageMapper",
    "RepoMapper",
    "SqlCommitPackages",
    "SqlDeviceGroupMembership",
    "SqlCommitRepository",
    "SqlDeviceGroupRepository",
    "SqlDeviceRepository",
    "SqlRepoRepository",
    "build_engine",
    "build_session_factory",
    "create_schema",
    "transaction",
    "SqlUnitOfWork",
]
