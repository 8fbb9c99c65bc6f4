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

"""Device group command DTOs."""

from dataclasses import dataclass
from typing import Tuple

from fleet_registry.core.device_groups.value_objects import DeviceGroupType


@dataclass(frozen=True)
class CreateDeviceGroupCommand:
    """Command to create a device group.

    Attributes:
        org_id: Tenant creating the group (from auth).
        account: Account identifier.
        name: Group name.
        type: Group type.
        device_ids: Existing devices of the tenant to add on creation.
    """

    org_id: str
    account: str
    name: str
    type: str = DeviceGroupType.DEFAULT.value
    device_ids: Tuple[int, ...] = ()


@dataclass(frozen=True)
class UpdateDeviceGroupCommand:
    """Command to rename a device group.

    Only the name is accepted; account and type cannot change after
    creation.
    """

    org_id: str
    group_id: int
    name: str


@dataclass(frozen=True)
class DeleteDeviceGroupCommand:
    """Command to delete a device group and its member devices."""

    org_id: str
    group_id: int


@dataclass(frozen=True)
class ChangeGroupMembershipCommand:
    """Command to add devices to, or remove devices from, a group."""

    org_id: str
    group_id: int
    device_ids: Tuple[int, ...]
