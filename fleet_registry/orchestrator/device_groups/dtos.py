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

"""Device group response DTOs."""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from fleet_registry.core.device_groups.entities import DeviceGroup
from fleet_registry.core.devices.entities import Device


@dataclass(frozen=True)
class DeviceGroupResponse:
    """Response DTO for device group operations.

    Attributes:
        id: Group identifier.
        name: Group name.
        type: Group type.
        account: Account identifier.
        org_id: Owning tenant.
        device_ids: Identifiers of member devices.
        created_at: Creation timestamp (ISO 8601).
        updated_at: Last update timestamp (ISO 8601).
    """

    id: int  # pylint: disable=invalid-name
    name: str
    type: str
    account: str
    org_id: str
    device_ids: Tuple[int, ...]
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_entity(
        cls, group: DeviceGroup, devices: Optional[List[Device]] = None
    ) -> "DeviceGroupResponse":
        """Build the response from a group and, optionally, its members."""
        members = group.devices if devices is None else devices
        return cls(
            id=group.id,
            name=group.name,
            type=group.type_value,
            account=group.account,
            org_id=group.org_id,
            device_ids=tuple(d.id for d in members if d.id is not None),
            created_at=group.created_at.isoformat() if group.created_at else None,
            updated_at=group.updated_at.isoformat() if group.updated_at else None,
        )


@dataclass(frozen=True)
class DeleteDeviceGroupResponse:
    """Response DTO for a device group delete."""

    group_id: int
    org_id: str
    deleted_devices: int
