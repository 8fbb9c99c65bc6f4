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

"""Device response DTOs."""

from dataclasses import dataclass
from typing import Optional

from fleet_registry.core.devices.entities import Device


@dataclass(frozen=True)
class DeviceResponse:
    """Response DTO for device operations."""

    id: int  # pylint: disable=invalid-name
    name: str
    uuid: str
    org_id: str
    group_id: Optional[int] = None

    @classmethod
    def from_entity(cls, device: Device) -> "DeviceResponse":
        """Build the response from a device."""
        return cls(
            id=device.id,
            name=device.name,
            uuid=device.uuid,
            org_id=device.org_id,
            group_id=device.group_id,
        )
