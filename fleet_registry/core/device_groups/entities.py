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

"""Domain entities for the DeviceGroup module."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Union

from fleet_registry.core.devices.entities import Device

from .validators import DeviceGroupValidator
from .value_objects import DeviceGroupType

# Fields a persisted group may still change. Account, type and org_id are
# fixed at creation.
MUTABLE_FIELDS = frozenset({"name"})


@dataclass
class DeviceGroup:
    """A named, typed collection of devices owned by one tenant.

    Attributes:
        name: Group name, unique among the tenant's live groups.
        org_id: Owning tenant.
        account: Account identifier (mandatory).
        type: Group type, one of the allowed DeviceGroupType values.
        devices: Member devices.
        id: Store identifier (set once persisted).
        created_at: Creation timestamp.
        updated_at: Last update timestamp.
        deleted_at: Soft-delete marker.
    """

    name: str
    org_id: str
    account: str
    type: Union[DeviceGroupType, str] = DeviceGroupType.DEFAULT
    devices: List[Device] = field(default_factory=list)
    id: Optional[int] = None  # pylint: disable=invalid-name
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None

    def validate_request(self, validator: Optional[DeviceGroupValidator] = None) -> None:
        """Validate the group before it is submitted for creation.

        Args:
            validator: Validator to use; defaults to the built-in policy.

        Raises:
            DeviceGroupValidationError: First failing field check.
        """
        (validator or DeviceGroupValidator()).validate(self)

    @property
    def type_value(self) -> str:
        """Group type as a plain string."""
        return getattr(self.type, "value", self.type)

    @property
    def device_ids(self) -> List[int]:
        """Identifiers of persisted member devices."""
        return [device.id for device in self.devices if device.id is not None]
