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

"""Repository port interfaces (Protocols) for the DeviceGroup domain.

These define the contracts that infrastructure implementations must satisfy.
"""

from typing import Any, Iterable, List, Mapping, Optional, Protocol

from fleet_registry.core.devices.entities import Device

from .entities import DeviceGroup


class DeviceGroupRepository(Protocol):
    """Repository port for device group persistence."""

    def create(self, group: DeviceGroup) -> DeviceGroup:
        """Persist a new group together with any member devices.

        Raises:
            MissingTenantError: If the group or a member has no org_id.
            UniquenessConflictError: If the tenant already has a live group
                with the same name.
        """
        ...

    def find_by_id(self, group_id: int, org_id: str) -> Optional[DeviceGroup]:
        """Retrieve a live group within a tenant."""
        ...

    def find_by_name(self, name: str, org_id: str) -> Optional[DeviceGroup]:
        """Retrieve a live group by name within a tenant."""
        ...

    def list_by_org(self, org_id: str) -> List[DeviceGroup]:
        """List live groups of a tenant ordered by name."""
        ...

    def update(
        self, group_id: int, org_id: str, changes: Mapping[str, Any]
    ) -> DeviceGroup:
        """Apply the mutable subset of changes to a live group."""
        ...

    def save(self, group: DeviceGroup) -> DeviceGroup:
        """Persist a group, creating it or updating its mutable fields."""
        ...

    def delete(self, group_id: int, org_id: str) -> int:
        """Delete a group after cascading to its member devices.

        Returns:
            Number of member devices deleted.

        Raises:
            EntityNotFoundError: If the group is not live in the tenant.
            CascadeFailureError: If member cleanup fails.
        """
        ...


class DeviceGroupMembershipRepository(Protocol):
    """Repository port for the device group to device association."""

    def add_devices(
        self, group_id: int, org_id: str, device_ids: Iterable[int]
    ) -> List[Device]:
        """Add devices of the same tenant to a group.

        Raises:
            EntityNotFoundError: If the group or a device is not live in
                the tenant.
            DeviceMembershipError: If a device already belongs to another
                group.
        """
        ...

    def remove_devices(
        self, group_id: int, org_id: str, device_ids: Iterable[int]
    ) -> List[Device]:
        """Remove devices from a group, keeping the device rows."""
        ...

    def list_devices(self, group_id: int, org_id: str) -> List[Device]:
        """List the live member devices of a group."""
        ...

    def delete_group_devices(self, group_id: int) -> int:
        """Hard-delete the join rows and device rows of a group.

        Returns:
            Number of devices deleted.

        Raises:
            CascadeFailureError: If the store rejects the cleanup.
        """
        ...
