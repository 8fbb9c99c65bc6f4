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

"""Repository port interfaces (Protocols) for the Device domain."""

from typing import List, Optional, Protocol

from .entities import Device


class DeviceRepository(Protocol):
    """Repository port for device persistence."""

    def create(self, device: Device) -> Device:
        """Persist a new device.

        Raises:
            MissingTenantError: If the device has no org_id.
            UniquenessConflictError: If the uuid is already registered.
        """
        ...

    def find_by_id(self, device_id: int, org_id: str) -> Optional[Device]:
        """Retrieve a live device within a tenant."""
        ...

    def find_by_uuid(self, uuid: str, org_id: str) -> Optional[Device]:
        """Retrieve a live device by hardware identifier within a tenant."""
        ...

    def list_by_org(self, org_id: str) -> List[Device]:
        """List live devices of a tenant."""
        ...

    def delete(self, device_id: int, org_id: str) -> None:
        """Soft-delete a device and drop its group membership.

        Raises:
            EntityNotFoundError: If the device is not live in the tenant.
        """
        ...
