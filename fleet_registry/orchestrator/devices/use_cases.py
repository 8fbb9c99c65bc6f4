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

"""Device use cases."""

import logging
from typing import Callable

from fleet_registry.core.devices.entities import Device
from fleet_registry.core.tenancy import require_tenant
from fleet_registry.core.unit_of_work import FleetUnitOfWork

from .commands import DeleteDeviceCommand, RegisterDeviceCommand
from .dtos import DeviceResponse

logger = logging.getLogger(__name__)


class RegisterDeviceUseCase:
    """Use case for registering a device."""

    def __init__(self, uow_factory: Callable[[], FleetUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def execute(self, command: RegisterDeviceCommand) -> DeviceResponse:
        """Register the device.

        Raises:
            MissingTenantError: If org_id is empty.
            UniquenessConflictError: If the uuid is already registered.
        """
        device = Device(
            name=command.name,
            uuid=command.uuid,
            org_id=command.org_id,
            account=command.account,
        )
        require_tenant(device)
        with self._uow_factory() as uow:
            response = DeviceResponse.from_entity(uow.devices.create(device))
        logger.info("Registered device %s", response.id)
        return response


class DeleteDeviceUseCase:
    """Use case for deleting a single device."""

    def __init__(self, uow_factory: Callable[[], FleetUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def execute(self, command: DeleteDeviceCommand) -> None:
        """Delete the device and its group membership.

        Raises:
            EntityNotFoundError: If the device is not live in the tenant.
        """
        with self._uow_factory() as uow:
            uow.devices.delete(command.device_id, command.org_id)
        logger.info("Deleted device %s", command.device_id)
