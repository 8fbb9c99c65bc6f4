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

"""Device group use cases.

Each use case runs its store calls inside one unit of work: either the
whole operation commits or nothing is persisted.
"""

import logging
from typing import Callable

from fleet_registry.common.logging_utils import log_secure_info
from fleet_registry.core.device_groups.entities import DeviceGroup
from fleet_registry.core.device_groups.validators import DeviceGroupValidator
from fleet_registry.core.exceptions import CascadeFailureError
from fleet_registry.core.tenancy import require_tenant
from fleet_registry.core.unit_of_work import FleetUnitOfWork

from .commands import (
    ChangeGroupMembershipCommand,
    CreateDeviceGroupCommand,
    DeleteDeviceGroupCommand,
    UpdateDeviceGroupCommand,
)
from .dtos import DeleteDeviceGroupResponse, DeviceGroupResponse

logger = logging.getLogger(__name__)

UnitOfWorkFactory = Callable[[], FleetUnitOfWork]


class CreateDeviceGroupUseCase:
    """Use case for creating a device group.

    The tenancy guard runs first, then field validation, then the store
    insert. Duplicate names within the tenant surface as
    UniquenessConflictError.
    """

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        validator: DeviceGroupValidator,
    ) -> None:
        """Initialize use case with its dependencies.

        Args:
            uow_factory: Callable returning a new unit of work.
            validator: Device group field validator.
        """
        self._uow_factory = uow_factory
        self._validator = validator

    def execute(self, command: CreateDeviceGroupCommand) -> DeviceGroupResponse:
        """Create the device group.

        Raises:
            MissingTenantError: If org_id is empty.
            DeviceGroupValidationError: If a field check fails.
            UniquenessConflictError: If the name is taken in the tenant.
            EntityNotFoundError: If a listed device is not in the tenant.
            DeviceMembershipError: If a listed device is already grouped.
        """
        group = DeviceGroup(
            name=command.name,
            org_id=command.org_id,
            account=command.account,
            type=command.type,
        )
        require_tenant(group)
        group.validate_request(self._validator)

        with self._uow_factory() as uow:
            created = uow.device_groups.create(group)
            members = created.devices
            if command.device_ids:
                members = uow.memberships.add_devices(
                    created.id, command.org_id, command.device_ids
                )
            response = DeviceGroupResponse.from_entity(created, members)

        log_secure_info(
            "info",
            f"Created device group {response.id} with {len(response.device_ids)} devices",
            org_id=command.org_id,
            logger=logger,
        )
        return response


class UpdateDeviceGroupUseCase:
    """Use case for renaming a device group."""

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        validator: DeviceGroupValidator,
    ) -> None:
        self._uow_factory = uow_factory
        self._validator = validator

    def execute(self, command: UpdateDeviceGroupCommand) -> DeviceGroupResponse:
        """Rename the group.

        Raises:
            DeviceGroupNameEmptyError: If the new name is empty.
            DeviceGroupNameInvalidError: If the new name is malformed.
            EntityNotFoundError: If the group is not live in the tenant.
            UniquenessConflictError: If the new name is taken.
        """
        self._validator.validate_name(command.name, org_id=command.org_id)
        with self._uow_factory() as uow:
            updated = uow.device_groups.update(
                command.group_id, command.org_id, {"name": command.name}
            )
            response = DeviceGroupResponse.from_entity(updated)

        log_secure_info(
            "info",
            f"Renamed device group {command.group_id}",
            org_id=command.org_id,
            logger=logger,
        )
        return response


class DeleteDeviceGroupUseCase:
    """Use case for deleting a device group with its member devices."""

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def execute(self, command: DeleteDeviceGroupCommand) -> DeleteDeviceGroupResponse:
        """Delete the group.

        Raises:
            EntityNotFoundError: If the group is not live in the tenant.
            CascadeFailureError: If member cleanup fails; nothing is deleted.
        """
        try:
            with self._uow_factory() as uow:
                deleted_devices = uow.device_groups.delete(
                    command.group_id, command.org_id
                )
        except CascadeFailureError:
            log_secure_info(
                "error",
                f"Delete of device group {command.group_id} rolled back",
                org_id=command.org_id,
                exc_info=True,
                logger=logger,
            )
            raise

        log_secure_info(
            "info",
            f"Deleted device group {command.group_id} and {deleted_devices} devices",
            org_id=command.org_id,
            logger=logger,
        )
        return DeleteDeviceGroupResponse(
            group_id=command.group_id,
            org_id=command.org_id,
            deleted_devices=deleted_devices,
        )


class AddDevicesToGroupUseCase:
    """Use case for adding existing devices to a group."""

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def execute(self, command: ChangeGroupMembershipCommand) -> DeviceGroupResponse:
        """Add the devices.

        Raises:
            EntityNotFoundError: If the group or a device is not in the tenant.
            DeviceMembershipError: If a device already belongs to another group.
        """
        with self._uow_factory() as uow:
            members = uow.memberships.add_devices(
                command.group_id, command.org_id, command.device_ids
            )
            group = uow.device_groups.find_by_id(command.group_id, command.org_id)
            response = DeviceGroupResponse.from_entity(group, members)

        logger.debug(
            "Added %d devices to group %s", len(command.device_ids), command.group_id
        )
        return response


class RemoveDevicesFromGroupUseCase:
    """Use case for removing devices from a group without deleting them."""

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def execute(self, command: ChangeGroupMembershipCommand) -> DeviceGroupResponse:
        """Remove the devices.

        Raises:
            EntityNotFoundError: If the group is not live in the tenant.
        """
        with self._uow_factory() as uow:
            members = uow.memberships.remove_devices(
                command.group_id, command.org_id, command.device_ids
            )
            group = uow.device_groups.find_by_id(command.group_id, command.org_id)
            response = DeviceGroupResponse.from_entity(group, members)

        logger.debug(
            "Removed %d devices from group %s", len(command.device_ids), command.group_id
        )
        return response
