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

"""Lifecycle hooks run around every store mutation.

The SQL repositories call these explicitly before creating, updating or
deleting an entity. A hook failure propagates to the caller and the
enclosing transaction is rolled back; the update filter is the one place
where input is dropped without an error.
"""

import logging
from typing import Any, Dict, FrozenSet, Mapping, Optional, Tuple, Type

from fleet_registry.core.commits.entities import (
    COMMIT_MUTABLE_FIELDS,
    REPO_MUTABLE_FIELDS,
    Commit,
    Repo,
)
from fleet_registry.core.device_groups.entities import MUTABLE_FIELDS, DeviceGroup
from fleet_registry.core.device_groups.exceptions import (
    DeviceGroupAccountEmptyError,
    DeviceGroupNameEmptyError,
)
from fleet_registry.core.device_groups.repositories import (
    DeviceGroupMembershipRepository,
)
from fleet_registry.core.devices.entities import Device
from fleet_registry.core.tenancy import require_tenant

logger = logging.getLogger(__name__)

TENANT_SCOPED_TYPES: Tuple[type, ...] = (Commit, DeviceGroup, Device, Repo)

UPDATABLE_FIELDS: Dict[type, FrozenSet[str]] = {
    DeviceGroup: MUTABLE_FIELDS,
    Device: frozenset({"name"}),
    Commit: COMMIT_MUTABLE_FIELDS,
    Repo: REPO_MUTABLE_FIELDS,
}


class LifecycleHooks:
    """Pre-create, pre-update and pre-delete logic for fleet entities.

    Attributes:
        membership: Group membership port used to cascade group deletes.
    """

    def __init__(
        self, membership: Optional[DeviceGroupMembershipRepository] = None
    ) -> None:
        self.membership = membership

    def before_create(self, entity: object) -> None:
        """Check an entity about to be inserted.

        The tenancy guard runs first. Device groups additionally need their
        mandatory fields; format checks are left to the validator callers
        run beforehand.

        Raises:
            MissingTenantError: Tenant-scoped entity without org_id.
            DeviceGroupNameEmptyError: Group without a name.
            DeviceGroupAccountEmptyError: Group without an account.
        """
        if isinstance(entity, TENANT_SCOPED_TYPES):
            require_tenant(entity)
        if isinstance(entity, DeviceGroup):
            if not entity.name:
                raise DeviceGroupNameEmptyError(org_id=entity.org_id)
            if not entity.account:
                raise DeviceGroupAccountEmptyError(org_id=entity.org_id)

    def before_update(
        self,
        entity_type: Type[Any],
        changes: Mapping[str, Any],
        entity_id: object = None,
    ) -> Dict[str, Any]:
        """Filter an update down to the fields the entity type may change.

        Args:
            entity_type: Domain class being updated.
            changes: Requested field values.
            entity_id: Identifier used for logging only.

        Returns:
            The allowed subset of changes.
        """
        allowed = UPDATABLE_FIELDS.get(entity_type, frozenset())
        accepted = {key: value for key, value in changes.items() if key in allowed}
        discarded = sorted(set(changes) - set(accepted))
        if discarded:
            logger.debug(
                "Ignoring immutable fields %s on %s %s",
                ", ".join(discarded),
                entity_type.__name__,
                entity_id,
            )
        return accepted

    def before_delete(self, entity: object) -> int:
        """Cascade a delete to dependent rows.

        Deleting a device group hard-deletes its member devices and the
        join rows. A group without members is a no-op.

        Returns:
            Number of dependent rows removed.

        Raises:
            CascadeFailureError: If member cleanup fails.
        """
        if not isinstance(entity, DeviceGroup) or entity.id is None:
            return 0
        if self.membership is None:
            raise RuntimeError("Device group deletes need a membership repository")
        removed = self.membership.delete_group_devices(entity.id)
        if removed:
            logger.info(
                "Deleted %d devices of group %s (org %s)",
                removed,
                entity.id,
                entity.org_id,
            )
        return removed
