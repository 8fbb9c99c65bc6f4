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

"""Core exceptions shared by every fleet registry domain module."""

from typing import Optional


class FleetDomainError(Exception):
    """Base exception for all fleet registry domain errors."""

    def __init__(self, message: str, org_id: Optional[str] = None) -> None:
        """Initialize domain error.

        Args:
            message: Human-readable error description.
            org_id: Tenant the failing operation was scoped to, if known.
        """
        super().__init__(message)
        self.message = message
        self.org_id = org_id


class MissingTenantError(FleetDomainError):
    """Raised when an entity is persisted without an org_id."""

    def __init__(self, entity_type: str) -> None:
        super().__init__("org_id is mandatory")
        self.entity_type = entity_type


class EntityNotFoundError(FleetDomainError):
    """Raised when an entity does not exist within the caller's tenant."""

    def __init__(
        self,
        entity_type: str,
        entity_id: object,
        org_id: Optional[str] = None,
    ) -> None:
        super().__init__(f"{entity_type} {entity_id} not found", org_id=org_id)
        self.entity_type = entity_type
        self.entity_id = entity_id


class UniquenessConflictError(FleetDomainError):
    """Raised when the store rejects a duplicate unique key."""

    def __init__(
        self,
        entity_type: str,
        key: str,
        org_id: Optional[str] = None,
    ) -> None:
        super().__init__(
            f"{entity_type} with key {key!r} already exists", org_id=org_id
        )
        self.entity_type = entity_type
        self.key = key


class CascadeFailureError(FleetDomainError):
    """Raised when the member cleanup of a group delete fails partway.

    The enclosing transaction must be rolled back; the group keeps its
    full membership.
    """

    def __init__(
        self,
        group_id: object,
        reason: str,
        org_id: Optional[str] = None,
    ) -> None:
        super().__init__(
            f"Failed to delete devices of group {group_id}: {reason}",
            org_id=org_id,
        )
        self.group_id = group_id
        self.reason = reason
