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

"""Identity and tenancy guard.

Every tenant-scoped entity must carry a non-empty org_id before it reaches
the store. The guard runs ahead of any other validation.
"""

from typing import Optional, Protocol

from .exceptions import MissingTenantError


class TenantScoped(Protocol):  # pylint: disable=too-few-public-methods
    """Anything that belongs to exactly one tenant."""

    org_id: Optional[str]


def has_tenant(entity: TenantScoped) -> bool:
    """Return True if the entity carries a usable org_id."""
    org_id = getattr(entity, "org_id", None)
    return bool(org_id and org_id.strip())


def require_tenant(entity: TenantScoped) -> None:
    """Reject an entity without an org_id.

    Args:
        entity: Entity about to be persisted.

    Raises:
        MissingTenantError: If org_id is empty or blank.
    """
    if not has_tenant(entity):
        raise MissingTenantError(entity_type=type(entity).__name__)
