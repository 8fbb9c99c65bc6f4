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

"""Domain entities for the Device module."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class Device:
    """An edge device registered by a tenant.

    Attributes:
        name: Display name.
        uuid: Hardware identifier, unique across the fleet.
        org_id: Owning tenant.
        account: Legacy account identifier.
        group_id: Device group the device belongs to, if any.
        id: Store identifier (set once persisted).
        created_at: Creation timestamp.
        updated_at: Last update timestamp.
        deleted_at: Soft-delete marker.
    """

    name: str
    uuid: str
    org_id: str
    account: str = ""
    group_id: Optional[int] = None
    id: Optional[int] = None  # pylint: disable=invalid-name
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None

    @property
    def is_persisted(self) -> bool:
        """Check if the device has been stored."""
        return self.id is not None

    @property
    def is_grouped(self) -> bool:
        """Check if the device belongs to a group."""
        return self.group_id is not None
