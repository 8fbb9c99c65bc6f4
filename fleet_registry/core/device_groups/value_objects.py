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

"""Value objects for the DeviceGroup domain.

All value objects are immutable and defined by their values, not identity.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Iterable, List, Optional, Pattern

DEFAULT_NAME_PATTERN = r"^[A-Za-z0-9]+[A-Za-z0-9\s_-]*$"


class DeviceGroupType(str, Enum):
    """Kind of device group.

    STATIC: Membership managed explicitly.
    DYNAMIC: Membership computed from device attributes.
    DEFAULT is an alias of STATIC.
    """

    STATIC = "static"
    DYNAMIC = "dynamic"
    DEFAULT = "static"


@dataclass(frozen=True)
class DeviceGroupPolicy:
    """Validation policy for device groups.

    Attributes:
        allowed_types: Accepted values for the group type field.
        name_pattern: Regular expression a group name must fully match.

    Raises:
        ValueError: If the policy itself is unusable.
    """

    allowed_types: FrozenSet[str] = field(
        default_factory=lambda: frozenset(t.value for t in DeviceGroupType)
    )
    name_pattern: str = DEFAULT_NAME_PATTERN

    def __post_init__(self) -> None:
        """Validate policy values."""
        if not self.allowed_types:
            raise ValueError("Device group policy needs at least one allowed type")
        try:
            re.compile(self.name_pattern)
        except re.error as exc:
            raise ValueError(
                f"Invalid device group name pattern {self.name_pattern!r}: {exc}"
            ) from exc

    @property
    def compiled_name_pattern(self) -> Pattern[str]:
        """Return the compiled name pattern."""
        return re.compile(self.name_pattern)

    @property
    def type_choices(self) -> List[str]:
        """Allowed types, known kinds first in declaration order."""
        known = [t.value for t in DeviceGroupType if t.value in self.allowed_types]
        return known + sorted(self.allowed_types.difference(known))

    def is_allowed_type(self, value: Optional[str]) -> bool:
        """Check whether value is one of the allowed group types."""
        return value in self.allowed_types

    @classmethod
    def from_values(
        cls,
        allowed_types: Optional[Iterable[str]] = None,
        name_pattern: Optional[str] = None,
    ) -> "DeviceGroupPolicy":
        """Build a policy, falling back to defaults for missing values."""
        types = frozenset(t.strip() for t in allowed_types or () if t.strip())
        return cls(
            allowed_types=types or frozenset(t.value for t in DeviceGroupType),
            name_pattern=name_pattern or DEFAULT_NAME_PATTERN,
        )
