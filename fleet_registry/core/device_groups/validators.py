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

"""Structural validation for device group requests.

Validation is pure: it inspects the candidate entity and raises the first
applicable error. Checks run in a fixed order so each failure maps to
exactly one message.
"""

from typing import TYPE_CHECKING, Optional

from .exceptions import (
    DeviceGroupAccountEmptyError,
    DeviceGroupNameEmptyError,
    DeviceGroupNameInvalidError,
    DeviceGroupTypeInvalidError,
    type_invalid_message,
)
from .value_objects import DeviceGroupPolicy

if TYPE_CHECKING:
    from .entities import DeviceGroup


class DeviceGroupValidator:
    """Validates device group fields against a DeviceGroupPolicy."""

    def __init__(self, policy: Optional[DeviceGroupPolicy] = None) -> None:
        self._policy = policy or DeviceGroupPolicy()
        self._name_pattern = self._policy.compiled_name_pattern
        self._type_message = type_invalid_message(self._policy.type_choices)

    @property
    def policy(self) -> DeviceGroupPolicy:
        """Policy in effect."""
        return self._policy

    def validate(self, group: "DeviceGroup") -> None:
        """Validate a device group request.

        Args:
            group: Candidate device group.

        Raises:
            DeviceGroupNameEmptyError: Name is empty.
            DeviceGroupTypeInvalidError: Type is not allowed.
            DeviceGroupNameInvalidError: Name has disallowed characters.
            DeviceGroupAccountEmptyError: Account is empty.
        """
        org_id = group.org_id or None
        if not group.name:
            raise DeviceGroupNameEmptyError(org_id=org_id)
        if not self._policy.is_allowed_type(_type_value(group.type)):
            raise DeviceGroupTypeInvalidError(self._type_message, org_id=org_id)
        if not self._name_pattern.fullmatch(group.name):
            raise DeviceGroupNameInvalidError(org_id=org_id)
        if not group.account:
            raise DeviceGroupAccountEmptyError(org_id=org_id)

    def validate_name(self, name: str, org_id: Optional[str] = None) -> None:
        """Validate a new name for an existing group."""
        if not name:
            raise DeviceGroupNameEmptyError(org_id=org_id)
        if not self._name_pattern.fullmatch(name):
            raise DeviceGroupNameInvalidError(org_id=org_id)


def _type_value(value: object) -> object:
    # Enum members hash by name, not by value.
    return getattr(value, "value", value)
