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

"""DeviceGroup domain exceptions."""

from typing import Optional, Sequence

from fleet_registry.core.exceptions import FleetDomainError

DEVICE_GROUP_NAME_EMPTY_MESSAGE = "group name cannot be empty"
DEVICE_GROUP_TYPE_INVALID_MESSAGE = "group type must be static or dynamic"
DEVICE_GROUP_NAME_INVALID_MESSAGE = (
    "group name must start with alphanumeric characters "
    "and can contain underscore and hyphen characters"
)
DEVICE_GROUP_ACCOUNT_EMPTY_MESSAGE = "group account can't be empty"


def type_invalid_message(allowed_types: Sequence[str]) -> str:
    """Build the invalid type message for the given choices."""
    choices = list(allowed_types)
    if len(choices) < 2:
        return f"group type must be {''.join(choices)}"
    return f"group type must be {', '.join(choices[:-1])} or {choices[-1]}"


class DeviceGroupValidationError(FleetDomainError):
    """Base exception for device group field validation failures."""

    default_message = "invalid device group"

    def __init__(self, message: Optional[str] = None, org_id: Optional[str] = None) -> None:
        super().__init__(message or self.default_message, org_id=org_id)


class DeviceGroupNameEmptyError(DeviceGroupValidationError):
    """Raised when the group name is empty."""

    default_message = DEVICE_GROUP_NAME_EMPTY_MESSAGE


class DeviceGroupTypeInvalidError(DeviceGroupValidationError):
    """Raised when the group type is outside the allowed set."""

    default_message = DEVICE_GROUP_TYPE_INVALID_MESSAGE


class DeviceGroupNameInvalidError(DeviceGroupValidationError):
    """Raised when the group name contains disallowed characters."""

    default_message = DEVICE_GROUP_NAME_INVALID_MESSAGE


class DeviceGroupAccountEmptyError(DeviceGroupValidationError):
    """Raised when the group account is empty."""

    default_message = DEVICE_GROUP_ACCOUNT_EMPTY_MESSAGE


class DeviceMembershipError(FleetDomainError):
    """Raised when a device cannot join or leave a group."""

    def __init__(
        self,
        device_id: object,
        reason: str,
        org_id: Optional[str] = None,
    ) -> None:
        super().__init__(
            f"Device {device_id} membership rejected: {reason}", org_id=org_id
        )
        self.device_id = device_id
        self.reason = reason
