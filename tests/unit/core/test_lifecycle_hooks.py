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

"""Unit tests for LifecycleHooks."""

import logging
from unittest.mock import Mock

import pytest

from fleet_registry.core.commits.entities import Commit, Repo
from fleet_registry.core.device_groups.entities import DeviceGroup
from fleet_registry.core.device_groups.exceptions import (
    DeviceGroupAccountEmptyError,
    DeviceGroupNameEmptyError,
)
from fleet_registry.core.devices.entities import Device
from fleet_registry.core.exceptions import CascadeFailureError, MissingTenantError
from fleet_registry.core.lifecycle import LifecycleHooks


class TestBeforeCreate:
    """Tests for the pre-create hook."""

    def test_tenant_checked_first(self) -> None:
        """A group missing both org_id and name fails on the tenant."""
        hooks = LifecycleHooks()
        with pytest.raises(MissingTenantError):
            hooks.before_create(DeviceGroup(name="", org_id="", account=""))

    def test_group_name_mandatory(self) -> None:
        """Group name is mandatory at creation."""
        with pytest.raises(DeviceGroupNameEmptyError):
            LifecycleHooks().before_create(DeviceGroup(name="", org_id="o", account="a"))

    def test_group_account_mandatory(self) -> None:
        """Group account is mandatory at creation."""
        with pytest.raises(DeviceGroupAccountEmptyError):
            LifecycleHooks().before_create(DeviceGroup(name="g", org_id="o", account=""))

    def test_device_and_commit_need_tenant(self) -> None:
        """Devices and commits are tenant scoped too."""
        hooks = LifecycleHooks()
        with pytest.raises(MissingTenantError):
            hooks.before_create(Device(name="d", uuid="u", org_id=""))
        with pytest.raises(MissingTenantError):
            hooks.before_create(Commit(org_id=""))

    def test_repo_needs_tenant(self) -> None:
        """Repos belong to a tenant like the commits that own them."""
        hooks = LifecycleHooks()
        with pytest.raises(MissingTenantError):
            hooks.before_create(Repo(url="https://repo"))
        hooks.before_create(Repo(url="https://repo", org_id="o"))


class TestBeforeUpdate:
    """Tests for the pre-update allowlist."""

    def test_group_keeps_only_name(self) -> None:
        """Account, type and org_id changes are discarded."""
        accepted = LifecycleHooks().before_update(
            DeviceGroup,
            {"name": "new", "account": "other", "type": "dynamic", "org_id": "x"},
        )
        assert accepted == {"name": "new"}

    def test_discarded_fields_do_not_raise(self) -> None:
        """An update made only of immutable fields becomes empty."""
        accepted = LifecycleHooks().before_update(DeviceGroup, {"account": "x"})
        assert accepted == {}

    def test_discarded_fields_logged_at_debug(self, caplog) -> None:
        """Dropped fields are reported at DEBUG level."""
        with caplog.at_level(logging.DEBUG, logger="fleet_registry.core.lifecycle"):
            LifecycleHooks().before_update(DeviceGroup, {"type": "dynamic"}, entity_id=7)
        assert "Ignoring immutable fields type on DeviceGroup 7" in caplog.text

    def test_input_is_not_modified(self) -> None:
        """The caller's mapping is left intact."""
        changes = {"name": "n", "account": "a"}
        LifecycleHooks().before_update(DeviceGroup, changes)
        assert changes == {"name": "n", "account": "a"}

    def test_commit_allowlist(self) -> None:
        """Commits accept build progress fields but not identity fields."""
        accepted = LifecycleHooks().before_update(
            Commit, {"status": "SUCCESS", "org_id": "x", "os_tree_commit": "abc"}
        )
        assert accepted == {"status": "SUCCESS", "os_tree_commit": "abc"}

    def test_unknown_type_discards_everything(self) -> None:
        """Types without an allowlist accept nothing."""
        assert LifecycleHooks().before_update(dict, {"a": 1}) == {}


class TestBeforeDelete:
    """Tests for the pre-delete cascade."""

    def test_group_delete_cascades(self) -> None:
        """Deleting a persisted group deletes its member devices."""
        membership = Mock()
        membership.delete_group_devices.return_value = 3
        group = DeviceGroup(name="g", org_id="o", account="a", id=11)

        removed = LifecycleHooks(membership).before_delete(group)

        assert removed == 3
        membership.delete_group_devices.assert_called_once_with(11)

    def test_group_without_members(self) -> None:
        """Zero members is a no-op returning zero."""
        membership = Mock()
        membership.delete_group_devices.return_value = 0
        group = DeviceGroup(name="g", org_id="o", account="a", id=11)
        assert LifecycleHooks(membership).before_delete(group) == 0

    def test_cascade_failure_propagates(self) -> None:
        """Storage failures surface unchanged to the caller."""
        membership = Mock()
        membership.delete_group_devices.side_effect = CascadeFailureError(11, "boom")
        group = DeviceGroup(name="g", org_id="o", account="a", id=11)
        with pytest.raises(CascadeFailureError):
            LifecycleHooks(membership).before_delete(group)

    def test_unsaved_group_is_noop(self) -> None:
        """A group without an id has nothing to cascade."""
        membership = Mock()
        group = DeviceGroup(name="g", org_id="o", account="a")
        assert LifecycleHooks(membership).before_delete(group) == 0
        membership.delete_group_devices.assert_not_called()

    def test_other_entities_are_noop(self) -> None:
        """Only device groups cascade."""
        membership = Mock()
        hooks = LifecycleHooks(membership)
        assert hooks.before_delete(Device(name="d", uuid="u", org_id="o", id=1)) == 0
        assert hooks.before_delete(Commit(org_id="o", id=1)) == 0
        membership.delete_group_devices.assert_not_called()

    def test_group_delete_needs_membership(self) -> None:
        """Hooks without a membership repository cannot delete groups."""
        group = DeviceGroup(name="g", org_id="o", account="a", id=11)
        with pytest.raises(RuntimeError):
            LifecycleHooks().before_delete(group)
