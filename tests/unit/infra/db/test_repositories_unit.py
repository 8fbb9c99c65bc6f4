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

"""Unit tests for SQL repository implementations (without database)."""

from unittest.mock import Mock

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from fleet_registry.core.device_groups.entities import DeviceGroup
from fleet_registry.core.devices.entities import Device
from fleet_registry.core.exceptions import (
    CascadeFailureError,
    EntityNotFoundError,
    MissingTenantError,
    UniquenessConflictError,
)
from fleet_registry.infra.db.models import DeviceGroupModel
from fleet_registry.infra.db.relationships import SqlDeviceGroupMembership
from fleet_registry.infra.db.repositories import (
    SqlDeviceGroupRepository,
    SqlDeviceRepository,
)


def _session_without_rows() -> Mock:
    mock_session = Mock()
    mock_result = Mock()
    mock_result.scalar_one_or_none.return_value = None
    mock_result.first.return_value = None
    mock_session.execute.return_value = mock_result
    return mock_session


class TestSqlDeviceGroupRepositoryUnit:
    """Unit tests for SqlDeviceGroupRepository using mocks."""

    def test_create_maps_integrity_error(self) -> None:
        """A unique index violation becomes UniquenessConflictError."""
        mock_session = _session_without_rows()
        mock_session.flush.side_effect = IntegrityError(
            "INSERT", {}, Exception("UNIQUE constraint failed: device_groups.name")
        )
        repo = SqlDeviceGroupRepository(mock_session)

        with pytest.raises(UniquenessConflictError) as exc_info:
            repo.create(DeviceGroup(name="g1", org_id="org-1", account="acc"))

        assert exc_info.value.key == "g1"
        assert exc_info.value.org_id == "org-1"

    def test_create_keeps_other_integrity_errors(self) -> None:
        """A NOT NULL violation is not reported as a name conflict."""
        mock_session = _session_without_rows()
        mock_session.flush.side_effect = IntegrityError(
            "INSERT", {}, Exception("NOT NULL constraint failed: device_groups.name")
        )
        repo = SqlDeviceGroupRepository(mock_session)

        with pytest.raises(IntegrityError):
            repo.create(DeviceGroup(name="g1", org_id="org-1", account="acc"))

    def test_create_runs_tenant_guard_before_store(self) -> None:
        """No store call happens for a group without tenant."""
        mock_session = _session_without_rows()
        repo = SqlDeviceGroupRepository(mock_session)

        with pytest.raises(MissingTenantError):
            repo.create(DeviceGroup(name="g1", org_id="", account="acc"))

        mock_session.add.assert_not_called()
        mock_session.execute.assert_not_called()

    def test_create_rejects_taken_name(self) -> None:
        """An existing live group with the same name is a conflict."""
        mock_session = Mock()
        mock_result = Mock()
        mock_result.scalar_one_or_none.return_value = DeviceGroupModel(id=1, name="g1")
        mock_session.execute.return_value = mock_result
        repo = SqlDeviceGroupRepository(mock_session)

        with pytest.raises(UniquenessConflictError):
            repo.create(DeviceGroup(name="g1", org_id="org-1", account="acc"))

        mock_session.add.assert_not_called()

    def test_update_discards_immutable_fields(self) -> None:
        """Only the name reaches the row."""
        model = DeviceGroupModel(
            id=4, name="old", type="static", account="acc", org_id="org-1", devices=[]
        )
        mock_session = Mock()
        mock_result = Mock()
        mock_result.scalar_one_or_none.side_effect = [model, None]
        mock_session.execute.return_value = mock_result
        repo = SqlDeviceGroupRepository(mock_session)

        group = repo.update(4, "org-1", {"name": "new", "account": "x", "type": "dynamic"})

        assert (model.name, model.account, model.type) == ("new", "acc", "static")
        assert group.name == "new"
        mock_session.flush.assert_called_once()

    def test_delete_missing_group(self) -> None:
        """Deleting an unknown group raises EntityNotFoundError."""
        repo = SqlDeviceGroupRepository(_session_without_rows())
        with pytest.raises(EntityNotFoundError):
            repo.delete(99, "org-1")

    def test_delete_runs_cascade_hook(self) -> None:
        """The pre-delete hook runs before the group row is marked deleted."""
        model = DeviceGroupModel(
            id=4, name="g", type="static", account="acc", org_id="org-1", devices=[]
        )
        mock_session = Mock()
        mock_result = Mock()
        mock_result.scalar_one_or_none.return_value = model
        mock_session.execute.return_value = mock_result
        hooks = Mock()
        hooks.before_delete.return_value = 2
        repo = SqlDeviceGroupRepository(mock_session, hooks)

        assert repo.delete(4, "org-1") == 2

        hooks.before_delete.assert_called_once()
        assert hooks.before_delete.call_args[0][0].id == 4
        assert model.deleted_at is not None

    def test_delete_cascade_failure_leaves_group_live(self) -> None:
        """A failing cascade stops the delete."""
        model = DeviceGroupModel(
            id=4, name="g", type="static", account="acc", org_id="org-1", devices=[]
        )
        mock_session = Mock()
        mock_result = Mock()
        mock_result.scalar_one_or_none.return_value = model
        mock_session.execute.return_value = mock_result
        hooks = Mock()
        hooks.before_delete.side_effect = CascadeFailureError(4, "locked")
        repo = SqlDeviceGroupRepository(mock_session, hooks)

        with pytest.raises(CascadeFailureError):
            repo.delete(4, "org-1")

        assert model.deleted_at is None


class TestSqlDeviceRepositoryUnit:
    """Unit tests for SqlDeviceRepository using mocks."""

    def test_create_maps_integrity_error(self) -> None:
        """A duplicate uuid at flush time becomes UniquenessConflictError."""
        mock_session = _session_without_rows()
        mock_session.flush.side_effect = IntegrityError(
            "INSERT", {}, Exception("UNIQUE constraint failed: devices.uuid")
        )
        repo = SqlDeviceRepository(mock_session)

        with pytest.raises(UniquenessConflictError) as exc_info:
            repo.create(Device(name="d", uuid="u-1", org_id="org-1"))

        assert exc_info.value.entity_type == "Device"

    def test_find_by_id_returns_none(self) -> None:
        """Unknown ids read as None."""
        repo = SqlDeviceRepository(_session_without_rows())
        assert repo.find_by_id(1, "org-1") is None


class TestSqlDeviceGroupMembershipUnit:
    """Unit tests for SqlDeviceGroupMembership using mocks."""

    def test_cascade_maps_store_errors(self) -> None:
        """Store errors during cleanup become CascadeFailureError."""
        group = DeviceGroupModel(id=4, name="g", type="static", account="a", org_id="o")
        mock_session = Mock()
        mock_session.get.return_value = group
        mock_session.refresh.side_effect = OperationalError("SELECT", {}, Exception("gone"))
        membership = SqlDeviceGroupMembership(mock_session)

        with pytest.raises(CascadeFailureError) as exc_info:
            membership.delete_group_devices(4)

        assert exc_info.value.group_id == 4

    def test_cascade_unknown_group(self) -> None:
        """A missing group has nothing to delete."""
        mock_session = Mock()
        mock_session.get.return_value = None
        assert SqlDeviceGroupMembership(mock_session).delete_group_devices(4) == 0
