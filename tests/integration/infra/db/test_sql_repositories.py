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

"""Integration tests for SQL repositories against SQLite."""

from datetime import timedelta

import pytest
from sqlalchemy import select
from sqlalchemy.orm import Session

from fleet_registry.core.commits.entities import Commit, InstalledPackage, Repo
from fleet_registry.core.commits.value_objects import CommitStatus, RepoStatus
from fleet_registry.core.device_groups.entities import DeviceGroup
from fleet_registry.core.device_groups.exceptions import (
    DeviceGroupNameEmptyError,
    DeviceMembershipError,
)
from fleet_registry.core.device_groups.value_objects import DeviceGroupType
from fleet_registry.core.devices.entities import Device
from fleet_registry.core.exceptions import (
    EntityNotFoundError,
    MissingTenantError,
    UniquenessConflictError,
)
from fleet_registry.infra.db.models import DeviceModel, device_groups_devices
from fleet_registry.infra.db.repositories import (
    SqlCommitRepository,
    SqlDeviceGroupRepository,
    SqlDeviceRepository,
    SqlRepoRepository,
)


def _new_group(org_id: str, name: str = "group1", **kwargs) -> DeviceGroup:
    return DeviceGroup(name=name, org_id=org_id, account="acc-1", **kwargs)


class TestSqlDeviceRepository:
    """Tests for SqlDeviceRepository."""

    def test_create_and_find(self, db_session: Session, org_id: str) -> None:
        """A created device can be read back within its tenant."""
        repo = SqlDeviceRepository(db_session)
        created = repo.create(Device(name="d1", uuid="uuid-1", org_id=org_id))

        assert created.id is not None
        assert created.created_at is not None
        assert repo.find_by_id(created.id, org_id) == created
        assert repo.find_by_uuid("uuid-1", org_id).id == created.id

    def test_timestamps_read_back_timezone_aware(
        self, db_session: Session, org_id: str
    ) -> None:
        """Timestamps reloaded from the store keep their UTC offset."""
        repo = SqlDeviceRepository(db_session)
        created = repo.create(Device(name="d1", uuid="uuid-1", org_id=org_id))
        db_session.expire_all()

        found = repo.find_by_id(created.id, org_id)

        assert found.created_at.tzinfo is not None
        assert found.created_at.utcoffset() == timedelta(0)
        assert found == created

    def test_other_tenant_cannot_read(
        self, db_session: Session, org_id: str, other_org_id: str
    ) -> None:
        """Lookups with another org_id read as not found."""
        repo = SqlDeviceRepository(db_session)
        created = repo.create(Device(name="d1", uuid="uuid-1", org_id=org_id))

        assert repo.find_by_id(created.id, other_org_id) is None
        assert repo.list_by_org(other_org_id) == []
        with pytest.raises(EntityNotFoundError):
            repo.delete(created.id, other_org_id)

    def test_missing_tenant(self, db_session: Session) -> None:
        """Devices need an org_id."""
        with pytest.raises(MissingTenantError):
            SqlDeviceRepository(db_session).create(Device(name="d", uuid="u", org_id=""))

    def test_duplicate_uuid(self, db_session: Session, org_id: str) -> None:
        """Hardware identifiers are unique among live devices."""
        repo = SqlDeviceRepository(db_session)
        repo.create(Device(name="d1", uuid="uuid-1", org_id=org_id))
        with pytest.raises(UniquenessConflictError):
            repo.create(Device(name="d2", uuid="uuid-1", org_id=org_id))

    def test_delete_is_soft_and_frees_uuid(self, db_session: Session, org_id: str) -> None:
        """A deleted device disappears and its uuid can be registered again."""
        repo = SqlDeviceRepository(db_session)
        created = repo.create(Device(name="d1", uuid="uuid-1", org_id=org_id))

        repo.delete(created.id, org_id)

        assert repo.find_by_id(created.id, org_id) is None
        assert db_session.get(DeviceModel, created.id).deleted_at is not None
        assert repo.create(Device(name="d1", uuid="uuid-1", org_id=org_id)).id != created.id

    def test_delete_drops_membership(self, db_session: Session, org_id: str) -> None:
        """A deleted device leaves its group."""
        device = SqlDeviceRepository(db_session).create(
            Device(name="d1", uuid="uuid-1", org_id=org_id)
        )
        groups = SqlDeviceGroupRepository(db_session)
        group = groups.create(_new_group(org_id, devices=[device]))

        SqlDeviceRepository(db_session).delete(device.id, org_id)

        assert groups.find_by_id(group.id, org_id).devices == []


class TestSqlDeviceGroupRepository:
    """Tests for SqlDeviceGroupRepository."""

    def test_create_with_new_and_existing_devices(
        self, db_session: Session, org_id: str
    ) -> None:
        """New members are inserted and existing ones linked."""
        existing = SqlDeviceRepository(db_session).create(
            Device(name="d1", uuid="uuid-1", org_id=org_id)
        )
        repo = SqlDeviceGroupRepository(db_session)

        group = repo.create(
            _new_group(
                org_id,
                devices=[existing, Device(name="d2", uuid="uuid-2", org_id=org_id)],
            )
        )

        assert group.id is not None
        assert group.type is DeviceGroupType.STATIC
        assert [d.uuid for d in group.devices] == ["uuid-1", "uuid-2"]
        assert all(d.group_id == group.id for d in group.devices)

    def test_find_by_name_and_list(self, db_session: Session, org_id: str) -> None:
        """Groups are found by name and listed by tenant."""
        repo = SqlDeviceGroupRepository(db_session)
        repo.create(_new_group(org_id, name="beta"))
        repo.create(_new_group(org_id, name="alpha"))

        assert repo.find_by_name("beta", org_id).name == "beta"
        assert [g.name for g in repo.list_by_org(org_id)] == ["alpha", "beta"]

    def test_duplicate_name_in_tenant(self, db_session: Session, org_id: str) -> None:
        """Two live groups of a tenant cannot share a name."""
        repo = SqlDeviceGroupRepository(db_session)
        repo.create(_new_group(org_id))
        with pytest.raises(UniquenessConflictError) as exc_info:
            repo.create(_new_group(org_id))
        assert exc_info.value.key == "group1"

    def test_same_name_in_other_tenant(
        self, db_session: Session, org_id: str, other_org_id: str
    ) -> None:
        """Names are unique per tenant, not globally."""
        repo = SqlDeviceGroupRepository(db_session)
        repo.create(_new_group(org_id))
        assert repo.create(_new_group(other_org_id)).org_id == other_org_id

    def test_name_reusable_after_delete(self, db_session: Session, org_id: str) -> None:
        """A deleted group's name can be taken again."""
        repo = SqlDeviceGroupRepository(db_session)
        first = repo.create(_new_group(org_id))
        repo.delete(first.id, org_id)

        second = repo.create(_new_group(org_id))

        assert second.id != first.id

    def test_update_keeps_account_and_type(self, db_session: Session, org_id: str) -> None:
        """Account and type survive an update that tries to change them."""
        repo = SqlDeviceGroupRepository(db_session)
        group = repo.create(_new_group(org_id, type=DeviceGroupType.STATIC))

        updated = repo.update(
            group.id,
            org_id,
            {"name": "renamed", "account": "other", "type": "dynamic"},
        )

        assert updated.name == "renamed"
        assert updated.account == "acc-1"
        assert updated.type is DeviceGroupType.STATIC

    def test_save_persists_only_name(self, db_session: Session, org_id: str) -> None:
        """Saving a modified entity writes the name only."""
        repo = SqlDeviceGroupRepository(db_session)
        group = repo.create(_new_group(org_id))
        group.name = "renamed"
        group.account = "other"
        group.type = DeviceGroupType.DYNAMIC

        repo.save(group)
        reloaded = repo.find_by_id(group.id, org_id)

        assert reloaded.name == "renamed"
        assert reloaded.account == "acc-1"
        assert reloaded.type is DeviceGroupType.STATIC

    def test_save_creates_new_group(self, db_session: Session, org_id: str) -> None:
        """Saving an unsaved group inserts it."""
        assert SqlDeviceGroupRepository(db_session).save(_new_group(org_id)).id is not None

    def test_rename_to_taken_name(self, db_session: Session, org_id: str) -> None:
        """Renaming onto another live group's name is a conflict."""
        repo = SqlDeviceGroupRepository(db_session)
        repo.create(_new_group(org_id, name="taken"))
        group = repo.create(_new_group(org_id, name="free"))
        with pytest.raises(UniquenessConflictError):
            repo.update(group.id, org_id, {"name": "taken"})

    @pytest.mark.parametrize("name", [None, ""])
    def test_rename_to_empty_name(self, db_session: Session, org_id: str, name) -> None:
        """An empty name is rejected and the stored name is kept."""
        repo = SqlDeviceGroupRepository(db_session)
        group = repo.create(_new_group(org_id, name="keep"))
        with pytest.raises(DeviceGroupNameEmptyError):
            repo.update(group.id, org_id, {"name": name})
        assert repo.find_by_id(group.id, org_id).name == "keep"

    def test_update_other_tenant(
        self, db_session: Session, org_id: str, other_org_id: str
    ) -> None:
        """Another tenant cannot update the group."""
        repo = SqlDeviceGroupRepository(db_session)
        group = repo.create(_new_group(org_id))
        with pytest.raises(EntityNotFoundError):
            repo.update(group.id, other_org_id, {"name": "stolen"})

    def test_delete_cascades_to_devices(self, db_session: Session, org_id: str) -> None:
        """Deleting a group hard-deletes its members and join rows."""
        repo = SqlDeviceGroupRepository(db_session)
        group = repo.create(
            _new_group(
                org_id,
                devices=[
                    Device(name="d1", uuid="uuid-1", org_id=org_id),
                    Device(name="d2", uuid="uuid-2", org_id=org_id),
                ],
            )
        )
        device_ids = group.device_ids

        removed = repo.delete(group.id, org_id)

        assert removed == 2
        assert repo.find_by_id(group.id, org_id) is None
        db_session.expire_all()
        for device_id in device_ids:
            assert db_session.get(DeviceModel, device_id) is None
        rows = db_session.execute(
            select(device_groups_devices).where(
                device_groups_devices.c.device_group_id == group.id
            )
        ).all()
        assert rows == []

    def test_delete_empty_group(self, db_session: Session, org_id: str) -> None:
        """A group without members deletes cleanly."""
        repo = SqlDeviceGroupRepository(db_session)
        group = repo.create(_new_group(org_id))
        assert repo.delete(group.id, org_id) == 0
        assert repo.find_by_id(group.id, org_id) is None

    def test_delete_leaves_other_devices(self, db_session: Session, org_id: str) -> None:
        """Devices outside the group are untouched."""
        devices = SqlDeviceRepository(db_session)
        outsider = devices.create(Device(name="d0", uuid="uuid-0", org_id=org_id))
        repo = SqlDeviceGroupRepository(db_session)
        group = repo.create(
            _new_group(org_id, devices=[Device(name="d1", uuid="uuid-1", org_id=org_id)])
        )

        repo.delete(group.id, org_id)

        assert devices.find_by_id(outsider.id, org_id) is not None

    def test_new_member_of_other_tenant(
        self, db_session: Session, org_id: str, other_org_id: str
    ) -> None:
        """A group cannot be created with another tenant's device."""
        repo = SqlDeviceGroupRepository(db_session)
        with pytest.raises(DeviceMembershipError):
            repo.create(
                _new_group(
                    org_id,
                    devices=[Device(name="d", uuid="uuid-x", org_id=other_org_id)],
                )
            )

    def test_existing_member_already_grouped(
        self, db_session: Session, org_id: str
    ) -> None:
        """A device in one group cannot be put into a second one at creation."""
        device = SqlDeviceRepository(db_session).create(
            Device(name="d", uuid="uuid-1", org_id=org_id)
        )
        repo = SqlDeviceGroupRepository(db_session)
        repo.create(_new_group(org_id, name="first", devices=[device]))
        with pytest.raises(DeviceMembershipError):
            repo.create(_new_group(org_id, name="second", devices=[device]))


class TestSqlCommitRepository:
    """Tests for SqlCommitRepository and SqlRepoRepository."""

    def test_create_with_repo_and_packages(self, db_session: Session, org_id: str) -> None:
        """Repo and package manifest are stored with the commit."""
        repo = SqlCommitRepository(db_session)
        commit = repo.create(
            Commit(
                org_id=org_id,
                name="image-1",
                arch="x86_64",
                repo=Repo(url="https://repo/1"),
                installed_packages=[
                    InstalledPackage(name="bash", version="5.1", arch="x86_64"),
                    InstalledPackage(name="vim", version="9.0", arch="x86_64"),
                ],
            )
        )

        found = repo.find_by_id(commit.id, org_id)

        assert found.repo.url == "https://repo/1"
        assert found.repo.status is RepoStatus.BUILDING
        assert sorted(p.name for p in found.installed_packages) == ["bash", "vim"]

    def test_missing_tenant(self, db_session: Session) -> None:
        """Commits need an org_id."""
        with pytest.raises(MissingTenantError):
            SqlCommitRepository(db_session).create(Commit(org_id=""))

    def test_update_filters_fields(self, db_session: Session, org_id: str) -> None:
        """Build progress changes are kept, identity changes dropped."""
        repo = SqlCommitRepository(db_session)
        commit = repo.create(Commit(org_id=org_id, name="image-1"))

        updated = repo.update(
            commit.id,
            org_id,
            {"status": "SUCCESS", "os_tree_commit": "abc123", "name": "other"},
        )

        assert updated.status is CommitStatus.SUCCESS
        assert updated.os_tree_commit == "abc123"
        assert updated.name == "image-1"

    def test_delete_keeps_repo(self, db_session: Session, org_id: str) -> None:
        """Deleting a commit leaves its repo in place."""
        commits = SqlCommitRepository(db_session)
        commit = commits.create(Commit(org_id=org_id, repo=Repo(url="https://repo/1")))

        commits.delete(commit.id, org_id)

        assert commits.find_by_id(commit.id, org_id) is None
        assert SqlRepoRepository(db_session).find_by_id(commit.repo_id, org_id).url == "https://repo/1"

    def test_attach_repo(self, db_session: Session, org_id: str) -> None:
        """An existing unowned repo can be attached to a commit."""
        stored = SqlRepoRepository(db_session).create(Repo(url="https://repo/9", org_id=org_id))
        commits = SqlCommitRepository(db_session)
        commit = commits.create(Commit(org_id=org_id))

        attached = commits.attach_repo(commit.id, org_id, stored)

        assert attached.repo_id == stored.id

    def test_repo_owned_by_one_commit(self, db_session: Session, org_id: str) -> None:
        """A repo cannot be attached to a second live commit."""
        commits = SqlCommitRepository(db_session)
        owner = commits.create(Commit(org_id=org_id, repo=Repo(url="https://repo/1")))
        other = commits.create(Commit(org_id=org_id))

        with pytest.raises(UniquenessConflictError):
            commits.attach_repo(other.id, org_id, owner.repo)

    def test_list_by_org_newest_first(
        self, db_session: Session, org_id: str, other_org_id: str
    ) -> None:
        """Only the tenant's commits are listed, newest first."""
        commits = SqlCommitRepository(db_session)
        first = commits.create(Commit(org_id=org_id))
        second = commits.create(Commit(org_id=org_id))
        commits.create(Commit(org_id=other_org_id))

        assert [c.id for c in commits.list_by_org(org_id)] == [second.id, first.id]

    def test_repo_update(self, db_session: Session, org_id: str) -> None:
        """Repo url and status can change."""
        repos = SqlRepoRepository(db_session)
        stored = repos.create(Repo(url="https://repo/1", org_id=org_id))

        updated = repos.update(stored.id, org_id, {"status": "SUCCESS", "id": 99})

        assert updated.status is RepoStatus.SUCCESS
        assert updated.id == stored.id

    def test_repo_created_in_commit_tenant(self, db_session: Session, org_id: str) -> None:
        """A repo created with a commit belongs to the commit's tenant."""
        commit = SqlCommitRepository(db_session).create(
            Commit(org_id=org_id, repo=Repo(url="https://repo/1"))
        )

        assert commit.repo.org_id == org_id

    def test_other_tenant_cannot_attach_orphaned_repo(
        self, db_session: Session, org_id: str, other_org_id: str
    ) -> None:
        """A repo left behind by a deleted commit stays with its tenant."""
        commits = SqlCommitRepository(db_session)
        owner = commits.create(Commit(org_id=org_id, repo=Repo(url="https://repo/1")))
        commits.delete(owner.id, org_id)
        intruder = commits.create(Commit(org_id=other_org_id))

        with pytest.raises(EntityNotFoundError):
            commits.attach_repo(intruder.id, other_org_id, owner.repo)
        assert commits.find_by_id(intruder.id, other_org_id).repo_id is None

    def test_other_tenant_cannot_read_or_update_repo(
        self, db_session: Session, org_id: str, other_org_id: str
    ) -> None:
        """Repo lookups and updates with another org_id read as not found."""
        repos = SqlRepoRepository(db_session)
        stored = repos.create(Repo(url="https://repo/1", org_id=org_id))

        assert repos.find_by_id(stored.id, other_org_id) is None
        with pytest.raises(EntityNotFoundError):
            repos.update(stored.id, other_org_id, {"url": "http://elsewhere"})
        assert repos.find_by_id(stored.id, org_id).url == "https://repo/1"
