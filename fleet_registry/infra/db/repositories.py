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

"""SQL repository implementations for fleet registry persistence.

These implement the repository Protocol ports defined in the core domain
modules using SQLAlchemy ORM. Each mutation runs the lifecycle hooks
explicitly before touching the session, and flushes so that store
constraint violations surface as domain errors inside the caller's
transaction.
"""

from typing import Any, List, Mapping, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from fleet_registry.core.commits.entities import (
    Commit,
    Repo,
    parse_commit_status,
    parse_repo_status,
)
from fleet_registry.core.device_groups.entities import DeviceGroup
from fleet_registry.core.device_groups.exceptions import (
    DeviceGroupNameEmptyError,
    DeviceMembershipError,
)
from fleet_registry.core.devices.entities import Device
from fleet_registry.core.exceptions import EntityNotFoundError, UniquenessConflictError
from fleet_registry.core.lifecycle import LifecycleHooks
from .mappers import CommitMapper, DeviceGroupMapper, DeviceMapper, RepoMapper
from .models import CommitModel, DeviceGroupModel, DeviceModel, RepoModel, utcnow
from .queries import find_live, is_unique_violation, require_live
from .relationships import SqlCommitPackages, SqlDeviceGroupMembership

_GROUP_SNAPSHOT_EXCLUDED = frozenset(
    {"id", "devices", "created_at", "updated_at", "deleted_at"}
)


class SqlDeviceRepository:
    """SQL implementation of DeviceRepository protocol."""

    def __init__(self, session: Session, hooks: Optional[LifecycleHooks] = None) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy session for database operations.
            hooks: Lifecycle hooks; defaults to hooks bound to this session.
        """
        self.session = session
        self._hooks = hooks or LifecycleHooks(SqlDeviceGroupMembership(session))

    def create(self, device: Device) -> Device:
        """Persist a new device.

        Raises:
            MissingTenantError: If the device has no org_id.
            UniquenessConflictError: If the uuid is already registered.
        """
        self._hooks.before_create(device)
        if self._uuid_taken(device.uuid):
            raise UniquenessConflictError("Device", device.uuid, org_id=device.org_id)

        model = DeviceMapper.to_orm(device)
        self.session.add(model)
        try:
            self.session.flush()
        except IntegrityError as exc:
            if not is_unique_violation(exc):
                raise
            raise UniquenessConflictError(
                "Device", device.uuid, org_id=device.org_id
            ) from exc
        return DeviceMapper.to_domain(model)

    def find_by_id(self, device_id: int, org_id: str) -> Optional[Device]:
        """Retrieve a live device within a tenant."""
        model = find_live(self.session, DeviceModel, device_id, org_id)
        return DeviceMapper.to_domain(model) if model is not None else None

    def find_by_uuid(self, uuid: str, org_id: str) -> Optional[Device]:
        """Retrieve a live device by hardware identifier within a tenant."""
        stmt = select(DeviceModel).where(
            DeviceModel.uuid == uuid,
            DeviceModel.org_id == org_id,
            DeviceModel.deleted_at.is_(None),
        )
        model = self.session.execute(stmt).scalar_one_or_none()
        return DeviceMapper.to_domain(model) if model is not None else None

    def list_by_org(self, org_id: str) -> List[Device]:
        """List live devices of a tenant."""
        stmt = (
            select(DeviceModel)
            .where(DeviceModel.org_id == org_id, DeviceModel.deleted_at.is_(None))
            .order_by(DeviceModel.id)
        )
        return [DeviceMapper.to_domain(m) for m in self.session.execute(stmt).scalars()]

    def delete(self, device_id: int, org_id: str) -> None:
        """Soft-delete a device and drop its group membership.

        Raises:
            EntityNotFoundError: If the device is not live in the tenant.
        """
        model = require_live(self.session, DeviceModel, device_id, org_id, "Device")
        model.groups.clear()
        model.deleted_at = utcnow()
        self.session.flush()

    def _uuid_taken(self, uuid: str) -> bool:
        stmt = select(DeviceModel.id).where(
            DeviceModel.uuid == uuid, DeviceModel.deleted_at.is_(None)
        )
        return self.session.execute(stmt).first() is not None


class SqlDeviceGroupRepository:
    """SQL implementation of DeviceGroupRepository protocol.

    Account, type and org_id are fixed once a group exists: update() and
    save() pass every change through LifecycleHooks.before_update, which
    keeps only the name.
    """

    def __init__(self, session: Session, hooks: Optional[LifecycleHooks] = None) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy session for database operations.
            hooks: Lifecycle hooks; defaults to hooks bound to this session.
        """
        self.session = session
        self._hooks = hooks or LifecycleHooks(SqlDeviceGroupMembership(session))

    def create(self, group: DeviceGroup) -> DeviceGroup:
        """Persist a new group together with its member devices.

        Members that are already stored are looked up within the group's
        tenant; new members are created with the group.

        Raises:
            MissingTenantError: If the group or a new member has no org_id.
            DeviceGroupNameEmptyError: If the name is empty.
            DeviceGroupAccountEmptyError: If the account is empty.
            DeviceMembershipError: If a member belongs to another tenant
                or another group.
            UniquenessConflictError: If the tenant already has a live group
                with this name.
        """
        self._hooks.before_create(group)
        if self._name_taken(group.name, group.org_id):
            raise UniquenessConflictError("DeviceGroup", group.name, org_id=group.org_id)

        model = DeviceGroupMapper.to_orm(group)
        for device in group.devices:
            model.devices.append(self._member_model(device, group.org_id))
        self.session.add(model)
        self._flush(group.name, group.org_id)
        return DeviceGroupMapper.to_domain(model)

    def find_by_id(self, group_id: int, org_id: str) -> Optional[DeviceGroup]:
        """Retrieve a live group within a tenant."""
        model = find_live(self.session, DeviceGroupModel, group_id, org_id)
        return DeviceGroupMapper.to_domain(model) if model is not None else None

    def find_by_name(self, name: str, org_id: str) -> Optional[DeviceGroup]:
        """Retrieve a live group by name within a tenant."""
        model = self._live_by_name(name, org_id)
        return DeviceGroupMapper.to_domain(model) if model is not None else None

    def list_by_org(self, org_id: str) -> List[DeviceGroup]:
        """List live groups of a tenant ordered by name."""
        stmt = (
            select(DeviceGroupModel)
            .where(
                DeviceGroupModel.org_id == org_id,
                DeviceGroupModel.deleted_at.is_(None),
            )
            .order_by(DeviceGroupModel.name)
        )
        return [
            DeviceGroupMapper.to_domain(m) for m in self.session.execute(stmt).scalars()
        ]

    def update(
        self, group_id: int, org_id: str, changes: Mapping[str, Any]
    ) -> DeviceGroup:
        """Apply the mutable subset of changes to a live group.

        Field formats are not re-checked here; callers validate new names
        first.

        Raises:
            EntityNotFoundError: If the group is not live in the tenant.
            DeviceGroupNameEmptyError: If the new name is empty.
            UniquenessConflictError: If the new name is taken.
        """
        model = require_live(self.session, DeviceGroupModel, group_id, org_id, "DeviceGroup")
        accepted = self._hooks.before_update(DeviceGroup, changes, entity_id=group_id)
        if "name" in accepted and not accepted["name"]:
            raise DeviceGroupNameEmptyError(org_id=org_id)
        new_name = accepted.get("name")
        if new_name is not None and new_name != model.name:
            if self._name_taken(new_name, org_id):
                raise UniquenessConflictError("DeviceGroup", new_name, org_id=org_id)
        for field_name, value in accepted.items():
            setattr(model, field_name, value)
        self._flush(model.name, org_id)
        return DeviceGroupMapper.to_domain(model)

    def save(self, group: DeviceGroup) -> DeviceGroup:
        """Persist a group, creating it or updating its mutable fields.

        For an existing group every scalar field of the entity is offered
        as a change; immutable ones are discarded. Membership is managed
        through SqlDeviceGroupMembership, not here.
        """
        if group.id is None:
            return self.create(group)
        changes = {
            name: getattr(group, name)
            for name in group.__dataclass_fields__
            if name not in _GROUP_SNAPSHOT_EXCLUDED
        }
        return self.update(group.id, group.org_id, changes)

    def delete(self, group_id: int, org_id: str) -> int:
        """Delete a group after cascading to its member devices.

        Member devices and join rows are hard-deleted first; the group row
        is then soft-deleted.

        Returns:
            Number of member devices deleted.

        Raises:
            EntityNotFoundError: If the group is not live in the tenant.
            CascadeFailureError: If member cleanup fails.
        """
        model = require_live(self.session, DeviceGroupModel, group_id, org_id, "DeviceGroup")
        removed = self._hooks.before_delete(DeviceGroupMapper.to_domain(model))
        model.deleted_at = utcnow()
        self.session.flush()
        return removed

    def _member_model(self, device: Device, org_id: str) -> DeviceModel:
        if device.id is not None:
            model = require_live(self.session, DeviceModel, device.id, org_id, "Device")
            if model.groups:
                raise DeviceMembershipError(
                    device.id,
                    f"already belongs to group {model.groups[0].id}",
                    org_id=org_id,
                )
            return model
        self._hooks.before_create(device)
        if device.org_id != org_id:
            raise DeviceMembershipError(
                device.uuid, "device belongs to another tenant", org_id=org_id
            )
        if self._device_uuid_taken(device.uuid):
            raise UniquenessConflictError("Device", device.uuid, org_id=org_id)
        return DeviceMapper.to_orm(device)

    def _live_by_name(self, name: str, org_id: str) -> Optional[DeviceGroupModel]:
        stmt = select(DeviceGroupModel).where(
            DeviceGroupModel.name == name,
            DeviceGroupModel.org_id == org_id,
            DeviceGroupModel.deleted_at.is_(None),
        )
        return self.session.execute(stmt).scalar_one_or_none()

    def _name_taken(self, name: str, org_id: str) -> bool:
        return self._live_by_name(name, org_id) is not None

    def _device_uuid_taken(self, uuid: str) -> bool:
        stmt = select(DeviceModel.id).where(
            DeviceModel.uuid == uuid, DeviceModel.deleted_at.is_(None)
        )
        return self.session.execute(stmt).first() is not None

    def _flush(self, name: str, org_id: str) -> None:
        try:
            self.session.flush()
        except IntegrityError as exc:
            if not is_unique_violation(exc):
                raise
            raise UniquenessConflictError("DeviceGroup", name, org_id=org_id) from exc


class SqlCommitRepository:
    """SQL implementation of CommitRepository protocol."""

    def __init__(self, session: Session, hooks: Optional[LifecycleHooks] = None) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy session for database operations.
            hooks: Lifecycle hooks; defaults to hooks bound to this session.
        """
        self.session = session
        self._hooks = hooks or LifecycleHooks()
        self._packages = SqlCommitPackages(session)

    def create(self, commit: Commit) -> Commit:
        """Persist a commit with its repo and installed packages.

        Raises:
            MissingTenantError: If the commit has no org_id.
            InvalidCommitStatusError: If the commit or repo status is unknown.
            EntityNotFoundError: If a referenced repo or package is unknown.
        """
        self._hooks.before_create(commit)
        model = CommitMapper.to_orm(commit)
        if commit.repo is not None:
            model.repo = self._repo_model(commit.repo, commit.org_id)
        self.session.add(model)
        self.session.flush()
        if commit.installed_packages:
            self._packages.attach(model.id, commit.org_id, commit.installed_packages)
        return CommitMapper.to_domain(model)

    def find_by_id(self, commit_id: int, org_id: str) -> Optional[Commit]:
        """Retrieve a live commit within a tenant."""
        model = find_live(self.session, CommitModel, commit_id, org_id)
        return CommitMapper.to_domain(model) if model is not None else None

    def list_by_org(self, org_id: str) -> List[Commit]:
        """List live commits of a tenant, newest first."""
        stmt = (
            select(CommitModel)
            .where(CommitModel.org_id == org_id, CommitModel.deleted_at.is_(None))
            .order_by(CommitModel.id.desc())
        )
        return [CommitMapper.to_domain(m) for m in self.session.execute(stmt).scalars()]

    def update(self, commit_id: int, org_id: str, changes: Mapping[str, Any]) -> Commit:
        """Apply the mutable subset of changes to a live commit.

        Raises:
            EntityNotFoundError: If the commit is not live in the tenant.
            InvalidCommitStatusError: If a new status is unknown.
        """
        model = require_live(self.session, CommitModel, commit_id, org_id, "Commit")
        accepted = self._hooks.before_update(Commit, changes, entity_id=commit_id)
        if "status" in accepted:
            accepted["status"] = parse_commit_status(accepted["status"], org_id=org_id).value
        for field_name, value in accepted.items():
            setattr(model, field_name, value)
        self.session.flush()
        return CommitMapper.to_domain(model)

    def attach_repo(self, commit_id: int, org_id: str, repo: Repo) -> Commit:
        """Give a commit its delivery repo.

        Raises:
            EntityNotFoundError: If the commit or repo does not exist.
            UniquenessConflictError: If another live commit owns the repo.
        """
        model = require_live(self.session, CommitModel, commit_id, org_id, "Commit")
        model.repo = self._repo_model(repo, org_id, owner_id=commit_id)
        self.session.flush()
        return CommitMapper.to_domain(model)

    def delete(self, commit_id: int, org_id: str) -> None:
        """Soft-delete a commit. The owned repo is left untouched."""
        model = require_live(self.session, CommitModel, commit_id, org_id, "Commit")
        model.deleted_at = utcnow()
        self.session.flush()

    def _repo_model(
        self, repo: Repo, org_id: str, owner_id: Optional[int] = None
    ) -> RepoModel:
        if repo.id is None:
            model = RepoMapper.to_orm(repo)
            model.org_id = org_id
            self.session.add(model)
            return model
        model = find_live(self.session, RepoModel, repo.id, org_id)
        if model is None:
            raise EntityNotFoundError("Repo", repo.id, org_id=org_id)
        stmt = select(CommitModel.id).where(
            CommitModel.repo_id == repo.id, CommitModel.deleted_at.is_(None)
        )
        if owner_id is not None:
            stmt = stmt.where(CommitModel.id != owner_id)
        if self.session.execute(stmt).first() is not None:
            raise UniquenessConflictError("Repo", str(repo.id), org_id=org_id)
        return model


class SqlRepoRepository:
    """SQL implementation of RepoRepository protocol.

    A repo belongs to the tenant of the commit that created it and is
    only visible within that tenant.
    """

    def __init__(self, session: Session, hooks: Optional[LifecycleHooks] = None) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy session for database operations.
            hooks: Lifecycle hooks; defaults to plain hooks.
        """
        self.session = session
        self._hooks = hooks or LifecycleHooks()

    def create(self, repo: Repo) -> Repo:
        """Persist a repo.

        Raises:
            MissingTenantError: If the repo has no org_id.
        """
        self._hooks.before_create(repo)
        model = RepoMapper.to_orm(repo)
        self.session.add(model)
        self.session.flush()
        return RepoMapper.to_domain(model)

    def find_by_id(self, repo_id: int, org_id: str) -> Optional[Repo]:
        """Retrieve a live repo within a tenant."""
        model = find_live(self.session, RepoModel, repo_id, org_id)
        return RepoMapper.to_domain(model) if model is not None else None

    def update(self, repo_id: int, org_id: str, changes: Mapping[str, Any]) -> Repo:
        """Apply the mutable subset of changes to a repo.

        Raises:
            EntityNotFoundError: If the repo is not live in the tenant.
            InvalidCommitStatusError: If a new status is unknown.
        """
        model = require_live(self.session, RepoModel, repo_id, org_id, "Repo")
        accepted = self._hooks.before_update(Repo, changes, entity_id=repo_id)
        if "status" in accepted:
            accepted["status"] = parse_repo_status(accepted["status"], org_id=org_id).value
        for field_name, value in accepted.items():
            setattr(model, field_name, value)
        self.session.flush()
        return RepoMapper.to_domain(model)
