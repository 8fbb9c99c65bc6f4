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

"""SQL implementations of the association repositories.

Group membership (device_groups_devices) and commit package manifests
(commit_installed_packages) are modelled as explicit join tables. Every
method flushes so a failure surfaces inside the caller's transaction.
"""

import logging
from typing import Iterable, List

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from fleet_registry.core.commits.entities import InstalledPackage
from fleet_registry.core.device_groups.exceptions import DeviceMembershipError
from fleet_registry.core.devices.entities import Device
from fleet_registry.core.exceptions import CascadeFailureError, EntityNotFoundError
from .mappers import DeviceMapper, InstalledPackageMapper
from .models import (
    CommitModel,
    DeviceGroupModel,
    DeviceModel,
    InstalledPackageModel,
    device_groups_devices,
)
from .queries import require_live

logger = logging.getLogger(__name__)


class SqlDeviceGroupMembership:
    """SQL implementation of DeviceGroupMembershipRepository protocol."""

    def __init__(self, session: Session) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy session for database operations.
        """
        self.session = session

    def add_devices(
        self, group_id: int, org_id: str, device_ids: Iterable[int]
    ) -> List[Device]:
        """Add devices of the same tenant to a group.

        Raises:
            EntityNotFoundError: Group or device not live in the tenant.
            DeviceMembershipError: Device already in another group.
        """
        device_ids = list(device_ids)
        group = require_live(self.session, DeviceGroupModel, group_id, org_id, "DeviceGroup")
        for device_id in device_ids:
            device = require_live(self.session, DeviceModel, device_id, org_id, "Device")
            other_groups = [g for g in device.groups if g.id != group.id]
            if other_groups:
                raise DeviceMembershipError(
                    device_id,
                    f"already belongs to group {other_groups[0].id}",
                    org_id=org_id,
                )
            if device not in group.devices:
                group.devices.append(device)

        try:
            self.session.flush()
        except IntegrityError as exc:
            raise DeviceMembershipError(
                device_ids, "already belongs to another group", org_id=org_id
            ) from exc
        return self._members(group)

    def remove_devices(
        self, group_id: int, org_id: str, device_ids: Iterable[int]
    ) -> List[Device]:
        """Remove devices from a group, keeping the device rows."""
        group = require_live(self.session, DeviceGroupModel, group_id, org_id, "DeviceGroup")
        to_remove = set(device_ids)
        for device in list(group.devices):
            if device.id in to_remove:
                group.devices.remove(device)
        self.session.flush()
        return self._members(group)

    def list_devices(self, group_id: int, org_id: str) -> List[Device]:
        """List the live member devices of a group, read from the join table."""
        require_live(self.session, DeviceGroupModel, group_id, org_id, "DeviceGroup")
        stmt = (
            select(DeviceModel)
            .join(
                device_groups_devices,
                device_groups_devices.c.device_id == DeviceModel.id,
            )
            .where(
                device_groups_devices.c.device_group_id == group_id,
                DeviceModel.deleted_at.is_(None),
            )
            .order_by(DeviceModel.id)
        )
        devices = self.session.execute(stmt).scalars().all()
        return [DeviceMapper.to_domain(device) for device in devices]

    def delete_group_devices(self, group_id: int) -> int:
        """Hard-delete the join rows, then the device rows, of a group.

        Returns:
            Number of devices deleted.

        Raises:
            CascadeFailureError: If the store rejects the cleanup.
        """
        try:
            group = self.session.get(DeviceGroupModel, group_id)
            if group is None:
                return 0
            self.session.flush()
            self.session.refresh(group, ["devices"])
            devices = list(group.devices)
            if not devices:
                return 0
            group.devices.clear()
            self.session.flush()
            for device in devices:
                self.session.delete(device)
            self.session.flush()
        except SQLAlchemyError as exc:
            logger.error("Cascade delete failed for group %s: %s", group_id, exc)
            raise CascadeFailureError(group_id, str(exc)) from exc
        return len(devices)

    @staticmethod
    def _members(group: DeviceGroupModel) -> List[Device]:
        return [
            DeviceMapper.to_domain(device)
            for device in group.devices
            if device.deleted_at is None
        ]


class SqlCommitPackages:
    """SQL implementation of CommitPackageRepository protocol."""

    def __init__(self, session: Session) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy session for database operations.
        """
        self.session = session

    def attach(
        self, commit_id: int, org_id: str, packages: Iterable[InstalledPackage]
    ) -> List[InstalledPackage]:
        """Attach packages to a commit, creating those not yet stored.

        Raises:
            EntityNotFoundError: Commit not live in the tenant, or an
                existing package id is unknown.
        """
        commit = require_live(self.session, CommitModel, commit_id, org_id, "Commit")
        for package in packages:
            model = self._package_model(package)
            if model not in commit.installed_packages:
                commit.installed_packages.append(model)
        self.session.flush()
        return [InstalledPackageMapper.to_domain(p) for p in commit.installed_packages]

    def detach(self, commit_id: int, org_id: str, package_ids: Iterable[int]) -> int:
        """Remove association rows; package rows are kept.

        Returns:
            Number of packages detached.
        """
        commit = require_live(self.session, CommitModel, commit_id, org_id, "Commit")
        to_remove = set(package_ids)
        detached = 0
        for package in list(commit.installed_packages):
            if package.id in to_remove:
                commit.installed_packages.remove(package)
                detached += 1
        self.session.flush()
        return detached

    def list_packages(self, commit_id: int, org_id: str) -> List[InstalledPackage]:
        """List the packages attached to a commit."""
        commit = require_live(self.session, CommitModel, commit_id, org_id, "Commit")
        return [InstalledPackageMapper.to_domain(p) for p in commit.installed_packages]

    def _package_model(self, package: InstalledPackage) -> InstalledPackageModel:
        if package.id is None:
            model = InstalledPackageMapper.to_orm(package)
            self.session.add(model)
            return model
        model = self.session.get(InstalledPackageModel, package.id)
        if model is None:
            raise EntityNotFoundError("InstalledPackage", package.id)
        return model
