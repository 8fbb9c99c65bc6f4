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

"""Mappers for domain <-> ORM model conversion.

Explicit mapping between domain entities and ORM models.
No domain logic lives here, only data transformation.
"""

from fleet_registry.core.commits.entities import (
    Commit,
    InstalledPackage,
    Repo,
    parse_commit_status,
    parse_repo_status,
)
from fleet_registry.core.device_groups.entities import DeviceGroup
from fleet_registry.core.device_groups.value_objects import DeviceGroupType
from fleet_registry.core.devices.entities import Device
from .models import (
    CommitModel,
    DeviceGroupModel,
    DeviceModel,
    InstalledPackageModel,
    RepoModel,
)


class DeviceMapper:
    """Mapper for Device entity <-> DeviceModel ORM."""

    @staticmethod
    def to_orm(device: Device) -> DeviceModel:
        """Convert Device domain entity to ORM model."""
        return DeviceModel(
            name=device.name,
            uuid=device.uuid,
            org_id=device.org_id,
            account=device.account,
        )

    @staticmethod
    def to_domain(model: DeviceModel) -> Device:
        """Convert DeviceModel ORM to Device domain entity."""
        live_groups = [group for group in model.groups if group.deleted_at is None]
        return Device(
            id=model.id,
            name=model.name,
            uuid=model.uuid,
            org_id=model.org_id,
            account=model.account or "",
            group_id=live_groups[0].id if live_groups else None,
            created_at=model.created_at,
            updated_at=model.updated_at,
            deleted_at=model.deleted_at,
        )


class DeviceGroupMapper:
    """Mapper for DeviceGroup entity <-> DeviceGroupModel ORM."""

    @staticmethod
    def to_orm(group: DeviceGroup) -> DeviceGroupModel:
        """Convert DeviceGroup domain entity to ORM model.

        Member devices are attached by the repository, not here.
        """
        return DeviceGroupModel(
            name=group.name,
            type=group.type_value,
            account=group.account,
            org_id=group.org_id,
        )

    @staticmethod
    def to_domain(model: DeviceGroupModel) -> DeviceGroup:
        """Convert DeviceGroupModel ORM to DeviceGroup domain entity."""
        try:
            group_type = DeviceGroupType(model.type)
        except ValueError:
            group_type = model.type
        return DeviceGroup(
            id=model.id,
            name=model.name,
            type=group_type,
            account=model.account,
            org_id=model.org_id,
            devices=[
                DeviceMapper.to_domain(device)
                for device in model.devices
                if device.deleted_at is None
            ],
            created_at=model.created_at,
            updated_at=model.updated_at,
            deleted_at=model.deleted_at,
        )


class RepoMapper:
    """Mapper for Repo entity <-> RepoModel ORM."""

    @staticmethod
    def to_orm(repo: Repo) -> RepoModel:
        """Convert Repo domain entity to ORM model."""
        return RepoModel(
            url=repo.url,
            status=parse_repo_status(repo.status).value,
            org_id=repo.org_id,
        )

    @staticmethod
    def to_domain(model: RepoModel) -> Repo:
        """Convert RepoModel ORM to Repo domain entity."""
        return Repo(
            id=model.id,
            url=model.url,
            status=parse_repo_status(model.status),
            org_id=model.org_id,
            created_at=model.created_at,
            updated_at=model.updated_at,
            deleted_at=model.deleted_at,
        )


class InstalledPackageMapper:
    """Mapper for InstalledPackage entity <-> InstalledPackageModel ORM."""

    @staticmethod
    def to_orm(package: InstalledPackage) -> InstalledPackageModel:
        """Convert InstalledPackage domain entity to ORM model."""
        return InstalledPackageModel(
            name=package.name,
            arch=package.arch,
            release=package.release,
            sigmd5=package.sigmd5,
            signature=package.signature,
            type=package.type,
            version=package.version,
            epoch=package.epoch,
        )

    @staticmethod
    def to_domain(model: InstalledPackageModel) -> InstalledPackage:
        """Convert InstalledPackageModel ORM to InstalledPackage domain entity."""
        return InstalledPackage(
            id=model.id,
            name=model.name,
            arch=model.arch,
            release=model.release,
            sigmd5=model.sigmd5,
            signature=model.signature,
            type=model.type,
            version=model.version,
            epoch=model.epoch,
        )


class CommitMapper:
    """Mapper for Commit entity <-> CommitModel ORM."""

    @staticmethod
    def to_orm(commit: Commit) -> CommitModel:
        """Convert Commit domain entity to ORM model.

        The owned repo and installed packages are attached by the
        repository.
        """
        return CommitModel(
            name=commit.name,
            account=commit.account,
            org_id=commit.org_id,
            image_build_hash=commit.image_build_hash,
            image_build_parent_hash=commit.image_build_parent_hash,
            image_build_tar_url=commit.image_build_tar_url,
            os_tree_commit=commit.os_tree_commit,
            os_tree_parent_commit=commit.os_tree_parent_commit,
            os_tree_ref=commit.os_tree_ref,
            os_tree_parent_ref=commit.os_tree_parent_ref,
            build_date=commit.build_date,
            build_number=commit.build_number,
            blueprint_toml=commit.blueprint_toml,
            arch=commit.arch,
            compose_job_id=commit.compose_job_id,
            status=parse_commit_status(commit.status, org_id=commit.org_id).value,
            changes_refs=commit.changes_refs,
        )

    @staticmethod
    def to_domain(model: CommitModel) -> Commit:
        """Convert CommitModel ORM to Commit domain entity."""
        return Commit(
            id=model.id,
            name=model.name,
            account=model.account or "",
            org_id=model.org_id,
            image_build_hash=model.image_build_hash,
            image_build_parent_hash=model.image_build_parent_hash,
            image_build_tar_url=model.image_build_tar_url,
            os_tree_commit=model.os_tree_commit,
            os_tree_parent_commit=model.os_tree_parent_commit,
            os_tree_ref=model.os_tree_ref,
            os_tree_parent_ref=model.os_tree_parent_ref,
            build_date=model.build_date,
            build_number=model.build_number,
            blueprint_toml=model.blueprint_toml,
            arch=model.arch,
            compose_job_id=model.compose_job_id,
            status=parse_commit_status(model.status),
            changes_refs=model.changes_refs,
            repo=RepoMapper.to_domain(model.repo) if model.repo is not None else None,
            installed_packages=[
                InstalledPackageMapper.to_domain(package)
                for package in model.installed_packages
            ],
            created_at=model.created_at,
            updated_at=model.updated_at,
            deleted_at=model.deleted_at,
        )
