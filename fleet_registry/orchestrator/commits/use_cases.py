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

"""Commit use cases."""

import logging
from typing import Callable

from fleet_registry.common.logging_utils import log_secure_info
from fleet_registry.core.commits.entities import Commit, Repo
from fleet_registry.core.exceptions import EntityNotFoundError
from fleet_registry.core.unit_of_work import FleetUnitOfWork

from .commands import CreateCommitCommand, DeleteCommitCommand, UpdateCommitStatusCommand
from .dtos import CommitResponse

logger = logging.getLogger(__name__)


class CreateCommitUseCase:
    """Use case for recording a new commit with its repo and packages."""

    def __init__(self, uow_factory: Callable[[], FleetUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def execute(self, command: CreateCommitCommand) -> CommitResponse:
        """Create the commit.

        Raises:
            MissingTenantError: If org_id is empty.
            InvalidCommitStatusError: If a status is unknown.
        """
        commit = Commit(
            org_id=command.org_id,
            account=command.account,
            name=command.name,
            image_build_hash=command.image_build_hash,
            image_build_parent_hash=command.image_build_parent_hash,
            os_tree_ref=command.os_tree_ref,
            os_tree_parent_ref=command.os_tree_parent_ref,
            build_date=command.build_date,
            build_number=command.build_number,
            blueprint_toml=command.blueprint_toml,
            arch=command.arch,
            compose_job_id=command.compose_job_id,
            status=command.status,
            repo=(
                Repo(
                    url=command.repo_url,
                    status=command.repo_status,
                    org_id=command.org_id,
                )
                if command.repo_url is not None
                else None
            ),
            installed_packages=list(command.installed_packages),
        )
        commit.validate_request()

        with self._uow_factory() as uow:
            response = CommitResponse.from_entity(uow.commits.create(commit))

        log_secure_info(
            "info",
            f"Created commit {response.id} with {response.package_count} packages",
            org_id=command.org_id,
            logger=logger,
        )
        return response


class UpdateCommitStatusUseCase:
    """Use case for recording build progress on a commit and its repo."""

    def __init__(self, uow_factory: Callable[[], FleetUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def execute(self, command: UpdateCommitStatusCommand) -> CommitResponse:
        """Update the commit, and its repo when a repo status is given.

        Raises:
            EntityNotFoundError: If the commit is not live in the tenant, or
                a repo status is given for a commit without a repo.
            InvalidCommitStatusError: If a status is unknown.
        """
        changes = {"status": command.status}
        if command.os_tree_commit is not None:
            changes["os_tree_commit"] = command.os_tree_commit
        if command.image_build_tar_url is not None:
            changes["image_build_tar_url"] = command.image_build_tar_url

        with self._uow_factory() as uow:
            commit = uow.commits.update(command.commit_id, command.org_id, changes)
            if command.repo_status is not None:
                if commit.repo_id is None:
                    raise EntityNotFoundError(
                        "Repo", f"of commit {command.commit_id}", org_id=command.org_id
                    )
                uow.repos.update(
                    commit.repo_id, command.org_id, {"status": command.repo_status}
                )
                commit = uow.commits.find_by_id(command.commit_id, command.org_id)
            response = CommitResponse.from_entity(commit)

        logger.info("Commit %s is now %s", command.commit_id, response.status)
        return response


class DeleteCommitUseCase:
    """Use case for deleting a commit while keeping its repo."""

    def __init__(self, uow_factory: Callable[[], FleetUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def execute(self, command: DeleteCommitCommand) -> None:
        """Delete the commit.

        Raises:
            EntityNotFoundError: If the commit is not live in the tenant.
        """
        with self._uow_factory() as uow:
            uow.commits.delete(command.commit_id, command.org_id)
        log_secure_info(
            "info",
            f"Deleted commit {command.commit_id}",
            org_id=command.org_id,
            logger=logger,
        )
