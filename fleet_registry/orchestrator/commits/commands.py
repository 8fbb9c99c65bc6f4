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

"""Commit command DTOs."""

from dataclasses import dataclass
from typing import Optional, Tuple

from fleet_registry.core.commits.entities import InstalledPackage
from fleet_registry.core.commits.value_objects import CommitStatus, RepoStatus


@dataclass(frozen=True)
class CreateCommitCommand:  # pylint: disable=too-many-instance-attributes
    """Command to record a commit produced by an image build.

    Attributes:
        org_id: Tenant owning the image (mandatory).
        repo_url: Delivery URL; a repo is created when set.
        installed_packages: Package manifest of the image.
    """

    org_id: str
    account: str = ""
    name: str = ""
    image_build_hash: str = ""
    image_build_parent_hash: str = ""
    os_tree_ref: str = ""
    os_tree_parent_ref: str = ""
    build_date: str = ""
    build_number: int = 0
    blueprint_toml: str = ""
    arch: str = ""
    compose_job_id: str = ""
    status: str = CommitStatus.BUILDING.value
    repo_url: Optional[str] = None
    repo_status: str = RepoStatus.BUILDING.value
    installed_packages: Tuple[InstalledPackage, ...] = ()


@dataclass(frozen=True)
class UpdateCommitStatusCommand:
    """Command to record build progress of a commit and its repo."""

    org_id: str
    commit_id: int
    status: str
    os_tree_commit: Optional[str] = None
    image_build_tar_url: Optional[str] = None
    repo_status: Optional[str] = None


@dataclass(frozen=True)
class DeleteCommitCommand:
    """Command to delete a commit; its repo is kept."""

    org_id: str
    commit_id: int
