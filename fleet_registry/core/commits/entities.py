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

"""Domain entities for the Commit module.

A Commit is one built OS-tree image revision. It exclusively owns an
optional Repo (the HTTP delivery point for its content) and carries the
manifest of packages installed in the image.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Union

from fleet_registry.core.tenancy import require_tenant

from .exceptions import InvalidCommitStatusError
from .value_objects import CommitStatus, RepoStatus

# Fields a persisted commit may still change once the build progresses.
COMMIT_MUTABLE_FIELDS = frozenset({
    "status",
    "image_build_tar_url",
    "os_tree_commit",
    "os_tree_parent_commit",
    "changes_refs",
})

REPO_MUTABLE_FIELDS = frozenset({"url", "status"})


@dataclass
class Repo:
    """Delivery mechanism of a Commit over HTTP.

    A repo belongs to the tenant of the commit that created it and stays
    with that tenant after the commit is deleted.
    """

    url: str = ""
    status: Union[RepoStatus, str] = RepoStatus.BUILDING
    org_id: str = ""
    id: Optional[int] = None  # pylint: disable=invalid-name
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None


@dataclass
class InstalledPackage:
    """A package installed in a commit's image."""

    name: str
    arch: str = ""
    release: str = ""
    sigmd5: str = ""
    signature: str = ""
    type: str = ""
    version: str = ""
    epoch: Optional[str] = None
    id: Optional[int] = None  # pylint: disable=invalid-name

    @property
    def nevra(self) -> str:
        """Package identity in name-epoch:version-release.arch form."""
        epoch = f"{self.epoch}:" if self.epoch else ""
        return f"{self.name}-{epoch}{self.version}-{self.release}.{self.arch}"


@dataclass
class Commit:  # pylint: disable=too-many-instance-attributes
    """An OS-tree commit produced by an image build.

    Attributes:
        org_id: Owning tenant (mandatory).
        status: Build status.
        repo: Owned delivery repo, if any.
        installed_packages: Package manifest of the image.
    """

    org_id: str
    name: str = ""
    account: str = ""
    image_build_hash: str = ""
    image_build_parent_hash: str = ""
    image_build_tar_url: str = ""
    os_tree_commit: str = ""
    os_tree_parent_commit: str = ""
    os_tree_ref: str = ""
    os_tree_parent_ref: str = ""
    build_date: str = ""
    build_number: int = 0
    blueprint_toml: str = ""
    arch: str = ""
    compose_job_id: str = ""
    status: Union[CommitStatus, str] = CommitStatus.BUILDING
    changes_refs: bool = False
    repo: Optional[Repo] = None
    installed_packages: List[InstalledPackage] = field(default_factory=list)
    id: Optional[int] = None  # pylint: disable=invalid-name
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None

    @property
    def repo_id(self) -> Optional[int]:
        """Identifier of the owned repo, if persisted."""
        return self.repo.id if self.repo is not None else None

    def validate_request(self) -> None:
        """Validate the commit before it is submitted for creation.

        Raises:
            MissingTenantError: If org_id is empty.
            InvalidCommitStatusError: If status is unknown.
        """
        require_tenant(self)
        self.status = parse_commit_status(self.status, org_id=self.org_id)
        if self.repo is not None:
            self.repo.status = parse_repo_status(self.repo.status, org_id=self.org_id)


def parse_commit_status(value: object, org_id: Optional[str] = None) -> CommitStatus:
    """Convert a raw value into a CommitStatus."""
    try:
        return CommitStatus(getattr(value, "value", value))
    except ValueError as exc:
        raise InvalidCommitStatusError(value, org_id=org_id) from exc


def parse_repo_status(value: object, org_id: Optional[str] = None) -> RepoStatus:
    """Convert a raw value into a RepoStatus."""
    try:
        return RepoStatus(getattr(value, "value", value))
    except ValueError as exc:
        raise InvalidCommitStatusError(value, org_id=org_id) from exc
