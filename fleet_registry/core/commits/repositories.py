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

"""Repository port interfaces (Protocols) for the Commit domain."""

from typing import Any, Iterable, List, Mapping, Optional, Protocol

from .entities import Commit, InstalledPackage, Repo


class CommitRepository(Protocol):
    """Repository port for commit persistence."""

    def create(self, commit: Commit) -> Commit:
        """Persist a commit with its repo and installed packages.

        Raises:
            MissingTenantError: If the commit has no org_id.
        """
        ...

    def find_by_id(self, commit_id: int, org_id: str) -> Optional[Commit]:
        """Retrieve a live commit within a tenant."""
        ...

    def list_by_org(self, org_id: str) -> List[Commit]:
        """List live commits of a tenant."""
        ...

    def update(self, commit_id: int, org_id: str, changes: Mapping[str, Any]) -> Commit:
        """Apply the mutable subset of changes to a live commit."""
        ...

    def attach_repo(self, commit_id: int, org_id: str, repo: Repo) -> Commit:
        """Give a commit its delivery repo."""
        ...

    def delete(self, commit_id: int, org_id: str) -> None:
        """Soft-delete a commit. The owned repo is left untouched."""
        ...


class RepoRepository(Protocol):
    """Repository port for delivery repos."""

    def create(self, repo: Repo) -> Repo:
        """Persist a repo."""
        ...

    def find_by_id(self, repo_id: int, org_id: str) -> Optional[Repo]:
        """Retrieve a live repo within a tenant."""
        ...

    def update(
        self, repo_id: int, org_id: str, changes: Mapping[str, Any]
    ) -> Repo:
        """Apply the mutable subset of changes to a repo of the tenant."""
        ...


class CommitPackageRepository(Protocol):
    """Repository port for the commit to installed package association."""

    def attach(
        self, commit_id: int, org_id: str, packages: Iterable[InstalledPackage]
    ) -> List[InstalledPackage]:
        """Attach packages to a commit, creating those not yet stored."""
        ...

    def detach(self, commit_id: int, org_id: str, package_ids: Iterable[int]) -> int:
        """Remove association rows; package rows are kept."""
        ...

    def list_packages(self, commit_id: int, org_id: str) -> List[InstalledPackage]:
        """List the packages attached to a commit."""
        ...
