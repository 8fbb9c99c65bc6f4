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

"""Commit response DTOs."""

from dataclasses import dataclass
from typing import Optional

from fleet_registry.core.commits.entities import Commit


@dataclass(frozen=True)
class CommitResponse:
    """Response DTO for commit operations."""

    id: int  # pylint: disable=invalid-name
    org_id: str
    name: str
    arch: str
    status: str
    repo_id: Optional[int]
    repo_url: Optional[str]
    repo_status: Optional[str]
    package_count: int

    @classmethod
    def from_entity(cls, commit: Commit) -> "CommitResponse":
        """Build the response from a commit."""
        repo = commit.repo
        return cls(
            id=commit.id,
            org_id=commit.org_id,
            name=commit.name,
            arch=commit.arch,
            status=getattr(commit.status, "value", commit.status),
            repo_id=repo.id if repo else None,
            repo_url=repo.url if repo else None,
            repo_status=getattr(repo.status, "value", repo.status) if repo else None,
            package_count=len(commit.installed_packages),
        )
