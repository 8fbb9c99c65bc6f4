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

"""Commit domain module."""

from .entities import (
    COMMIT_MUTABLE_FIELDS,
    REPO_MUTABLE_FIELDS,
    Commit,
    InstalledPackage,
    Repo,
    parse_commit_status,
    parse_repo_status,
)
from .exceptions import InvalidCommitStatusError
from .repositories import CommitPackageRepository, CommitRepository, RepoRepository
from .value_objects import CommitStatus, RepoStatus

__all__ = [
    "COMMIT_MUTABLE_FIELDS",
    "REPO_MUTABLE_FIELDS",
    "Commit",
    "InstalledPackage",
    "Repo",
    "parse_commit_status",
    "parse_repo_status",
    "InvalidCommitStatusError",
    "CommitPackageRepository",
    "CommitRepository",
    "RepoRepository",
    "CommitStatus",
    "RepoStatus",
]
