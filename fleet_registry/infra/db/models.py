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

"""SQLAlchemy ORM models for fleet registry persistence.

ORM models are infrastructure-only and never exposed outside this layer.
Domain <-> ORM conversion is handled by mappers in mappers.py.
"""

from datetime import datetime, timezone

# Third-party imports
from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Table,
    Text,
    TypeDecorator,
    UniqueConstraint,
    text,
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()

_LIVE_ROWS = text("deleted_at IS NULL")


def utcnow() -> datetime:
    """Current UTC time."""
    return datetime.now(timezone.utc)


class UtcDateTime(TypeDecorator):  # pylint: disable=too-many-ancestors
    """Timezone-aware UTC datetime on every backend.

    SQLite keeps no offset, so values are written as UTC and read back with
    tzinfo=UTC attached. Naive values are taken to be UTC.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    def process_result_value(self, value, dialect):
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


# Association tables
device_groups_devices = Table(
    "device_groups_devices",
    Base.metadata,
    Column(
        "device_group_id",
        Integer,
        ForeignKey("device_groups.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "device_id",
        Integer,
        ForeignKey("devices.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    # A device belongs to at most one group.
    UniqueConstraint("device_id", name="uq_device_groups_devices_device"),
)

commit_installed_packages = Table(
    "commit_installed_packages",
    Base.metadata,
    Column(
        "commit_id",
        Integer,
        ForeignKey("commits.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "installed_package_id",
        Integer,
        ForeignKey("installed_packages.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class TimestampMixin:  # pylint: disable=too-few-public-methods
    """Creation, update and soft-delete timestamps."""

    created_at = Column(UtcDateTime(), nullable=False, default=utcnow)
    updated_at = Column(
        UtcDateTime(), nullable=False, default=utcnow, onupdate=utcnow
    )
    deleted_at = Column(UtcDateTime(), nullable=True, index=True)


class DeviceModel(TimestampMixin, Base):
    """ORM model for devices table.

    Maps to Device domain entity via DeviceMapper.
    """

    __tablename__ = "devices"

    # Primary key
    id = Column(Integer, primary_key=True, autoincrement=True)

    # Business attributes
    name = Column(String(255), nullable=False, default="")
    uuid = Column(String(64), nullable=False)
    org_id = Column(String(128), nullable=False, index=True)
    account = Column(String(128), nullable=True)

    # Relationships
    groups = relationship(
        "DeviceGroupModel",
        secondary=device_groups_devices,
        back_populates="devices",
        lazy="selectin",
    )

    __table_args__ = (
        Index(
            "ix_devices_uuid_live",
            "uuid",
            unique=True,
            sqlite_where=_LIVE_ROWS,
            postgresql_where=_LIVE_ROWS,
        ),
    )


class DeviceGroupModel(TimestampMixin, Base):
    """ORM model for device_groups table.

    Maps to DeviceGroup domain entity via DeviceGroupMapper.
    """

    __tablename__ = "device_groups"

    # Primary key
    id = Column(Integer, primary_key=True, autoincrement=True)

    # Business attributes
    name = Column(String(255), nullable=False)
    type = Column(String(20), nullable=False)
    account = Column(String(128), nullable=False)
    org_id = Column(String(128), nullable=False, index=True)

    # Relationships
    devices = relationship(
        "DeviceModel",
        secondary=device_groups_devices,
        back_populates="groups",
        lazy="selectin",
        order_by="DeviceModel.id",
    )

    # Name is unique among a tenant's live groups
    __table_args__ = (
        Index(
            "ix_device_groups_org_name_live",
            "org_id",
            "name",
            unique=True,
            sqlite_where=_LIVE_ROWS,
            postgresql_where=_LIVE_ROWS,
        ),
    )


class RepoModel(TimestampMixin, Base):
    """ORM model for repos table."""

    __tablename__ = "repos"

    id = Column(Integer, primary_key=True, autoincrement=True)
    url = Column(Text, nullable=False, default="")
    status = Column(String(20), nullable=False)
    # Tenant of the commit that created the repo
    org_id = Column(String(128), nullable=False, index=True)


class InstalledPackageModel(TimestampMixin, Base):
    """ORM model for installed_packages table."""

    __tablename__ = "installed_packages"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    arch = Column(String(50), nullable=False, default="")
    release = Column(String(255), nullable=False, default="")
    sigmd5 = Column(String(64), nullable=False, default="")
    signature = Column(Text, nullable=False, default="")
    type = Column(String(50), nullable=False, default="")
    version = Column(String(255), nullable=False, default="")
    epoch = Column(String(20), nullable=True)


class CommitModel(TimestampMixin, Base):
    """ORM model for commits table.

    Maps to Commit domain entity via CommitMapper.
    """

    __tablename__ = "commits"

    # Primary key
    id = Column(Integer, primary_key=True, autoincrement=True)

    # Business attributes
    name = Column(String(255), nullable=False, default="")
    account = Column(String(128), nullable=True)
    org_id = Column(String(128), nullable=False, index=True)
    image_build_hash = Column(String(255), nullable=False, default="")
    image_build_parent_hash = Column(String(255), nullable=False, default="")
    image_build_tar_url = Column(Text, nullable=False, default="")
    os_tree_commit = Column(String(255), nullable=False, default="")
    os_tree_parent_commit = Column(String(255), nullable=False, default="")
    os_tree_ref = Column(String(255), nullable=False, default="")
    os_tree_parent_ref = Column(String(255), nullable=False, default="")
    build_date = Column(String(64), nullable=False, default="")
    build_number = Column(Integer, nullable=False, default=0)
    blueprint_toml = Column(Text, nullable=False, default="")
    arch = Column(String(50), nullable=False, default="")
    compose_job_id = Column(String(64), nullable=False, default="")
    status = Column(String(20), nullable=False, index=True)
    changes_refs = Column(Boolean, nullable=False, default=False)

    # Owned delivery repo; the repo outlives the commit
    repo_id = Column(
        Integer, ForeignKey("repos.id", ondelete="SET NULL"), nullable=True
    )

    # Relationships
    repo = relationship("RepoModel", lazy="joined")
    installed_packages = relationship(
        "InstalledPackageModel",
        secondary=commit_installed_packages,
        lazy="selectin",
        order_by="InstalledPackageModel.id",
    )

    __table_args__ = (
        Index("ix_commits_org_status", "org_id", "status"),
    )
