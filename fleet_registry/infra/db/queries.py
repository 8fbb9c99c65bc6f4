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

"""Tenant-scoped lookup helpers shared by the SQL repositories."""

from typing import Optional, Type, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from fleet_registry.core.exceptions import EntityNotFoundError

ModelT = TypeVar("ModelT")


def find_live(
    session: Session,
    model: Type[ModelT],
    entity_id: int,
    org_id: Optional[str] = None,
) -> Optional[ModelT]:
    """Return a live row by id, restricted to org_id when the model has one.

    A row owned by another tenant is indistinguishable from a missing row.
    """
    stmt = select(model).where(model.id == entity_id, model.deleted_at.is_(None))
    if org_id is not None:
        stmt = stmt.where(model.org_id == org_id)
    return session.execute(stmt).scalar_one_or_none()


def require_live(
    session: Session,
    model: Type[ModelT],
    entity_id: int,
    org_id: Optional[str],
    entity_type: str,
) -> ModelT:
    """Like find_live, raising EntityNotFoundError when nothing matches."""
    row = find_live(session, model, entity_id, org_id)
    if row is None:
        raise EntityNotFoundError(entity_type, entity_id, org_id=org_id)
    return row


def is_unique_violation(exc: IntegrityError) -> bool:
    """Return True when an IntegrityError comes from a unique constraint.

    PostgreSQL reports SQLSTATE 23505; SQLite only names the constraint
    kind in its message.
    """
    if getattr(exc.orig, "pgcode", None) == "23505":
        return True
    return "unique" in str(exc.orig).lower()
