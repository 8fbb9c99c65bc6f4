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

"""Dependency Injector containers for the fleet registry."""
# pylint: disable=c-extension-no-member

import os

from dependency_injector import containers, providers

from fleet_registry.common.config import load_config_or_default
from fleet_registry.core.device_groups.validators import DeviceGroupValidator
from fleet_registry.infra.db.config import DatabaseConfig
from fleet_registry.infra.db.session import (
    build_engine,
    build_session_factory,
    create_schema,
)
from fleet_registry.infra.db.unit_of_work import SqlUnitOfWork
from fleet_registry.orchestrator.commits.use_cases import (
    CreateCommitUseCase,
    DeleteCommitUseCase,
    UpdateCommitStatusUseCase,
)
from fleet_registry.orchestrator.device_groups.use_cases import (
    AddDevicesToGroupUseCase,
    CreateDeviceGroupUseCase,
    DeleteDeviceGroupUseCase,
    RemoveDevicesFromGroupUseCase,
    UpdateDeviceGroupUseCase,
)
from fleet_registry.orchestrator.devices.use_cases import (
    DeleteDeviceUseCase,
    RegisterDeviceUseCase,
)

DEV_DATABASE_URL = "sqlite://"


def _dev_database_config() -> DatabaseConfig:
    """Environment database config, defaulting to in-memory SQLite."""
    config = DatabaseConfig()
    if not config.database_url:
        config.database_url = DEV_DATABASE_URL
    return config


def _dev_engine(config: DatabaseConfig):
    """Engine with the schema created up front."""
    return create_schema(build_engine(config))


class DevContainer(containers.DeclarativeContainer):  # pylint: disable=R0903
    """Development profile container.

    Uses SQLite (in-memory unless DATABASE_URL is set) with the schema
    created on first use. No external database required.

    Activated when ENV=dev (default).
    """

    config = providers.Singleton(load_config_or_default)
    database_config = providers.Singleton(_dev_database_config)

    # --- Validation ---
    device_group_validator = providers.Singleton(
        DeviceGroupValidator,
        policy=config.provided.device_groups,
    )

    # --- Persistence ---
    engine = providers.Singleton(_dev_engine, database_config)
    session_factory = providers.Singleton(build_session_factory, engine)
    unit_of_work = providers.Factory(SqlUnitOfWork, session_factory=session_factory)

    # --- Device use cases ---
    register_device_use_case = providers.Factory(
        RegisterDeviceUseCase,
        uow_factory=unit_of_work.provider,
    )

    delete_device_use_case = providers.Factory(
        DeleteDeviceUseCase,
        uow_factory=unit_of_work.provider,
    )

    # --- Device group use cases ---
    create_device_group_use_case = providers.Factory(
        CreateDeviceGroupUseCase,
        uow_factory=unit_of_work.provider,
        validator=device_group_validator,
    )

    update_device_group_use_case = providers.Factory(
        UpdateDeviceGroupUseCase,
        uow_factory=unit_of_work.provider,
        validator=device_group_validator,
    )

    delete_device_group_use_case = providers.Factory(
        DeleteDeviceGroupUseCase,
        uow_factory=unit_of_work.provider,
    )

    add_devices_to_group_use_case = providers.Factory(
        AddDevicesToGroupUseCase,
        uow_factory=unit_of_work.provider,
    )

    remove_devices_from_group_use_case = providers.Factory(
        RemoveDevicesFromGroupUseCase,
        uow_factory=unit_of_work.provider,
    )

    # --- Commit use cases ---
    create_commit_use_case = providers.Factory(
        CreateCommitUseCase,
        uow_factory=unit_of_work.provider,
    )

    update_commit_status_use_case = providers.Factory(
        UpdateCommitStatusUseCase,
        uow_factory=unit_of_work.provider,
    )

    delete_commit_use_case = providers.Factory(
        DeleteCommitUseCase,
        uow_factory=unit_of_work.provider,
    )


class ProdContainer(DevContainer):  # pylint: disable=R0903
    """Production profile container.

    Requires DATABASE_URL; the schema is owned by the deployment, not
    created here.

    Activated when ENV=prod.
    """

    database_config = providers.Singleton(DatabaseConfig)
    engine = providers.Singleton(build_engine, database_config)
    session_factory = providers.Singleton(build_session_factory, engine)
    unit_of_work = providers.Factory(SqlUnitOfWork, session_factory=session_factory)


def get_container_class():
    """Select container class based on ENV environment variable.

    Returns:
        DevContainer if ENV=dev (default)
        ProdContainer if ENV=prod

    Raises:
        ValueError: If ENV has an unknown value.
    """
    env = os.getenv("ENV", "dev").lower()
    if env == "prod":
        return ProdContainer
    if env == "dev":
        return DevContainer
    raise ValueError(f"Unknown ENV value {env!r}; expected 'dev' or 'prod'")


def create_container():
    """Instantiate the container for the current environment."""
    return get_container_class()()
