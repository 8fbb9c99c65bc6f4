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

"""Configuration loader for the fleet registry."""

import configparser
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from fleet_registry.core.device_groups.value_objects import DeviceGroupPolicy

DEFAULT_CONFIG_PATH = "/etc/fleet_registry/fleet_registry.ini"


@dataclass
class FleetRegistryConfig:
    """Fleet registry configuration."""
    device_groups: DeviceGroupPolicy = field(default_factory=DeviceGroupPolicy)


def load_config(config_path: Optional[str] = None) -> FleetRegistryConfig:
    """Load fleet registry configuration from INI file.

    Example file::

        [device_groups]
        allowed_types = static, dynamic
        name_pattern = ^[A-Za-z0-9]+[A-Za-z0-9\\s_-]*$

    Args:
        config_path: Path to configuration file. If None, uses
                    FLEET_REGISTRY_CONFIG_PATH or the default path.

    Returns:
        FleetRegistryConfig instance.

    Raises:
        FileNotFoundError: If config file not found.
        ValueError: If config is invalid.
    """
    if config_path is None:
        config_path = os.getenv("FLEET_REGISTRY_CONFIG_PATH", DEFAULT_CONFIG_PATH)

    config_file = Path(config_path)
    if not config_file.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_file}")

    parser = configparser.ConfigParser(interpolation=None)
    parser.read(config_file)

    if not parser.sections():
        raise ValueError(f"Empty configuration file: {config_file}")

    section = "device_groups"
    allowed_types = parser.get(section, "allowed_types", fallback="")
    name_pattern = parser.get(section, "name_pattern", fallback="")

    policy = DeviceGroupPolicy.from_values(
        allowed_types=allowed_types.split(",") if allowed_types else None,
        name_pattern=name_pattern or None,
    )
    return FleetRegistryConfig(device_groups=policy)


def load_config_or_default(config_path: Optional[str] = None) -> FleetRegistryConfig:
    """Load configuration, falling back to built-in defaults when absent."""
    try:
        return load_config(config_path)
    except FileNotFoundError:
        return FleetRegistryConfig()
