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

"""Unit tests for configuration loading."""

import pytest

from fleet_registry.common.config import (
    FleetRegistryConfig,
    load_config,
    load_config_or_default,
)
from fleet_registry.core.device_groups.value_objects import DEFAULT_NAME_PATTERN


class TestLoadConfig:
    """Tests for load_config."""

    def test_reads_device_group_section(self, tmp_path) -> None:
        """Types and pattern come from the [device_groups] section."""
        config_file = tmp_path / "fleet_registry.ini"
        config_file.write_text(
            "[device_groups]\n"
            "allowed_types = static\n"
            "name_pattern = ^[a-z]+$\n"
        )
        config = load_config(str(config_file))
        assert config.device_groups.allowed_types == frozenset({"static"})
        assert config.device_groups.name_pattern == "^[a-z]+$"

    def test_missing_keys_use_defaults(self, tmp_path) -> None:
        """Keys left out keep their defaults."""
        config_file = tmp_path / "fleet_registry.ini"
        config_file.write_text("[device_groups]\n")
        config = load_config(str(config_file))
        assert config.device_groups.allowed_types == frozenset({"static", "dynamic"})
        assert config.device_groups.name_pattern == DEFAULT_NAME_PATTERN

    def test_percent_in_pattern_is_literal(self, tmp_path) -> None:
        """Patterns are read without interpolation."""
        config_file = tmp_path / "fleet_registry.ini"
        config_file.write_text("[device_groups]\nname_pattern = ^[a-z%]+$\n")
        assert load_config(str(config_file)).device_groups.name_pattern == "^[a-z%]+$"

    def test_path_from_environment(self, tmp_path, monkeypatch) -> None:
        """FLEET_REGISTRY_CONFIG_PATH is used when no path is given."""
        config_file = tmp_path / "custom.ini"
        config_file.write_text("[device_groups]\nallowed_types = dynamic\n")
        monkeypatch.setenv("FLEET_REGISTRY_CONFIG_PATH", str(config_file))
        assert load_config().device_groups.allowed_types == frozenset({"dynamic"})

    def test_missing_file(self, tmp_path) -> None:
        """A missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / "absent.ini"))

    def test_empty_file(self, tmp_path) -> None:
        """A file without sections is rejected."""
        config_file = tmp_path / "empty.ini"
        config_file.write_text("")
        with pytest.raises(ValueError, match="Empty configuration file"):
            load_config(str(config_file))

    def test_invalid_pattern(self, tmp_path) -> None:
        """An invalid pattern is reported as ValueError."""
        config_file = tmp_path / "bad.ini"
        config_file.write_text("[device_groups]\nname_pattern = ([a-z\n")
        with pytest.raises(ValueError):
            load_config(str(config_file))


class TestLoadConfigOrDefault:
    """Tests for load_config_or_default."""

    def test_falls_back_when_missing(self, tmp_path) -> None:
        """A missing file yields the default configuration."""
        assert load_config_or_default(str(tmp_path / "absent.ini")) == FleetRegistryConfig()
