"""
Common validation utilities for svsetup.

This module provides shared validation functions for the CLI and the
configuration loader, so that bad input is rejected before any network
request is made.
"""

import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ..constants import (
    FORBIDDEN_SYSTEM_PATHS, MAX_BUILD_LENGTH, MAX_VERSION_LENGTH,
    VALID_BUILD_CHARS, VALID_VERSION_CHARS
)
from ..exceptions import ValidationError


def is_safe_file_name(name: str) -> bool:
    """True if name stays inside the directory it is joined onto."""
    if not name or name in (".", ".."):
        return False
    return not any(char in name for char in ("/", "\\", "\0"))


class BaseValidator:
    """Base validator class with common validation methods."""

    @staticmethod
    def validate_non_empty_string(value: Any, field_name: str) -> str:
        """Validate that value is a non-empty string."""
        if not isinstance(value, str):
            raise ValidationError(f"{field_name} must be a string")

        stripped = value.strip()
        if not stripped:
            raise ValidationError(f"{field_name} cannot be empty")

        return stripped

    @staticmethod
    def validate_string_length(value: str, field_name: str, max_length: int) -> str:
        """Validate string length constraints."""
        if len(value) > max_length:
            raise ValidationError(f"{field_name} must be no more than {max_length} characters")
        return value

    @staticmethod
    def validate_regex_pattern(
        value: str,
        field_name: str,
        pattern: str,
        pattern_description: str = "valid format"
    ) -> str:
        """Validate that value matches the given regex pattern."""
        if not re.match(pattern, value):
            raise ValidationError(f"{field_name} must have {pattern_description}")
        return value


class ProvisionValidator(BaseValidator):
    """Validator for provisioning inputs."""

    @staticmethod
    def validate_version(version: Any) -> str:
        """Validate a version string, which may carry a ``-<build>`` suffix."""
        version_str = ProvisionValidator.validate_non_empty_string(version, "Version")
        version_str = ProvisionValidator.validate_string_length(version_str, "Version", MAX_VERSION_LENGTH)
        return ProvisionValidator.validate_regex_pattern(
            version_str,
            "Version",
            VALID_VERSION_CHARS,
            "valid characters (alphanumeric, dots, dashes, underscores, plus signs only)"
        )

    @staticmethod
    def validate_build(build: Any) -> str:
        """Validate a build override."""
        build_str = ProvisionValidator.validate_non_empty_string(str(build), "Build")
        build_str = ProvisionValidator.validate_string_length(build_str, "Build", MAX_BUILD_LENGTH)
        return ProvisionValidator.validate_regex_pattern(
            build_str, "Build", VALID_BUILD_CHARS, "valid characters (alphanumeric, dots, dashes only)"
        )

    @staticmethod
    def validate_server_directory(directory: Any) -> Path:
        """Validate the server directory path."""
        if not isinstance(directory, (str, Path)):
            raise ValidationError("Directory must be a string or Path")

        directory_path = Path(directory).expanduser().resolve()

        path_str = str(directory_path)
        for forbidden_path in FORBIDDEN_SYSTEM_PATHS:
            if path_str == forbidden_path or path_str.startswith(forbidden_path + "/"):
                raise ValidationError("Cannot provision into system directories")

        return directory_path

    @staticmethod
    def validate_file_name(name: Any, field_name: str = "File name") -> str:
        """Validate a bare file name that will be joined onto a directory."""
        name_str = ProvisionValidator.validate_non_empty_string(name, field_name)
        if not is_safe_file_name(name_str):
            raise ValidationError(f"{field_name} must be a plain file name, got {name_str!r}")
        return name_str

    @staticmethod
    def validate_plugin_urls(urls: List[str]) -> List[str]:
        """Validate direct plugin download URLs."""
        validated = []
        for url in urls:
            url_str = ProvisionValidator.validate_non_empty_string(url, "Plugin URL")
            if not (url_str.startswith('http://') or url_str.startswith('https://')):
                raise ValidationError("Plugin URL must start with http:// or https://")
            validated.append(url_str)
        return validated


def validate_provision_input(
    server_type: str,
    version: str,
    directory: Union[str, Path],
    build: Optional[Any] = None,
    plugins: Optional[List[str]] = None,
    plugin_urls: Optional[List[str]] = None,
) -> Dict[str, Any]:
    """
    Validate provisioning inputs and return cleaned values.

    Args:
        server_type: Free-text server type
        version: Version string, optionally suffixed with ``-<build>``
        directory: Server directory
        build: Optional build override
        plugins: Plugin identifiers
        plugin_urls: Direct plugin URLs

    Returns:
        Dict with all validated parameters

    Raises:
        ValidationError: If any validation fails
    """
    params: Dict[str, Any] = {
        'server_type': ProvisionValidator.validate_non_empty_string(server_type, "Server type"),
        'version': ProvisionValidator.validate_version(version),
        'directory': ProvisionValidator.validate_server_directory(directory),
        'build': ProvisionValidator.validate_build(build) if build is not None else None,
        'plugins': [
            ProvisionValidator.validate_non_empty_string(p, "Plugin") for p in (plugins or [])
        ],
        'plugin_urls': ProvisionValidator.validate_plugin_urls(list(plugin_urls or [])),
    }
    return params
