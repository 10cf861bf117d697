"""
Dupe Configuration

Settings shared by the registry, the mock network and the mock server.
"""

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Dict, Any, Optional

import yaml

from .errors import InvalidArgumentError

SUPPORTED_FORMATS = ('xml', 'json')


@dataclass
class DupeConfig:
    """Configuration for registry and mock behavior."""

    # Response encoding (xml, json); also the suffix of default mock URLs
    format: str = "xml"

    # Install find-all / find-one GET mocks for every registered model
    default_mocks: bool = True

    # Print the request log before each reset
    debug: bool = False

    # Level for the "dupe" logger hierarchy; None leaves logging configuration alone
    log_level: Optional[str] = None

    # Mock server admin routes
    admin_prefix: str = "/__dupe__"

    def __post_init__(self):
        if self.format not in SUPPORTED_FORMATS:
            raise InvalidArgumentError(
                f"Unsupported format '{self.format}'. Expected one of: {', '.join(SUPPORTED_FORMATS)}"
            )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'DupeConfig':
        """Create config from a dictionary, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise InvalidArgumentError(f"Unknown configuration keys: {sorted(unknown)}")
        return cls(**data)

    @classmethod
    def from_yaml(cls, yaml_path: str) -> 'DupeConfig':
        """Load config from a YAML file."""
        with open(Path(yaml_path), 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise InvalidArgumentError(f"Expected a mapping in {yaml_path}, found {type(data).__name__}")

        return cls.from_dict(data)

    @classmethod
    def from_env(cls, env: Optional[Dict[str, str]] = None) -> 'DupeConfig':
        """
        Build config from DUPE_* environment variables.

        Args:
            env: Environment mapping (defaults to os.environ)

        Returns:
            DupeConfig with environment overrides applied
        """
        env = os.environ if env is None else env
        overrides: Dict[str, Any] = {}

        if env.get('DUPE_FORMAT'):
            overrides['format'] = env['DUPE_FORMAT'].lower()
        if env.get('DUPE_DEBUG'):
            overrides['debug'] = env['DUPE_DEBUG'].lower() in ('1', 'true', 'yes', 'on')
        if env.get('DUPE_LOG_LEVEL'):
            overrides['log_level'] = env['DUPE_LOG_LEVEL'].lower()

        return cls(**overrides)
