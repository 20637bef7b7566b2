"""
Generator configuration.

Defaults reproduce the stock Gradle/JUnit layout. A YAML file may override
any key:

    dependency_marker: testImplementation
    source_roots:
      - src/main/kotlin
      - src/main/java

The file is picked from --config, then the UTGEN_CONFIG environment variable.
Build file names are fixed (build.gradle, build.gradle.kts) and not configurable.
"""

import os
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

import yaml

from utgen_errors import ConfigResolutionError

CONFIG_ENV = "UTGEN_CONFIG"


@dataclass
class GeneratorConfig:
    """Names and markers the pipeline stages look for."""
    dependency_marker: str = "testImplementation"
    source_roots: List[str] = field(default_factory=lambda: ["src/main/kotlin", "src/main/java"])

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


_LIST_KEYS = ("source_roots",)
_STR_KEYS = ("dependency_marker",)


def _validate(data: Dict[str, Any], source: str) -> Dict[str, Any]:
    unknown = sorted(set(data) - set(_LIST_KEYS) - set(_STR_KEYS))
    if unknown:
        raise ConfigResolutionError(f"Unknown config keys in {source}: {', '.join(unknown)}")

    for key in _LIST_KEYS:
        if key not in data:
            continue
        value = data[key]
        if not isinstance(value, list) or not value or not all(
            isinstance(item, str) and item for item in value
        ):
            raise ConfigResolutionError(f"{key} in {source} must be a non-empty list of strings")

    for key in _STR_KEYS:
        if key in data and (not isinstance(data[key], str) or not data[key]):
            raise ConfigResolutionError(f"{key} in {source} must be a non-empty string")

    return data


def load_config(path: Optional[str] = None) -> GeneratorConfig:
    """Build the configuration from defaults plus an optional YAML file."""
    path = path or os.environ.get(CONFIG_ENV)
    if not path:
        return GeneratorConfig()

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigResolutionError(f"Cannot read config file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigResolutionError(f"Invalid YAML in config file {path}: {e}") from e

    if data is None:
        return GeneratorConfig()
    if not isinstance(data, dict):
        raise ConfigResolutionError(f"Config file {path} must contain a mapping")

    return GeneratorConfig(**_validate(data, path))
