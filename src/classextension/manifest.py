"""
Loading extension metadata from manifest files (YAML/JSON/TOML).

A manifest is a mapping shaped like a package manifest::

    name: logging
    version: 1.2.0
    dependencies:
      timestamps: ^2.0.0

Only ``name``, ``version`` and ``dependencies`` are read. Other keys are ignored.
"""

from __future__ import annotations

import json
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

import yaml

MANIFEST_KEYS: Final = ("name", "version", "dependencies")


def parse_manifest(data: object, source: str = "manifest") -> Mapping[str, Any]:
    """
    Pick the extension metadata out of parsed manifest data.

    :param data: The parsed manifest.
    :param source: Label used in error messages.
    :return: Mapping with whichever of ``name``, ``version`` and ``dependencies`` are present.
    :raises ValueError: If ``data`` is not a mapping.
    """
    if not isinstance(data, Mapping):
        raise ValueError(
            f"{source} must contain a mapping at top level, got {type(data).__name__}"
        )
    return {key: data[key] for key in MANIFEST_KEYS if data.get(key) is not None}


def load_manifest(file_path: Path) -> Mapping[str, Any]:
    """
    Load a manifest file, choosing the parser from the file suffix.

    :param file_path: Path to a ``.yaml``, ``.yml``, ``.json`` or ``.toml`` file.
    :return: The extension metadata found in the file.
    :raises ValueError: If the suffix is not recognized or the content is malformed.
    """
    content = file_path.read_text(encoding="utf-8")

    suffix = file_path.suffix.lower()
    try:
        if suffix in (".yaml", ".yml"):
            data = yaml.safe_load(content)
        elif suffix == ".json":
            data = json.loads(content)
        elif suffix == ".toml":
            data = tomllib.loads(content)
        else:
            raise ValueError(
                f"Unrecognized manifest format: {file_path.name}. "
                f"Expected .yaml, .yml, .json, or .toml"
            )
    except (yaml.YAMLError, json.JSONDecodeError, tomllib.TOMLDecodeError) as e:
        raise ValueError(f"Could not parse manifest {file_path.name}: {e}") from e

    return parse_manifest(data, source=file_path.name)
