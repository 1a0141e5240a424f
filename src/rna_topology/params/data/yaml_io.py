from __future__ import annotations
from pathlib import Path
from typing import Any, Dict

import yaml

from rna_topology.errors import InvalidInputError


def read_yaml(path: str | Path) -> Dict[str, Any]:
    """
    Read and parse a YAML file into a mapping.

    Raises
    ------
    InvalidInputError
        If the suffix is not `.yml`/`.yaml`, the file is missing, or the
        document is not a mapping.
    """
    path_obj = Path(path)
    if path_obj.suffix.lower() not in {".yml", ".yaml"}:
        raise InvalidInputError("Only YAML files are supported.")
    if not path_obj.is_file():
        raise InvalidInputError(f"Parameter file not found: {path_obj}")

    data = yaml.safe_load(path_obj.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise InvalidInputError(f"Top level of {path_obj.name} must be a mapping.")
    return data
