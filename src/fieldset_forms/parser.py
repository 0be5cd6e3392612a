import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from loguru import logger

from .models import Fieldset

SUPPORTED_SUFFIXES = (".json", ".yaml", ".yml")


class FieldsetLoadError(ValueError):
    pass


def read_document(path: Union[str, Path]) -> Dict[str, Any]:
    path = Path(path)
    if path.suffix not in SUPPORTED_SUFFIXES:
        raise FieldsetLoadError(f"Unsupported file type: {path}")

    with open(path, "r", encoding="utf-8") as f:
        if path.suffix == ".json":
            data = json.load(f)
        else:
            data = yaml.safe_load(f)

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise FieldsetLoadError(f"{path} must contain a mapping, got {type(data).__name__}")
    return data


def load_fieldset(path: Union[str, Path]) -> Fieldset:
    fieldset = Fieldset.model_validate(read_document(path))
    field_count = sum(len(s.fields) for s in fieldset.sections.values())
    logger.info(f"Loaded fieldset {Path(path).name}: {len(fieldset.sections)} sections, {field_count} fields")
    return fieldset


def find_values(values_dir: Union[str, Path], stem: str) -> Optional[Path]:
    for suffix in SUPPORTED_SUFFIXES:
        candidate = Path(values_dir) / f"{stem}{suffix}"
        if candidate.is_file():
            return candidate
    return None


def load_values(path: Optional[Union[str, Path]]) -> Dict[str, Any]:
    if path is None:
        return {}
    return read_document(path)


def list_fieldsets(fieldsets_dir: Union[str, Path]) -> List[Path]:
    root = Path(fieldsets_dir)
    if not root.is_dir():
        logger.warning(f"Fieldsets directory not found: {root}")
        return []
    return sorted(p for p in root.iterdir() if p.is_file() and p.suffix in SUPPORTED_SUFFIXES)
