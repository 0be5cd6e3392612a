import json
from pathlib import Path
from typing import Dict, Optional, Union

import yaml
from loguru import logger


class Catalog:
    """Translation lookup, unknown keys translate to themselves."""

    def __init__(self, messages: Optional[Dict[str, str]] = None):
        self.messages: Dict[str, str] = dict(messages or {})

    def __call__(self, key: str) -> str:
        return self.messages.get(key, key)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "Catalog":
        path = Path(path)
        with open(path, "r", encoding="utf-8") as f:
            if path.suffix == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Language file {path} must contain a mapping")
        logger.info(f"Loaded {len(data)} translations from {path}")
        return cls({str(k): str(v) for k, v in data.items()})
