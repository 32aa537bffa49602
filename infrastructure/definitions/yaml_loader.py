# infrastructure/definitions/yaml_loader.py
from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from infrastructure.definitions.base_loader import DefinitionLoaderBase, DefinitionLoadError


class YamlDefinitionLoader(DefinitionLoaderBase):
    """YAMLファイルからプロセス/フロー定義をロード"""

    def _load_file(self, path: Path) -> Any:
        try:
            with path.open("r", encoding="utf-8") as f:
                return yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise DefinitionLoadError(f"Invalid YAML in {path}: {exc}") from exc
