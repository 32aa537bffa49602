# infrastructure/definitions/loader_registry.py
from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional

from infrastructure.definitions.base_loader import (
    DefinitionLoaderBase,
    DefinitionLoadError,
    TaskCreatorFactory,
)
from infrastructure.definitions.json_loader import JsonDefinitionLoader
from infrastructure.definitions.yaml_loader import YamlDefinitionLoader


class DefinitionLoaderRegistry:
    def __init__(self, task_creator_factory: Optional[TaskCreatorFactory] = None) -> None:
        yaml_loader = YamlDefinitionLoader(task_creator_factory)
        self._loaders: Dict[str, DefinitionLoaderBase] = {
            ".yaml": yaml_loader,
            ".yml": yaml_loader,
            ".json": JsonDefinitionLoader(task_creator_factory),
        }

    def get_loader(self, path: Path) -> DefinitionLoaderBase:
        ext = path.suffix.lower()
        loader = self._loaders.get(ext)
        if loader is None:
            raise DefinitionLoadError(f"Unsupported definition format: {ext}")
        return loader

    def supports(self, path: Path) -> bool:
        return path.suffix.lower() in self._loaders
