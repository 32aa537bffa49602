# infrastructure/definitions/directory_loader.py
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List

from domain.business_process import BusinessProcessDefinition
from domain.flows.application_form_flow import ApplicationFormFlow
from infrastructure.definitions.base_loader import DefinitionLoadError
from infrastructure.definitions.file_finder import DefinitionFileFinder
from infrastructure.definitions.loader_registry import DefinitionLoaderRegistry


@dataclass
class LoadedDefinitions:
    processes: Dict[str, BusinessProcessDefinition] = field(default_factory=dict)
    flows: Dict[str, ApplicationFormFlow] = field(default_factory=dict)
    sources: Dict[str, Path] = field(default_factory=dict)


def load_directory(base_dir: Path, registry: DefinitionLoaderRegistry) -> LoadedDefinitions:
    """
    Load every process and flow document under ``base_dir``. Two documents
    declaring the same name are rejected.
    """
    loaded = LoadedDefinitions()
    files: List[Path] = DefinitionFileFinder(base_dir).list_files()

    for path in files:
        definition = registry.get_loader(path).load_from_file(path)
        name = definition.name
        if name in loaded.sources:
            raise DefinitionLoadError(
                f"Definition {name} declared in both {loaded.sources[name]} and {path}"
            )
        loaded.sources[name] = path

        if isinstance(definition, ApplicationFormFlow):
            loaded.flows[name] = definition
        else:
            loaded.processes[name] = definition

    return loaded
