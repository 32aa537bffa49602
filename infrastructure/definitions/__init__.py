# infrastructure/definitions/__init__.py
from infrastructure.definitions.base_loader import DefinitionLoadError, DefinitionLoaderBase, resolve_callable
from infrastructure.definitions.directory_loader import LoadedDefinitions, load_directory
from infrastructure.definitions.file_finder import DefinitionFileFinder
from infrastructure.definitions.json_loader import JsonDefinitionLoader
from infrastructure.definitions.loader_registry import DefinitionLoaderRegistry
from infrastructure.definitions.yaml_loader import YamlDefinitionLoader

__all__ = [
    "DefinitionLoadError",
    "DefinitionLoaderBase",
    "DefinitionFileFinder",
    "LoadedDefinitions",
    "load_directory",
    "DefinitionLoaderRegistry",
    "JsonDefinitionLoader",
    "YamlDefinitionLoader",
    "resolve_callable",
]
