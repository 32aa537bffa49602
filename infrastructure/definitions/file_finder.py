"""Find definition files by ID."""
from pathlib import Path
from typing import List, Optional

PRIORITY = [".json", ".yaml", ".yml"]


class DefinitionFileFinder:
    """Search definition files under the given base directory."""

    def __init__(self, base_dir: Path):
        self.base_dir = base_dir

    def find_by_id(self, definition_id: str) -> Optional[Path]:
        """
        Find a definition file by ID (the file name without extension).

        Returns the Path if found, otherwise None. When the same ID exists
        with several extensions, .json wins over the YAML variants.
        """
        candidates: list[Path] = []

        for ext in PRIORITY:
            filename = f"{definition_id}{ext}"
            for file_path in self.base_dir.rglob(filename):
                if file_path.is_file():
                    candidates.append(file_path)

        if not candidates:
            return None

        candidates.sort(key=lambda path: (PRIORITY.index(path.suffix), str(path)))
        return candidates[0]

    def list_files(self) -> List[Path]:
        if not self.base_dir.is_dir():
            return []
        files = [
            path for path in self.base_dir.rglob("*")
            if path.is_file() and path.suffix.lower() in PRIORITY
        ]
        return sorted(files, key=lambda path: str(path))
