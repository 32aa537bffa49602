# infrastructure/config/settings.py
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import dotenv_values

PROJECT_ROOT = Path(__file__).parent.parent.parent
DEFAULT_ENV_PATH = PROJECT_ROOT / ".env"


@dataclass(frozen=True)
class Settings:
    definitions_dir: Path
    log_level: str = "INFO"
    route_prefix: str = ""

    @classmethod
    def from_env(cls, env_path: Optional[Path] = None, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Read settings from the process environment, falling back to the
        project's .env file for anything the environment does not set.
        """
        path = env_path or DEFAULT_ENV_PATH
        values = {k: v for k, v in dotenv_values(path).items() if v is not None} if path.exists() else {}
        values.update(os.environ if environ is None else environ)

        definitions_dir = values.get("CASEFLOW_DEFINITIONS_DIR") or str(PROJECT_ROOT / "definitions")
        return cls(
            definitions_dir=Path(definitions_dir),
            log_level=values.get("CASEFLOW_LOG_LEVEL", "INFO").upper(),
            route_prefix=values.get("CASEFLOW_ROUTE_PREFIX", ""),
        )
