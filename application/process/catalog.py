# application/process/catalog.py
from __future__ import annotations

from threading import Lock
from typing import Dict, List, Optional

from application.exceptions import ProcessNotFoundError
from application.process.business_process import BusinessProcess
from domain.exceptions import ConfigurationError


class ProcessCatalog:
    """Owns the business processes of an application, keyed by name."""

    def __init__(self) -> None:
        self._processes: Dict[str, BusinessProcess] = {}
        self._lock = Lock()

    def register(self, process: BusinessProcess, replace: bool = False) -> BusinessProcess:
        with self._lock:
            previous = self._processes.get(process.name)
            if previous is not None and previous is not process:
                if not replace:
                    raise ConfigurationError(f"Business process already defined: {process.name}")
                previous.stop_listening_for_events()
            self._processes[process.name] = process
            return process

    def get(self, name: str) -> BusinessProcess:
        with self._lock:
            process = self._processes.get(name)
        if process is None:
            raise ProcessNotFoundError(f"Business process not found: {name}")
        return process

    def for_case_type(self, case_type: str) -> Optional[BusinessProcess]:
        with self._lock:
            for process in self._processes.values():
                if process.definition.case_type == case_type:
                    return process
        return None

    def names(self) -> List[str]:
        with self._lock:
            return list(self._processes)

    def stop_all(self) -> None:
        with self._lock:
            processes = list(self._processes.values())
        for process in processes:
            process.stop_listening_for_events()
