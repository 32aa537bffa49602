# application/exceptions.py
from __future__ import annotations


class ApplicationError(Exception):
    pass


class ProcessNotFoundError(ApplicationError):
    pass


class FlowNotFoundError(ApplicationError):
    pass


class IdempotencyError(ApplicationError):
    pass
