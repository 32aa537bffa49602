# domain/exceptions.py
from __future__ import annotations


class DomainError(Exception):
    pass


class ValidationError(DomainError):
    pass


class ConfigurationError(DomainError):
    """
    Raised for programmer errors detected while defining a process or a flow.
    """
