from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    SERVICE = "service"
    CONNECTIVITY = "connectivity"
    REQUEST = "request"


class KnowledgeGraphError(Exception):
    kind: ErrorKind

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(KnowledgeGraphError):
    """Input rejected before anything was sent."""

    kind = ErrorKind.VALIDATION


class ExtractionError(KnowledgeGraphError):
    """A single extraction attempt failed. Never retried."""


class ServiceError(ExtractionError):
    """The extraction service answered, but with an error."""

    kind = ErrorKind.SERVICE

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ConnectivityError(ExtractionError):
    """The request went out but no response came back."""

    kind = ErrorKind.CONNECTIVITY


class RequestConstructionError(ExtractionError):
    """The request could not be built or sent."""

    kind = ErrorKind.REQUEST
