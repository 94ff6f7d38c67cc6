from dataclasses import dataclass
from enum import Enum
from typing import Any, Union


class FailureKind(str, Enum):
    CREDENTIAL_REJECTED = "credential_rejected"
    IDENTIFIER_GENERATION_FAILED = "identifier_generation_failed"
    DUPLICATE_TENANT_NAME = "duplicate_tenant_name"
    UNKNOWN_FAILURE = "unknown_failure"


@dataclass(frozen=True)
class Ok:
    value: Any


@dataclass(frozen=True)
class Err:
    kind: FailureKind
    message: str


Result = Union[Ok, Err]


class RowStoreError(Exception):
    """Raised by the row store for any database failure."""

    def __init__(self, message: str, is_unique_violation: bool = False):
        super().__init__(message)
        self.is_unique_violation = is_unique_violation


class SessionStoreNotReady(RuntimeError):
    """The session store was used before init() completed."""
