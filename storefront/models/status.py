# storefront/models/status.py
from enum import Enum
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict

class StatusKind(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    ERROR = "error"
    SUCCESS = "success"

class SubmissionStatus(BaseModel):
    """Status of the product submission for one user session"""
    model_config = ConfigDict(frozen=True)

    kind: StatusKind = StatusKind.IDLE
    message: Optional[str] = None

    @classmethod
    def idle(cls) -> "SubmissionStatus":
        return cls()

    @classmethod
    def loading(cls) -> "SubmissionStatus":
        return cls(kind=StatusKind.LOADING)

    @classmethod
    def error(cls, message: str) -> "SubmissionStatus":
        return cls(kind=StatusKind.ERROR, message=message)

    @classmethod
    def success(cls) -> "SubmissionStatus":
        return cls(kind=StatusKind.SUCCESS)

    @property
    def is_loading(self) -> bool:
        return self.kind == StatusKind.LOADING

class ResponseKind(str, Enum):
    PAYLOAD = "payload"
    EMPTY = "empty"
    FAILURE = "failure"

class ApiResponse(BaseModel):
    """Catalog response classified by outcome"""
    status: int
    kind: ResponseKind
    payload: Any = None
    error_body: Optional[str] = None

    @property
    def is_successful(self) -> bool:
        return self.kind != ResponseKind.FAILURE
