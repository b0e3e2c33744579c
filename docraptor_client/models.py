from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class JobStatus(str, Enum):
    QUEUED = "queued"
    WORKING = "working"
    COMPLETED = "completed"
    FAILED = "failed"


class DocumentRequest(BaseModel):
    """
    Typed form of the options accepted by DocRaptorClient.create.

    Unset fields are dropped before sending, so the client defaults apply.
    Unknown keys are passed through to the service untouched.
    """
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    name: Optional[str] = None
    document_type: Optional[str] = None
    document_content: Optional[str] = None
    document_url: Optional[str] = None
    test: Optional[bool] = None
    async_: Optional[bool] = Field(default=None, alias="async")
    javascript: Optional[bool] = None
    strict: Optional[str] = None
    tag: Optional[str] = None
    help: Optional[bool] = None
    prince_options: Optional[Dict[str, Any]] = None


class ListOptions(BaseModel):
    model_config = ConfigDict(extra="allow")

    page: Optional[int] = None
    per_page: Optional[int] = None


class StatusRecord(BaseModel):
    """Parsed body of a status check. download_key is filled in once the job completes."""
    model_config = ConfigDict(extra="allow")

    status: Optional[str] = None
    download_url: Optional[str] = None
    download_key: Optional[str] = None
    number_of_pages: Optional[int] = None
    message: Optional[str] = None
    validation_errors: Optional[Any] = None

    @property
    def is_completed(self) -> bool:
        return self.status == JobStatus.COMPLETED.value
