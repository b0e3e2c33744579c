from .client import DocRaptorClient
from .exceptions import (
    DocRaptorError,
    NoApiKeyProvided,
    NoContentError,
    InvalidArgument,
    MalformedResponse,
    DocRaptorRequestError,
    DocumentCreationFailure,
    DocumentListingFailure,
    DocumentStatusFailure,
)
from .models import DocumentRequest, JobStatus, ListOptions, StatusRecord

__version__ = "0.1.0"

__all__ = [
    "DocRaptorClient",
    "DocumentRequest",
    "JobStatus",
    "ListOptions",
    "StatusRecord",
    "DocRaptorError",
    "NoApiKeyProvided",
    "NoContentError",
    "InvalidArgument",
    "MalformedResponse",
    "DocRaptorRequestError",
    "DocumentCreationFailure",
    "DocumentListingFailure",
    "DocumentStatusFailure",
]
