from typing import Optional, Union


class DocRaptorError(Exception):
    """Base class for every error raised by the DocRaptor client."""

    def __init__(self, message: str = ""):
        self.message = message
        super().__init__(message)


class NoApiKeyProvided(DocRaptorError):
    """No API key could be resolved from an argument, the cache or the environment."""


class NoContentError(DocRaptorError, ValueError):
    """A create request carried neither document_content nor document_url."""


class InvalidArgument(DocRaptorError, ValueError):
    """An operation was called with options that are not a mapping, or with an invalid id or key."""


class MalformedResponse(DocRaptorError):
    """The service answered successfully but not in the expected shape."""


class DocRaptorRequestError(DocRaptorError):
    """
    The service reported a non-success HTTP status.

    :param body: The raw response body, kept verbatim for logging or display.
    :param status_code: The HTTP status code of the response.
    """

    def __init__(self, body: Union[str, bytes, None], status_code: Optional[int]):
        if isinstance(body, bytes):
            body = body.decode("utf-8", errors="replace")
        self.body = body
        self.status_code = status_code
        super().__init__(body or "")

    def __str__(self) -> str:
        return f"{type(self).__name__}\nHTTP Status: {self.status_code}\nReturned: {self.body}"

    def __repr__(self) -> str:
        return str(self)


class DocumentCreationFailure(DocRaptorRequestError):
    pass


class DocumentListingFailure(DocRaptorRequestError):
    pass


class DocumentStatusFailure(DocRaptorRequestError):
    pass
