import json
import logging
import re
import tempfile
from contextlib import contextmanager
from typing import IO, Any, Callable, Dict, Iterator, List, Mapping, Optional, Sized, Tuple, Type, Union

import requests
from pydantic import BaseModel, ValidationError

from . import config
from .exceptions import (
    DocRaptorRequestError,
    DocumentCreationFailure,
    DocumentListingFailure,
    DocumentStatusFailure,
    InvalidArgument,
    MalformedResponse,
    NoContentError,
)
from .models import StatusRecord

logger = logging.getLogger(__name__)

CREATE_DEFAULTS = {
    "name": "default",
    "document_type": "pdf",
    "test": False,
    "async": False,
}

LIST_DEFAULTS = {
    "page": 1,
    "per_page": 100,
}

DOWNLOAD_KEY_PATTERN = re.compile(r".*?/download/(.+)")

Handler = Callable[[IO[bytes], requests.Response], Any]
Options = Union[Mapping[str, Any], BaseModel, None]


class DocRaptorClient:
    """
    Python client for the DocRaptor document generation API.

    The id of the last asynchronous job and the download key of the last
    completed status check are kept on the instance, so a create -> status
    -> download workflow can be driven without passing them around. Use one
    client per workflow when several jobs run side by side.
    """

    def __init__(self, api_key: Optional[str] = None, base_url: Optional[str] = None, timeout: Optional[float] = None):
        """
        Initializes the API client.

        :param api_key: Your API key. Falls back to the process-wide key, then DOCRAPTOR_API_KEY.
            A key given here stays local to this instance and is not cached process-wide.
        :param base_url: The service URL. Defaults to DOCRAPTOR_URL or "https://docraptor.com/".
        :param timeout: Passed to every request unchanged; None keeps the transport default.
        """
        self.root_url = (base_url or config.base_url()).rstrip('/')
        self.timeout = timeout
        self.headers = {
            "User-Agent": "docraptor-client-python",
        }
        self.status_id: Optional[str] = None
        self.download_key: Optional[str] = None
        self._api_key = api_key

    def api_key(self, key: Optional[str] = None) -> str:
        if key:
            self._api_key = key
            return config.api_key(key)
        if self._api_key:
            return self._api_key
        return config.api_key()

    def _request(self, method: str, path: str, authenticate: bool = True, **kwargs) -> requests.Response:
        url = f"{self.root_url}{path}"
        if authenticate:
            kwargs["auth"] = (self.api_key(), "")

        logger.debug("%s %s", method, path)
        response = requests.request(method, url, headers=self.headers.copy(), timeout=self.timeout, **kwargs)
        logger.debug("%s %s -> %s", method, path, response.status_code)
        return response

    def _check(self, response: requests.Response, failure: Type[DocRaptorRequestError], raise_on_failure: bool) -> None:
        if response.ok:
            return
        logger.warning("DocRaptor returned HTTP %s for %s", response.status_code, response.url)
        if raise_on_failure:
            raise failure(response.text, response.status_code)

    # --- Documents ---
    def create(self, options: Options = None, handler: Optional[Handler] = None, raise_on_failure: bool = False) -> Any:
        """
        Submit a document for generation.

        With a handler, the response body is written to a temporary file which is
        passed to ``handler(file, response)``; the handler's return value is returned
        and the file is removed afterwards. Without one, an async request returns the
        job's status id (also kept as ``self.status_id``) and a synchronous request
        returns the raw response.
        """
        options = _as_options(options)
        if _is_blank(options.get("document_content")) and _is_blank(options.get("document_url")):
            raise NoContentError("must supply document_content or document_url")

        doc = dict(CREATE_DEFAULTS)
        doc.update(options)

        params = {"output": "json"} if doc.get("async") else {}
        response = self._request("POST", "/docs", data=_form_fields("doc", doc), params=params)
        self._check(response, DocumentCreationFailure, raise_on_failure)

        if handler is not None:
            return _handle(response, handler)
        if doc.get("async") and response.ok:
            self.status_id = _status_id(response)
            return self.status_id
        return response

    def create_strict(self, options: Options = None, handler: Optional[Handler] = None) -> Any:
        return self.create(options, handler=handler, raise_on_failure=True)

    def list_docs(self, options: Options = None, raise_on_failure: bool = False) -> requests.Response:
        params = dict(LIST_DEFAULTS)
        params.update(_as_options(options))

        response = self._request("GET", "/docs", params=params)
        self._check(response, DocumentListingFailure, raise_on_failure)
        return response

    def list_docs_strict(self, options: Options = None) -> requests.Response:
        return self.list_docs(options, raise_on_failure=True)

    # --- Jobs ---
    def status(self, status_id: Optional[str] = None, raise_on_failure: bool = False) -> StatusRecord:
        """
        Check an asynchronous job, defaulting to the one started by the last async create.

        Once the job is completed the download key is taken from ``download_url``,
        set on the returned record and kept as ``self.download_key``.
        """
        status_id = _resolve_id(status_id, self.status_id, "status id")
        response = self._request("GET", f"/status/{status_id}", params={"output": "json"})
        self._check(response, DocumentStatusFailure, raise_on_failure)

        record = _parse_status(response)
        if record.is_completed:
            self.download_key = _download_key(record.download_url)
            record.download_key = self.download_key
        return record

    def status_strict(self, status_id: Optional[str] = None) -> StatusRecord:
        return self.status(status_id, raise_on_failure=True)

    def download(self, download_key: Optional[str] = None, handler: Optional[Handler] = None) -> Any:
        """
        Fetch a finished document. Only valid after a status check reported it completed.

        Download URLs are not authenticated, so no credentials are sent.
        """
        download_key = _resolve_id(download_key, self.download_key, "download key")
        response = self._request("GET", f"/download/{download_key}", authenticate=False)
        if handler is not None:
            return _handle(response, handler)
        return response


def _as_options(options: Options) -> Dict[str, Any]:
    if options is None:
        return {}
    if isinstance(options, BaseModel):
        return options.model_dump(exclude_none=True, by_alias=True)
    if isinstance(options, Mapping):
        return {str(k): v for k, v in options.items()}
    raise InvalidArgument("please pass in an options mapping")


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, (str, bytes)):
        return not value.strip()
    if isinstance(value, Sized):
        return not value
    return False


def _resolve_id(value: Optional[str], cached: Optional[str], what: str) -> str:
    if value is None:
        value = cached
    if value is None:
        raise InvalidArgument(f"no {what} given and none cached from a previous call")
    if not isinstance(value, str) or not value.strip():
        raise InvalidArgument(f"{what} must be a non-empty string, got {value!r}")
    return value


def _form_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return ""
    return str(value)


def _form_fields(prefix: str, value: Any) -> List[Tuple[str, str]]:
    """Flatten a nested mapping into Rails-style form fields, e.g. doc[prince_options][media]."""
    if isinstance(value, Mapping):
        fields = []
        for key, item in value.items():
            fields.extend(_form_fields(f"{prefix}[{key}]", item))
        return fields
    if isinstance(value, (list, tuple)):
        fields = []
        for item in value:
            fields.extend(_form_fields(f"{prefix}[]", item))
        return fields
    return [(prefix, _form_value(value))]


def _status_id(response: requests.Response) -> str:
    try:
        payload = response.json()
    except ValueError as e:
        raise MalformedResponse(f"Failed to decode JSON from async create: {response.text[:100]}") from e
    status_id = payload.get("status_id") if isinstance(payload, dict) else None
    if not status_id:
        raise MalformedResponse(f"Async create response has no status_id: {payload}")
    return str(status_id)


def _parse_status(response: requests.Response) -> StatusRecord:
    try:
        payload = response.json()
    except ValueError:
        return StatusRecord(message=response.text)
    if not isinstance(payload, dict):
        return StatusRecord(message=json.dumps(payload))
    try:
        return StatusRecord(**payload)
    except ValidationError as e:
        if response.ok:
            raise MalformedResponse(f"Unexpected status payload: {payload}") from e
        # error bodies are returned as sent
        return StatusRecord.model_construct(**payload)


def _download_key(download_url: Optional[str]) -> str:
    match = DOWNLOAD_KEY_PATTERN.match(download_url or "")
    if match is None:
        raise MalformedResponse(f"Completed status has unexpected download_url: {download_url!r}")
    return match.group(1)


@contextmanager
def _buffered(content: bytes) -> Iterator[IO[bytes]]:
    with tempfile.NamedTemporaryFile(mode="w+b", prefix="docraptor") as f:
        f.write(content)
        f.flush()
        f.seek(0)
        yield f


def _handle(response: requests.Response, handler: Handler) -> Any:
    with _buffered(response.content) as f:
        return handler(f, response)


__all__ = ["DocRaptorClient"]
