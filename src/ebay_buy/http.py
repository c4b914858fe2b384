"""HTTP utilities for eBay API access: response checking and decoding."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

from pydantic import BaseModel, ValidationError
from requests import PreparedRequest, Response

from .exceptions import DecodingError, ErrorData, ErrorRecord

logger = logging.getLogger(__name__)


def is_success(response: Response) -> bool:
    return 200 <= response.status_code < 300


def error_from_response(
    response: Response, request: PreparedRequest | None = None
) -> ErrorData:
    """Build an `ErrorData` from a non-2xx response.

    Decoding is best effort: an empty, non-JSON or unexpected body still
    yields an `ErrorData`, with an empty error list.
    """

    return ErrorData(_error_records(response), response=response, request=request)


def _error_records(response: Response) -> list[ErrorRecord]:
    """Decode the ``errors`` array record by record.

    A record that does not fit is skipped; the others are kept in order.
    """

    try:
        payload = response.json()
    except ValueError as exc:
        logger.debug("Error body of %s response is not JSON: %s", response.status_code, exc)
        return []
    entries = payload.get("errors") if isinstance(payload, Mapping) else None
    if not isinstance(entries, list):
        return []
    records: list[ErrorRecord] = []
    for index, entry in enumerate(entries):
        try:
            records.append(ErrorRecord.model_validate(entry))
        except ValidationError as exc:
            logger.debug("Skipping error record %d: %s", index, exc)
    return records


def check_response(response: Response, request: PreparedRequest | None = None) -> None:
    """Raise `ErrorData` if the response signals a failure."""

    if is_success(response):
        return
    raise error_from_response(response, request)


def decode_json(response: Response, into: Callable[[Any], Any] | type) -> Any:
    """Decode a successful response body into ``into``.

    ``into`` is either a pydantic model class or any callable accepting the
    decoded JSON value.
    """

    try:
        payload = response.json()
    except ValueError as exc:
        raise DecodingError(
            f"{_describe(response)}: response did not contain valid JSON",
            status_code=response.status_code,
        ) from exc
    try:
        if isinstance(into, type) and issubclass(into, BaseModel):
            return into.model_validate(payload)
        return into(payload)
    except (ValidationError, TypeError, ValueError) as exc:
        raise DecodingError(
            f"{_describe(response)}: cannot decode response: {exc}",
            status_code=response.status_code,
        ) from exc


def _describe(response: Response) -> str:
    request = getattr(response, "request", None)
    method = getattr(request, "method", None) or "?"
    url = getattr(request, "url", None) or response.url or "?"
    return f"{method} {url}"
