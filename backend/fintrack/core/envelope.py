"""`{success, data, error}` response envelope: decoding, unwrapping, building."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

import httpx

from fintrack.core.exceptions import (
    AuthExpired,
    EmptyResponse,
    InvalidResponse,
    RequestFailed,
)
from fintrack.schemas.common import ApiResponse

T = TypeVar("T")

DEFAULT_ERROR = "Request failed"


@dataclass(frozen=True)
class Ok(Generic[T]):
    data: T


@dataclass(frozen=True)
class Err:
    message: str


def is_api_response(value: Any) -> bool:
    return isinstance(value, Mapping) and isinstance(value.get("success"), bool)


def _error_message(body: Mapping) -> str:
    return body.get("error") or body.get("message") or DEFAULT_ERROR


def decode_envelope(payload: Any) -> Ok | Err:
    """Decode a wire envelope into ``Ok(data)`` or ``Err(message)``.

    ``data`` may be None inside ``Ok``; callers that need a value use
    :func:`parse_api_response`.
    """
    if not isinstance(payload, Mapping):
        raise InvalidResponse()
    if not payload.get("success"):
        return Err(_error_message(payload))
    return Ok(payload.get("data"))


def parse_api_response(response: httpx.Response | Mapping | Any) -> Any:
    """Unwrap an envelope (or an HTTP response carrying one) into its data.

    Raises RequestFailed for non-2xx responses and ``success: false``,
    AuthExpired for a 401, EmptyResponse when data is missing and
    InvalidResponse for anything that is not an envelope.
    """
    if isinstance(response, httpx.Response):
        if not response.is_success:
            message = DEFAULT_ERROR
            try:
                body = response.json()
            except ValueError:
                body = None
            if isinstance(body, Mapping):
                message = _error_message(body)
            if response.status_code == httpx.codes.UNAUTHORIZED:
                raise AuthExpired(message)
            raise RequestFailed(message, status_code=response.status_code)

        try:
            body = response.json()
        except ValueError:
            raise InvalidResponse() from None
        return parse_api_response(body)

    result = decode_envelope(response)
    if isinstance(result, Err):
        raise RequestFailed(result.message)
    if result.data is None:
        raise EmptyResponse()
    return result.data


def success_envelope(data: Any, message: str | None = None) -> dict:
    return ApiResponse(success=True, data=data, message=message).to_wire()


def error_envelope(error: str, path: str | None = None) -> dict:
    return ApiResponse(success=False, error=error, path=path).to_wire()
