"""
JSON encoding and decoding for API payloads.

Models are encoded with ``exclude_unset`` so that fields never assigned are
omitted from the body. The API treats an omitted field as "leave unchanged",
while an explicit ``None`` is sent as ``null``.
"""
import json
import logging
from functools import lru_cache
from typing import Any, Mapping, Optional

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from ztcentral.network.errors import (
    APIError,
    AuthError,
    ClientError,
    DecodeError,
    NotFoundError,
    ServerError,
)

logger = logging.getLogger(__name__)


def _to_jsonable(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True, exclude_unset=True)
    if isinstance(value, Mapping):
        return {key: _to_jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_jsonable(item) for item in value]
    return value


def encode(value: Any) -> bytes:
    """
    Serializes a value into a request body.

    Args:
        value: A pydantic model, mapping, list or JSON scalar; None for no body

    Returns:
        UTF-8 encoded JSON, or empty bytes for None
    """
    if value is None:
        return b""
    return json.dumps(_to_jsonable(value), separators=(",", ":")).encode("utf-8")


@lru_cache(maxsize=None)
def _adapter(target: Any) -> TypeAdapter:
    return TypeAdapter(target)


def decode(data: Optional[bytes], target: Any = None, status_code: Optional[int] = None) -> Any:
    """
    Deserializes a response body into ``target``.

    An empty body decodes to None, which is what delete-style calls return.

    Args:
        data: Raw response body
        target: Type to validate against (a model class, ``list[Model]``, ...);
            None discards the body
        status_code: Status of the response, recorded on DecodeError

    Returns:
        An instance of ``target`` or None

    Raises:
        DecodeError: If the body is not valid JSON or does not match ``target``
    """
    if target is None or not data or not data.strip():
        return None
    try:
        return _adapter(target).validate_json(data)
    except ValidationError as e:
        raise DecodeError(
            f"Could not decode response as {getattr(target, '__name__', target)}",
            status_code=status_code,
            detail=str(e),
        ) from e


def _error_message(response: httpx.Response) -> Optional[str]:
    try:
        payload = response.json()
    except ValueError:
        return None
    if isinstance(payload, dict):
        for key in ("message", "error", "detail"):
            value = payload.get(key)
            if value:
                return str(value)
    return None


def _retry_after(response: httpx.Response) -> Optional[float]:
    value = response.headers.get("retry-after")
    if value is None:
        return None
    try:
        return max(0.0, float(value))
    except ValueError:
        return None


def _request_url(response: httpx.Response) -> str:
    try:
        return str(response.request.url)
    except RuntimeError:
        return "<unknown>"


def error_from_response(response: httpx.Response) -> APIError:
    """
    Builds the error matching a non-2xx response.

    The message is taken from the JSON body when the API provided one,
    otherwise it is ``status N``.
    """
    status_code = response.status_code
    detail = _error_message(response)
    message = detail or f"status {status_code}"

    if status_code in (401, 403):
        logger.error(f"Authentication error ({status_code}): {message}")
        return AuthError(message, status_code, detail, response)
    if status_code == 404:
        logger.error(f"Resource not found: {_request_url(response)}")
        return NotFoundError(message, status_code, detail, response)
    if status_code == 429:
        logger.warning(f"Too many requests: {message}")
        return ClientError(message, status_code, detail, response)
    if 400 <= status_code < 500:
        logger.error(f"Client error ({status_code}): {message}")
        return ClientError(message, status_code, detail, response)
    if status_code >= 500:
        logger.error(f"Server error ({status_code}): {message}")
        return ServerError(message, status_code, detail, response, retry_after=_retry_after(response))
    # 1xx/3xx that made it through redirect handling
    return ClientError(message, status_code, detail, response)


def decode_response(response: httpx.Response, target: Any = None) -> Any:
    """Checks the status of ``response`` and decodes its body into ``target``."""
    if not response.is_success:
        raise error_from_response(response)
    return decode(response.content, target, status_code=response.status_code)
