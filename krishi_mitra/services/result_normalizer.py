import json
import logging
from typing import Any, Optional, Union

from pydantic import TypeAdapter, ValidationError

from krishi_mitra.models.result import (
    INVALID_RESPONSE_MESSAGE,
    ServiceError,
    Success,
)

logger = logging.getLogger(__name__)


def _reported_error(data: Any) -> Optional[str]:
    if isinstance(data, dict) and data.get("error"):
        error = data["error"]
        if isinstance(error, dict):
            return str(error.get("message") or error)
        return str(error)
    return None


def normalize_text(
    raw_text: Optional[str], failure_message: str
) -> Union[Success, ServiceError]:
    if not raw_text:
        return ServiceError(message=failure_message)
    return Success(payload=raw_text)


def normalize_structured(
    raw_text: Optional[str], adapter: TypeAdapter
) -> Union[Success, ServiceError]:
    """
    Parses and validates a schema-constrained response.

    An object carrying an "error" key is the backend reporting its own
    failure; its message is passed through as-is.
    """
    if not raw_text:
        return ServiceError(message=INVALID_RESPONSE_MESSAGE)

    try:
        data = json.loads(raw_text)
    except (ValueError, TypeError, RecursionError):
        logger.warning("AI response is not valid JSON: %.200s", raw_text)
        return ServiceError(message=INVALID_RESPONSE_MESSAGE)

    reported = _reported_error(data)
    if reported is not None:
        return ServiceError(message=reported)

    try:
        return Success(payload=adapter.validate_python(data))
    except ValidationError as e:
        logger.warning("AI response does not match the schema: %s", e)
        return ServiceError(message=INVALID_RESPONSE_MESSAGE)
