"""Result envelope wrapped around every JSON response body."""

from typing import Any

from fastapi import status
from loguru import logger
from pydantic import BaseModel, Field
from pydantic_core import PydanticSerializationError
from starlette.responses import PlainTextResponse, Response


class Result(BaseModel):
    """Uniform response wrapper: ``{code, data, message}``.

    ``data`` holds a single product, a list of products, or ``None``.
    """

    code: int = Field(description="HTTP status code of the response")
    data: Any = Field(default=None, description="Response payload")
    message: str = Field(default="", description="Human-readable outcome")


def write_result(
    data: Any,
    message: str,
    status_code: int = status.HTTP_200_OK,
) -> Response:
    """Serialize a result envelope into a JSON response.

    A payload that cannot be serialized yields a 500 with the error text as a
    plain-text body instead of an envelope.
    """
    result = Result(code=status_code, data=data, message=message)
    try:
        body = result.model_dump_json()
    except PydanticSerializationError as exc:
        logger.exception("Failed to serialize response envelope")
        return PlainTextResponse(
            str(exc), status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    return Response(
        content=body, status_code=status_code, media_type="application/json"
    )


def write_error(status_code: int, message: str) -> Response:
    """Envelope for a failed request, carrying no data."""
    return write_result(None, message, status_code=status_code)
