"""Mapping of service results to HTTP responses.

Successful results become ``{"data": ...}``; failures become
``{"error": {"code", "message", "details"}}`` with the status code of the
error. Route handlers never raise for service failures.
"""

from typing import Any

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from hospeda.domain.entities.pagination import PaginatedResult
from hospeda.domain.entities.service_result import CountResult, ServiceErrorCode, ServiceResult
from hospeda.infrastructure.persistence.database import Base

STATUS_BY_ERROR_CODE: dict[ServiceErrorCode, int] = {
    ServiceErrorCode.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    ServiceErrorCode.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    ServiceErrorCode.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ServiceErrorCode.NOT_AUTHORIZED: status.HTTP_403_FORBIDDEN,
    ServiceErrorCode.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ServiceErrorCode.ALREADY_EXISTS: status.HTTP_409_CONFLICT,
    ServiceErrorCode.INTERNAL_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ServiceErrorCode.NOT_IMPLEMENTED: status.HTTP_501_NOT_IMPLEMENTED,
}


def serialize(data: Any, schema: type[BaseModel] | None = None) -> Any:
    """Convert service output to JSON-compatible data.

    ORM records are rendered through ``schema``; pages, counts, lists and
    plain values are converted recursively.
    """
    if isinstance(data, PaginatedResult):
        return {
            "items": [serialize(item, schema) for item in data.items],
            "total": data.total,
            "page": data.page,
            "page_size": data.page_size,
            "total_pages": data.total_pages,
            "has_next_page": data.has_next_page,
            "has_previous_page": data.has_previous_page,
        }
    if isinstance(data, CountResult):
        return {"count": data.count}
    if isinstance(data, list):
        return [serialize(item, schema) for item in data]
    if isinstance(data, Base):
        if schema is None:
            raise TypeError(f"No response schema for {type(data).__name__}")
        return schema.model_validate(data).model_dump(mode="json")
    return jsonable_encoder(data)


def service_result_response(
    result: ServiceResult[Any],
    success_status: int = status.HTTP_200_OK,
    schema: type[BaseModel] | None = None,
) -> JSONResponse:
    """Build the HTTP response for a service result.

    Args:
        result: The service result.
        success_status: Status code used when the result is successful.
        schema: Response schema for ORM records in the result.

    Returns:
        JSONResponse with ``data`` or ``error``.
    """
    if result.error is not None:
        return JSONResponse(
            status_code=STATUS_BY_ERROR_CODE.get(result.error.code, 500),
            content={"error": jsonable_encoder(result.error.to_dict())},
        )
    return JSONResponse(status_code=success_status, content={"data": serialize(result.data, schema)})


async def respond(
    session: AsyncSession,
    result: ServiceResult[Any],
    success_status: int = status.HTTP_200_OK,
    schema: type[BaseModel] | None = None,
) -> JSONResponse:
    """Build the response, discarding the request's pending writes on failure."""
    if result.error is not None:
        await session.rollback()
    return service_result_response(result, success_status, schema)
