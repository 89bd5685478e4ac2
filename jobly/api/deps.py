"""Dependency helpers shared by the route modules."""

from typing import Annotated, Type, TypeVar

from fastapi import Path, Request
from pydantic import BaseModel, ValidationError

from jobly.core.errors import BadRequestError, format_validation_errors
from jobly.schemas.schemas import INT_MAX

SearchModel = TypeVar("SearchModel", bound=BaseModel)

JobId = Annotated[int, Path(ge=-INT_MAX - 1, le=INT_MAX)]


def validate_query(request: Request, schema: Type[SearchModel]) -> SearchModel:
    """
    Validate the whole query string against a schema.

    Unknown parameters are rejected (schemas forbid extras) and every
    violation is reported at once.
    """
    try:
        return schema.model_validate(dict(request.query_params))
    except ValidationError as e:
        raise BadRequestError(format_validation_errors(e.errors()))
