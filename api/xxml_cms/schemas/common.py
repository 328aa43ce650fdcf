"""Result envelope shared by every mutation endpoint."""

from typing import Generic, TypeVar

from pydantic import BaseModel, ValidationError

from xxml_cms.errors import ServiceError, ValidationFailed

T = TypeVar("T")


class ErrorInfo(BaseModel):
    """Structured error returned to callers."""

    code: str
    message: str
    field: str | None = None
    request_id: str | None = None


class ActionResult(BaseModel, Generic[T]):
    """
    Outcome of an operation.

    Exactly one of ``error`` and ``data`` is populated.
    """

    error: ErrorInfo | None = None
    data: T | None = None

    @classmethod
    def success(cls, data: T) -> "ActionResult[T]":
        return cls(error=None, data=data)

    @classmethod
    def failure(cls, exc: ServiceError, request_id: str | None = None) -> "ActionResult[T]":
        return cls(
            error=ErrorInfo(
                code=exc.code,
                message=exc.message,
                field=exc.field,
                request_id=request_id,
            ),
            data=None,
        )


def validation_failure(exc: ValidationError) -> ValidationFailed:
    """Convert the first pydantic error into a ValidationFailed."""
    first = exc.errors()[0]
    loc = first.get("loc") or ()
    field = str(loc[0]) if loc else None
    ctx = first.get("ctx") or {}
    if first.get("type") == "value_error" and "error" in ctx:
        reason = str(ctx["error"])
    else:
        reason = first.get("msg", "Invalid value")
    return ValidationFailed(field, reason)


M = TypeVar("M", bound=BaseModel)


def parse_input(model: type[M], **data) -> M:
    """Validate keyword input against a schema, raising ValidationFailed."""
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise validation_failure(exc) from exc
