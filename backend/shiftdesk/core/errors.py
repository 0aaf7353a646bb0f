from __future__ import annotations

from pydantic import ValidationError


class ServiceError(Exception):
    """Domain error raised by services; rendered as {"detail": ...} by the app."""

    status_code = 500

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class InvalidInput(ServiceError):
    status_code = 400


class NotFound(ServiceError):
    status_code = 404


class Conflict(ServiceError):
    status_code = 409


def describe_errors(errors) -> str:
    parts = []
    for err in errors:
        loc = ".".join(str(x) for x in err.get("loc", ()) if x not in ("__root__", "body"))
        msg = err.get("msg", "invalid value")
        parts.append(f"{loc}: {msg}" if loc else msg)
    return "Invalid input: " + "; ".join(parts)


def invalid_input_from(exc: ValidationError) -> InvalidInput:
    return InvalidInput(describe_errors(exc.errors()))
