from typing import Any, Generic, TypeVar

from app.shared.api.utils import ApiFailure, ApiSuccess

T = TypeVar("T")


class ApiOut(ApiSuccess, Generic[T]):
    """Success envelope returned by the JSON routers: `{success, results, version}`."""

    results: T  # type: ignore[valid-type]


def error_responses(*status_codes: int) -> dict[int | str, dict[str, Any]]:
    """OpenAPI `responses` entries documenting the ApiFailure envelope."""
    descriptions = {
        400: "Invalid request",
        404: "Event or AWS resource not found",
        422: "Malformed request body",
        500: "AWS or configuration failure",
    }
    return {code: {"model": ApiFailure, "description": descriptions.get(code, "Error")} for code in status_codes}
