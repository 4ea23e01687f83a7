from botocore.exceptions import ClientError
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger

from app.services.integrations.aws_session import client_error_message, is_not_found
from app.shared.api.utils import E_INVALID_PARAMS, ApiFailure, api_failure, make_response
from app.utils.app_errors import AppError, AppErrorCode, HttpStatusCode


def describe_error(exc: BaseException) -> str:
    """Human-readable message for redirects and JSON error bodies."""
    if isinstance(exc, AppError):
        return exc.errmesg
    if isinstance(exc, ClientError):
        return client_error_message(exc)
    return str(exc) or type(exc).__name__


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """
    Custom exception handler for AppError.
    Converts AppError to ApiFailure and returns via make_response.
    """
    log_msg = f"{exc.errcode} {exc.erresid} msg={exc.errmesg} caller={exc.caller_info}"
    if exc.status_code >= 500:
        logger.error(log_msg)
    else:
        logger.warning(log_msg)

    failure = ApiFailure(errcode=exc.errcode, errmesg=exc.errmesg, erresid=exc.erresid)
    return make_response(failure, status_code=exc.status_code)


async def client_error_handler(request: Request, exc: ClientError) -> JSONResponse:
    """
    Custom exception handler for botocore ClientError (AWS API errors).
    Missing resources map to 404, everything else is a provider failure.
    """
    error = exc.response.get("Error", {})
    status = exc.response.get("ResponseMetadata", {}).get("HTTPStatusCode")

    if is_not_found(exc):
        errcode, status_code = AppErrorCode.E_RESOURCE_NOT_FOUND, HttpStatusCode.NOT_FOUND
    else:
        errcode, status_code = AppErrorCode.E_PROVIDER_ERROR, HttpStatusCode.INTERNAL_SERVER_ERROR

    log_msg = f"ClientError: code={error.get('Code')} status={status} msg={error.get('Message')}"
    if status_code >= 500:
        logger.error(log_msg)
    else:
        logger.warning(log_msg)

    failure = ApiFailure(errcode=errcode.value, errmesg=client_error_message(exc))
    return make_response(failure, status_code=int(status_code))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()

    logger.warning(
        "Validation error: path={} method={} errors={}",
        request.url.path,
        request.method,
        errors,
    )

    failure = api_failure(E_INVALID_PARAMS, errmesg=str(errors))
    return make_response(failure, status_code=HttpStatusCode.UNPROCESSABLE_ENTITY)
