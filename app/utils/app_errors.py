"""Application error type raised by domain and service code.

Routers never build error responses by hand: they let `AppError` propagate and
the handler in `app.api.errors` turns it into an `ApiFailure` envelope.
"""

import inspect
from enum import Enum, IntEnum
from uuid import uuid4


class AppErrorCode(str, Enum):
    E_INVALID_REQUEST = "E_INVALID_REQUEST"
    E_CONFIG_MISSING = "E_CONFIG_MISSING"
    E_EVENT_NOT_FOUND = "E_EVENT_NOT_FOUND"
    E_RESOURCE_NOT_FOUND = "E_RESOURCE_NOT_FOUND"
    E_CHANNEL_NOT_READY = "E_CHANNEL_NOT_READY"
    E_PROVIDER_ERROR = "E_PROVIDER_ERROR"
    E_INTERNAL_ERROR = "E_INTERNAL_ERROR"


class HttpStatusCode(IntEnum):
    OK = 200
    CREATED = 201
    BAD_REQUEST = 400
    NOT_FOUND = 404
    UNPROCESSABLE_ENTITY = 422
    INTERNAL_SERVER_ERROR = 500


class AppError(Exception):
    def __init__(
        self,
        errcode: AppErrorCode | str = AppErrorCode.E_INTERNAL_ERROR,
        errmesg: str = "We are sorry, an error occurred.",
        status_code: HttpStatusCode | int = HttpStatusCode.INTERNAL_SERVER_ERROR,
    ) -> None:
        super().__init__(errmesg)
        self.errcode = errcode.value if isinstance(errcode, AppErrorCode) else str(errcode)
        self.errmesg = errmesg
        self.status_code = int(status_code)
        self.erresid = uuid4().hex[:10]

        # Remember where the error was raised so the handler can log it
        frame = inspect.currentframe()
        caller = frame.f_back if frame else None
        if caller is not None:
            module = caller.f_globals.get("__name__", "?")
            self.caller_info = f"{module}:{caller.f_code.co_name}:{caller.f_lineno}"
        else:
            self.caller_info = "unknown"

    def __repr__(self) -> str:
        return f"AppError({self.errcode}, {self.errmesg!r}, {self.status_code})"
