import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """파일/DB 저장소 읽기·쓰기 실패"""


class ApiError(Exception):
    """
    라우터에서 던지는 사용자용 에러.
    응답은 항상 {"ok": false, "error": message} 형태.
    """

    def __init__(self, message: str, status_code: int = status.HTTP_200_OK):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def error_response(message: str, status_code: int = status.HTTP_200_OK, **extra) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"ok": False, "error": message, **extra},
    )


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ApiError)
    async def handle_api_error(request: Request, exc: ApiError):
        return error_response(exc.message, exc.status_code)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        return error_response(str(exc.detail), exc.status_code)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return error_response("서버 오류가 발생했습니다.", status.HTTP_500_INTERNAL_SERVER_ERROR)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        logger.info("Rejected request body for %s %s", request.method, request.url.path)
        return error_response(
            "입력값이 올바르지 않습니다.",
            status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=jsonable_errors(exc),
        )


def jsonable_errors(exc: RequestValidationError) -> list[dict]:
    # ctx 안에 예외 객체가 들어있을 수 있어 JSON 직렬화 가능한 항목만 남김
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")}
        for err in exc.errors()
    ]
