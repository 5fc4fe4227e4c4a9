"""HTTP exception handlers.

将领域异常转换为纯文本 HTTP 响应（Aries 客户端只读取状态码与文本消息）。
各模块的异常类通过定义 http_status_code 类属性来自定义状态码。
"""

from fastapi import Request, status
from fastapi.responses import PlainTextResponse
from loguru import logger

from aries_jstor.core.domain.exceptions import DomainException


async def domain_exception_handler(
    _request: Request, exc: DomainException
) -> PlainTextResponse:
    """Handle domain exceptions."""
    status_code = getattr(exc, "http_status_code", 400)
    if status_code >= 500:
        logger.error(f"{exc.error_code}: {exc.message}")
    return PlainTextResponse(exc.message, status_code=status_code)


async def global_exception_handler(
    _request: Request, exc: Exception
) -> PlainTextResponse:
    """Handle all unhandled exceptions."""
    logger.exception(f"Unhandled exception: {exc}")
    return PlainTextResponse(
        "An internal error occurred",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
