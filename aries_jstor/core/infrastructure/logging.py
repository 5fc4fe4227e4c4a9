"""Logging configuration with structlog integration.

提供两种日志记录方式：
1. loguru: 用于一般调试日志
2. structlog: 用于关键业务事件的结构化日志
"""

import sys
from typing import Any

import structlog
from loguru import logger

from aries_jstor.core.config import settings


def setup_logging() -> None:
    """Configure application logging with structlog and loguru."""
    _configure_structlog()
    _configure_loguru()

    logger.info(f"Logging configured with level: {settings.LOG_LEVEL}")


def _configure_structlog() -> None:
    """配置 structlog 处理器链。"""
    if settings.ENVIRONMENT == "local":
        renderer = structlog.dev.ConsoleRenderer(colors=True)
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.CallsiteParameterAdder(
                [
                    structlog.processors.CallsiteParameter.MODULE,
                    structlog.processors.CallsiteParameter.FUNC_NAME,
                    structlog.processors.CallsiteParameter.LINENO,
                ]
            ),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            _get_log_level_number(settings.LOG_LEVEL)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def _configure_loguru() -> None:
    """配置 loguru。"""
    logger.remove()

    logger.add(
        sys.stderr,
        level=settings.LOG_LEVEL,
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
            "<level>{message}</level>"
        ),
        colorize=True,
    )

    if settings.ENVIRONMENT != "local":
        logger.add(
            "logs/aries_jstor_{time:YYYY-MM-DD}.log",
            rotation="00:00",
            retention="30 days",
            level="INFO",
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
        )


def _get_log_level_number(level: str) -> int:
    """将日志级别字符串转换为数字。"""
    levels = {
        "DEBUG": 10,
        "INFO": 20,
        "WARNING": 30,
        "ERROR": 40,
        "CRITICAL": 50,
    }
    return levels.get(level.upper(), 20)


# ============================================================================
# 业务事件日志记录器
# ============================================================================


class BusinessEvents:
    """业务事件日志助手类。

    Usage:
        from aries_jstor.core.infrastructure.logging import BusinessEvents

        BusinessEvents.asset_resolved(external_id="23760225", asset_id=23760225)
    """

    _log = structlog.get_logger("business.events")

    @classmethod
    def upstream_login(
        cls,
        system: str,
        cookie_count: int,
        status_code: int,
        **extra: Any,
    ) -> None:
        """记录上游登录事件。"""
        cls._log.info(
            "upstream_login",
            event_type="auth",
            system=system,
            cookie_count=cookie_count,
            status_code=status_code,
            **extra,
        )

    @classmethod
    def upstream_reauth(
        cls,
        system: str,
        url: str,
        status_code: int,
        **extra: Any,
    ) -> None:
        """记录会话失效后的重新登录。"""
        cls._log.warning(
            "upstream_reauth",
            event_type="auth",
            system=system,
            url=url,
            status_code=status_code,
            **extra,
        )

    @classmethod
    def lookup_filter_failed(
        cls,
        external_id: str,
        filter_label: str,
        reason: str,
        **extra: Any,
    ) -> None:
        """记录单个过滤器查询失败。"""
        cls._log.warning(
            "lookup_filter_failed",
            event_type="lookup",
            external_id=external_id,
            filter_label=filter_label,
            reason=reason,
            **extra,
        )

    @classmethod
    def asset_resolved(
        cls,
        external_id: str,
        asset_id: int,
        filter_label: str,
        service_urls: int = 0,
        access_urls: int = 0,
        **extra: Any,
    ) -> None:
        """记录标识符解析成功事件。"""
        cls._log.info(
            "asset_resolved",
            event_type="lookup",
            external_id=external_id,
            asset_id=asset_id,
            filter_label=filter_label,
            service_urls=service_urls,
            access_urls=access_urls,
            **extra,
        )

    @classmethod
    def asset_not_found(cls, external_id: str, **extra: Any) -> None:
        """记录标识符未找到事件。"""
        cls._log.info(
            "asset_not_found",
            event_type="lookup",
            external_id=external_id,
            **extra,
        )

    @classmethod
    def feature_degraded(
        cls,
        feature: str,
        reason: str,
        **extra: Any,
    ) -> None:
        """记录功能降级事件（富化或公共链接解析失败）。"""
        cls._log.warning(
            "feature_degraded",
            event_type="degradation",
            feature=feature,
            reason=reason,
            **extra,
        )
