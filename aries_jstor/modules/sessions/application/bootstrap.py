"""Startup session bootstrap.

服务开始接收请求之前，必须先成功登录 Catalog 与 Public 两个上游系统。
登录失败会按指数退避重试，重试耗尽后抛出 AuthError，进程不应继续启动。
"""

from loguru import logger
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)
from tenacity.wait import wait_base

from aries_jstor.modules.sessions.domain.entities import UpstreamSystem
from aries_jstor.modules.sessions.domain.exceptions import AuthError
from aries_jstor.modules.sessions.domain.repository import Authenticator

STARTUP_ORDER = (UpstreamSystem.CATALOG, UpstreamSystem.PUBLIC)


async def establish_sessions(
    authenticator: Authenticator,
    attempts: int = 3,
    wait: wait_base | None = None,
) -> None:
    """Log in to every upstream system, retrying transport failures.

    Raises:
        AuthError: 某个系统在所有尝试后仍无法登录
    """
    for system in STARTUP_ORDER:
        async for attempt in AsyncRetrying(
            retry=retry_if_exception_type(AuthError),
            stop=stop_after_attempt(max(attempts, 1)),
            wait=wait or wait_exponential(multiplier=1, min=1, max=10),
            reraise=True,
        ):
            with attempt:
                if attempt.retry_state.attempt_number > 1:
                    logger.warning(
                        f"Retrying {system.value} login "
                        f"(attempt {attempt.retry_state.attempt_number}/{attempts})"
                    )
                await authenticator.login(system)
