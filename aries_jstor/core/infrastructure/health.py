"""统一的健康检查类型定义。"""

from enum import Enum

from pydantic import BaseModel, Field


class HealthStatus(str, Enum):
    """健康检查状态枚举。"""

    OK = "ok"
    ERROR = "error"


class UpstreamHealthResult(BaseModel):
    """上游 API 健康检查结果。"""

    status: HealthStatus = Field(..., description="健康状态")
    system: str = Field(..., description="上游系统")
    latency_ms: int | None = Field(None, description="延迟（毫秒）", ge=0)
    error: str | None = Field(None, description="错误信息")

    @property
    def reachable(self) -> bool:
        return self.status == HealthStatus.OK
