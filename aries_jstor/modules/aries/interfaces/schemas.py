"""Aries API schemas."""

from pydantic import BaseModel, Field


class ServiceURLResponse(BaseModel):
    url: str = Field(..., description="服务地址")
    protocol: str = Field(..., description="协议标签，如 image-download")


class AriesResponse(BaseModel):
    """Aries descriptor; empty lists are omitted from the payload."""

    identifier: list[str] | None = Field(None, description="标识符列表")
    service_url: list[ServiceURLResponse] | None = Field(
        None, description="服务地址列表"
    )
    access_url: list[str] | None = Field(None, description="公开访问地址列表")
