"""Aries API routes."""

from fastapi import APIRouter, Depends, Path
from fastapi.responses import PlainTextResponse
from loguru import logger

from aries_jstor.modules.aries.application.assembler import assemble
from aries_jstor.modules.aries.application.dependencies import (
    get_identifier_resolver,
)
from aries_jstor.modules.aries.application.resolver import IdentifierResolver
from aries_jstor.modules.aries.interfaces.schemas import AriesResponse

router = APIRouter(prefix="/aries", tags=["aries"])


@router.get(
    "",
    response_class=PlainTextResponse,
    summary="Aries ping",
)
async def aries_ping() -> str:
    return "JSTOR Aries API"


@router.get(
    "/{external_id}",
    response_model=AriesResponse,
    response_model_exclude_none=True,
    summary="解析标识符",
    description="按 SSID 或文件名前缀查询 JSTOR Forum，返回 Aries 描述；未找到返回 404",
    responses={404: {"description": "Identifier not found"}},
)
async def aries_lookup(
    external_id: str = Path(..., description="外部标识符（SSID 或文件名前缀）"),
    resolver: IdentifierResolver = Depends(get_identifier_resolver),
) -> AriesResponse:
    """Resolve an identifier into an Aries descriptor."""
    logger.info(f"Aries lookup for {external_id}")
    descriptor = await resolver.resolve(external_id)
    return AriesResponse.model_validate(assemble(descriptor))
