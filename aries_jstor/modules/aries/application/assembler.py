"""Aries descriptor response shaping."""

from typing import Any

from aries_jstor.modules.aries.domain.entities import AriesDescriptor


def assemble(descriptor: AriesDescriptor) -> dict[str, Any]:
    """Shape a descriptor into the Aries wire format, dropping empty fields."""
    payload: dict[str, Any] = {}
    if descriptor.identifiers:
        payload["identifier"] = list(descriptor.identifiers)
    if descriptor.service_urls:
        payload["service_url"] = [
            {"url": service_url.url, "protocol": service_url.protocol.value}
            for service_url in descriptor.service_urls
        ]
    if descriptor.access_urls:
        payload["access_url"] = list(descriptor.access_urls)
    return payload
