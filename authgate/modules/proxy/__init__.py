"""
Proxy Module - Black Box Interface

Purpose: Forward requests that passed the trust boundary to the downstream service
Interface: DownstreamProxy.forward(request)
Hidden: HTTP client, hop-by-hop header handling, failure mapping
"""

import logging
from typing import Optional

import httpx
from fastapi import Request, Response

from ..errors import GatewayError, GatewayErrorCode, UnavailableError

logger = logging.getLogger(__name__)

HOP_BY_HOP = frozenset({
    "connection",
    "keep-alive",
    "proxy-authenticate",
    "proxy-authorization",
    "te",
    "trailer",
    "transfer-encoding",
    "upgrade",
    "host",
    "content-length",
})


class DownstreamProxy:
    """Forwards filtered requests to a single downstream base URL."""

    def __init__(
        self,
        base_url: Optional[str],
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/") if base_url else None
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def forward(self, request: Request) -> Response:
        """
        Forward a request with the headers the trust boundary produced.

        Raises:
            GatewayError: NOT_FOUND when no downstream is configured,
                GATEWAY_TIMEOUT when the downstream does not answer in time
            UnavailableError: When the downstream cannot be reached
        """
        if not self.base_url:
            raise GatewayError("No downstream configured", code=GatewayErrorCode.NOT_FOUND)

        url = self.base_url + request.url.path
        if request.url.query:
            url += "?" + request.url.query
        headers = [
            (k, v) for k, v in request.headers.items() if k.lower() not in HOP_BY_HOP
        ]

        try:
            upstream = await self._client.request(
                request.method,
                url,
                headers=headers,
                content=await request.body(),
            )
        except httpx.TimeoutException as e:
            logger.error(f"Downstream timed out for {request.method} {request.url.path}")
            raise GatewayError("Downstream timed out", code=GatewayErrorCode.GATEWAY_TIMEOUT) from e
        except httpx.TransportError as e:
            logger.error(f"Downstream unreachable for {request.method} {request.url.path}: {e}")
            raise UnavailableError("Downstream unreachable") from e

        response_headers = {
            k: v for k, v in upstream.headers.items()
            if k.lower() not in HOP_BY_HOP and k.lower() != "content-encoding"
        }
        return Response(
            content=upstream.content,
            status_code=upstream.status_code,
            headers=response_headers,
        )


__all__ = ["DownstreamProxy"]
