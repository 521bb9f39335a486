# hany_realty/services/map_resolver.py
import logging
from typing import Optional
from urllib.parse import unquote, urlparse

import httpx

logger = logging.getLogger(__name__)


class InvalidMapUrlError(Exception):
    pass


class MapResolveError(Exception):
    """네트워크/전송 단계 실패"""


class MapUrlResolver:
    """
    네이버/구글 지도 단축 URL(naver.me, goo.gl/maps ...)을
    리다이렉트 끝까지 따라가서 최종 URL 을 돌려줌.
    """

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        # 테스트에서는 httpx.MockTransport 주입
        self.transport = transport

    async def resolve(self, url: str) -> Optional[str]:
        """
        최종 URL(퍼센트 디코딩된 값)을 반환.
        최종 응답이 에러 상태면 None.
        """
        parsed = urlparse(url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise InvalidMapUrlError(url)

        try:
            async with httpx.AsyncClient(
                follow_redirects=True,
                transport=self.transport,
            ) as client:
                resp = await client.get(url)
        except httpx.HTTPError as exc:
            logger.exception("Map URL resolve failed for %s", url)
            raise MapResolveError(str(exc)) from exc

        hops = len(resp.history)
        if resp.is_error:
            logger.warning(
                "Map URL %s ended with status %s after %d redirects",
                url, resp.status_code, hops,
            )
            return None

        final_url = unquote(str(resp.url))
        logger.info("Resolved %s -> %s (%d redirects)", url, final_url, hops)
        return final_url or None
