from fastapi import APIRouter, Depends, status

from hany_realty.core.errors import ApiError
from hany_realty.dependencies import get_map_resolver
from hany_realty.services.map_resolver import (
    InvalidMapUrlError,
    MapResolveError,
    MapUrlResolver,
)

router = APIRouter(prefix="/api", tags=["maps"])


@router.get("/resolve-map")
async def resolve_map(
    url: str = "",
    resolver: MapUrlResolver = Depends(get_map_resolver),
):
    url = url.strip()
    if not url:
        raise ApiError("url 파라미터가 필요합니다.", status.HTTP_400_BAD_REQUEST)

    try:
        final_url = await resolver.resolve(url)
    except InvalidMapUrlError:
        raise ApiError("올바른 URL 이 아닙니다.", status.HTTP_400_BAD_REQUEST)
    except MapResolveError:
        raise ApiError("지도 URL 확인 중 오류가 발생했습니다.", status.HTTP_500_INTERNAL_SERVER_ERROR)

    if not final_url:
        # 200 으로 돌려주고 프론트에서 원본 URL 을 그대로 사용
        return {"ok": False, "error": "최종 URL 을 찾을 수 없습니다.", "url": url}

    return {"ok": True, "url": url, "finalUrl": final_url}
