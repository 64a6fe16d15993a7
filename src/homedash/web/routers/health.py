from fastapi import APIRouter

from homedash.web.deps import AppDep
from homedash.web.envelope import Envelope, ok

router = APIRouter(tags=["health"])


@router.get("/health", summary="Service health", operation_id="getHealth")
async def health_check(app: AppDep) -> Envelope[dict[str, str | float]]:
    return ok(app.get_health())
