from fastapi import APIRouter, Request, Response

from clustermetrics.infrastructure.base import WindowStore

router = APIRouter()


async def store_unavailable(store: WindowStore) -> str | None:
    """Reason the window store cannot serve reads, or None when it can."""
    try:
        ok = await store.ping()
    except Exception as e:
        return str(e) or type(e).__name__
    if not ok:
        return "window store unavailable"
    return None


@router.get("/healthz")
async def healthz(request: Request):
    reason = await store_unavailable(request.app.state.store)
    if reason is not None:
        return Response(status_code=503, content=reason)
    return {"status": "ok", "backend": type(request.app.state.store).__name__}


@router.get("/readyz")
async def readyz(request: Request):
    state = request.app.state
    reason = await store_unavailable(state.store)
    if reason is not None:
        state.ready_event.clear()
        return Response(status_code=503, content=f"not ready: {reason}")
    state.ready_event.set()
    return {"status": "ready"}
