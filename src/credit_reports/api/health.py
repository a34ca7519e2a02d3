from fastapi import APIRouter, Request

router = APIRouter(tags=["health"])


@router.get("/health")
async def health(request: Request):
    """Basic health check, including which bureau parsers are loaded."""
    registry = getattr(request.app.state, "registry", None)
    bureaus = [bureau.value for bureau in registry.registered_bureaus()] if registry else []
    return {"status": "ok", "bureaus": bureaus}
