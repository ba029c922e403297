from fastapi import APIRouter
from fastapi.responses import PlainTextResponse


router = APIRouter(prefix="/api", tags=["health"])


@router.api_route("/healthz", methods=["GET", "HEAD"])
def healthz() -> PlainTextResponse:
    return PlainTextResponse("OK")
