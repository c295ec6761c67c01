from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from .services.exceptions import ProviderAPIError

router = APIRouter()


@router.get("/healthz", response_class=PlainTextResponse)
def health():
    return "ok"


async def provider_error_handler(_request: Request, exc: ProviderAPIError) -> JSONResponse:
    """Relay provider failures with the provider's status code and body."""
    return JSONResponse(
        status_code=exc.status_code or 500,
        content={"error": exc.message, "details": exc.payload},
    )
