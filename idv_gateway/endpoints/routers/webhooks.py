"""Onfido webhook receiver and the debug read path for received results.

Response contract towards Onfido:
- 400 only when the signature is missing/invalid or the body is not JSON
- 200 "ok" for everything else, including payloads we cannot map and
  internal errors (Onfido retries aggressively on non-2xx)
"""

import logging

from fastapi import APIRouter, Depends, Header, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from ...config import Settings, get_settings
from ...schemas import NotFoundResponse, VerificationResult
from ...services.exceptions import MalformedPayloadError, SignatureMissingError, WebhookRejectedError
from ...services.normalizer import normalize_webhook_payload, parse_payload
from ...services.result_store import ResultStore, get_result_store
from ...services.signature import SIGNATURE_HEADER, verify_signature
from ...utils.enums import WebhookOutcome

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Webhooks"])


def _log_webhook(outcome: WebhookOutcome, workflow_run_id: str | None = None, status: str | None = None) -> None:
    logger.info(f"[ONFIDO WEBHOOK] outcome={outcome.value} run={workflow_run_id} status={status}")


def _rejection_outcome(exc: WebhookRejectedError) -> WebhookOutcome:
    if isinstance(exc, SignatureMissingError):
        return WebhookOutcome.SIGNATURE_MISSING
    if isinstance(exc, MalformedPayloadError):
        return WebhookOutcome.INVALID_JSON
    return WebhookOutcome.SIGNATURE_INVALID


def ingest_webhook(body: bytes, signature: str | None, secret: str, store: ResultStore) -> VerificationResult:
    """Verify, parse, normalize and (when the run id resolves) store one delivery.

    Raises WebhookRejectedError for signature/JSON failures; nothing is stored then.
    """
    verify_signature(body, signature, secret)
    payload = parse_payload(body)

    result = normalize_webhook_payload(payload)
    if result.workflow_run_id:
        store.put(result.workflow_run_id, result)
        _log_webhook(WebhookOutcome.STORED, result.workflow_run_id, result.status)
    else:
        _log_webhook(WebhookOutcome.UNRESOLVED)
    return result


@router.post("/webhook/onfido", response_class=PlainTextResponse)
async def onfido_webhook(
    request: Request,
    x_sha2_signature: str | None = Header(default=None, alias=SIGNATURE_HEADER),
    settings: Settings = Depends(get_settings),
    store: ResultStore = Depends(get_result_store),
):
    # Raw bytes: the signature is computed over the body exactly as sent
    body = await request.body()

    try:
        ingest_webhook(body, x_sha2_signature, settings.onfido_webhook_secret, store)
    except WebhookRejectedError as e:
        _log_webhook(_rejection_outcome(e))
        return PlainTextResponse(e.response_text, status_code=400)
    except Exception:
        # Acknowledge anyway so Onfido does not start a retry storm
        logger.exception("Webhook error")
        _log_webhook(WebhookOutcome.INTERNAL_ERROR)

    return PlainTextResponse("ok", status_code=200)


@router.get(
    "/api/webhook_runs/{workflow_run_id}",
    response_model=VerificationResult,
    responses={404: {"model": NotFoundResponse}},
)
async def get_webhook_run(workflow_run_id: str, store: ResultStore = Depends(get_result_store)):
    result = store.get(workflow_run_id)
    if result is None:
        return JSONResponse(NotFoundResponse().model_dump(), status_code=404)
    return result
