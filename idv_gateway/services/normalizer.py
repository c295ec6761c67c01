"""Onfido webhook payload normalization.

The webhook schema has changed across Onfido API versions, so identifiers and
statuses can live under different keys. Each lookup is an ordered tuple of
ExtractionRule objects; the first rule that yields a non-empty string wins.

Unrecognized shapes never raise: they produce a partial (or empty)
VerificationResult. Only malformed JSON is an error, raised by parse_payload
before normalization runs.
"""

import json
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Iterable, Optional

from ..schemas import VerificationResult
from .exceptions import MalformedPayloadError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExtractionRule:
    """A named key path into a parsed webhook body."""

    name: str
    path: tuple[str, ...]

    def lookup(self, payload: Any) -> Any:
        node = payload
        for key in self.path:
            if not isinstance(node, dict):
                return None
            node = node.get(key)
        return node

    def extract(self, payload: Any) -> Optional[str]:
        value = self.lookup(payload)
        if isinstance(value, str) and value:
            return value
        return None


# Priority order matters: current resource shape first, legacy object shapes after
WORKFLOW_RUN_ID_RULES: tuple[ExtractionRule, ...] = (
    ExtractionRule("payload.resource.id", ("payload", "resource", "id")),
    ExtractionRule("payload.object.id", ("payload", "object", "id")),
    ExtractionRule("object.id", ("object", "id")),
)

STATUS_RULES: tuple[ExtractionRule, ...] = (
    ExtractionRule("payload.resource.status", ("payload", "resource", "status")),
    ExtractionRule("payload.object.status", ("payload", "object", "status")),
)

APPLICANT_ID_RULES: tuple[ExtractionRule, ...] = (
    ExtractionRule("payload.resource.applicant_id", ("payload", "resource", "applicant_id")),
)

ACTION_RULES: tuple[ExtractionRule, ...] = (
    ExtractionRule("payload.action", ("payload", "action")),
)

OUTPUT_RULE = ExtractionRule("payload.resource.output", ("payload", "resource", "output"))

# canonical field -> key inside the workflow run "output" map
OUTPUT_FIELDS: dict[str, str] = {
    "gender": "gender",
    "date_of_birth": "dob",
    "document_type": "document_type",
    "document_number": "document_number",
    "date_expiry": "date_expiry",
}


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-standard JSON token {name}")


def parse_payload(body: bytes) -> Any:
    """Strict RFC 8259 parse of a UTF-8 body.

    json.loads on bytes would sniff UTF-16/32 and accept NaN/Infinity, so the
    body is decoded explicitly and the constant hook rejects those tokens. A
    leading BOM left by the decode is rejected by json.loads itself.
    """
    try:
        return json.loads(body.decode("utf-8"), parse_constant=_reject_constant)
    except ValueError as e:
        # JSONDecodeError and UnicodeDecodeError are both ValueErrors
        raise MalformedPayloadError(f"invalid json: {e}") from e


def first_match(payload: Any, rules: Iterable[ExtractionRule]) -> Optional[str]:
    for rule in rules:
        value = rule.extract(payload)
        if value is not None:
            return value
    return None


def _as_text(value: Any) -> Optional[str]:
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, (dict, list)):
        return None
    return str(value)


def map_output_fields(output: Any) -> dict[str, Optional[str]]:
    """Map an Onfido workflow run ``output`` map onto the canonical field names.

    Missing keys (or a missing/non-mapping output) map to None.
    """
    if not isinstance(output, dict):
        output = {}
    return {field: _as_text(output.get(key)) for field, key in OUTPUT_FIELDS.items()}


def normalize_webhook_payload(payload: Any, received_at: datetime | None = None) -> VerificationResult:
    run_id = first_match(payload, WORKFLOW_RUN_ID_RULES)
    action = first_match(payload, ACTION_RULES)
    if run_id is None:
        logger.debug(f"Webhook payload without workflow run id (action={action})")

    return VerificationResult(
        workflow_run_id=run_id,
        status=first_match(payload, STATUS_RULES),
        first_name=None,
        last_name=None,
        applicant_id=first_match(payload, APPLICANT_ID_RULES),
        received_at=received_at or datetime.now(timezone.utc),
        **map_output_fields(OUTPUT_RULE.lookup(payload)),
    )
