from enum import Enum


class WebhookOutcome(str, Enum):
    """Outcome of a single webhook delivery (audit log)."""
    STORED = "stored"
    UNRESOLVED = "unresolved"
    SIGNATURE_MISSING = "signature_missing"
    SIGNATURE_INVALID = "signature_invalid"
    INVALID_JSON = "invalid_json"
    INTERNAL_ERROR = "internal_error"


class ProviderName(str, Enum):
    ONFIDO = "onfido"
    MOCK = "mock"
