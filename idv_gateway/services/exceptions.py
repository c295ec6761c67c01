from typing import Any


class WebhookRejectedError(Exception):
    """Webhook delivery refused before normalization; answered with 400."""

    response_text = "rejected"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.response_text)


class AuthenticationFailure(WebhookRejectedError):
    response_text = "invalid signature"


class SignatureMissingError(AuthenticationFailure):
    response_text = "missing signature"


class SignatureMismatchError(AuthenticationFailure):
    response_text = "invalid signature"


class MalformedPayloadError(WebhookRejectedError):
    response_text = "invalid json"


class ProviderAPIError(Exception):
    """Error returned by (or while talking to) the identity provider API."""

    def __init__(self, message: str, status_code: int = 500, payload: Any = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload
