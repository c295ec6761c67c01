import logging

from fastapi import Request

from ...config import Settings
from ...utils.enums import ProviderName
from .base import IdentityProvider
from .mock import MockIdentityProvider
from .onfido import OnfidoProvider

logger = logging.getLogger(__name__)


def get_identity_provider(name: str, settings: Settings) -> IdentityProvider:
    name = (name or ProviderName.ONFIDO.value).lower()
    if name == ProviderName.MOCK.value or settings.sandbox:
        return MockIdentityProvider()
    if name == ProviderName.ONFIDO.value:
        return OnfidoProvider(settings)
    logger.warning(f"Unknown identity provider '{name}', falling back to onfido")
    return OnfidoProvider(settings)


def get_provider(request: Request) -> IdentityProvider:
    return request.app.state.provider
