import os
from dataclasses import dataclass, field

from fastapi import Request

DEFAULT_API_BASE = "https://api.us.onfido.com"
DEFAULT_API_VERSION = "v3.6"


def _flag(name: str) -> bool:
    return os.getenv(name, "0") == "1"


def _split_origins(raw: str) -> list[str]:
    origins = [o.strip() for o in raw.split(",") if o.strip()]
    return origins or ["*"]


@dataclass(frozen=True)
class Settings:
    onfido_api_token: str = ""
    onfido_api_base: str = DEFAULT_API_BASE
    onfido_api_version: str = DEFAULT_API_VERSION
    # Empty secret = signature enforcement disabled (dev/open mode)
    onfido_webhook_secret: str = ""
    onfido_timeout_seconds: float = 30.0
    identity_provider: str = "onfido"
    sandbox: bool = False
    cors_origins: list[str] = field(default_factory=lambda: ["*"])
    client_dist_dir: str = "client/dist"
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "info"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            onfido_api_token=os.getenv("ONFIDO_API_TOKEN", ""),
            onfido_api_base=os.getenv("ONFIDO_API_BASE", DEFAULT_API_BASE).rstrip("/"),
            onfido_api_version=os.getenv("ONFIDO_API_VERSION", DEFAULT_API_VERSION),
            onfido_webhook_secret=os.getenv("ONFIDO_WEBHOOK_SECRET", ""),
            onfido_timeout_seconds=float(os.getenv("ONFIDO_TIMEOUT_SECONDS", "30")),
            identity_provider=os.getenv("IDENTITY_PROVIDER", "onfido").lower(),
            sandbox=_flag("DEBUG") or _flag("TESTING"),
            cors_origins=_split_origins(os.getenv("CORS_ORIGINS", "*")),
            client_dist_dir=os.getenv("CLIENT_DIST_DIR", "client/dist"),
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "3000")),
            log_level=os.getenv("LOG_LEVEL", "info").lower(),
        )

    @property
    def signature_required(self) -> bool:
        return bool(self.onfido_webhook_secret)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings
