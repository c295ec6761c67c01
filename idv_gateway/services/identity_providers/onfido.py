import json
import logging
from typing import Any
from urllib.parse import quote

import requests
from starlette.concurrency import run_in_threadpool

from ...config import Settings
from ..exceptions import ProviderAPIError
from .base import IdentityProvider

logger = logging.getLogger(__name__)


def _error_message(status_code: int, payload: Any) -> str:
    if isinstance(payload, dict):
        error = payload.get("error")
        if isinstance(error, dict) and error.get("message"):
            return error["message"]
        if payload.get("message"):
            return payload["message"]
    if payload is not None:
        return json.dumps(payload)
    return f"Onfido error {status_code}"


class OnfidoProvider(IdentityProvider):
    """Thin client for the Onfido REST API (applicants and workflow runs).

    Requests are blocking, so every call is pushed to the threadpool.
    """

    def __init__(self, settings: Settings, session: requests.Session | None = None):
        self.base_url = f"{settings.onfido_api_base}/{settings.onfido_api_version}"
        self.timeout = settings.onfido_timeout_seconds
        self.session = session or requests.Session()
        self.session.headers.update({
            "Authorization": f"Token token={settings.onfido_api_token}",
            "Accept": "application/json",
            "Content-Type": "application/json",
        })

    def _request(self, method: str, path: str, body: dict | None = None) -> Any:
        url = f"{self.base_url}{path}"
        try:
            resp = self.session.request(method, url, json=body, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"Onfido request failed method={method} path={path} err={e}")
            raise ProviderAPIError(f"Onfido request failed: {e}", status_code=502) from e

        payload = None
        if resp.text:
            try:
                payload = resp.json()
            except ValueError:
                if resp.ok:
                    raise ProviderAPIError("Onfido returned a non-JSON response", status_code=502)

        if not resp.ok:
            message = _error_message(resp.status_code, payload)
            logger.warning(f"Onfido error method={method} path={path} status={resp.status_code} msg={message}")
            raise ProviderAPIError(message, status_code=resp.status_code, payload=payload)
        return payload

    async def _call(self, method: str, path: str, body: dict | None = None) -> Any:
        return await run_in_threadpool(self._request, method, path, body)

    async def create_applicant(self, applicant: dict):
        return await self._call("POST", "/applicants", applicant)

    async def get_applicant(self, applicant_id: str):
        return await self._call("GET", f"/applicants/{quote(applicant_id, safe='')}")

    async def create_workflow_run(self, *, workflow_id: str | None, applicant_id: str | None):
        body = {"workflow_id": workflow_id, "applicant_id": applicant_id}
        return await self._call("POST", "/workflow_runs", {k: v for k, v in body.items() if v is not None})

    async def get_workflow_run(self, workflow_run_id: str):
        return await self._call("GET", f"/workflow_runs/{quote(workflow_run_id, safe='')}")
