import uuid
from datetime import datetime, timezone

from ..exceptions import ProviderAPIError
from .base import IdentityProvider


class MockIdentityProvider(IdentityProvider):
    """In-memory stand-in for Onfido (sandbox mode and tests).

    Workflow runs stay in ``awaiting_input`` until ``set_run`` changes them.
    """

    def __init__(self):
        self.applicants: dict[str, dict] = {}
        self.runs: dict[str, dict] = {}

    async def create_applicant(self, applicant: dict):
        applicant_id = f"mock_{uuid.uuid4()}"
        record = {
            "id": applicant_id,
            "created_at": datetime.now(timezone.utc).isoformat(),
            **applicant,
        }
        self.applicants[applicant_id] = record
        return record

    async def get_applicant(self, applicant_id: str):
        applicant = self.applicants.get(applicant_id)
        if applicant is None:
            raise ProviderAPIError("Applicant not found", status_code=404, payload={"error": {"type": "resource_not_found"}})
        return applicant

    async def create_workflow_run(self, *, workflow_id: str | None, applicant_id: str | None):
        run_id = f"mock_run_{uuid.uuid4()}"
        run = {
            "id": run_id,
            "workflow_id": workflow_id,
            "applicant_id": applicant_id,
            "status": "awaiting_input",
            "output": None,
            "sdk_token": f"mock_token_{run_id}",
            "dashboard_url": f"https://dashboard.onfido.com/results/{run_id}",
        }
        self.runs[run_id] = run
        return run

    async def get_workflow_run(self, workflow_run_id: str):
        run = self.runs.get(workflow_run_id)
        if run is None:
            raise ProviderAPIError("Workflow run not found", status_code=404, payload={"error": {"type": "resource_not_found"}})
        return {k: v for k, v in run.items() if k != "sdk_token"}

    def set_run(self, workflow_run_id: str, **fields) -> None:
        self.runs.setdefault(workflow_run_id, {"id": workflow_run_id}).update(fields)
