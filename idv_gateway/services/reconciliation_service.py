import logging

from ..schemas import WorkflowRunSummary
from .exceptions import ProviderAPIError
from .identity_providers.base import IdentityProvider
from .normalizer import map_output_fields

logger = logging.getLogger(__name__)


async def reconcile_workflow_run(provider: IdentityProvider, workflow_run_id: str) -> WorkflowRunSummary:
    """
    Fetch the live workflow run from the provider and enrich it with the
    applicant's name. Independent of the webhook result store.

    Errors fetching the run propagate (ProviderAPIError); a failed applicant
    lookup only leaves first_name/last_name empty.
    """
    run = await provider.get_workflow_run(workflow_run_id) or {}
    applicant_id = run.get("applicant_id") or None

    first_name = None
    last_name = None
    if applicant_id:
        try:
            applicant = await provider.get_applicant(applicant_id) or {}
            first_name = applicant.get("first_name") or None
            last_name = applicant.get("last_name") or None
        except ProviderAPIError as e:
            logger.warning(
                f"Applicant lookup failed run={workflow_run_id} applicant={applicant_id} "
                f"status={e.status_code} err={e.message}"
            )

    return WorkflowRunSummary(
        status=run.get("status") or None,
        first_name=first_name,
        last_name=last_name,
        workflow_run_id=run.get("id") or workflow_run_id,
        applicant_id=applicant_id,
        dashboard_url=run.get("dashboard_url") or None,
        **map_output_fields(run.get("output")),
    )
