import logging
from fastapi import APIRouter, Depends

from ..schemas.workflow_runs import WorkflowRunCreateRequest
from ...schemas import WorkflowRunSummary
from ...services.identity_providers.base import IdentityProvider
from ...services.identity_providers.factory import get_provider
from ...services.reconciliation_service import reconcile_workflow_run

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/workflow_runs", tags=["Workflow runs"])


@router.post("")
async def create_workflow_run(
    payload: WorkflowRunCreateRequest | None = None,
    provider: IdentityProvider = Depends(get_provider),
):
    """Start a workflow run; the response includes the SDK token for the frontend."""
    payload = payload or WorkflowRunCreateRequest()
    run = await provider.create_workflow_run(
        workflow_id=payload.workflow_id,
        applicant_id=payload.applicant_id,
    )
    logger.info(f"Workflow run created id={(run or {}).get('id')} applicant={payload.applicant_id}")
    return run


@router.get("/{workflow_run_id}", response_model=WorkflowRunSummary)
async def get_workflow_run(
    workflow_run_id: str,
    provider: IdentityProvider = Depends(get_provider),
):
    # Live status from Onfido + applicant name; does not touch the webhook cache
    return await reconcile_workflow_run(provider, workflow_run_id)
