from pydantic import BaseModel, ConfigDict
from typing import Optional
from datetime import datetime


class VerificationResult(BaseModel):
    """Canonical view of a workflow run, as last reported by a webhook."""

    model_config = ConfigDict(frozen=True)

    workflow_run_id: Optional[str] = None
    status: Optional[str] = None

    # Onfido never sends names in the webhook output; only reconciliation fills them
    first_name: Optional[str] = None
    last_name: Optional[str] = None

    gender: Optional[str] = None
    date_of_birth: Optional[str] = None
    document_type: Optional[str] = None
    document_number: Optional[str] = None
    date_expiry: Optional[str] = None

    applicant_id: Optional[str] = None
    received_at: Optional[datetime] = None


class WorkflowRunSummary(BaseModel):
    status: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    gender: Optional[str] = None
    date_of_birth: Optional[str] = None
    document_type: Optional[str] = None
    document_number: Optional[str] = None
    date_expiry: Optional[str] = None
    workflow_run_id: str
    applicant_id: Optional[str] = None
    dashboard_url: Optional[str] = None


class NotFoundResponse(BaseModel):
    message: str = "not found"
