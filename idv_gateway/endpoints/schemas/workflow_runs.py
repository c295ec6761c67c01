from pydantic import BaseModel
from typing import Optional


class WorkflowRunCreateRequest(BaseModel):
    workflow_id: Optional[str] = None
    applicant_id: Optional[str] = None
