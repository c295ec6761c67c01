from fastapi import APIRouter

from .routers.applicants import router as applicants_router
from .routers.workflow_runs import router as workflow_runs_router

api = APIRouter(prefix="/api")

# Provider proxies under /api
api.include_router(applicants_router)
api.include_router(workflow_runs_router)
