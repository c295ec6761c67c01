import logging
from fastapi import APIRouter, Depends

from ..schemas.applicants import ApplicantCreateRequest
from ...services.identity_providers.base import IdentityProvider
from ...services.identity_providers.factory import get_provider

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/applicants", tags=["Applicants"])  # parent /api is added by endpoints/api.py


@router.post("")
async def create_applicant(
    payload: ApplicantCreateRequest | None = None,
    provider: IdentityProvider = Depends(get_provider),
):
    payload = payload or ApplicantCreateRequest()
    # Unset fields are left out of the provider request entirely
    applicant = await provider.create_applicant(payload.model_dump(exclude_none=True))
    logger.info(f"Applicant created id={(applicant or {}).get('id')}")
    return applicant
