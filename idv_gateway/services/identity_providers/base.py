from abc import ABC, abstractmethod
from typing import Dict, Any


class IdentityProvider(ABC):
    @abstractmethod
    async def create_applicant(self, applicant: dict) -> Dict[str, Any]:
        pass

    @abstractmethod
    async def get_applicant(self, applicant_id: str) -> Dict[str, Any]:
        pass

    @abstractmethod
    async def create_workflow_run(self, *, workflow_id: str | None, applicant_id: str | None) -> Dict[str, Any]:
        """Return the provider's workflow run object (includes ``sdk_token``)."""
        pass

    @abstractmethod
    async def get_workflow_run(self, workflow_run_id: str) -> Dict[str, Any]:
        pass
