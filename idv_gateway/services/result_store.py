from threading import Lock
from typing import Dict, Optional

from fastapi import Request

from ..schemas import VerificationResult

# In-memory cache of the latest webhook result per workflow run (debug / demo).
# Not a system of record: no eviction, nothing survives a restart.


class ResultStore:
    def __init__(self):
        self._results: Dict[str, VerificationResult] = {}
        self._lock = Lock()

    def put(self, workflow_run_id: str, result: VerificationResult) -> None:
        """Store ``result`` under ``workflow_run_id``, replacing any previous entry."""
        with self._lock:
            self._results[workflow_run_id] = result

    def get(self, workflow_run_id: str) -> Optional[VerificationResult]:
        with self._lock:
            return self._results.get(workflow_run_id)

    def __contains__(self, workflow_run_id: object) -> bool:
        with self._lock:
            return workflow_run_id in self._results

    def __len__(self) -> int:
        with self._lock:
            return len(self._results)


def get_result_store(request: Request) -> ResultStore:
    return request.app.state.result_store
