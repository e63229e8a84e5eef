"""Job queue integration (celery)."""

from .pending import Chain, PendingDispatch
from .job import Job, handle_job

__all__ = [
    "Chain",
    "PendingDispatch",
    "Job",
    "handle_job",
]
