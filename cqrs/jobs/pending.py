"""Pending job dispatches and chains."""
from __future__ import annotations

from typing import Any, Iterable, List, Optional

from celery import chain as celery_chain
from celery.canvas import Signature

from cqrs.infrastructure.observability import get_logger

logger = get_logger(__name__)


class PendingDispatch:
    """A job configured fluently and sent to the queue by ``dispatch()``.

    Example::

        command.queue(event).on_queue("mail").delay(30).dispatch()
    """

    def __init__(self, job: Any) -> None:
        self.job = job
        self.chained: List[Any] = []
        self.chain_queue: Optional[str] = None
        self.chain_connection: Any = None

    def on_connection(self, connection: Any) -> "PendingDispatch":
        self.job.connection = connection
        return self

    def on_queue(self, queue: Optional[str]) -> "PendingDispatch":
        self.job.queue = queue
        return self

    def all_on_connection(self, connection: Any) -> "PendingDispatch":
        self.chain_connection = connection
        return self.on_connection(connection)

    def all_on_queue(self, queue: Optional[str]) -> "PendingDispatch":
        self.chain_queue = queue
        return self.on_queue(queue)

    def delay(self, delay: Any) -> "PendingDispatch":
        """Delay the job by a number of seconds or until a datetime."""
        self.job.delay = delay
        return self

    def chain(self, jobs: Iterable[Any]) -> "PendingDispatch":
        """Run the given jobs in order after this one succeeds."""
        self.chained.extend(jobs)
        return self

    def signature(self) -> Signature:
        signatures = [self.job.signature()] + [self._chained_signature(job) for job in self.chained]
        if len(signatures) == 1:
            return signatures[0]
        return celery_chain(*signatures)

    def dispatch(self) -> Any:
        logger.info("job_dispatched", handler=self.job.handler, chained=len(self.chained))
        return self.signature().apply_async()

    def _chained_signature(self, job: Any) -> Signature:
        if isinstance(job, Signature):
            signature = job.clone()
        else:
            signature = job.signature()
        if self.chain_queue and not signature.options.get("queue"):
            signature.set(queue=self.chain_queue)
        if self.chain_connection is not None and "connection" not in signature.options:
            signature.set(connection=self.chain_connection)
        return signature


class Chain:
    """Dispatches a job with other jobs chained after it."""

    def __init__(self, job_class: type, chain: Iterable[Any]) -> None:
        self.job_class = job_class
        self.chain = list(chain)

    def dispatch(self, *args: Any) -> PendingDispatch:
        return PendingDispatch(self.job_class(*args)).chain(self.chain)
