"""Request Lifecycle Controller - One current request per logical session."""

from __future__ import annotations

import asyncio
import functools
import itertools
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Generic, TypeVar

from ..exceptions import BackendError
from ..models.enums import RequestOutcomeStatus, RequestPhase
from ..models.state import RequestState

logger = logging.getLogger(__name__)

T = TypeVar("T")

RequestFn = Callable[[], Awaitable[T]]


@dataclass
class RequestOutcome(Generic[T]):
    """Result of one issued request.

    Attributes:
        status: APPLIED, STALE or FAILED
        token: Token the request was issued with
        value: Returned value (only when APPLIED)
        error: Failure reason (only when FAILED)
    """

    status: RequestOutcomeStatus
    token: int
    value: T | None = None
    error: str | None = None

    @property
    def applied(self) -> bool:
        return self.status == RequestOutcomeStatus.APPLIED


class RequestLifecycleController:
    """Tracks request sessions and discards stale completions.

    Each session (e.g. "quiz", "workflow", "stage-detail") has one current
    token. Issuing a request assigns a new token; when the request completes
    its result is applied only if its token is still the session's token.
    Last-issued wins, whatever the completion order.

    Everything runs on one event loop, so the check-then-apply step needs no
    lock: ``on_success`` runs synchronously right after the token check.

    Example:
        >>> controller = RequestLifecycleController()
        >>> outcome = await controller.issue("quiz", fetch, on_success=apply)
        >>> outcome.applied
        True
    """

    def __init__(self, states: dict[str, RequestState] | None = None):
        """Initialize the controller.

        Args:
            states: Pre-existing RequestState objects to drive, keyed by session
                (lets a view expose its own state objects)
        """
        self._states: dict[str, RequestState] = dict(states or {})
        self._tasks: dict[str, set[asyncio.Task]] = {}
        # Tokens are unique across sessions, so a token never repeats
        self._counter = itertools.count(1)

    def state(self, session_id: str) -> RequestState:
        """Return the session's state, creating it in IDLE."""
        if session_id not in self._states:
            self._states[session_id] = RequestState()
        return self._states[session_id]

    def bind(self, session_id: str, state: RequestState) -> None:
        """Drive an externally owned RequestState for ``session_id``."""
        self._states[session_id] = state

    def is_current(self, session_id: str, token: int) -> bool:
        return self.state(session_id).token == token

    async def issue(
        self,
        session_id: str,
        request_fn: RequestFn[T],
        on_success: Callable[[T], Any] | None = None,
    ) -> RequestOutcome[T]:
        """Issue a request and apply its result if still current.

        Args:
            session_id: Logical session the request belongs to
            request_fn: Zero-argument coroutine function doing the I/O
            on_success: Called with the value only when the token still matches

        Returns:
            RequestOutcome with APPLIED, STALE or FAILED status

        Raises:
            Exception: Anything other than BackendError raised by request_fn
                (programming errors are not swallowed)
        """
        token = self._begin(session_id)
        return await self._run(session_id, token, request_fn, on_success)

    def _begin(self, session_id: str) -> int:
        state = self.state(session_id)
        token = next(self._counter)
        state.token = token
        state.phase = RequestPhase.PENDING
        state.error = None
        logger.debug(f"[{session_id}] Request {token} pending")
        return token

    async def _run(
        self,
        session_id: str,
        token: int,
        request_fn: RequestFn[T],
        on_success: Callable[[T], Any] | None,
    ) -> RequestOutcome[T]:
        state = self.state(session_id)
        try:
            value = await request_fn()
        except BackendError as e:
            if not self.is_current(session_id, token):
                logger.debug(f"[{session_id}] Dropping stale failure of request {token}")
                return RequestOutcome(status=RequestOutcomeStatus.STALE, token=token)
            state.phase = RequestPhase.ERROR
            state.error = e.message or str(e)
            logger.warning(f"[{session_id}] Request {token} failed: {state.error}")
            return RequestOutcome(
                status=RequestOutcomeStatus.FAILED, token=token, error=state.error
            )

        if not self.is_current(session_id, token):
            logger.debug(f"[{session_id}] Dropping stale result of request {token}")
            return RequestOutcome(status=RequestOutcomeStatus.STALE, token=token)

        if on_success is not None:
            on_success(value)
        state.phase = RequestPhase.SUCCESS
        logger.debug(f"[{session_id}] Request {token} applied")
        return RequestOutcome(status=RequestOutcomeStatus.APPLIED, token=token, value=value)

    def start(
        self,
        session_id: str,
        request_fn: RequestFn[T],
        on_success: Callable[[T], Any] | None = None,
    ) -> asyncio.Task:
        """Schedule ``issue`` as a background task tracked for cancellation.

        The token is assigned and the session marked PENDING before this
        returns, so a later ``start`` or ``cancel`` always supersedes it.
        Nothing awaits the task, so an exception other than BackendError is
        logged here and, if the request is still current, leaves the session
        in ERROR instead of PENDING.
        """
        token = self._begin(session_id)
        task = asyncio.ensure_future(self._run(session_id, token, request_fn, on_success))
        tasks = self._tasks.setdefault(session_id, set())
        tasks.add(task)
        task.add_done_callback(tasks.discard)
        task.add_done_callback(functools.partial(self._on_task_done, session_id, token))
        return task

    def _on_task_done(self, session_id: str, token: int, task: asyncio.Task) -> None:
        if task.cancelled():
            return
        error = task.exception()
        if error is None:
            return

        logger.error(f"[{session_id}] Request {token} raised: {error!r}")
        if self.is_current(session_id, token):
            state = self.state(session_id)
            state.phase = RequestPhase.ERROR
            state.error = str(error) or type(error).__name__

    def cancel(self, session_id: str) -> None:
        """Drop interest in the session's in-flight request.

        Bumps the token so a late completion is discarded, returns the session
        to IDLE and cancels tasks created with ``start``.
        """
        state = self.state(session_id)
        was_pending = state.phase == RequestPhase.PENDING
        state.token = next(self._counter)
        state.phase = RequestPhase.IDLE
        state.error = None

        for task in list(self._tasks.pop(session_id, set())):
            task.cancel()

        if was_pending:
            logger.debug(f"[{session_id}] Pending request cancelled")

    def cancel_all(self) -> None:
        for session_id in list(self._states):
            self.cancel(session_id)
