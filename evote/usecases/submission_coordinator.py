"""Single-flight coordinator for one form's outbound submission."""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional

from evote.domain.submission import Outcome, SubmissionState, state_from_outcome

SendFn = Callable[[Mapping[str, Any]], Any]
InterpretFn = Callable[[Any], Outcome]


def _noop(*_: object, **__: object) -> None:
    """Default no-op callback used for hooks."""


@dataclass
class SubmissionHooks:
    """Optional callbacks fired on submission events.

    ``on_outcome`` runs once per attempt while the slot is still Pending, so
    side effects (token persistence, form reset) finish before a new attempt
    can be accepted. ``on_state`` sees every transition in order.
    """

    on_state: Callable[[SubmissionState], None] = _noop
    on_outcome: Callable[[Outcome], None] = _noop

    def __post_init__(self) -> None:
        self.on_state = self.on_state or _noop
        self.on_outcome = self.on_outcome or _noop


class SubmissionCoordinator:
    """Owns the Idle -> Pending -> Succeeded/Failed lifecycle of one form.

    Exactly one request is in flight at a time. A submit while Pending is
    dropped, not queued. Nothing is retried, timed out or cancelled here; a
    hung ``send`` keeps the coordinator Pending until it returns.
    """

    def __init__(
        self,
        send: SendFn,
        interpret: InterpretFn,
        *,
        executor: Optional[Executor] = None,
        hooks: Optional[SubmissionHooks] = None,
        name: str = "form",
    ) -> None:
        """
        Args:
            send: Endpoint call, already bound to its path. Returns the raw
                response or raises an adapter error.
            interpret: Maps the raw response or exception to an ``Outcome``.
            executor: Runs ``send`` off the caller's thread. Defaults to a
                private one-worker thread pool.
            hooks: Observers for state transitions and outcomes.
            name: Workflow name used in logs.
        """
        self.send = send
        self.interpret = interpret
        self.hooks = hooks or SubmissionHooks()
        self.name = name
        self._owns_executor = executor is None
        self._executor: Executor = executor or ThreadPoolExecutor(
            max_workers=1, thread_name_prefix=f"evote-{name}"
        )
        self._lock = threading.Lock()
        # Held from a slot change until its state is published, so observers
        # never see Pending(n+1) before the terminal state of n.
        self._emit_lock = threading.RLock()
        self._state = SubmissionState.idle()
        self._attempts = 0
        self._log = logging.getLogger(__name__)

    @property
    def state(self) -> SubmissionState:
        with self._lock:
            return self._state

    @property
    def is_pending(self) -> bool:
        return self.state.is_pending

    @property
    def attempts(self) -> int:
        """Number of accepted submissions so far."""
        with self._lock:
            return self._attempts

    def submit(self, payload: Mapping[str, Any]) -> Optional["Future[Outcome]"]:
        """Start one request for ``payload`` unless another is in flight.

        Returns:
            Future resolving to the attempt's ``Outcome``, or ``None`` when the
            call was dropped because an attempt is already Pending.
        """
        with self._emit_lock:
            with self._lock:
                if self._state.is_pending:
                    self._log.info(
                        "%s: submit ignored, attempt %d still pending",
                        self.name,
                        self._state.attempt,
                    )
                    return None
                self._attempts += 1
                attempt = self._attempts
                pending = SubmissionState.pending(attempt)
                self._state = pending
            self._log.info("%s: attempt %d pending", self.name, attempt)
            self._emit_state(pending)
        try:
            return self._executor.submit(self._run, attempt, payload)
        except RuntimeError as exc:
            # Executor already shut down: close the attempt instead of
            # leaving the slot Pending forever.
            self._finish(attempt, self.interpret(exc))
            raise

    def shutdown(self, wait: bool = True) -> None:
        if self._owns_executor:
            self._executor.shutdown(wait=wait)

    # ------------------------------------------------------------------
    def _run(self, attempt: int, payload: Mapping[str, Any]) -> Outcome:
        try:
            raw: Any = self.send(payload)
        except Exception as exc:
            raw = exc
        outcome = self.interpret(raw)
        self._finish(attempt, outcome)
        return outcome

    def _finish(self, attempt: int, outcome: Outcome) -> None:
        terminal = state_from_outcome(attempt, outcome)
        try:
            self.hooks.on_outcome(outcome)
        except Exception:
            self._log.exception("%s: on_outcome hook failed for attempt %d", self.name, attempt)
        with self._emit_lock:
            with self._lock:
                if self._state.attempt != attempt:  # pragma: no cover - slot is single-flight
                    self._log.warning("%s: stale completion for attempt %d", self.name, attempt)
                    return
                self._state = terminal
            self._log.info(
                "%s: attempt %d %s%s",
                self.name,
                attempt,
                terminal.status.value,
                f" ({terminal.error_kind})" if terminal.error_kind else "",
            )
            self._emit_state(terminal)

    def _emit_state(self, state: SubmissionState) -> None:
        try:
            self.hooks.on_state(state)
        except Exception:
            self._log.exception("%s: on_state hook failed", self.name)


__all__ = ["SubmissionCoordinator", "SubmissionHooks"]
