from __future__ import annotations

import logging
from concurrent.futures import Executor, Future
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from evote.domain.errors import TransformError
from evote.domain.forms import FormDefinition
from evote.domain.payload import redact, to_payload
from evote.domain.ports import TOKEN_KEY, AuthPort, TokenStorePort, UseCaseError
from evote.domain.submission import Outcome, SubmissionState
from evote.usecases.interpret_result import ResultInterpreter
from evote.usecases.submission_coordinator import SubmissionCoordinator, SubmissionHooks


@dataclass
class SubmitAttempt:
    """What happened synchronously when the user pressed submit."""

    field_errors: Dict[str, str] = field(default_factory=dict)
    future: Optional["Future[Outcome]"] = None

    @property
    def accepted(self) -> bool:
        return self.future is not None

    @property
    def blocked_by_validation(self) -> bool:
        return bool(self.field_errors)


class SubmitForm:
    """Validate -> transform -> submit workflow for one form instance.

    Validation failures never reach the network. On a successful login the
    session token is written once to the injected token store before the
    outcome is forwarded to ``hooks``.
    """

    def __init__(
        self,
        definition: FormDefinition,
        auth_port: AuthPort,
        *,
        token_store: Optional[TokenStorePort] = None,
        executor: Optional[Executor] = None,
        hooks: Optional[SubmissionHooks] = None,
    ) -> None:
        self.definition = definition
        self.auth_port = auth_port
        self.token_store = token_store
        self.hooks = hooks or SubmissionHooks()
        self.coordinator = SubmissionCoordinator(
            send=self._send,
            interpret=ResultInterpreter(definition),
            executor=executor,
            hooks=SubmissionHooks(on_state=self._on_state, on_outcome=self._on_outcome),
            name=definition.name,
        )
        self._log = logging.getLogger(__name__)

    @property
    def state(self) -> SubmissionState:
        return self.coordinator.state

    def __call__(self, values: Mapping[str, Any]) -> SubmitAttempt:
        if self.coordinator.is_pending:
            self._log.info("%s: submit ignored while a request is pending", self.definition.name)
            return SubmitAttempt()

        schema = self.definition.schema
        errors = schema.validate_all(values)
        if errors:
            self._log.info(
                "%s: submission blocked by validation (%s)",
                self.definition.name,
                ", ".join(errors),
            )
            return SubmitAttempt(field_errors=errors)

        try:
            payload = to_payload(values, schema)
        except TransformError as exc:
            self._log.exception("%s: validated values failed to transform", self.definition.name)
            raise UseCaseError("TRANSFORM_FAILED", str(exc)) from exc

        self._log.debug("%s: submitting %s", self.definition.name, redact(payload))
        return SubmitAttempt(future=self.coordinator.submit(payload))

    def shutdown(self, wait: bool = True) -> None:
        self.coordinator.shutdown(wait=wait)

    # ------------------------------------------------------------------
    def _send(self, payload: Mapping[str, Any]) -> Any:
        return self.auth_port.post(self.definition.path, dict(payload))

    def _on_state(self, state: SubmissionState) -> None:
        self.hooks.on_state(state)

    def _on_outcome(self, outcome: Outcome) -> None:
        if outcome.is_success:
            self._persist_token(outcome)
        self.hooks.on_outcome(outcome)

    def _persist_token(self, outcome: Outcome) -> None:
        token_field = self.definition.token_field
        if not token_field or self.token_store is None:
            return
        token = (outcome.data or {}).get(token_field)
        if isinstance(token, str) and token:
            self.token_store.set(TOKEN_KEY, token)
            self._log.info("%s: session token stored", self.definition.name)


__all__ = ["SubmitAttempt", "SubmitForm"]
