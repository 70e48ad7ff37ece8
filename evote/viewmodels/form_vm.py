from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from ..domain.forms import FormDefinition
from ..domain.submission import Outcome, OutcomeKind, SubmissionState, SubmissionStatus
from ..usecases.submit_form import SubmitAttempt


@dataclass(frozen=True)
class FieldView:
    """Render snapshot for one input: what to show and the inline error."""

    name: str
    label: str
    value: str
    error: Optional[str] = None


@dataclass
class FormVM:
    """Live form state for the login or signup page, no I/O here.

    - ``values``: raw strings keyed by field name, updated on every keystroke
    - ``errors``: inline message per field (client or server side)
    - ``state`` / ``outcome``: last submission snapshot pushed by the use case
    - ``banner``: single form-level message (success, conflict or failure)
    """

    definition: FormDefinition
    on_submit: Optional[Callable[[Dict[str, str]], SubmitAttempt]] = None

    values: Dict[str, str] = field(default_factory=dict)
    errors: Dict[str, str] = field(default_factory=dict)
    state: SubmissionState = field(default_factory=SubmissionState.idle)
    outcome: Optional[Outcome] = None
    banner: str = ""
    show_password: bool = False

    def __post_init__(self) -> None:
        defaults = self.definition.schema.defaults()
        defaults.update({k: v for k, v in self.values.items() if k in defaults})
        self.values = defaults

    # ---------- Live form API ----------
    def set_field(self, name: str, value: str) -> None:
        if name not in self.values:
            raise ValueError(f"Unknown field '{name}' for form '{self.definition.name}'")
        self.values[name] = "" if value is None else str(value)
        self.errors.pop(name, None)

    def field_view(self, name: str) -> FieldView:
        spec = self.definition.schema.get(name)
        return FieldView(
            name=name,
            label=spec.label,
            value=self.values.get(name, ""),
            error=self.errors.get(name),
        )

    def field_views(self) -> List[FieldView]:
        """All fields in display order."""
        return [self.field_view(name) for name in self.definition.schema.field_names]

    def validate(self) -> bool:
        self.errors = self.definition.schema.validate_all(self.values)
        return not self.errors

    def toggle_password(self) -> None:
        self.show_password = not self.show_password

    @property
    def is_busy(self) -> bool:
        return self.state.status is SubmissionStatus.PENDING

    # ---------- Commands ----------
    def submit(self) -> SubmitAttempt:
        if self.on_submit is None:
            raise RuntimeError(f"Form '{self.definition.name}' has no submit handler")
        attempt = self.on_submit(dict(self.values))
        if attempt.blocked_by_validation:
            self.errors = dict(attempt.field_errors)
        return attempt

    # ---------- Use-case callbacks ----------
    def apply_state(self, state: SubmissionState) -> None:
        if state.attempt < self.state.attempt:
            return
        if state.is_pending and state.attempt != self.state.attempt:
            # Outcome of the previous attempt no longer applies.
            self.outcome = None
            self.banner = ""
        self.state = state

    def apply_outcome(self, outcome: Outcome) -> None:
        self.outcome = outcome
        if outcome.kind is OutcomeKind.SUCCESS:
            self.values = self.definition.schema.defaults()
            self.errors = {}
        elif outcome.kind is OutcomeKind.VALIDATION_REJECTED:
            known = {k: v for k, v in outcome.field_errors.items() if k in self.values}
            self.errors.update(known)
        self.banner = outcome.message or self.definition.failure_message


__all__ = ["FieldView", "FormVM"]
