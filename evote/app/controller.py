"""Adapter, use-case and viewmodel wiring for the client runtime.

This module owns lazy construction of the auth adapter, token store, and the
login/signup workflows that depend on :class:`evote.app.settings.AppSettings`.
"""

from __future__ import annotations

import logging
from concurrent.futures import Executor
from typing import Optional

from ..adapters.auth_mock import AuthMock
from ..adapters.auth_rest import AuthRestAdapter
from ..adapters.token_store import TokenStoreLocal, TokenStoreMemory
from ..domain.forms import LOGIN_FORM, SIGNUP_FORM, FormDefinition
from ..domain.ports import TOKEN_KEY, AuthPort, TokenStorePort
from ..usecases.submission_coordinator import SubmissionHooks
from ..usecases.submit_form import SubmitForm
from ..viewmodels.form_vm import FormVM
from .settings import AppSettings


class AppController:
    """Create and cache runtime adapters, use cases and form viewmodels.

    Call chain:
        A presentation layer (or ``evote.app.main``) creates one instance, then
        reads ``login_vm``/``signup_vm`` and forwards keystrokes and submit
        clicks to them.
    """

    def __init__(
        self,
        settings: Optional[AppSettings] = None,
        *,
        auth_port: Optional[AuthPort] = None,
        token_store: Optional[TokenStorePort] = None,
        executor: Optional[Executor] = None,
    ) -> None:
        """Initialize controller with optional pre-built collaborators.

        Args:
            settings: Runtime settings; defaults come from the environment.
            auth_port: Overrides the adapter selected from settings.
            token_store: Overrides the token store selected from settings.
            executor: Shared executor for submissions; each workflow gets a
                private single-worker pool when omitted.
        """
        self.settings = settings or AppSettings.from_env()
        self._auth_port = auth_port
        self._token_store = token_store
        self._executor = executor
        self.uc_login: Optional[SubmitForm] = None
        self.uc_signup: Optional[SubmitForm] = None
        self._login_vm: Optional[FormVM] = None
        self._signup_vm: Optional[FormVM] = None
        self._log = logging.getLogger(__name__)

    @property
    def auth_port(self) -> AuthPort:
        if self._auth_port is None:
            if self.settings.use_mock:
                self._log.info("Using offline auth mock with a demo account")
                self._auth_port = AuthMock.with_demo_user()
            else:
                self._auth_port = AuthRestAdapter(
                    self.settings.api_base_url,
                    request_timeout_s=self.settings.request_timeout_s,
                )
        return self._auth_port

    @property
    def token_store(self) -> TokenStorePort:
        if self._token_store is None:
            if self.settings.token_path:
                self._token_store = TokenStoreLocal(self.settings.token_path)
            else:
                self._token_store = TokenStoreMemory()
        return self._token_store

    @property
    def login_vm(self) -> FormVM:
        if self._login_vm is None:
            self.uc_login, self._login_vm = self._build(LOGIN_FORM)
        return self._login_vm

    @property
    def signup_vm(self) -> FormVM:
        if self._signup_vm is None:
            self.uc_signup, self._signup_vm = self._build(SIGNUP_FORM)
        return self._signup_vm

    def session_token(self) -> Optional[str]:
        return self.token_store.get(TOKEN_KEY)

    def reset(self) -> None:
        """Drop cached workflows so the next access rebuilds them from settings."""
        self.shutdown(wait=False)
        self.uc_login = None
        self.uc_signup = None
        self._login_vm = None
        self._signup_vm = None

    def shutdown(self, wait: bool = True) -> None:
        for uc in (self.uc_login, self.uc_signup):
            if uc is not None:
                uc.shutdown(wait=wait)

    def _build(self, definition: FormDefinition) -> tuple[SubmitForm, FormVM]:
        uc = SubmitForm(
            definition,
            self.auth_port,
            token_store=self.token_store if definition.persists_token else None,
            executor=self._executor,
        )
        vm = FormVM(definition, on_submit=uc)
        uc.hooks = SubmissionHooks(on_state=vm.apply_state, on_outcome=vm.apply_outcome)
        return uc, vm


__all__ = ["AppController"]
