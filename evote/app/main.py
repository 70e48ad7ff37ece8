"""Console front end for the login and signup workflows."""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from typing import Dict, List, Optional

from ..adapters.auth_mock import DEMO_CNIC, DEMO_PASSWORD
from ..domain.submission import OutcomeKind
from ..utils.logging import configure_root
from .controller import AppController
from .settings import AppSettings

_FIELD_FLAGS: Dict[str, str] = {
    "name": "name",
    "age": "age",
    "cnic": "cnicNumber",
    "password": "password",
    "mobile": "mobile",
    "email": "email",
    "address": "address",
}


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse CLI args for a single login or signup submission."""
    parser = argparse.ArgumentParser(description="Log in or sign up to the e-voting service.")
    parser.add_argument("action", choices=("login", "signup"))
    parser.add_argument("--base-url", default=None, help="Voting service base URL.")
    parser.add_argument("--timeout", type=float, default=None, help="Request timeout in seconds.")
    parser.add_argument("--token-path", default=None, help="JSON file to store the session token.")
    parser.add_argument(
        "--mock",
        action="store_true",
        help=(
            "Use the offline auth mock. It starts with one account "
            f"(CNIC {DEMO_CNIC}, password {DEMO_PASSWORD}) and forgets signups on exit."
        ),
    )
    parser.add_argument("--debug", action="store_true")
    for flag in _FIELD_FLAGS:
        parser.add_argument(f"--{flag}", default="")
    return parser.parse_args(argv)


def _settings_from_args(args: argparse.Namespace) -> AppSettings:
    settings = AppSettings.from_env()
    changes = {"use_mock": bool(args.mock), "debug_logging": settings.debug_logging or args.debug}
    if args.base_url:
        changes["api_base_url"] = args.base_url
    if args.timeout is not None:
        changes["request_timeout_s"] = args.timeout if args.timeout > 0 else None
    if args.token_path:
        changes["token_path"] = args.token_path
    return replace(settings, **changes)


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entrypoint: validate, submit once, print the outcome."""
    args = _parse_args(argv)
    settings = _settings_from_args(args)
    configure_root(logging.DEBUG if settings.debug_logging else logging.WARNING)

    controller = AppController(settings)
    vm = controller.login_vm if args.action == "login" else controller.signup_vm
    for flag, name in _FIELD_FLAGS.items():
        if name in vm.values:
            vm.set_field(name, getattr(args, flag))

    try:
        attempt = vm.submit()
        if attempt.blocked_by_validation:
            for view in vm.field_views():
                if view.error:
                    print(f"{view.label}: {view.error}", file=sys.stderr)
            return 2
        if attempt.future is not None:
            attempt.future.result()
    finally:
        controller.shutdown()

    outcome = vm.outcome
    if outcome is None:
        print(vm.banner or "No response.", file=sys.stderr)
        return 1
    if outcome.kind is OutcomeKind.SUCCESS:
        print(vm.banner)
        return 0
    print(vm.banner, file=sys.stderr)
    for name, message in outcome.field_errors.items():
        print(f"{name}: {message}", file=sys.stderr)
    return 1


if __name__ == "__main__":
    sys.exit(main())
