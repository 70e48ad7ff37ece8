"""Login and signup form definitions.

A :class:`FormDefinition` bundles the schema with the endpoint path and the
user-facing messages the result interpreter needs. Both schemas reference the
same CNIC rule object and the same ``min_length`` factory for passwords.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from .schema import FieldSpec, FormSchema
from .validators import (
    AGE_RULE,
    CNIC_RULE,
    EMAIL_RULE,
    MOBILE_RULE,
    min_length,
    not_blank,
)

LOGIN_PASSWORD_MIN = 2
SIGNUP_PASSWORD_MIN = 6

LOGIN_PASSWORD_RULE = min_length(LOGIN_PASSWORD_MIN, "Enter Correct Password")
SIGNUP_PASSWORD_RULE = min_length(
    SIGNUP_PASSWORD_MIN, f"Password must be at least {SIGNUP_PASSWORD_MIN} characters."
)
NAME_RULE = min_length(3, "Name must be at least 3 characters.")
ADDRESS_RULE = not_blank("Address is required.")


def cnic_field(*, numeric: bool) -> FieldSpec:
    return FieldSpec(
        name="cnicNumber",
        label="CNIC Number",
        constraints=(CNIC_RULE,),
        numeric=numeric,
    )


LOGIN_SCHEMA = FormSchema(
    name="login",
    fields=(
        cnic_field(numeric=False),
        FieldSpec(name="password", label="Password", constraints=(LOGIN_PASSWORD_RULE,)),
    ),
)

SIGNUP_SCHEMA = FormSchema(
    name="signup",
    fields=(
        FieldSpec(name="name", label="Full Name", constraints=(NAME_RULE,)),
        FieldSpec(name="age", label="Candidate Age", constraints=(AGE_RULE,), numeric=True),
        cnic_field(numeric=True),
        FieldSpec(name="password", label="Password", constraints=(SIGNUP_PASSWORD_RULE,)),
        FieldSpec(name="mobile", label="Mobile Number", constraints=(MOBILE_RULE,)),
        FieldSpec(name="email", label="Email", constraints=(EMAIL_RULE,)),
        FieldSpec(name="address", label="Address", constraints=(ADDRESS_RULE,)),
    ),
)


@dataclass(frozen=True)
class FormDefinition:
    """Endpoint descriptor and message catalogue for one submission workflow.

    Attributes:
        name: Short workflow name used in logs.
        schema: Field schema validated before any request.
        path: Endpoint path appended to the API base URL.
        success_message: Banner text after a successful submission.
        failure_message: Fallback text when the service gives no usable message.
        conflict_message: Text for HTTP 409 (identity already registered).
        message_keys: Error body keys searched, in order, for a server message.
        token_field: Success body key holding the session token, if any.
    """

    name: str
    schema: FormSchema
    path: str
    success_message: str
    failure_message: str
    conflict_message: str = "User already exists!"
    message_keys: Tuple[str, ...] = ("message", "error")
    token_field: Optional[str] = None

    @property
    def persists_token(self) -> bool:
        return bool(self.token_field)


LOGIN_FORM = FormDefinition(
    name="login",
    schema=LOGIN_SCHEMA,
    path="/user/login",
    success_message="Login Successful.",
    failure_message="Login failed! Try again.",
    message_keys=("message", "error"),
    token_field="token",
)

SIGNUP_FORM = FormDefinition(
    name="signup",
    schema=SIGNUP_SCHEMA,
    path="/user/signup",
    success_message="User successfully signed up!",
    failure_message="Can't Signup, try again!",
    message_keys=("error", "message"),
)


__all__ = [
    "FormDefinition",
    "LOGIN_FORM",
    "LOGIN_SCHEMA",
    "SIGNUP_FORM",
    "SIGNUP_SCHEMA",
]
