import dataclasses
import re
from typing import Any, Optional

from constructs import Node

import constants

_ACCOUNT_ID_PATTERN = re.compile(r"^\d{12}$")


class ConfigurationError(ValueError):
    """Raised when a stack set parameter is missing or malformed."""

    def __init__(self, message: str, config_key: Optional[str] = None):
        super().__init__(message)
        self.config_key = config_key


@dataclasses.dataclass(frozen=True)
class StackSetConfig:
    """Parameters identifying the principal allowed to assume the role.

    The principal is the SSO user session of a role in the organization
    management account:
    arn:aws:sts::<org account>:assumed-role/<role name>/<sso user>
    """

    org_account: str
    role_name: str
    sso_user: str

    def __post_init__(self) -> None:
        for field, context_key in (
            ("org_account", constants.ORG_ACCOUNT_CONTEXT_KEY),
            ("role_name", constants.ROLE_NAME_CONTEXT_KEY),
            ("sso_user", constants.SSO_USER_CONTEXT_KEY),
        ):
            value = getattr(self, field)
            if not isinstance(value, str) or not value.strip():
                raise ConfigurationError(
                    f"{context_key} must be a non-empty string", config_key=context_key
                )
        if not _ACCOUNT_ID_PATTERN.match(self.org_account):
            raise ConfigurationError(
                f"{constants.ORG_ACCOUNT_CONTEXT_KEY} must be a 12 digit AWS account"
                f" ID, got {self.org_account!r}",
                config_key=constants.ORG_ACCOUNT_CONTEXT_KEY,
            )

    @property
    def assumed_role_arn(self) -> str:
        return (
            f"arn:aws:sts::{self.org_account}:assumed-role/"
            f"{self.role_name}/{self.sso_user}"
        )

    @classmethod
    def from_context(cls, node: Node) -> "StackSetConfig":
        return cls(
            org_account=_get_context(node, constants.ORG_ACCOUNT_CONTEXT_KEY),
            role_name=_get_context(node, constants.ROLE_NAME_CONTEXT_KEY),
            sso_user=_get_context(node, constants.SSO_USER_CONTEXT_KEY),
        )


def _get_context(node: Node, key: str) -> str:
    value: Any = node.try_get_context(key)
    if value is None:
        raise ConfigurationError(
            f"Missing context value {key}, pass it with `cdk synth -c {key}=<value>`",
            config_key=key,
        )
    # Values from cdk.json keep their JSON type, account IDs may be numbers.
    return str(value)
