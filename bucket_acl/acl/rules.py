"""Predefined ACL rule aliases.

Each access list variant accepts its own set of predefined rules. A rule can
be given by its API spelling (``publicRead``) or by one of the snake_case
aliases (``public``, ``public_read``); both resolve to the API spelling.
"""

import logging
from types import MappingProxyType
from typing import Any, Mapping

logger = logging.getLogger(__name__)

AUTHENTICATED_READ = "authenticatedRead"
BUCKET_OWNER_FULL_CONTROL = "bucketOwnerFullControl"
BUCKET_OWNER_READ = "bucketOwnerRead"
PRIVATE = "private"
PROJECT_PRIVATE = "projectPrivate"
PUBLIC_READ = "publicRead"
PUBLIC_READ_WRITE = "publicReadWrite"


class RuleAliasTable:
    """Immutable alias -> canonical rule id lookup."""

    def __init__(self, name: str, rules: Mapping[str, str]):
        self.name = name
        self._rules = MappingProxyType(dict(rules))

    def resolve(self, alias: Any) -> str | None:
        """Returns the canonical rule id, or None if the alias is unknown."""
        return self._rules.get(str(alias))

    def rule_for(self, alias: Any) -> str:
        """Resolve an alias, passing unknown values through unchanged.

        The storage API is left to reject rule ids it does not know.
        """
        rule = self.resolve(alias)
        if rule is None:
            logger.warning(
                f"Unknown {self.name} rule {alias!r}, sending it to the API as-is"
            )
            return str(alias)
        return rule

    def canonical_rules(self) -> frozenset[str]:
        return frozenset(self._rules.values())

    def aliases(self) -> Mapping[str, str]:
        return self._rules

    def __contains__(self, alias: object) -> bool:
        return str(alias) in self._rules

    def __repr__(self) -> str:
        return f"RuleAliasTable({self.name!r}, rules={sorted(self.canonical_rules())})"


BUCKET_ACL_RULES = RuleAliasTable(
    "bucket ACL",
    {
        "authenticatedRead": AUTHENTICATED_READ,
        "auth": AUTHENTICATED_READ,
        "auth_read": AUTHENTICATED_READ,
        "authenticated": AUTHENTICATED_READ,
        "authenticated_read": AUTHENTICATED_READ,
        "private": PRIVATE,
        "projectPrivate": PROJECT_PRIVATE,
        "proj_private": PROJECT_PRIVATE,
        "project_private": PROJECT_PRIVATE,
        "publicRead": PUBLIC_READ,
        "public": PUBLIC_READ,
        "public_read": PUBLIC_READ,
        "publicReadWrite": PUBLIC_READ_WRITE,
        "public_write": PUBLIC_READ_WRITE,
    },
)

DEFAULT_ACL_RULES = RuleAliasTable(
    "default object ACL",
    {
        "authenticatedRead": AUTHENTICATED_READ,
        "auth": AUTHENTICATED_READ,
        "auth_read": AUTHENTICATED_READ,
        "authenticated": AUTHENTICATED_READ,
        "authenticated_read": AUTHENTICATED_READ,
        "bucketOwnerFullControl": BUCKET_OWNER_FULL_CONTROL,
        "owner_full": BUCKET_OWNER_FULL_CONTROL,
        "bucketOwnerRead": BUCKET_OWNER_READ,
        "owner_read": BUCKET_OWNER_READ,
        "private": PRIVATE,
        "projectPrivate": PROJECT_PRIVATE,
        "project_private": PROJECT_PRIVATE,
        "publicRead": PUBLIC_READ,
        "public": PUBLIC_READ,
        "public_read": PUBLIC_READ,
    },
)


def predefined_rule_for(alias: Any) -> str | None:
    return BUCKET_ACL_RULES.resolve(alias)


def predefined_default_rule_for(alias: Any) -> str | None:
    return DEFAULT_ACL_RULES.resolve(alias)
