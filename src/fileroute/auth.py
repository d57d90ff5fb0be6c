"""Per-route authorization gate.

A route's ``@auth`` rule is an opaque token. The router never interprets
it; it hands it to a predicate registered once at startup and takes the
answer as-is.

Predicates that need the request (headers, client address) read it from
:func:`fileroute.context.get_request`, which is task-local::

    from fileroute.context import get_request

    def check(rule: str) -> bool:
        token = get_request().headers.get("authorization")
        return rule == "admin_only" and token == "Bearer s3cr3t"

    app.set_auth_handler(check)
"""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import TypeAlias

AuthPredicate: TypeAlias = Callable[[str], bool]


class AuthDecision(Enum):
    ALLOW = "allow"
    DENY = "deny"


@dataclass(frozen=True, slots=True)
class AuthGate:
    """Decides allow/deny for a matched route's auth rule.

    Attributes:
        predicate: The registered check, or ``None`` if none was set.
        fail_open: With no predicate, allow routes that declare a rule.
            Off by default: an ``@auth`` route without a predicate is denied.
    """

    predicate: AuthPredicate | None = None
    fail_open: bool = False

    def check(self, auth_rule: str | None) -> AuthDecision:
        if auth_rule is None:
            return AuthDecision.ALLOW
        if self.predicate is None:
            return AuthDecision.ALLOW if self.fail_open else AuthDecision.DENY
        return AuthDecision.ALLOW if self.predicate(auth_rule) else AuthDecision.DENY
