"""Tests for fileroute.auth — the per-route auth gate."""

from fileroute.auth import AuthDecision, AuthGate


class TestAuthGate:
    def test_no_rule_always_allows(self) -> None:
        assert AuthGate().check(None) is AuthDecision.ALLOW
        assert AuthGate(lambda rule: False).check(None) is AuthDecision.ALLOW

    def test_predicate_receives_raw_rule(self) -> None:
        seen: list[str] = []

        def predicate(rule: str) -> bool:
            seen.append(rule)
            return True

        assert AuthGate(predicate).check("role:admin") is AuthDecision.ALLOW
        assert seen == ["role:admin"]

    def test_predicate_deny(self) -> None:
        gate = AuthGate(lambda rule: rule != "admin_only")
        assert gate.check("admin_only") is AuthDecision.DENY
        assert gate.check("public") is AuthDecision.ALLOW

    def test_truthy_result_allows(self) -> None:
        assert AuthGate(lambda rule: "yes").check("x") is AuthDecision.ALLOW  # type: ignore[arg-type, return-value]
        assert AuthGate(lambda rule: 0).check("x") is AuthDecision.DENY  # type: ignore[arg-type, return-value]

    def test_missing_predicate_fails_closed(self) -> None:
        assert AuthGate().check("admin_only") is AuthDecision.DENY

    def test_missing_predicate_fail_open(self) -> None:
        assert AuthGate(fail_open=True).check("admin_only") is AuthDecision.ALLOW
