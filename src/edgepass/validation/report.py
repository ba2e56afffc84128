from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class RuleResult:
    """Outcome of one compliance rule on a generated photo."""
    rule_id: str
    passed: bool
    message: str
    metrics: dict[str, Any] | None = None


@dataclass(frozen=True)
class ValidationReport:
    standard: str
    results: list[RuleResult] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return all(r.passed for r in self.results)

    def failures(self) -> list[RuleResult]:
        return [r for r in self.results if not r.passed]
