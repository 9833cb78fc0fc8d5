"""Typed results produced by a coverage run."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from covgate.model.types import CheckType


@dataclass(frozen=True, slots=True)
class CheckResult:
    """Outcome of evaluating one coverage threshold.

    Fields
    ------
    type:
        Which threshold this result evaluates.
    coverage:
        Measured percentage (0..100), or ``None`` when it could not be determined.
    min_required:
        Configured threshold for this check.
    output:
        Raw diff-cover report; only populated for new-code checks.
    """

    type: CheckType
    coverage: float | None
    min_required: float
    output: str | None = None

    @property
    def passed(self) -> bool:
        return self.coverage is not None and self.coverage >= self.min_required

    @classmethod
    def for_overall(cls, coverage: float | None, min_required: float) -> CheckResult:
        return cls(type=CheckType.OVERALL, coverage=coverage, min_required=min_required)

    @classmethod
    def for_new_code(cls, coverage: float | None, min_required: float, output: str) -> CheckResult:
        return cls(type=CheckType.NEW_CODE, coverage=coverage, min_required=min_required, output=output)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "type": self.type.value,
            "coverage": self.coverage,
            "min_required": self.min_required,
            "passed": self.passed,
        }
        if self.output is not None:
            data["output"] = self.output
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CheckResult:
        """Create a :class:`CheckResult` from a dictionary.

        ``passed`` is ignored if present; it is always derived from the numbers.
        Percentages outside 0..100 raise :class:`ValueError`.
        """
        coverage = data.get("coverage")
        output = data.get("output")
        result = cls(
            type=CheckType(str(data["type"])),
            coverage=None if coverage is None else float(coverage),
            min_required=float(data["min_required"]),
            output=None if output is None else str(output),
        )
        for field_name, value in (("coverage", result.coverage), ("min_required", result.min_required)):
            if value is not None and not 0 <= value <= 100:  # noqa: PLR2004
                msg = f"{field_name} must be between 0 and 100, got {value}"
                raise ValueError(msg)
        return result


@dataclass(frozen=True, slots=True)
class RepositoryContext:
    """Identity of the repository and pull request a report is published to."""

    owner: str
    name: str
    pull_request_id: int | None = None

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"

    @classmethod
    def from_full_name(cls, full_name: str, pull_request_id: int | None = None) -> RepositoryContext:
        owner, sep, name = full_name.strip().partition("/")
        if not sep or not owner or not name or "/" in name:
            msg = f"repository must look like 'owner/name', got {full_name!r}"
            raise ValueError(msg)
        return cls(owner=owner, name=name, pull_request_id=pull_request_id)


__all__ = ["CheckResult", "RepositoryContext"]
