from covgate.model.results import CheckResult, RepositoryContext
from covgate.model.types import FULL_COVERAGE, CheckType

__all__ = ["FULL_COVERAGE", "CheckResult", "CheckType", "RepositoryContext"]
