"""
Requirement Models

Shared data types for requirement validation.
"""

from dataclasses import dataclass
from typing import Awaitable, Callable, List, Tuple, Union


CheckFunction = Callable[[], Union[str, Awaitable[str]]]


@dataclass(frozen=True)
class RequirementCheck:
    """
    A named check verifying one precondition of the environment.

    ``run`` returns the fulfilled message (directly or as an awaitable) and
    raises when the requirement is not met. The exception text becomes the
    unfulfilled message.
    """
    title: str
    run: CheckFunction


@dataclass(frozen=True)
class CheckOutcome:
    """Settled result of a single requirement check."""
    title: str
    passed: bool
    message: str
    duration: float

    @property
    def status(self) -> str:
        return "Passed" if self.passed else "Failed"

    def __str__(self) -> str:
        return f"[{self.status}] {self.title}: {self.message}"


@dataclass(frozen=True)
class SetupTestResult:
    """Outcomes of a requirement run, in registration order."""
    outcomes: Tuple[CheckOutcome, ...] = ()

    @property
    def all_passed(self) -> bool:
        """True if every check passed."""
        return all(o.passed for o in self.outcomes)

    @property
    def failures(self) -> List[CheckOutcome]:
        return [o for o in self.outcomes if not o.passed]

    @property
    def total_duration(self) -> float:
        """Sum of the individual check durations, in seconds."""
        return sum(o.duration for o in self.outcomes)

    def summary(self) -> str:
        """Get summary string."""
        total = len(self.outcomes)
        passed = total - len(self.failures)
        status = "PASSED" if self.all_passed else "FAILED"
        return f"{status}: {passed}/{total} requirements met"
