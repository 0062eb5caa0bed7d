"""
Requirements Engine

Runs requirement checks concurrently and collects every outcome.
"""

import asyncio
import inspect
import logging
import time
from collections.abc import Sequence
from typing import Iterable, List, Optional

from rich.console import Console

from .models import CheckOutcome, RequirementCheck, SetupTestResult
from .report import render_report


class RequirementsEngine:
    """
    Runs a batch of requirement checks and reports on all of them.

    Checks are started together and each is settled into a CheckOutcome
    before the join, so one failing check never hides the others. The
    returned result keeps registration order, not completion order.
    """

    def __init__(
        self,
        requirements: Optional[Iterable[RequirementCheck]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize the engine.

        Args:
            requirements: Checks to register up front
            logger: Logger used for per-check debug output
        """
        self.requirements: List[RequirementCheck] = list(requirements or [])
        self.logger = logger or logging.getLogger(__name__)

    def add_requirements(self, requirements: Iterable[RequirementCheck]) -> None:
        """Register additional checks after the existing ones."""
        if requirements:
            self.requirements.extend(requirements)

    async def execute_setup(
        self,
        checks: Optional[Sequence] = None,
        console: Optional[Console] = None,
    ) -> SetupTestResult:
        """
        Run all checks and wait for every one of them to settle.

        Args:
            checks: Checks to run; defaults to the registered requirements
            console: If given, the report tree is printed to it

        Returns:
            SetupTestResult with one outcome per check

        Raises:
            TypeError, ValueError: If the check list is malformed. Raised
                before any check starts.
        """
        if checks is None:
            checks = self.requirements
        self._validate(checks)

        outcomes = await asyncio.gather(*(self._settle(check) for check in checks))
        result = SetupTestResult(outcomes=tuple(outcomes))
        self.logger.debug(result.summary())

        if console is not None:
            render_report(result, console)
        return result

    async def _settle(self, check: RequirementCheck) -> CheckOutcome:
        """Run one check, converting any failure into an outcome."""
        start = time.perf_counter()
        try:
            value = check.run()
            if inspect.isawaitable(value):
                value = await value
            passed, message = True, str(value)
        except Exception as e:
            passed, message = False, str(e) or type(e).__name__
        duration = time.perf_counter() - start

        self.logger.debug(
            "Requirement '%s' %s in %.3f sec: %s",
            check.title,
            "passed" if passed else "failed",
            duration,
            message,
        )
        return CheckOutcome(
            title=check.title,
            passed=passed,
            message=message,
            duration=duration,
        )

    @staticmethod
    def _validate(checks) -> None:
        if isinstance(checks, (str, bytes)) or not isinstance(checks, Sequence):
            raise TypeError(
                f"Requirement checks must be a sequence, got {type(checks).__name__}"
            )

        seen = set()
        for i, check in enumerate(checks):
            if not isinstance(check, RequirementCheck):
                raise TypeError(
                    f"Item {i} is not a RequirementCheck: {type(check).__name__}"
                )
            if not callable(check.run):
                raise TypeError(f"Requirement '{check.title}' has no callable run")
            if check.title in seen:
                raise ValueError(f"Duplicate requirement title: {check.title}")
            seen.add(check.title)
