import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Union

from touchy.core.applier import TimestampApplier, TouchOutcome, TouchStatus
from touchy.core.config import TouchConfig
from touchy.core.resolver import TimestampResolver
from touchy.utils.logger import get_logger


# ============================================================================
# Touch Report
# ============================================================================


@dataclass
class TouchReport:
    """Outcomes of one invocation, in command-line order."""

    outcomes: List[TouchOutcome] = field(default_factory=list)

    @property
    def all_succeeded(self) -> bool:
        return all(outcome.succeeded for outcome in self.outcomes)

    @property
    def failures(self) -> List[TouchOutcome]:
        return [outcome for outcome in self.outcomes if outcome.status is TouchStatus.FAILED]

    def count(self, status: TouchStatus) -> int:
        return sum(1 for outcome in self.outcomes if outcome.status is status)


# ============================================================================
# Toucher
# ============================================================================


class Toucher:
    """Main orchestrator: resolves the stamp source once, then touches each path in order."""

    def __init__(
        self,
        config: TouchConfig,
        resolver: Optional[TimestampResolver] = None,
        applier: Optional[TimestampApplier] = None,
    ):
        """
        Initialize toucher with configuration.

        Args:
            config: Touch configuration
            resolver: Stamp source resolver
            applier: Per-file timestamp applier
        """
        self.config = config
        self.resolver = resolver or TimestampResolver()
        self.applier = applier or TimestampApplier()
        self.logger = get_logger()

    def touch(self, paths: Iterable[Union[str, os.PathLike]]) -> TouchReport:
        """
        Touch every path.

        Configuration errors raise before any file is opened. Per-file errors
        are recorded in the report and processing continues.

        Args:
            paths: Target paths in command-line order

        Returns:
            TouchReport with one outcome per path
        """
        source = self.resolver.resolve(self.config)
        fields = self.config.effective_fields

        report = TouchReport()
        for path in paths:
            outcome = self.applier.apply(
                Path(path),
                source,
                fields,
                create=self.config.create,
                follow_symlinks=self.config.follow_symlinks,
            )
            report.outcomes.append(outcome)

        self.logger.debug(
            f"Touched {report.count(TouchStatus.APPLIED)} file(s), "
            f"skipped {report.count(TouchStatus.SKIPPED)}, failed {report.count(TouchStatus.FAILED)}"
        )
        return report
