"""
Base runner interface and common data structures.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional
import time
import logging

from testsweep.lib.dimensions import RunDescriptor

log = logging.getLogger(__name__)


class RunStatus(Enum):
    """Outcome of a single run."""

    PENDING = "pending"
    COMPLETED = "completed"
    NON_ZERO_EXIT = "non_zero_exit"
    LAUNCH_FAILED = "launch_failed"
    WRITE_FAILED = "write_failed"


@dataclass
class RunResult:
    """
    Result of one invocation of the test executable.

    Holds only what the driver observed: exit code and artifact path. The
    artifact content is never inspected.
    """

    descriptor: RunDescriptor
    status: RunStatus = RunStatus.PENDING
    start_time: float = 0.0
    end_time: float = 0.0
    exit_code: Optional[int] = None
    artifact: Optional[Path] = None
    error_message: Optional[str] = None

    @property
    def duration_seconds(self) -> float:
        return self.end_time - self.start_time

    @property
    def succeeded(self) -> bool:
        return self.status == RunStatus.COMPLETED


@dataclass
class SweepResult:
    """All run results of one sweep plus the seed they shared."""

    seed: int
    output_dir: Path
    runs: List[RunResult] = field(default_factory=list)
    start_time: float = 0.0
    end_time: float = 0.0

    @property
    def duration_seconds(self) -> float:
        return self.end_time - self.start_time

    def count(self, status: RunStatus) -> int:
        return sum(1 for r in self.runs if r.status == status)

    def summary(self) -> Dict[str, int]:
        return {
            "total": len(self.runs),
            "completed": self.count(RunStatus.COMPLETED),
            "non_zero_exit": self.count(RunStatus.NON_ZERO_EXIT),
            "launch_failed": self.count(RunStatus.LAUNCH_FAILED),
            "write_failed": self.count(RunStatus.WRITE_FAILED),
        }

    @property
    def all_succeeded(self) -> bool:
        return all(r.succeeded for r in self.runs)

    def failed_runs(self) -> List[RunResult]:
        return [r for r in self.runs if not r.succeeded]


class BaseRunner(ABC):
    """
    Abstract base class for runners.

    Runners follow a lifecycle:
    1. setup() - Prepare the environment (output directory, seed)
    2. run() - Execute the sweep
    3. teardown() - Release anything setup() acquired

    execute() orchestrates the lifecycle. Errors raised by setup() are fatal
    and propagate to the caller.
    """

    @abstractmethod
    def setup(self):
        """Prepare the environment before the sweep. Raise on fatal problems."""
        pass

    @abstractmethod
    def run(self) -> SweepResult:
        """Execute every run and return the collected results."""
        pass

    def teardown(self):
        """Cleanup after the sweep. Artifacts must outlive the runner, so the default does nothing."""
        return True

    def execute(self) -> SweepResult:
        """
        Full execution lifecycle: setup -> run -> teardown.

        Returns:
            SweepResult from run()
        """
        start_time = time.time()
        log.info(f"Setting up {self.__class__.__name__}...")
        self.setup()

        try:
            log.info(f"Running {self.__class__.__name__}...")
            result = self.run()
            log.info(f"{self.__class__.__name__} finished in {time.time() - start_time:.1f}s")
            return result
        finally:
            log.info(f"Tearing down {self.__class__.__name__}...")
            try:
                self.teardown()
            except Exception as e:
                log.warning(f"Teardown error (non-fatal): {e}")
