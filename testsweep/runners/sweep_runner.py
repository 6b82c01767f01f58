"""
Sweep driver.

Invokes a test executable once for every combination of
{repetition} x {category} x {mode} x {flag} (plus any extra dimensions),
strictly one after another, and writes each run's stdout to its own
artifact file in the output directory.
"""

from datetime import datetime
from pathlib import Path
import logging
import time

from testsweep.lib.artifacts import (
    DEFAULT_TIMESTAMP_FORMAT,
    NAMING_INDEXED,
    NAMING_SCHEMES,
    artifact_name,
    ensure_output_dir,
    format_timestamp,
    open_artifact,
)
from testsweep.lib.dimensions import build_dimensions, count_runs, iter_runs
from testsweep.lib.errors import ArtifactWriteError, LaunchError
from testsweep.lib.process import build_env, invoke
from testsweep.lib.seed import DEFAULT_SEED_ENV_VAR, SystemSeedSource, seed_source_for
from testsweep.runners._base_runner import BaseRunner, RunResult, RunStatus, SweepResult

log = logging.getLogger(__name__)


class SweepRunner(BaseRunner):
    """Runs one sweep over an ordered list of dimensions."""

    def __init__(
        self,
        executable,
        output_dir,
        repetitions,
        dimensions,
        seed_source=None,
        seed_env_var=DEFAULT_SEED_ENV_VAR,
        naming=NAMING_INDEXED,
        timestamp_format=DEFAULT_TIMESTAMP_FORMAT,
        working_dir=None,
        clock=datetime.now,
    ):
        super().__init__()
        if repetitions < 1:
            raise ValueError(f"repetitions must be >= 1, got {repetitions}")
        if naming not in NAMING_SCHEMES:
            raise ValueError(f"Unknown naming scheme '{naming}', expected one of {NAMING_SCHEMES}")
        self.executable = executable
        self.output_dir = Path(output_dir)
        self.repetitions = repetitions
        self.dimensions = list(dimensions)
        self.seed_source = seed_source or SystemSeedSource()
        self.seed_env_var = seed_env_var
        self.naming = naming
        self.timestamp_format = timestamp_format
        self.working_dir = working_dir
        self.clock = clock

        self.seed = None
        self._env = None

    @property
    def total_runs(self) -> int:
        return count_runs(self.repetitions, self.dimensions)

    def plan(self):
        """Yield every run descriptor in execution order without running anything."""
        return iter_runs(self.repetitions, self.dimensions)

    def setup(self):
        ensure_output_dir(self.output_dir)
        # One seed per sweep, shared by every child
        self.seed = self.seed_source.next_seed()
        self._env = build_env(self.seed_env_var, self.seed)
        log.info(f"Sweep seed {self.seed_env_var}={self.seed}, {self.total_runs} runs into {self.output_dir}")

    def run(self) -> SweepResult:
        if self._env is None:
            raise RuntimeError("setup() must be called before run()")
        result = SweepResult(seed=self.seed, output_dir=self.output_dir, start_time=time.time())
        for descriptor in self.plan():
            result.runs.append(self.run_one(descriptor))
        result.end_time = time.time()
        log.info(f"Sweep summary: {result.summary()}")
        return result

    def run_one(self, descriptor) -> RunResult:
        """Invoke the executable for one combination. Never raises for per-run failures."""
        run = RunResult(descriptor=descriptor, start_time=time.time())
        print(f"Run {descriptor.label}", flush=True)

        # Timestamp is taken before launch, like the shell redirection it replaces
        name = artifact_name(descriptor, format_timestamp(self.clock(), self.timestamp_format), self.naming)
        try:
            run.artifact, fh = open_artifact(self.output_dir, name, self.naming)
        except ArtifactWriteError as e:
            log.error(str(e))
            run.status = RunStatus.WRITE_FAILED
            run.error_message = str(e)
            run.end_time = time.time()
            return run

        with fh:
            try:
                run.exit_code = invoke(self.executable, descriptor.args, self._env, fh, cwd=self.working_dir)
            except LaunchError as e:
                log.warning(f"{e} (run: {descriptor.label}, repetition {descriptor.repetition})")
                run.status = RunStatus.LAUNCH_FAILED
                run.error_message = str(e)

        if run.status == RunStatus.PENDING:
            if run.exit_code == 0:
                run.status = RunStatus.COMPLETED
            else:
                log.info(f"Run '{descriptor.label}' exited with status {run.exit_code}")
                run.status = RunStatus.NON_ZERO_EXIT
        run.end_time = time.time()
        log.debug(f"Run '{descriptor.label}' {run.status.value} in {run.duration_seconds:.1f}s")
        return run


def run_sweep(
    repetitions,
    categories,
    modes,
    flags,
    executable,
    output_dir,
    *,
    seed_source=None,
    seed_env_var=DEFAULT_SEED_ENV_VAR,
    naming=NAMING_INDEXED,
    timestamp_format=DEFAULT_TIMESTAMP_FORMAT,
    extra_dimensions=None,
    working_dir=None,
    clock=datetime.now,
) -> SweepResult:
    """
    Run a full sweep and return its results.

    Every combination is attempted even when runs fail to launch, exit
    non-zero or cannot write their artifact.

    Raises:
        DirectoryCreationError: output_dir cannot be created. Nothing is run.
        ValueError: repetitions < 1 or an empty dimension.
    """
    runner = SweepRunner(
        executable=executable,
        output_dir=output_dir,
        repetitions=repetitions,
        dimensions=build_dimensions(categories, modes, flags, extra_dimensions),
        seed_source=seed_source,
        seed_env_var=seed_env_var,
        naming=naming,
        timestamp_format=timestamp_format,
        working_dir=working_dir,
        clock=clock,
    )
    return runner.execute()


def runner_from_config(config, seed_source=None) -> SweepRunner:
    """Build a SweepRunner from a validated SweepConfig."""
    return SweepRunner(
        executable=config.executable,
        output_dir=config.output_dir,
        repetitions=config.repetitions,
        dimensions=build_dimensions(config.categories, config.modes, config.flags, config.extra_dimensions),
        seed_source=seed_source or seed_source_for(config.seed),
        seed_env_var=config.seed_env_var,
        naming=config.naming,
        timestamp_format=config.timestamp_format,
        working_dir=config.working_dir,
    )
