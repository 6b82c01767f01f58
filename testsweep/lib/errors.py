"""
Exception types raised by the sweep driver.

Only ConfigError and DirectoryCreationError abort a sweep. LaunchError and
ArtifactWriteError are raised for a single run; the driver records them
against that run and moves on to the next combination.
"""


class SweepError(RuntimeError):
    """Base class for all sweep driver errors."""


class ConfigError(SweepError):
    """Sweep configuration could not be read or failed validation."""


class DirectoryCreationError(SweepError):
    """The artifact output directory could not be created."""

    def __init__(self, path, cause):
        self.path = path
        self.cause = cause
        super().__init__(f"Cannot create output directory {path}: {cause}")


class LaunchError(SweepError):
    """The test executable could not be started."""

    def __init__(self, executable, cause):
        self.executable = executable
        self.cause = cause
        super().__init__(f"Failed to launch {executable}: {cause}")


class ArtifactWriteError(SweepError):
    """An artifact file could not be created or written."""

    def __init__(self, path, cause):
        self.path = path
        self.cause = cause
        super().__init__(f"Cannot write artifact {path}: {cause}")
