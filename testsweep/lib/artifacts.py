"""
Artifact naming and creation.

An artifact holds the captured stdout of exactly one run. Names are built
from the run's tokens and a second-granularity timestamp, e.g.
``correct_undef_jumpOct19_14_03_59_r1``.
"""

import logging
from datetime import datetime
from pathlib import Path

from testsweep.lib.errors import ArtifactWriteError, DirectoryCreationError

log = logging.getLogger(__name__)

DEFAULT_TIMESTAMP_FORMAT = "%b%d_%H_%M_%S"

NAMING_INDEXED = "indexed"
NAMING_TIMESTAMP = "timestamp"
NAMING_SCHEMES = (NAMING_INDEXED, NAMING_TIMESTAMP)


def format_timestamp(when: datetime, fmt: str = DEFAULT_TIMESTAMP_FORMAT) -> str:
    return when.strftime(fmt)


def artifact_name(descriptor, timestamp: str, naming: str = NAMING_INDEXED) -> str:
    """
    Build the artifact file name for one run.

    ``timestamp`` naming reproduces ``{category}_{mode}_{flag}{timestamp}``
    and can collide when two repetitions of the same combination land in the
    same second. ``indexed`` naming appends the repetition index.
    """
    if naming not in NAMING_SCHEMES:
        raise ValueError(f"Unknown naming scheme '{naming}', expected one of {NAMING_SCHEMES}")
    name = "_".join(descriptor.args) + timestamp
    if naming == NAMING_INDEXED:
        name += f"_r{descriptor.repetition}"
    return name


def ensure_output_dir(path) -> Path:
    """Create the output directory if needed. Existing contents are left alone."""
    path = Path(path)
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise DirectoryCreationError(path, e) from e
    if not path.is_dir():
        raise DirectoryCreationError(path, "path exists and is not a directory")
    return path


def open_artifact(output_dir, name: str, naming: str = NAMING_INDEXED):
    """
    Open a new artifact file for binary writing and return ``(path, file)``.

    With timestamp naming an existing file of the same name is truncated,
    matching plain shell redirection. Indexed naming never overwrites: a
    numeric suffix is added until the name is free.
    """
    output_dir = Path(output_dir)
    path = output_dir / name
    try:
        if naming == NAMING_TIMESTAMP:
            if path.exists():
                log.warning(f"Artifact {path} already exists and will be overwritten")
            return path, open(path, "wb")

        suffix = 0
        while True:
            try:
                return path, open(path, "xb")
            except FileExistsError:
                suffix += 1
                path = output_dir / f"{name}.{suffix}"
    except (OSError, ValueError) as e:
        # open() raises ValueError for names with an embedded NUL byte
        raise ArtifactWriteError(path, e) from e
