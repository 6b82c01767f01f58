"""
Child process invocation for sweep runs.

The child's stdout goes straight into the artifact file handle. stderr is
inherited from the driver. There is no timeout: a hung child hangs the
sweep, just like the shell loop it replaces.
"""

import logging
import os
import subprocess

from testsweep.lib.errors import LaunchError

log = logging.getLogger(__name__)


def build_env(seed_env_var, seed, base=None):
    """Copy the parent environment (or ``base``) and export the sweep seed."""
    env = dict(os.environ if base is None else base)
    env[seed_env_var] = str(seed)
    return env


def build_command(executable, args):
    return [str(executable)] + [str(a) for a in args]


def invoke(executable, args, env, stdout, cwd=None) -> int:
    """
    Run ``executable args...`` to completion and return its exit code.

    Raises:
        LaunchError: the program could not be started.
    """
    cmd = build_command(executable, args)
    log.debug(f"cmd = {' '.join(cmd)} (cwd={cwd or os.getcwd()})")
    try:
        completed = subprocess.run(cmd, stdout=stdout, env=env, cwd=cwd, check=False)
    except (OSError, ValueError) as e:
        # ValueError: embedded NUL byte in the command line or environment
        raise LaunchError(executable, e) from e
    return completed.returncode
