"""Platform abstraction layer: subprocesses and files."""

from .files import append_line, atomic_write_text
from .process import ProcessError, merged_env, run, which

__all__ = [
    # files
    "append_line",
    "atomic_write_text",
    # process
    "ProcessError",
    "merged_env",
    "run",
    "which",
]
