"""Process exit codes returned by every command handler."""

from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    """Result of a handler, forwarded verbatim as the process exit code.

    Examples
    --------
    >>> int(ExitCode.FAIL)
    1
    """

    SUCCESS = 0
    FAIL = 1
