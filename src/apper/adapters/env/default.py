"""Environment variable adapter.

Purpose
-------
Translate the process environment into flat settings keys. It forms the first
(lowest precedence) layer read by :func:`apper.core.load_settings`.

Key behaviours
--------------
* Captures every variable; there is no prefix filter.
* Treats ``__`` as a section delimiter (``Values__Name`` → ``Values:Name``) so
  variables line up with flattened JSON keys.
* Leaves values as strings.
"""

from __future__ import annotations

import os
from typing import Final, Mapping

from ...domain.settings import KEY_DELIMITER
from ...observability import log_debug

ENV_SECTION_DELIMITER: Final[str] = "__"


def normalize_env_key(name: str) -> str:
    """Return the settings key for environment variable *name*.

    Examples
    --------
    >>> normalize_env_key('Values__Name')
    'Values:Name'
    >>> normalize_env_key('PATH')
    'PATH'
    """

    return name.replace(ENV_SECTION_DELIMITER, KEY_DELIMITER)


class DefaultEnvLoader:
    """Load all environment variables as flat settings entries."""

    def __init__(self, *, environ: Mapping[str, str] | None = None) -> None:
        """Initialise the loader with a specific ``environ`` mapping for testability.

        Parameters
        ----------
        environ:
            Mapping to read from. Defaults to :data:`os.environ`.
        """

        self._environ = os.environ if environ is None else environ

    def load(self) -> dict[str, str]:
        """Return every variable keyed by its normalised settings key.

        Side Effects
        ------------
        Emits an ``env_variables_loaded`` debug event with the key count.

        Examples
        --------
        >>> loader = DefaultEnvLoader(environ={'Values__Name': 'demo', 'EMPTY': ''})
        >>> loader.load()
        {'Values:Name': 'demo', 'EMPTY': ''}
        """

        collected: dict[str, str] = {}
        for name, value in self._environ.items():
            if not name:
                continue
            collected[normalize_env_key(name)] = value
        log_debug("env_variables_loaded", layer="env", path=None, keys=len(collected))
        return collected
