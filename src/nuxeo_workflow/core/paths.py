"""Path helpers for building REST resource paths."""

import re

_SEPARATOR_RUN = re.compile(r"/{2,}")


def join(*segments: object) -> str:
    """Join path segments with ``/`` and collapse duplicate separators.

    Segments are converted with ``str()`` and are not validated, so a missing
    id produces a path such as ``task/None/approve``.

    Example:
        >>> join("task", "42", "approve")
        'task/42/approve'
        >>> join("task/", "/42")
        'task/42'
    """
    return _SEPARATOR_RUN.sub("/", "/".join(str(segment) for segment in segments))
