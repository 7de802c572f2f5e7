"""
Normalize pagination parameters of queries

Functions
---------
- `get_int`: Convert a value to an integer with a lower bound
- `resolve_limit`: Number of rows per page
- `resolve_page`: Page number
"""
import math
from typing import Any, Callable, Final, Optional


DEFAULT_LIMIT: Final[int] = 20
"""Number of rows per page if not specified"""


def _is_numeric(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    if isinstance(value, float):
        return math.isfinite(value)
    if isinstance(value, str):
        # float() accepts digit separators such as "1_000"
        if "_" in value:
            return False
        try:
            return math.isfinite(float(value.strip()))
        except ValueError:
            return False
    return False

def get_int(value: Any, minimum: Optional[int] = None) -> int:
    """Convert a value to an integer

    Parameters
    ----------
    value : Any
        Value to convert, non-numeric values are regarded as 0
    minimum : int, optional
        Lower bound of the result

    Returns
    -------
    int
        Converted value (fractions are truncated)

    Examples
    --------
    >>> get_int("7.9")
    7
    >>> get_int(None, 1)
    1
    >>> get_int(-3, 1)
    1
    """
    if not _is_numeric(value):
        number = 0
    elif isinstance(value, int):
        number = value
    else:
        number = int(float(value))

    if minimum is not None and number < minimum:
        number = minimum
    return number

def resolve_limit(limit: Any = None,
                  post_process: Optional[Callable[[int], int]] = None) -> int:
    """Number of rows per page

    Parameters
    ----------
    limit : Any, optional
        Requested limit, `DEFAULT_LIMIT` is used if not numeric
    post_process : Callable[[int], int], optional
        Function to override the resolved limit

    Returns
    -------
    int
        Limit (1 or more, unless overridden by `post_process`)
    """
    if not _is_numeric(limit):
        limit = DEFAULT_LIMIT

    resolved = get_int(limit, 1)
    if post_process is not None:
        resolved = post_process(resolved)
    return resolved

def resolve_page(page: Any = None) -> int:
    """Page number (1 or more)"""
    return get_int(page, 1)
