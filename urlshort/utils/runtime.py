"""Runtime utilities

Functions:
    running_locally() -> bool:
        True if lambda is running in local SAM, False otherwise.

    request_deadline(context) -> float | None:
        Seconds left for storage calls before the invocation times out.

Example:
    >>> from urlshort.utils.runtime import running_locally
    >>> os.environ['APP_ENV'] = 'local'
    >>> running_locally()
    True
"""

import os

from urlshort.types import LambdaContext
from urlshort.utils.constants import APP_ENV_ENV, AWS_SAM_LOCAL_ENV, DEADLINE_MARGIN_SECONDS


def running_locally() -> bool:
    """Check if the lambda is running locally via sam local invoke

    Returns:
        bool: True if running locally, False otherwise.
    """
    env = os.getenv(APP_ENV_ENV, '').lower()
    return env == 'local' or os.getenv(AWS_SAM_LOCAL_ENV) == 'true'


def request_deadline(context: LambdaContext) -> float | None:
    """Return the time budget (in seconds) left for a blocking storage call

    The value is meant to be used as a socket timeout, so that a storage
    round-trip is aborted before the Lambda runtime kills the invocation.

    Args:
        context (LambdaContext):
            AWS Lambda context object. Contexts without
            `get_remaining_time_in_millis()` (tests, local runs) have no deadline.

    Returns:
        float | None:
            Remaining seconds minus a small safety margin (never below the
            margin itself), or None when the context carries no deadline.

    Example:
        >>> context.get_remaining_time_in_millis()
        3000
        >>> request_deadline(context)
        2.75
    """
    remaining = getattr(context, 'get_remaining_time_in_millis', None)
    if not callable(remaining):
        return None

    seconds = remaining() / 1000 - DEADLINE_MARGIN_SECONDS
    return max(seconds, DEADLINE_MARGIN_SECONDS)
