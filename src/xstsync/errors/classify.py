"""Single classification point turning raised errors into ErrorInfo."""

from __future__ import annotations

from xstsync.models import ErrorInfo

from .exceptions import error_code_of, is_network_error


def classify_error(exc: BaseException) -> ErrorInfo:
    """
    Classify an exception raised while executing one item.

    Connection-class failures (see NETWORK_ERROR_CODES) are marked as network
    errors; everything else is scoped to the item.
    """
    network = is_network_error(exc)
    code = error_code_of(exc)
    message = str(exc) or exc.__class__.__name__
    if network and code and code not in message:
        message = f"{message} ({code})"

    return ErrorInfo(
        message=message,
        is_network_error=network,
        error_type=exc.__class__.__name__,
        code=code if network else None,
    )
