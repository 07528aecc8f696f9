"""Payment utility functions."""


def normalize_code(raw):
    """
    Normalize a raw wire code to lower snake case.

    Args:
        raw: Code as received from the API (may be None or any case)

    Returns:
        str: Normalized code, '' when nothing was supplied
    """
    if raw is None:
        return ""
    return str(raw).strip().lower().replace("-", "_")


def parse_status(raw):
    """
    Map a raw status to :class:`~payprocess.payment.methods.Status`.

    Unrecognised values become ``Status.UNKNOWN`` so a new server status is
    treated as terminal instead of breaking parsing.
    """
    from ..payment.methods import Status

    if isinstance(raw, Status):
        return raw

    code = normalize_code(raw)
    for status in Status:
        if status.value == code:
            return status
    return Status.UNKNOWN


def parse_error(raw):
    """
    Map a raw error code to :class:`~payprocess.payment.methods.Error`.

    Returns None when the response carries no error at all.
    """
    from ..payment.methods import Error

    if raw is None or isinstance(raw, Error):
        return raw

    code = normalize_code(raw)
    if not code:
        return None
    for error in Error:
        if error.value == code:
            return error
    return Error.UNKNOWN
