"""
Domain exceptions for the feature aggregation engine.

Routers translate these into HTTP responses (see dengue_watch.main); the
engine itself never catches them.
"""


class DengueWatchError(Exception):
    """Base class for all domain errors raised by this package."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(DengueWatchError, ValueError):
    """
    Malformed request input: area code, ISO week, week filter or years.

    Always surfaced to the caller, never retried.
    """

    status_code = 400


class InvalidAggregationInput(DengueWatchError, ValueError):
    """
    A weekly statistic received data it cannot aggregate.

    Raised for None, empty, oversized (> 7) or non-finite samples. The
    offending argument is available as ``parameter``.
    """

    status_code = 422

    def __init__(self, message: str, parameter: str):
        super().__init__(f"{message} (parameter: {parameter})")
        self.parameter = parameter


class NotFoundError(DengueWatchError):
    """A single-week snapshot was requested but the week lacks 7 observations."""

    status_code = 404


class AggregationCancelled(DengueWatchError):
    """A bulk run was cancelled; no partial result is returned."""

    status_code = 503
