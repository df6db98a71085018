"""Application-wide exceptions."""


class ConfigurationError(Exception):
    """Raised for fatal configuration or programming errors.

    Examples are a duplicate repository transform within one organization or
    a URL that cannot be built from upstream data. These are never retried
    and never folded into an empty schedule.
    """

    pass
