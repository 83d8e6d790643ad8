class ConfigurationError(Exception):
    """
    Raised when an entity's rule spec is broken: an unknown rule name, or a
    rule given a parameter it does not take (or missing one it needs).

    Never reported as a field error; it aborts the request.
    """
