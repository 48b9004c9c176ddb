"""Exception hierarchy for the lgssm package."""


class LGSSMError(Exception):
    """Base class for all exceptions raised by lgssm."""

    pass


class InvalidShapeError(ValueError, LGSSMError):
    """
    Raised at model construction when an input array has the wrong shape.

    Attributes
    ----------
    name : str
        Name of the offending argument (e.g. 'A', 'initial_state')
    expected : str
        Human-readable description of the expected shape
    actual : tuple
        Shape that was actually supplied
    """

    def __init__(self, name, expected, actual):
        self.name = name
        self.expected = expected
        self.actual = tuple(actual)
        super().__init__(f"`{name}` should be {expected}, got shape {self.actual}")


class SingularInnovationCovarianceError(ArithmeticError, LGSSMError):
    """
    Raised when the innovation covariance S = C P C' + R cannot be solved
    to the required tolerance during a Kalman update.
    """

    def __init__(self, message, condition_number=None):
        self.condition_number = condition_number
        super().__init__(message)


class ConfigError(ValueError, LGSSMError):
    """
    Raised when a configuration key or option value is not recognised
    (e.g. an unknown gain solver).
    """

    pass
