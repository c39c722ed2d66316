class StepwiseError(Exception):
    """ Base class for all stepwise errors"""
    pass

class StepwiseSyntaxError(StepwiseError):
    """ Raised for malformed source text or malformed special forms"""

class StepwiseTypeError(StepwiseError):
    """ Raised when a struct accessor receives a value of the wrong struct type"""

    def __init__(self, message: str, expected: str | None = None, actual=None):
        super().__init__(message)
        self.expected = expected
        self.actual = actual

class EvaluationCancelled(StepwiseError):
    """ Raised when an in-flight stepping session is invalidated by a new prepare"""
