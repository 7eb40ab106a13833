"""
Service-level exceptions.

Data-quality problems in user-entered records are tolerated by the services
and never raised. The exceptions here signal caller bugs: arguments that
violate a function's contract.
"""

class CycleEngineError(Exception):
    """Base exception for the cycle engine."""
    pass

class ContractViolationError(CycleEngineError, ValueError):
    """Raised when a caller passes an argument outside a function's contract."""
    pass

class InvalidCycleLengthError(ContractViolationError):
    """Raised when a cycle length of zero or less is supplied."""
    pass

class InvalidDayInCycleError(ContractViolationError):
    """Raised when a day-within-cycle below 1 is supplied."""
    pass

class InvalidPredictionCountError(ContractViolationError):
    """Raised when zero or fewer predictions are requested."""
    pass

class InvalidCycleRecordError(ContractViolationError):
    """Raised when a stored record has no usable period start date."""
    pass
