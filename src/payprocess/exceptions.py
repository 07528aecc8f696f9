"""
payprocess exception hierarchy
"""


class PaymentProcessError(Exception):
    """payprocess base exception"""

    pass


class ProcessStateError(PaymentProcessError, RuntimeError):
    """Raised when a call is not legal for the process's current state"""

    def __init__(self, message: str, state=None):
        self.state = state
        super().__init__(message)


class InvalidSavedStateError(PaymentProcessError, ValueError):
    """Saved state or its packed flags could not be decoded"""

    pass


class MissingParameterError(PaymentProcessError, ValueError):
    """A request could not be built from the current parameters"""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"{name} is null or empty")


class UnsupportedMoneySourceError(PaymentProcessError, ValueError):
    """The selected money source cannot fund this kind of process"""

    def __init__(self, money_source, process: str):
        self.money_source = money_source
        super().__init__(
            f"{type(money_source).__name__} cannot be used by {process}"
        )
