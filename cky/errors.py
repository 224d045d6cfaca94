

class CkyError(Exception):
    """ Base class for all cky errors"""
    pass

class CkyLoadError(CkyError):
    """ Raised when a pattern registration or a pattern cannot be loaded"""
    pass

class CkySyntaxError(CkyError):
    """ Raised when source text cannot be tokenized or parsed"""

class CkyUnboundSymbol(CkyError):
    """ Raised when an identifier is looked up before it is bound"""

class CkyArityError(CkyError):
    """ Raised when the number of arguments passed to a function is incorrect"""

class CkyTypeError(CkyError):
    """ Raised when the types of arguments passed to a function are incorrect,
    or when a non-callable value appears in function position"""

class CkyRecursionError(CkyError):
    """ Raised when evaluation nests deeper than the configured ceiling"""

class CkyRefcountError(CkyError):
    """ Raised when a value is released more often than it was acquired"""


class ExitRequested(Exception):
    """Control flow raised by (exit); carries the owned exit value.

    Not an error: the interpreter boundary turns it into a stop outcome.
    """

    def __init__(self, value):
        super().__init__("exit requested")
        self.value = value
