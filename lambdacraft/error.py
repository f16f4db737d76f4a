"""Error handling for lambdacraft. Combinators only raise LambdaCraftErrors for violated preconditions: anything raised
inside a caller-supplied function value propagates untouched. ErrorHandler is offered to host programs that want the
errors reported instead of a Python traceback.
"""

import logging
import sys

from termcolor import colored

logger = logging.getLogger(__name__)


class LambdaCraftError(Exception):
    """Templates an error message. exprs are the offending values; they are substituted into msg (plain in str(),
    highlighted when reported through ErrorHandler). A tuple holds one value per placeholder, anything else is a
    single value: wrap values that may themselves be tuples, e.g. (length,).
    """

    def __init__(self, msg, exprs=None, operation=None):
        if exprs is None:
            exprs = ()
        elif not isinstance(exprs, tuple):
            exprs = (exprs,)

        self.template = msg
        self.exprs = exprs
        self.operation = operation  # combinator that raised, used as message prefix
        self.msg = self.render()
        super().__init__(self.msg)

    def render(self, highlight=None):
        """Formats the template, passing every expr through highlight (if given)."""
        exprs = (repr(expr) for expr in self.exprs)
        if highlight is not None:
            exprs = (highlight(expr) for expr in exprs)
        msg = self.template.format(*exprs)
        return f"{self.operation}: {msg}" if self.operation else msg


class InvalidArgument(LambdaCraftError, ValueError):
    """Bad length, undersized destination buffer, or malformed setting."""


class NonTerminatingTraversal(LambdaCraftError):
    """Linked sequence did not reach the empty marker within the safety bound."""

    def __init__(self, msg, exprs=None, operation=None, steps=0):
        self.steps = steps
        super().__init__(msg, exprs, operation)


class OutOfMemory(LambdaCraftError, MemoryError):
    """Allocation failed while building a new linked sequence. Nodes built before the failure were released."""

    def __init__(self, msg, exprs=None, operation=None, released=0):
        self.released = released
        super().__init__(msg, exprs, operation)


class ErrorHandler:
    """Context manager that reports errors raised in its block instead of letting them produce a traceback."""
    ERROR = "red"
    WARNING = "magenta"

    def __init__(self, fatal=True, stream=None):
        self.fatal = fatal
        self.stream = stream
        self.errors = []  # errors reported (and suppressed) while non-fatal

    @staticmethod
    def diagnose(error, warning=False):
        """Returns error's message with the offending values highlighted and bolded."""
        color = ErrorHandler.WARNING if warning else ErrorHandler.ERROR
        return error.render(lambda expr: colored(expr, color, attrs=["bold"]))

    def _print(self, msg):
        print(msg, file=self.stream if self.stream is not None else sys.stdout)

    def warn(self, *args, **kwargs):
        """Generates and prints warning message based on args (same signature as LambdaCraftError)."""
        error = LambdaCraftError(*args, **kwargs)
        logger.warning(error.msg)
        self._print(colored("warning: ", ErrorHandler.WARNING, attrs=["bold"]) + ErrorHandler.diagnose(error, True))

    def throw(self, error, internal=False):
        """Reports error, then exits if fatal. error must be a LambdaCraftError."""
        error_msg = ""
        if internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])
        error_msg += colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + ErrorHandler.diagnose(error)
        self._print(error_msg)

        if self.fatal:
            sys.exit(1)
        self.errors.append(error)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None or exc_type is SystemExit:
            return False

        logger.debug("reporting %s", exc_type.__name__, exc_info=(exc_type, exc_val, exc_tb))
        if exc_type is KeyboardInterrupt:
            self.throw(LambdaCraftError("keyboard interrupt"))
        elif exc_type is RecursionError:
            self.throw(LambdaCraftError("maximum recursion depth exceeded inside a function value"))
        elif issubclass(exc_type, LambdaCraftError):
            self.throw(exc_val)
        else:
            self.throw(LambdaCraftError("unknown error: {}", f"{exc_type.__name__}: {exc_val}"), internal=True)
        return True
