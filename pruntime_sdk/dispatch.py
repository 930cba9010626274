"""
Exit-code protocol for console operations.

Operations return plain values or an Outcome; ``dispatch`` is the only place
where results and exceptions are turned into a process exit status.
"""
import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

from .exceptions import EnvelopeError, PRuntimeError, SubmitError

EXIT_OK = 0
EXIT_FAILURE = -1

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Outcome:
    """Terminal result of one console operation"""
    exit_code: int
    value: Any = None
    message: Optional[str] = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.exit_code == EXIT_OK

    @classmethod
    def success(cls, value: Any = None) -> "Outcome":
        return cls(exit_code=EXIT_OK, value=value)

    @classmethod
    def failure(cls, message: str, error: Optional[BaseException] = None, value: Any = None) -> "Outcome":
        return cls(exit_code=EXIT_FAILURE, value=value, message=message, error=error)


def describe_error(error: BaseException) -> str:
    """Build the diagnostic line printed for a failed operation."""
    message = f"{type(error).__name__}: {error}"
    if isinstance(error, EnvelopeError) and error.response is not None:
        message += f"\nRaw response: {error.response!r}"
    if isinstance(error, SubmitError) and error.detail is not None:
        message += f"\nChain detail: {error.detail!r}"
    return message


def dispatch(operation: Callable[..., Any], *args: Any, **kwargs: Any) -> Outcome:
    """
    Run an operation and map its result to an Outcome

    Args:
        operation: Callable returning a value or an Outcome
        *args: Positional arguments for the operation
        **kwargs: Keyword arguments for the operation

    Returns:
        The operation's Outcome, a success wrapping its value, or a failure
        describing the exception it raised
    """
    name = getattr(operation, "__name__", repr(operation))
    # Failures are reported through the Outcome, so logging stays at debug
    try:
        result = operation(*args, **kwargs)
    except PRuntimeError as e:
        logger.debug(f"{name} failed: {e}")
        return Outcome.failure(describe_error(e), error=e)
    except Exception as e:
        logger.debug(f"{name} failed with an unexpected error", exc_info=True)
        return Outcome.failure(describe_error(e), error=e)

    if isinstance(result, Outcome):
        return result
    return Outcome.success(result)
