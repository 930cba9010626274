"""
Exceptions for the pRuntime SDK.
"""
from typing import Any, Optional


class PRuntimeError(Exception):
    """Base exception for all pRuntime console errors."""
    pass


class TransportError(PRuntimeError):
    """Raised when the enclave runtime or the chain node cannot be reached."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class EnvelopeError(PRuntimeError):
    """Raised when the enclave runtime answers with a non-ok envelope."""

    def __init__(self, message: str, response: Any = None):
        self.response = response
        super().__init__(message)


class FormatError(PRuntimeError, ValueError):
    """Raised when user input cannot be encoded for a contract."""
    pass


class SubmitError(PRuntimeError):
    """
    Raised when a command cannot be signed or is rejected by the chain.

    Side effects may already be pending on-chain when this is raised after
    submission.
    """

    def __init__(self, message: str, state: Optional[str] = None, detail: Any = None):
        self.state = state
        self.detail = detail
        super().__init__(message)
