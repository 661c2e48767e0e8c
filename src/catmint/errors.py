"""
Error taxonomy for catmint.

Every failure propagates to the caller unchanged.  Remote rejections keep
the node's payload on the exception so callers can inspect it.
"""

from __future__ import annotations

from typing import Any, Optional


class CatmintError(RuntimeError):
    """Base class for catmint failures; exit_code is the CLI process status."""

    exit_code: int = 1


class NetworkError(CatmintError):
    """Endpoint unreachable, timed out, or returned a non-JSON reply."""

    exit_code = 2


class KeyDerivationError(CatmintError):
    """Missing, malformed, or wiped key material."""

    exit_code = 3


class RemoteError(CatmintError):
    """Failure reported by the remote node."""

    def __init__(
        self,
        message: str,
        result: Optional[Any] = None,
        response: Optional[dict] = None,
    ) -> None:
        super().__init__(message)
        self.result = result
        self.response = response


class InsufficientFundsError(RemoteError):
    exit_code = 4


class TransactionRejectedError(RemoteError):
    exit_code = 5


def classify_remote_error(
    message: str,
    result: Optional[Any] = None,
    response: Optional[dict] = None,
) -> RemoteError:
    """Pick the error class for a message reported by the node.

    The node reports both bank-level (sdk code 5) and contract-level
    shortages as text containing "insufficient funds".
    """
    if "insufficient funds" in message.lower():
        return InsufficientFundsError(message, result=result, response=response)
    return TransactionRejectedError(message, result=result, response=response)
