"""Error kinds raised by the sharing core.

Everything a caller can trigger with bad input derives from
``SharingError`` (itself a ``ValueError``).  ``DivisionByZero`` is kept
apart: upstream validation makes it unreachable, so seeing it means a bug.
"""

from __future__ import annotations


class SharingError(ValueError):
    """Base class for user-facing secret sharing failures."""


class InvalidThreshold(SharingError):
    """Threshold outside [MIN_THRESHOLD, MAX_THRESHOLD]."""


class InvalidShareIndex(SharingError):
    """Share x-coordinate outside [MIN_SHARE_X, MAX_SHARE_X]."""


class NotInitialized(SharingError):
    """Session has no coefficients yet (decoder before a recovery)."""


class AlreadyDecoded(SharingError):
    """Recovery attempted on a session that already holds a secret."""


class InsufficientShares(SharingError):
    """Fewer unique shares than the threshold."""


class MalformedShares(SharingError):
    """Shares disagree on the length of their ``fx`` payload."""


class LengthMismatch(SharingError):
    """Share payload length differs from the session's secret length."""


class InconsistentShares(SharingError):
    """Redundant shares do not lie on one polynomial of degree < threshold."""


CannotDecode = InconsistentShares


class DivisionByZero(ZeroDivisionError):
    """Inversion of zero in GF(256)."""
