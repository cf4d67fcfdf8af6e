"""Shamir (K-of-N) secret sharing of byte strings over GF(256).

Every byte of the secret gets its own random polynomial of degree K-1
whose constant term is that byte.  A share is an x-coordinate together
with the value of every one of those polynomials at x.

API
---
ShamirSecret.encoder(k, secret)   -> session that can issue shares
ShamirSecret.decoder(k)           -> empty session, fill with recover_secret
split_secret(secret, n, k)        -> list of Share with x = 1..n
combine_shares(shares, k)         -> secret bytes   (needs >= k shares)

Shares carry no MAC.  With more than K shares, recovery detects shares
that do not lie on a common polynomial; with exactly K it cannot.
"""

from __future__ import annotations

import enum
import logging
import secrets
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

from gfshare.config import MAX_SHARE_X, MAX_THRESHOLD, MIN_THRESHOLD
from gfshare.crypto import lagrange, polynomial
from gfshare.errors import (
    AlreadyDecoded,
    InsufficientShares,
    InvalidThreshold,
    LengthMismatch,
    MalformedShares,
    NotInitialized,
    SharingError,
)

logger = logging.getLogger(__name__)

RandomSource = Callable[[int], bytes]


@dataclass(frozen=True)
class Share:
    """One evaluation point: ``fx[i]`` is f_i(x) for secret byte i."""

    x: int
    fx: bytes

    def __post_init__(self) -> None:
        polynomial.check_share_index(self.x)

    def to_hex(self) -> str:
        """Encode as hex of ``x || fx``."""
        return bytes([self.x]).hex() + bytes(self.fx).hex()

    @classmethod
    def from_hex(cls, hex_str: str) -> Share:
        """Decode ``to_hex`` output; a bad x raises ``InvalidShareIndex``."""
        raw = bytes.fromhex(hex_str)
        if not raw:
            raise MalformedShares("Share hex is empty")
        return cls(x=raw[0], fx=raw[1:])


class SessionState(enum.Enum):
    UNINITIALIZED = "uninitialized"
    ENCODING_READY = "encoding_ready"
    DECODED = "decoded"


class ShamirSecret:
    """Incremental secret sharing session.

    Built with a secret it is an encoder: coefficients are drawn at once
    and shares can be computed one at a time for any x.  Built without one
    it is a decoder: ``recover_secret`` fills in the secret and the full
    polynomials, after which it behaves like an encoder.

    Not safe for concurrent mutation; once the secret is set,
    ``compute_share`` and ``is_valid_share`` are pure reads.
    """

    def __init__(
        self,
        threshold: int,
        secretdata: Optional[bytes] = None,
        random_bytes: Optional[RandomSource] = None,
    ) -> None:
        if (
            isinstance(threshold, bool)
            or not isinstance(threshold, int)
            or not MIN_THRESHOLD <= threshold <= MAX_THRESHOLD
        ):
            raise InvalidThreshold(
                f"threshold must be in [{MIN_THRESHOLD}, {MAX_THRESHOLD}], not {threshold!r}"
            )
        self._threshold = threshold
        self._secretdata: Optional[bytes] = None
        # one polynomial per secret byte
        self._coefficients: Optional[List[List[int]]] = None
        self._state = SessionState.UNINITIALIZED

        if secretdata is not None:
            self._init_coefficients(bytes(secretdata), random_bytes or secrets.token_bytes)

    @classmethod
    def encoder(
        cls,
        threshold: int,
        secretdata: bytes,
        random_bytes: Optional[RandomSource] = None,
    ) -> ShamirSecret:
        """Session holding *secretdata*, ready to compute shares."""
        if secretdata is None:
            raise TypeError("encoder requires secretdata")
        return cls(threshold, secretdata, random_bytes)

    @classmethod
    def decoder(cls, threshold: int) -> ShamirSecret:
        """Empty session awaiting ``recover_secret``."""
        return cls(threshold)

    # ---- state ----

    @property
    def threshold(self) -> int:
        return self._threshold

    @property
    def secretdata(self) -> Optional[bytes]:
        return self._secretdata

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def coefficients(self) -> Optional[Tuple[Tuple[int, ...], ...]]:
        if self._coefficients is None:
            return None
        return tuple(tuple(poly) for poly in self._coefficients)

    def _init_coefficients(self, secretdata: bytes, random_bytes: RandomSource) -> None:
        n_random = self._threshold - 1
        coefficients: List[List[int]] = []
        for secret_byte in secretdata:
            # Fresh randomness per byte; bytes never share a polynomial.
            rand = random_bytes(n_random) if n_random else b""
            if len(rand) != n_random:
                raise ValueError(
                    f"random source returned {len(rand)} bytes, expected {n_random}"
                )
            coefficients.append([secret_byte] + list(rand))

        self._secretdata = secretdata
        self._coefficients = coefficients
        self._state = SessionState.ENCODING_READY
        logger.debug(
            "encoder session ready (threshold=%d, secret_len=%d)",
            self._threshold,
            len(secretdata),
        )

    # ---- shares ----

    def compute_share(self, x: int) -> Share:
        """Evaluate every per-byte polynomial at *x*."""
        if self._coefficients is None:
            raise NotInitialized("Must initialize coefficients before computing a share")
        polynomial.check_share_index(x)
        fx = bytes(polynomial.evaluate(poly, x) for poly in self._coefficients)
        return Share(x=x, fx=fx)

    def compute_shares(self, xs: Iterable[int]) -> List[Share]:
        return [self.compute_share(x) for x in xs]

    def is_valid_share(self, share: Share) -> bool:
        """True iff *share* is exactly what this session would compute at share.x.

        Raises when the session is empty or the share has the wrong length.
        """
        if self._coefficients is None:
            raise NotInitialized("Must initialize coefficients before checking a share")
        polynomial.check_share_index(share.x)
        if len(share.fx) != len(self._coefficients):
            raise LengthMismatch(
                f"share has {len(share.fx)} bytes, secret has {len(self._coefficients)}"
            )
        return self.compute_share(share.x).fx == bytes(share.fx)

    # ---- recovery ----

    def recover_secret(self, shares: Sequence[Share]) -> bytes:
        """Recover the secret and all coefficients from at least K shares.

        Shares repeating an x already seen are dropped (first one wins).
        Nothing is stored unless every byte position interpolates cleanly.
        """
        unique: List[Share] = []
        seen = set()
        for share in shares:
            polynomial.check_share_index(share.x)
            if share.x in seen:
                continue
            seen.add(share.x)
            unique.append(share)

        if len(unique) < self._threshold:
            raise InsufficientShares(
                f"threshold {self._threshold} is larger than the number of "
                f"unique shares ({len(unique)})"
            )
        if self._secretdata is not None:
            raise AlreadyDecoded("Session already holds a secret; use is_valid_share instead")

        secret_len = len(unique[0].fx)
        if any(len(share.fx) != secret_len for share in unique):
            raise MalformedShares("Shares have different lengths")

        xs = [share.x for share in unique]
        coefficients: List[List[int]] = []
        try:
            for pos in range(secret_len):
                fxs = [share.fx[pos] for share in unique]
                coefficients.append(lagrange.interpolate_checked(xs, fxs, self._threshold))
        except SharingError:
            logger.warning(
                "recovery failed at byte %d (threshold=%d, shares=%d)",
                len(coefficients),
                self._threshold,
                len(unique),
            )
            raise

        self._coefficients = coefficients
        self._secretdata = bytes(poly[0] for poly in coefficients)
        self._state = SessionState.DECODED
        logger.info(
            "recovered %d-byte secret from %d unique shares (threshold=%d)",
            secret_len,
            len(unique),
            self._threshold,
        )
        return self._secretdata


def split_secret(
    secret: bytes,
    n: int,
    k: int,
    random_bytes: Optional[RandomSource] = None,
) -> List[Share]:
    """Split *secret* into *n* shares with threshold *k*.

    Shares are issued at x = 1 … n.
    """
    if k < 1 or k > n:
        raise InvalidThreshold(f"Invalid threshold: k={k}, n={n}")
    if n > MAX_SHARE_X:
        raise ValueError(f"At most {MAX_SHARE_X} shares can be issued, not {n}")
    session = ShamirSecret.encoder(k, secret, random_bytes)
    return session.compute_shares(range(1, n + 1))


def combine_shares(shares: Sequence[Share], k: int) -> bytes:
    """Reconstruct the secret from *shares* (needs >= k unique ones)."""
    return ShamirSecret.decoder(k).recover_secret(shares)
