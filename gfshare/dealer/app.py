"""Dealer FastAPI application.

A thin HTTP wrapper around ``ShamirSecret`` sessions kept in memory.
Secrets travel hex-encoded; shares travel in the ``Share.to_hex`` form.

Endpoints:
- POST   /sessions                 – create an encoder (secret given) or decoder
- GET    /sessions/{id}            – threshold and lifecycle state
- POST   /sessions/{id}/shares     – compute shares at the given x values
- POST   /sessions/{id}/validate   – check one share against the session
- POST   /sessions/{id}/recover    – recover the secret from shares
- DELETE /sessions/{id}            – forget a session
- GET    /health
"""

from __future__ import annotations

import logging
import threading
import uuid
from typing import Dict, List, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from gfshare.config import MAX_THRESHOLD, MIN_THRESHOLD
from gfshare.crypto.shamir import ShamirSecret, Share
from gfshare.errors import AlreadyDecoded, NotInitialized, SharingError

logger = logging.getLogger(__name__)

# ------ request models (module-level for Pydantic / FastAPI compat) ------


class CreateSessionRequest(BaseModel):
    threshold: int = Field(ge=MIN_THRESHOLD, le=MAX_THRESHOLD)
    secret_hex: Optional[str] = None


class ShareModel(BaseModel):
    share_hex: str  # Share.to_hex(): x byte followed by fx


class ComputeSharesRequest(BaseModel):
    xs: List[int]


class RecoverRequest(BaseModel):
    shares: List[str]


def _unhex(value: str) -> bytes:
    try:
        return bytes.fromhex(value)
    except ValueError:
        raise HTTPException(400, f"Invalid hex: {value!r}")


def _parse_share(share_hex: str) -> Share:
    try:
        return Share.from_hex(share_hex)
    except ValueError as exc:
        raise HTTPException(400, f"Invalid share {share_hex!r}: {exc}")


class _Entry:
    """A session plus the lock that serializes its mutations.

    ``recover`` is a sync handler, so FastAPI runs it in its threadpool and
    two recoveries on one session can race without this lock.
    """

    def __init__(self, session: ShamirSecret) -> None:
        self.session = session
        self.lock = threading.Lock()


class DealerState:
    """Per-dealer mutable state."""

    def __init__(self) -> None:
        self.sessions: Dict[str, _Entry] = {}


def create_app(state: DealerState | None = None) -> FastAPI:
    """Factory that creates a dealer app (fresh state unless *state* is given)."""
    if state is None:
        state = DealerState()

    app = FastAPI(title="gfshare Dealer")

    def _get(session_id: str) -> _Entry:
        entry = state.sessions.get(session_id)
        if entry is None:
            raise HTTPException(404, "Unknown session")
        return entry

    def _http_error(exc: SharingError) -> HTTPException:
        if isinstance(exc, (NotInitialized, AlreadyDecoded)):
            return HTTPException(409, str(exc))
        return HTTPException(400, str(exc))

    @app.post("/sessions")
    async def create_session(req: CreateSessionRequest):
        if req.secret_hex is None:
            session = ShamirSecret.decoder(req.threshold)
        else:
            session = ShamirSecret.encoder(req.threshold, _unhex(req.secret_hex))
        session_id = uuid.uuid4().hex
        state.sessions[session_id] = _Entry(session)
        logger.info(
            "created session %s (threshold=%d, state=%s)",
            session_id,
            session.threshold,
            session.state.value,
        )
        return {"session_id": session_id, "state": session.state.value}

    @app.get("/sessions/{session_id}")
    async def describe_session(session_id: str):
        session = _get(session_id).session
        return {
            "session_id": session_id,
            "threshold": session.threshold,
            "state": session.state.value,
        }

    @app.post("/sessions/{session_id}/shares")
    async def compute_shares(session_id: str, req: ComputeSharesRequest):
        session = _get(session_id).session
        try:
            shares = session.compute_shares(req.xs)
        except SharingError as exc:
            raise _http_error(exc)
        return {"shares": [s.to_hex() for s in shares]}

    @app.post("/sessions/{session_id}/validate")
    async def validate_share(session_id: str, req: ShareModel):
        session = _get(session_id).session
        share = _parse_share(req.share_hex)
        try:
            valid = session.is_valid_share(share)
        except SharingError as exc:
            raise _http_error(exc)
        return {"valid": valid}

    @app.post("/sessions/{session_id}/recover")
    def recover(session_id: str, req: RecoverRequest):
        entry = _get(session_id)
        shares = [_parse_share(s) for s in req.shares]
        with entry.lock:
            try:
                secret = entry.session.recover_secret(shares)
            except SharingError as exc:
                raise _http_error(exc)
        return {"secret_hex": secret.hex(), "state": entry.session.state.value}

    @app.delete("/sessions/{session_id}")
    async def delete_session(session_id: str):
        removed = state.sessions.pop(session_id, None) is not None
        return {"session_id": session_id, "status": "deleted" if removed else "not_found"}

    @app.get("/health")
    async def health():
        return {"status": "ok", "sessions": len(state.sessions)}

    return app


app = create_app()
