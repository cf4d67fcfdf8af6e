#!/usr/bin/env python3
"""gfshare end-to-end demo.

Usage (with a dealer running, e.g. ``uvicorn gfshare.dealer.app:app --port 9200``):
    python -m gfshare.demo.run_demo

The script:
1. Creates an encoder session for the secret b"sec" with threshold 2.
2. Computes shares at x = 1, 2, 3, 4.
3. Recovers the secret from every pair of shares in fresh decoder sessions.
4. Recovers from all four shares (degree-consistency check passes).
5. Tampers with one share and shows that 3 shares catch it, 2 do not.
6. Validates shares against a decoded session.
"""

from __future__ import annotations

import itertools
import logging
import sys

import httpx

from gfshare.config import DEALER_URL, DEFAULT_NUM_SHARES, DEFAULT_THRESHOLD, LOG_LEVEL
from gfshare.crypto.shamir import Share

SECRET = bytes([115, 101, 99])  # b"sec"


def banner(msg: str) -> None:
    print(f"\n{'='*60}")
    print(f"  {msg}")
    print(f"{'='*60}")


def _new_session(client: httpx.Client, secret: bytes | None = None) -> str:
    body = {"threshold": DEFAULT_THRESHOLD}
    if secret is not None:
        body["secret_hex"] = secret.hex()
    resp = client.post("/sessions", json=body)
    resp.raise_for_status()
    return resp.json()["session_id"]


def _recover(client: httpx.Client, shares: list) -> httpx.Response:
    sid = _new_session(client)
    return client.post(f"/sessions/{sid}/recover", json={"shares": shares})


def _flip_first_byte(share_hex: str) -> str:
    share = Share.from_hex(share_hex)
    fx = bytearray(share.fx)
    fx[0] ^= 0x01
    return Share(share.x, bytes(fx)).to_hex()


def main() -> None:
    logging.basicConfig(level=LOG_LEVEL)
    client = httpx.Client(base_url=DEALER_URL, timeout=15.0)

    # ---- 1. Encoder ----
    banner("1) Create encoder session")
    encoder = _new_session(client, SECRET)
    print(f"   session_id = {encoder}")

    # ---- 2. Shares ----
    banner(f"2) Compute {DEFAULT_NUM_SHARES} shares")
    resp = client.post(
        f"/sessions/{encoder}/shares",
        json={"xs": list(range(1, DEFAULT_NUM_SHARES + 1))},
    )
    resp.raise_for_status()
    shares = resp.json()["shares"]
    for s in shares:
        print(f"   {s}")

    # ---- 3. Every pair ----
    banner(f"3) Recover from every {DEFAULT_THRESHOLD}-subset")
    ok = True
    for subset in itertools.combinations(shares, DEFAULT_THRESHOLD):
        resp = _recover(client, list(subset))
        secret = bytes.fromhex(resp.json()["secret_hex"])
        match = secret == SECRET
        ok = ok and match
        xs = [Share.from_hex(s).x for s in subset]
        print(f"   xs={xs} → {list(secret)}  {'✓' if match else '✗'}")

    # ---- 4. All shares ----
    banner("4) Recover from all shares")
    resp = _recover(client, shares)
    print(f"   HTTP {resp.status_code}: {resp.json()}")
    ok = ok and resp.status_code == 200

    # ---- 5. Tampering ----
    banner("5) Tamper with one share")
    tampered = [_flip_first_byte(shares[0])] + shares[1:]
    resp = _recover(client, tampered[: DEFAULT_THRESHOLD + 1])
    print(f"   {DEFAULT_THRESHOLD + 1} shares → HTTP {resp.status_code}: {resp.json()}")
    resp = _recover(client, tampered[:DEFAULT_THRESHOLD])
    print(f"   {DEFAULT_THRESHOLD} shares → HTTP {resp.status_code}: {resp.json()}")

    # ---- 6. Validate against a decoded session ----
    banner("6) Validate shares against a decoded session")
    decoder = _new_session(client)
    client.post(
        f"/sessions/{decoder}/recover", json={"shares": shares[:DEFAULT_THRESHOLD]}
    ).raise_for_status()
    for s in (shares[-1], tampered[0]):
        resp = client.post(f"/sessions/{decoder}/validate", json={"share_hex": s})
        print(f"   {s} → valid={resp.json()['valid']}")

    if not ok:
        sys.exit(1)


if __name__ == "__main__":
    main()
