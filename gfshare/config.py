"""Global configuration for gfshare."""

import os

# ---------- GF(256) definition ----------
# Rijndael polynomial x^8 + x^4 + x^3 + x + 1.  Shares are only portable
# between deployments that agree on both values below.
FIELD_POLYNOMIAL = 0x11B
FIELD_GENERATOR = 0x03
FIELD_ORDER = 256

# ---------- Share indices ----------
# x = 0 would hand out the secret byte itself.
MIN_SHARE_X = 1
MAX_SHARE_X = 254

# ---------- Threshold ----------
MIN_THRESHOLD = 1
MAX_THRESHOLD = 255
DEFAULT_THRESHOLD = 2   # K
DEFAULT_NUM_SHARES = 4  # N (demo / split_secret callers)

# ---------- Dealer service (used by the demo) ----------
DEALER_URL = os.environ.get("GFSHARE_DEALER_URL", "http://localhost:9200")
LOG_LEVEL = os.environ.get("GFSHARE_LOG_LEVEL", "INFO")
