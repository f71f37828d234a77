import os

LOG_LEVEL = os.getenv("AUTOACK_LOG_LEVEL", "INFO").upper()

# Strict mode rejects addresses that do not look like `local@host.tld`
# before they reach the decision engine.
STRICT_ADDRESSES = os.getenv("AUTOACK_STRICT_ADDRESSES", "1").lower() not in ("0", "false", "no")

HISTORY_LIMIT = int(os.getenv("AUTOACK_HISTORY_LIMIT", "10"))

CORS_ORIGINS = [o.strip() for o in os.getenv("AUTOACK_CORS_ORIGINS", "*").split(",") if o.strip()]
