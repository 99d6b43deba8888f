import hashlib
import logging
from typing import Any

# Create the library logger
logger = logging.getLogger("twitchantic")

# Add NullHandler to prevent "No handlers could be found" warnings
# if the application doesn't configure logging.
logger.addHandler(logging.NullHandler())


def redact_token(value: Any) -> str:
    """
    Redacts credentials and cursors for logging.
    Hashes the value so log lines can be correlated without revealing it.
    """
    if value is None:
        return "<none>"
    try:
        return hashlib.sha256(str(value).encode("utf-8")).hexdigest()[:8]
    except Exception:
        return "<redaction_failed>"
