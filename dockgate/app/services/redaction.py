from __future__ import annotations

import re

# IPv4 address followed by a port. Octets are matched syntactically (0-999),
# not validated against 0-255.
IP_PORT_RE = re.compile(r"\b(?:\d{1,3}\.){3}\d{1,3}:\d{1,5}\b")
REDACTED = "[REDACTED]"


def redact(text: str) -> str:
    """
    Mask every `IPv4:port` occurrence in `text`.

    Args:
        text: Arbitrary log text.

    Returns:
        The same text with each non-overlapping match replaced by `[REDACTED]`.
    """

    return IP_PORT_RE.sub(REDACTED, text)
