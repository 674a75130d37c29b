"""
Core Utilities

Shared helpers used across the package.
"""
import re
from datetime import datetime, timezone


def utcnow() -> datetime:
    """
    Return timezone-aware UTC datetime.

    Use this instead of datetime.utcnow() which returns naive datetime.
    """
    return datetime.now(timezone.utc)


def sanitize_for_logging(text: str, max_length: int = 500) -> str:
    """
    Remove credentials from text for safe logging.

    Args:
        text: Text that may contain tokens or client secrets
        max_length: Maximum length of result

    Returns:
        Sanitized text safe for logging
    """
    if not text:
        return ""

    sanitized = text[:max_length]

    # Patterns to redact
    patterns = [
        # Authorization header values
        (r'\b(Bearer|Basic)\s+[A-Za-z0-9._~+/=-]+', r'\1 [REDACTED]'),
        # JSON / form encoded secrets
        (r'("?(?:access_token|refresh_token|client_secret|client_id)"?\s*[:=]\s*"?)[^"&,\s}]+', r'\1[REDACTED]'),
    ]

    for pattern, replacement in patterns:
        sanitized = re.sub(pattern, replacement, sanitized, flags=re.IGNORECASE)

    return sanitized
