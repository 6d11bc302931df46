"""Secret redaction utility for safe logging of USPS traffic.

USPS Web Tools authenticates by a ``USERID`` attribute on the request
root element, so request traces carry the credential inline. Uses
case-insensitive substring matching for sensitive key detection and
handles nested dicts and lists of dicts as produced by xmltodict.
"""

import re

# Substring patterns matched case-insensitively against dict keys
_DEFAULT_SENSITIVE_PATTERNS = frozenset({
    "userid", "user_id", "password", "secret", "token", "authorization",
})

_REDACTED = "***REDACTED***"


def _is_sensitive_key(key: str, sensitive_patterns: frozenset[str]) -> bool:
    """Check if a key matches any sensitive pattern (case-insensitive substring)."""
    key_lower = key.lower()
    return any(pattern in key_lower for pattern in sensitive_patterns)


def redact_for_logging(
    obj: dict,
    sensitive_patterns: frozenset[str] = _DEFAULT_SENSITIVE_PATTERNS,
) -> dict:
    """Redact sensitive values from a dict for safe logging.

    Args:
        obj: Dict to redact (not mutated; a copy is returned).
        sensitive_patterns: Substring patterns whose matching keys' values
            should be replaced. Matching is case-insensitive.

    Returns:
        New dict with sensitive values replaced by '***REDACTED***'.
        Attribute keys such as xmltodict's ``@USERID`` are matched too.
    """
    result = {}
    for key, value in obj.items():
        if _is_sensitive_key(key, sensitive_patterns):
            result[key] = _REDACTED
        elif isinstance(value, dict):
            result[key] = redact_for_logging(value, sensitive_patterns)
        elif isinstance(value, list):
            result[key] = [
                redact_for_logging(item, sensitive_patterns) if isinstance(item, dict) else item
                for item in value
            ]
        else:
            result[key] = value
    return result


# Credential-looking fragments in free text: XML attributes
# (USERID="abc"), XML elements (<Password>x</Password>) and key=value.
_SENSITIVE_KEYWORDS = r"userid|user_id|password"
_SENSITIVE_VALUE_PATTERNS = re.compile(
    r"(?i)"
    r"(?:"
    r"(?:" + _SENSITIVE_KEYWORDS + r")\s*=\s*\"[^\"]*\""
    r"|"
    r"<(" + _SENSITIVE_KEYWORDS + r")>[^<]*</\1>"
    r"|"
    r"(?:" + _SENSITIVE_KEYWORDS + r")\s*[=:]\s*[^\s&\"<>]+"
    r")",
)


def sanitize_message(msg: str | None, max_length: int = 2000) -> str | None:
    """Redact credential-looking fragments from text and truncate it.

    Args:
        msg: Text to sanitize (None passes through).
        max_length: Maximum length of the sanitized text.

    Returns:
        Sanitized and truncated text, or None.
    """
    if msg is None:
        return None
    sanitized = _SENSITIVE_VALUE_PATTERNS.sub(_REDACTED, msg)
    if len(sanitized) > max_length:
        sanitized = sanitized[:max_length - 3] + "..."
    return sanitized
