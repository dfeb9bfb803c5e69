"""
SEA Catering API - Security Utilities.

Input sanitisation, format validation and password rules for user-supplied
text that ends up stored or echoed back.
"""

import re
from typing import Tuple


XSS_PATTERNS = [
    re.compile(r"<script[^>]*>.*?</script>", re.IGNORECASE | re.DOTALL),
    re.compile(r"<iframe[^>]*>.*?</iframe>", re.IGNORECASE | re.DOTALL),
    re.compile(r"javascript:", re.IGNORECASE),
    re.compile(r"on\w+\s*=", re.IGNORECASE),
    re.compile(r"<img[^>]*src[^>]*>", re.IGNORECASE),
    re.compile(r"<[^>]*javascript[^>]*>", re.IGNORECASE),
    re.compile(r"data:text/html", re.IGNORECASE),
    re.compile(r"vbscript:", re.IGNORECASE),
]

# Characters each restricted kind of field may not keep. Free text (allergy
# notes, testimonials) only loses markup characters.
_KIND_STRIP = {
    "phone": re.compile(r"[^0-9\s()\-+]"),
    "name": re.compile(r"[^\w\s\-']"),
}

_MARKUP = re.compile(r"[<>\"]")


def validate_password_strength(password: str) -> Tuple[bool, str]:
    """
    Validate password strength requirements.

    Requirements:
    - Minimum 6 characters

    Args:
        password: Password string to validate.

    Returns:
        Tuple[bool, str]: (is_valid, error_message)
            - is_valid: True if password meets requirements
            - error_message: Empty if valid, description of issue if invalid

    Example:
        >>> validate_password_strength("abc")
        (False, 'Password must be at least 6 characters long')
        >>> validate_password_strength("secret1")
        (True, '')
    """
    if len(password) < 6:
        return False, "Password must be at least 6 characters long"

    return True, ""


def is_valid_phone(phone: str) -> bool:
    """Accept phone numbers carrying 10 to 15 digits once punctuation is removed."""
    digits = re.sub(r"\D", "", phone)
    return 10 <= len(digits) <= 15


def contains_xss(value: str) -> bool:
    """Return True when the value matches a known script-injection pattern."""
    return any(pattern.search(value) for pattern in XSS_PATTERNS)


def sanitize_input(value: str, kind: str = "text") -> str:
    """
    Sanitize user input before it is validated and stored.

    The value is trimmed and stripped of markup characters. Phone numbers and
    names are further reduced to the characters allowed for their kind; any
    other kind (free text such as allergy notes) keeps its punctuation and
    non-ASCII letters.

    Example:
        >>> sanitize_input("  (555) 123-4567 ", "phone")
        '(555) 123-4567'
        >>> sanitize_input("Café staff: no nuts; shellfish & dairy", "allergies")
        'Café staff: no nuts; shellfish & dairy'
    """
    if not value:
        return ""

    sanitized = _MARKUP.sub("", value.strip())
    pattern = _KIND_STRIP.get(kind)
    return pattern.sub("", sanitized) if pattern else sanitized
