"""Email shape validation."""

import re

EMAIL_MIN_LENGTH = 3
EMAIL_MAX_LENGTH = 254

# Local part of up to 64 allowed characters, then dot-separated domain labels
# of 1-63 alphanumerics with hyphens only in the interior.
_EMAIL_PATTERN = re.compile(
    r"^[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]{1,64}@[a-zA-Z0-9]"
    r"(?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?(?:\.[a-zA-Z0-9]"
    r"(?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)*$"
)


def is_email_valid(email: str) -> bool:
    """Return True if ``email`` has a plausible address shape and length.

    No DNS lookups and no internationalized domain handling.
    """
    if len(email) < EMAIL_MIN_LENGTH or len(email) > EMAIL_MAX_LENGTH:
        return False
    return _EMAIL_PATTERN.fullmatch(email) is not None
