"""Security validators."""

from typing import Final

from zxcvbn import zxcvbn

# Minimum zxcvbn score (0-4 scale): 3 = "safely unguessable"
MIN_PASSWORD_SCORE: Final[int] = 3


def validate_password_strength(password: str) -> str:
    """Validate password strength using zxcvbn entropy estimation.

    Raises:
        ValueError: With zxcvbn's own warning or first suggestion when available.
    """
    result = zxcvbn(password)
    if result["score"] >= MIN_PASSWORD_SCORE:
        return password

    feedback = result.get("feedback", {})
    warning = feedback.get("warning", "")
    suggestions = feedback.get("suggestions", [])

    if warning:
        raise ValueError(f"Weak password: {warning}")
    elif suggestions:
        raise ValueError(f"Weak password: {suggestions[0]}")
    raise ValueError("Password is too weak. Use a longer password with a mix of characters.")
