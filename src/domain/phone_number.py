"""Phone number normalization for mobile money charges"""

import re

_NON_DIGITS = re.compile(r"\D")


def normalize_msisdn(raw: str, country_code: str = "254") -> str:
    """
    Normalize a local mobile number to international (E.164) form

    - 0712345678    -> +254712345678
    - 254712345678  -> +254712345678
    - +254712345678 -> unchanged

    Raises:
        ValueError: if the number has any other shape
    """
    value = (raw or "").strip()
    digits = _NON_DIGITS.sub("", value)

    if digits.startswith("0"):
        return f"+{country_code}{digits[1:]}"
    if digits.startswith(country_code):
        return f"+{digits}"
    if value.startswith("+") and digits:
        return value

    raise ValueError(
        f"Invalid phone {raw!r}. Use format +{country_code}7XXXXXXXX, "
        f"{country_code}7XXXXXXXX or 07XXXXXXXX"
    )
