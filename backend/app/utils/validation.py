"""
Input format predicates for the validation layer in front of the
authentication and user services.
"""

import re


EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
# Somali numbers: +252 XX XXXXXXX
PHONE_PATTERN = re.compile(r"^\+?(?:252)?[0-9]{9}$")
PASSWORD_PATTERN = re.compile(r"^(?=.*[A-Za-z])(?=.*[0-9])[A-Za-z0-9@$!%*#?&]{8,}$")


def is_valid_email(email: str) -> bool:
    return bool(EMAIL_PATTERN.fullmatch(email))


def is_valid_phone(phone: str) -> bool:
    """Whitespace inside the number is ignored."""
    return bool(PHONE_PATTERN.fullmatch(re.sub(r"\s", "", phone)))


def is_valid_password(password: str) -> bool:
    """At least 8 characters with one letter and one digit."""
    return bool(PASSWORD_PATTERN.fullmatch(password))
