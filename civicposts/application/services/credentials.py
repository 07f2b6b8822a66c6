"""
Author credentials (bcrypt).
"""

import bcrypt

from civicposts.shared.exceptions.domain_exceptions import DomainValidationError

MIN_PASSWORD_LENGTH = 6


def hash_password(password: str) -> str:
    """
    Hash a plain-text password.

    Raises:
        DomainValidationError: if the password is too short
    """
    if not password or len(password) < MIN_PASSWORD_LENGTH:
        raise DomainValidationError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
        )
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")
