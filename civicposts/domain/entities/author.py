"""
Domain entity: Author

Authoritative source of an author's display name. Articles keep a
denormalized copy of the name (see AuthorNameResolver).
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from civicposts.shared.exceptions.domain_exceptions import DomainValidationError


def normalize_email(email: str) -> str:
    """Emails are unique case-insensitively, ignoring surrounding whitespace."""
    return (email or "").strip().lower()


@dataclass
class Author:
    """
    Author record.

    Invariants:
    - name is non-empty after trimming
    - email is stored trimmed and lowercased
    """

    name: str = ""
    email: str = ""
    id: UUID = field(default_factory=uuid4)
    bio: Optional[str] = None
    avatar: Optional[str] = None
    # Password hash for login-capable authors; never exposed by the API.
    credential: Optional[str] = field(default=None, repr=False)
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self):
        self.name = (self.name or "").strip()
        self.email = normalize_email(self.email)
        if self.bio is not None:
            self.bio = self.bio.strip() or None
        self.validate()

    def validate(self) -> None:
        if not self.name:
            raise DomainValidationError("Author name is required")
        if not self.email:
            raise DomainValidationError("Author email is required")
        if "@" not in self.email:
            raise DomainValidationError(f"Invalid author email: {self.email}")

    @property
    def can_login(self) -> bool:
        return bool(self.credential)

    def rename(self, new_name: str) -> str:
        """
        Change the display name.

        Returns:
            The previous name, which the caller needs for name propagation.
        """
        new_name = (new_name or "").strip()
        if not new_name:
            raise DomainValidationError("Author name is required")
        old_name = self.name
        self.name = new_name
        self.updated_at = datetime.utcnow()
        return old_name

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Author):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return f"Author(id={self.id}, name='{self.name}', email='{self.email}')"
