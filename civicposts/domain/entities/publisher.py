"""
Domain entity: Publisher

Back-office account that creates articles on behalf of authors. Articles it
creates carry its id as ``publisher_id``.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from civicposts.domain.entities.author import normalize_email
from civicposts.shared.exceptions.domain_exceptions import DomainValidationError

CREATOR_ROLES = ("admin", "author")


@dataclass
class Publisher:
    """
    Publisher account.

    Invariants:
    - name is non-empty after trimming
    - email is stored trimmed and lowercased
    - credential is always set (publishers must be able to sign in)
    - created_by_role is "admin" or "author"
    """

    name: str = ""
    email: str = ""
    credential: str = field(default="", repr=False)
    id: UUID = field(default_factory=uuid4)
    avatar: Optional[str] = None
    # Identity of the admin or author who created the account; admins are
    # anonymous upstream, so it is None for admin-created publishers.
    created_by: Optional[UUID] = None
    created_by_role: str = "admin"
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self):
        self.name = (self.name or "").strip()
        self.email = normalize_email(self.email)
        self.validate()

    def validate(self) -> None:
        if not self.name:
            raise DomainValidationError("Publisher name is required")
        if not self.email:
            raise DomainValidationError("Publisher email is required")
        if "@" not in self.email:
            raise DomainValidationError(f"Invalid publisher email: {self.email}")
        if not self.credential:
            raise DomainValidationError("Password is required")
        if self.created_by_role not in CREATOR_ROLES:
            raise DomainValidationError(f"Invalid creator role: {self.created_by_role}")

    def touch(self) -> None:
        self.updated_at = datetime.utcnow()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Publisher):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return f"Publisher(id={self.id}, name='{self.name}', email='{self.email}')"
