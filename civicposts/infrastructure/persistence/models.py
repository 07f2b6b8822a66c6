"""
SQLAlchemy models - infrastructure layer.

Images are stored as JSON documents ({url, public_id, alt[, order]}); the
repository maps them to ImageRef / SubImage value objects.
"""

import uuid
from datetime import datetime

from sqlalchemy import JSON, Boolean, Column, Date, DateTime, Index, Integer, String, Text, Uuid
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class AuthorModel(Base):
    """SQLAlchemy model of an author."""

    __tablename__ = "authors"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False)
    # Stored lowercased and trimmed; uniqueness is case-insensitive.
    email = Column(String(320), nullable=False, unique=True, index=True)
    bio = Column(Text)
    avatar = Column(String(2048))
    credential = Column(String(255))
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<AuthorModel(id={self.id}, name='{self.name}')>"


class PublisherModel(Base):
    """SQLAlchemy model of a publisher account."""

    __tablename__ = "publishers"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False)
    email = Column(String(320), nullable=False, unique=True, index=True)
    avatar = Column(String(2048))
    credential = Column(String(255), nullable=False)
    created_by = Column(Uuid)
    created_by_role = Column(String(20), nullable=False, default="admin")
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<PublisherModel(id={self.id}, name='{self.name}')>"


class ArticleModel(Base):
    """
    SQLAlchemy model of an article.

    ``author_id`` is a weak reference (no foreign key): deleting an author
    leaves its articles and their stored ``author_name`` in place.
    """

    __tablename__ = "articles"

    # =========================================================================
    # Identity
    # =========================================================================
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    slug = Column(String(200), nullable=False, unique=True, index=True)

    # =========================================================================
    # Content
    # =========================================================================
    title = Column(String(500), nullable=False)
    subtitle = Column(Text)
    content = Column(JSON, nullable=False, default=list)
    category = Column(String(50), nullable=False, index=True)
    status = Column(String(20), nullable=False, default="draft", index=True)
    published_date = Column(Date, nullable=False, index=True)

    # =========================================================================
    # Authorship
    # =========================================================================
    author_id = Column(Uuid, index=True)
    author_name = Column(String(255), index=True)
    publisher_id = Column(Uuid, index=True)

    # =========================================================================
    # Media
    # =========================================================================
    main_image = Column(JSON, nullable=False)
    mini_image = Column(JSON)
    youtube_link = Column(String(2048))
    sub_images = Column(JSON, default=list)

    # =========================================================================
    # Home-page placement
    # =========================================================================
    is_top_story = Column(Boolean, nullable=False, default=False)
    is_mini_top_story = Column(Boolean, nullable=False, default=False)
    is_latest = Column(Boolean, nullable=False, default=False)
    is_trending = Column(Boolean, nullable=False, default=False)

    # =========================================================================
    # Counters and audit
    # =========================================================================
    views = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (
        Index("ix_articles_visibility", "status", "published_date"),
    )

    def __repr__(self):
        return f"<ArticleModel(id={self.id}, slug='{self.slug}')>"
