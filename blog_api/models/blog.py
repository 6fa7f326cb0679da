"""
Blog API — Blog SQLAlchemy Model
==================================

What:  ORM model for the `blogs` table used by the sql store backend.
Why:   Lets the same BlogPost documents live in PostgreSQL (or SQLite in
       tests) when MongoDB is not available.
Who:   Used by SqlBlogStore for CRUD operations and by Alembic for migrations.

Table Design Rationale:
    - String(24) primary key: ObjectId hex strings, so identifiers have the
      same shape and validity rule as the Mongo backend
    - Text columns: blog descriptions and image URLs have no natural limit
    - date: UTC with timezone; indexed DESC for the list query
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from blog_api.database import Base


class Blog(Base):
    """
    A blog post row.

    Query Patterns:
        - List: SELECT ... ORDER BY date DESC  → idx_blogs_date
        - Get/update/delete: WHERE id = :id    → primary key
    """

    __tablename__ = "blogs"

    id: Mapped[str] = mapped_column(
        String(24),
        primary_key=True,
        comment="ObjectId hex string assigned at insert",
    )

    name: Mapped[str] = mapped_column(Text, nullable=False)
    email: Mapped[str] = mapped_column(Text, nullable=False)

    user_img: Mapped[str] = mapped_column(Text, nullable=False, default="")
    cover_img: Mapped[str] = mapped_column(Text, nullable=False, default="")

    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)

    date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        comment="Creation time (UTC); may be overwritten by an update",
    )

    __table_args__ = (
        Index("idx_blogs_date", date.desc()),
    )

    def to_document(self) -> dict:
        """Row → store document (identifier under `id`)."""
        date = self.date
        # SQLite drops the offset on round trip; values are always stored as UTC
        if date is not None and date.tzinfo is None:
            date = date.replace(tzinfo=timezone.utc)
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "user_img": self.user_img,
            "cover_img": self.cover_img,
            "title": self.title,
            "description": self.description,
            "date": date,
        }

    def __repr__(self) -> str:
        return f"<Blog(id={self.id}, title='{self.title}', date='{self.date}')>"
