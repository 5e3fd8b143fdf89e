"""SQLAlchemy ORM models for the guide catalog."""

import datetime

from sqlalchemy import JSON, DateTime, ForeignKey, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from corpus.db.base import Base
from corpus.enums import Difficulty


class Guide(Base):
    __tablename__ = "guides"

    slug: Mapped[str] = mapped_column(String(512), primary_key=True)
    path: Mapped[str] = mapped_column(String(512), nullable=False, unique=True)
    title: Mapped[str] = mapped_column(String(256), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    area: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    difficulty: Mapped[str] = mapped_column(
        String(16), nullable=False, default=Difficulty.BEGINNER
    )
    object_types: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    variable_types: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    body: Mapped[str] = mapped_column(Text, nullable=False)
    # Lower-cased title, description, types and body for the search prefilter.
    search_text: Mapped[str] = mapped_column(Text, nullable=False, default="")
    content_hash: Mapped[str] = mapped_column(String(64), nullable=False)
    indexed_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    tags: Mapped[list["GuideTag"]] = relationship(
        back_populates="guide",
        cascade="all, delete-orphan",
        order_by="GuideTag.position",
        lazy="selectin",
    )

    @property
    def tag_names(self) -> list[str]:
        return [t.tag for t in self.tags]


class GuideTag(Base):
    __tablename__ = "guide_tags"

    guide_slug: Mapped[str] = mapped_column(
        ForeignKey("guides.slug", ondelete="CASCADE"), primary_key=True
    )
    tag: Mapped[str] = mapped_column(String(64), primary_key=True, index=True)
    position: Mapped[int] = mapped_column(nullable=False, default=0)

    guide: Mapped[Guide] = relationship(back_populates="tags")
