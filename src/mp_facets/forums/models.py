"""Forums – ORM models of the topic search scope."""
from __future__ import annotations

import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from mp_facets.adapters.sqlalchemy.mixins import SoftDeleteMixin
from mp_facets.adapters.sqlalchemy.models import Base


def _utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.UTC).replace(tzinfo=None)


class Forum(Base):
    __tablename__ = "forum"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(200))
    display_order: Mapped[int] = mapped_column(default=0)


class Customer(Base):
    __tablename__ = "customer"

    id: Mapped[int] = mapped_column(primary_key=True)
    username: Mapped[str] = mapped_column(String(500))


class ForumTopic(SoftDeleteMixin, Base):
    __tablename__ = "forum_topic"

    id: Mapped[int] = mapped_column(primary_key=True)
    forum_id: Mapped[int] = mapped_column(ForeignKey("forum.id"), index=True)
    customer_id: Mapped[int] = mapped_column(ForeignKey("customer.id"), index=True)
    subject: Mapped[str] = mapped_column(String(450))
    num_posts: Mapped[int] = mapped_column(default=0)
    published: Mapped[bool] = mapped_column(Boolean, default=True)
    created_on_utc: Mapped[datetime.datetime] = mapped_column(DateTime(), default=_utcnow)
    last_post_time: Mapped[datetime.datetime | None] = mapped_column(DateTime(), nullable=True)


class ForumPost(Base):
    __tablename__ = "forum_post"

    id: Mapped[int] = mapped_column(primary_key=True)
    topic_id: Mapped[int] = mapped_column(ForeignKey("forum_topic.id"), index=True)
    customer_id: Mapped[int] = mapped_column(ForeignKey("customer.id"))
    text: Mapped[str] = mapped_column(Text)
    created_on_utc: Mapped[datetime.datetime] = mapped_column(DateTime(), default=_utcnow)


__all__ = ["Customer", "Forum", "ForumPost", "ForumTopic"]
