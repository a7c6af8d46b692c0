from datetime import datetime

from sqlalchemy import Column, Integer, String, DateTime, Boolean, JSON, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from app.db.base_class import Base


class Page(Base):
    __tablename__ = "pages"
    __table_args__ = (
        UniqueConstraint("user_id", "slug", name="uq_pages_user_slug"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)

    title = Column(String, nullable=False)
    subtitle = Column(String, nullable=True)
    slug = Column(String, nullable=False)
    layout = Column(String, default="classic", nullable=False)
    primary_color = Column(String, default="#0070df", nullable=False)
    avatar_url = Column(String, nullable=True)
    address = Column(String, nullable=True)
    is_modal = Column(Boolean, default=False, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    user = relationship("User")
    blocks = relationship(
        "PageBlock",
        back_populates="page",
        order_by="PageBlock.order",
        cascade="all, delete-orphan",
    )
    social_links = relationship("SocialLink", back_populates="page", cascade="all, delete-orphan")
    addresses = relationship("PageAddress", back_populates="page", cascade="all, delete-orphan")


class PageBlock(Base):
    __tablename__ = "page_blocks"

    id = Column(Integer, primary_key=True, index=True)
    page_id = Column(Integer, ForeignKey("pages.id", ondelete="CASCADE"), index=True, nullable=False)

    # BUTTON | FORM | ADDRESS
    type = Column(String, nullable=False)
    content = Column(JSON, nullable=True)
    order = Column(Integer, nullable=False, default=0)

    page = relationship("Page", back_populates="blocks")


class SocialLink(Base):
    __tablename__ = "social_links"

    id = Column(Integer, primary_key=True, index=True)
    page_id = Column(Integer, ForeignKey("pages.id", ondelete="CASCADE"), index=True, nullable=False)

    platform = Column(String, nullable=False)
    username = Column(String, nullable=False)
    url = Column(String, nullable=False)

    page = relationship("Page", back_populates="social_links")


class PageAddress(Base):
    __tablename__ = "page_addresses"

    id = Column(Integer, primary_key=True, index=True)
    page_id = Column(Integer, ForeignKey("pages.id", ondelete="CASCADE"), index=True, nullable=False)

    name = Column(String, nullable=False)
    address = Column(String, nullable=False)
    is_default = Column(Boolean, default=False, nullable=False)

    page = relationship("Page", back_populates="addresses")
