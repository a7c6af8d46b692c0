from datetime import datetime

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from app.db.base_class import Base


class Indication(Base):
    __tablename__ = "indications"
    __table_args__ = (
        UniqueConstraint("user_id", "slug", name="uq_indications_user_slug"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)

    slug = Column(String, index=True, nullable=False)
    name = Column(String, nullable=True)
    # link | quiz | page | chatbot
    type = Column(String, default="link", nullable=False)
    full_link = Column(String, nullable=True)

    quiz_id = Column(Integer, ForeignKey("quizzes.id", ondelete="SET NULL"), nullable=True)
    page_id = Column(Integer, ForeignKey("pages.id", ondelete="SET NULL"), nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    user = relationship("User", back_populates="indications")
    quiz = relationship("Quiz", back_populates="indications")
    page = relationship("Page")
    leads = relationship("Lead", back_populates="indication")
    events = relationship("Event", back_populates="indication")
