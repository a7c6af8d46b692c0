from datetime import datetime

from sqlalchemy import Column, Integer, String, DateTime, Boolean, Text, JSON, ForeignKey
from sqlalchemy.orm import relationship

from app.db.base_class import Base


class Quiz(Base):
    __tablename__ = "quizzes"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)

    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    is_published = Column(Boolean, default=False, nullable=False)

    opening_screen = Column(JSON, nullable=True)
    completion_screen = Column(JSON, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    questions = relationship(
        "QuizQuestion",
        back_populates="quiz",
        order_by="QuizQuestion.order",
        cascade="all, delete-orphan",
    )
    indications = relationship("Indication", back_populates="quiz")


class QuizQuestion(Base):
    __tablename__ = "quiz_questions"

    id = Column(Integer, primary_key=True, index=True)
    quiz_id = Column(Integer, ForeignKey("quizzes.id", ondelete="CASCADE"), index=True, nullable=False)

    text = Column(Text, nullable=False)
    type = Column(String, nullable=False)
    required = Column(Boolean, default=False, nullable=False)
    variable_name = Column(String, nullable=False)
    options = Column(JSON, nullable=True)
    order = Column(Integer, nullable=False, default=0)

    quiz = relationship("Quiz", back_populates="questions")
