from datetime import datetime

from sqlalchemy import Column, Integer, String, DateTime, Boolean, Float, Text, ForeignKey
from sqlalchemy.orm import relationship

from app.db.base_class import Base


class Cycle(Base):
    __tablename__ = "cycles"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)

    start_date = Column(DateTime, nullable=False)
    end_date = Column(DateTime, nullable=False)
    vision = Column(Text, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    weeks = relationship(
        "CycleWeek",
        back_populates="cycle",
        order_by="CycleWeek.week_number",
        cascade="all, delete-orphan",
    )


class CycleWeek(Base):
    __tablename__ = "cycle_weeks"

    id = Column(Integer, primary_key=True, index=True)
    cycle_id = Column(Integer, ForeignKey("cycles.id", ondelete="CASCADE"), index=True, nullable=False)

    week_number = Column(Integer, nullable=False)
    vision = Column(Text, nullable=True)
    reflection = Column(Text, nullable=True)
    is_expanded = Column(Boolean, default=False, nullable=False)

    cycle = relationship("Cycle", back_populates="weeks")
    goals = relationship("WeekGoal", back_populates="week", cascade="all, delete-orphan")
    key_results = relationship("KeyResult", back_populates="week", cascade="all, delete-orphan")
    days = relationship(
        "CycleDay",
        back_populates="week",
        order_by="CycleDay.date",
        cascade="all, delete-orphan",
    )


class WeekGoal(Base):
    __tablename__ = "week_goals"

    id = Column(Integer, primary_key=True, index=True)
    week_id = Column(Integer, ForeignKey("cycle_weeks.id", ondelete="CASCADE"), index=True, nullable=False)
    title = Column(String, nullable=False)

    week = relationship("CycleWeek", back_populates="goals")


class KeyResult(Base):
    __tablename__ = "key_results"

    id = Column(Integer, primary_key=True, index=True)
    week_id = Column(Integer, ForeignKey("cycle_weeks.id", ondelete="CASCADE"), index=True, nullable=False)

    title = Column(String, nullable=False)
    target = Column(Float, default=0, nullable=False)
    current = Column(Float, default=0, nullable=False)

    week = relationship("CycleWeek", back_populates="key_results")


class CycleDay(Base):
    __tablename__ = "cycle_days"

    id = Column(Integer, primary_key=True, index=True)
    week_id = Column(Integer, ForeignKey("cycle_weeks.id", ondelete="CASCADE"), index=True, nullable=False)

    date = Column(DateTime, nullable=False)
    notes = Column(Text, nullable=True)

    week = relationship("CycleWeek", back_populates="days")
    tasks = relationship("CycleTask", back_populates="day", cascade="all, delete-orphan")


class CycleTask(Base):
    __tablename__ = "cycle_tasks"

    id = Column(Integer, primary_key=True, index=True)
    day_id = Column(Integer, ForeignKey("cycle_days.id", ondelete="CASCADE"), index=True, nullable=False)

    title = Column(String, nullable=False)
    completed = Column(Boolean, default=False, nullable=False)
    time_block = Column(String, nullable=True)
    scheduled_time = Column(String, nullable=True)

    day = relationship("CycleDay", back_populates="tasks")
