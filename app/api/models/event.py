from datetime import datetime

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from app.db.base_class import Base


class Event(Base):
    __tablename__ = "events"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    indication_id = Column(Integer, ForeignKey("indications.id", ondelete="SET NULL"), index=True, nullable=True)

    type = Column(String, index=True, nullable=False)
    ip = Column(String, nullable=True)
    user_agent = Column(String, nullable=True)

    utm_source = Column(String, nullable=True)
    utm_medium = Column(String, nullable=True)
    utm_campaign = Column(String, nullable=True)
    utm_term = Column(String, nullable=True)
    utm_content = Column(String, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, index=True, nullable=False)

    indication = relationship("Indication", back_populates="events")
