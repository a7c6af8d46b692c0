from datetime import datetime

from sqlalchemy import Column, Integer, String, DateTime, Float, Text, ForeignKey
from sqlalchemy.orm import relationship

from app.db.base_class import Base
from app.core.constants import LeadStatus


class Lead(Base):
    __tablename__ = "leads"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    indication_id = Column(Integer, ForeignKey("indications.id", ondelete="SET NULL"), nullable=True)

    name = Column(String, nullable=False)
    # somente dígitos, usado para deduplicar por médico
    phone = Column(String(32), index=True, nullable=False)
    email = Column(String, nullable=True)
    interest = Column(String, nullable=True)
    status = Column(String, default=LeadStatus.NOVO.value, nullable=False)
    source = Column(String, nullable=True)

    potential_value = Column(Float, nullable=True)
    appointment_date = Column(DateTime, nullable=True)
    medical_notes = Column(Text, nullable=True)

    utm_source = Column(String, nullable=True)
    utm_medium = Column(String, nullable=True)
    utm_campaign = Column(String, nullable=True)
    utm_term = Column(String, nullable=True)
    utm_content = Column(String, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    user = relationship("User", back_populates="leads")
    indication = relationship("Indication", back_populates="leads")
