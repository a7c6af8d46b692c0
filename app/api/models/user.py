from datetime import datetime

from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship

from app.db.base_class import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)

    # Identidade do médico
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=True)

    # handle público: med1.app/<slug>
    slug = Column(String, unique=True, index=True, nullable=False)
    specialty = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    image = Column(String, nullable=True)

    plan = Column(String, default="free", nullable=False)
    plan_expires_at = Column(DateTime, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    leads = relationship("Lead", back_populates="user", cascade="all, delete-orphan")
    indications = relationship("Indication", back_populates="user", cascade="all, delete-orphan")

    @property
    def is_premium(self) -> bool:
        if self.plan != "premium":
            return False
        return self.plan_expires_at is None or self.plan_expires_at > datetime.utcnow()
