from datetime import datetime

from sqlalchemy import Column, Integer, String, DateTime, Text, ForeignKey, Table
from sqlalchemy.orm import relationship

from app.db.base_class import Base
from app.core.constants import OutboundStatus


outbound_clinics = Table(
    "outbound_clinics",
    Base.metadata,
    Column("outbound_id", Integer, ForeignKey("outbounds.id", ondelete="CASCADE"), primary_key=True),
    Column("clinic_id", Integer, ForeignKey("clinics.id", ondelete="CASCADE"), primary_key=True),
)


class Outbound(Base):
    __tablename__ = "outbounds"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)

    nome = Column(String, nullable=False)
    especialidade = Column(String, nullable=True)
    instagram = Column(String, nullable=True)
    whatsapp = Column(String, nullable=True)
    email = Column(String, nullable=True)
    status = Column(String, default=OutboundStatus.PROSPECTADO.value, nullable=False)
    observacoes = Column(Text, nullable=True)
    endereco = Column(String, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    clinics = relationship("Clinic", secondary=outbound_clinics, back_populates="outbounds")
    interactions = relationship(
        "ContactInteraction",
        back_populates="outbound",
        order_by="ContactInteraction.created_at.desc()",
        cascade="all, delete-orphan",
    )


class Clinic(Base):
    __tablename__ = "clinics"

    id = Column(Integer, primary_key=True, index=True)

    nome = Column(String, nullable=False)
    localizacao = Column(String, nullable=True)
    media_de_medicos = Column(Integer, nullable=True)
    instagram = Column(String, nullable=True)
    site = Column(String, nullable=True)
    link_bio = Column(String, nullable=True)
    contato = Column(String, nullable=True)
    email = Column(String, nullable=True)
    whatsapp = Column(String, nullable=True)
    observacoes = Column(Text, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    outbounds = relationship("Outbound", secondary=outbound_clinics, back_populates="clinics")


class ContactInteraction(Base):
    __tablename__ = "contact_interactions"

    id = Column(Integer, primary_key=True, index=True)
    outbound_id = Column(Integer, ForeignKey("outbounds.id", ondelete="CASCADE"), index=True, nullable=False)

    # whatsapp | email | instagram | call | other
    type = Column(String, nullable=False)
    content = Column(Text, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    outbound = relationship("Outbound", back_populates="interactions")
