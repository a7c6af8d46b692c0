import logging
from typing import List, Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session, selectinload

from app.api.models.outbound import Clinic, ContactInteraction, Outbound
from app.api.models.user import User
from app.core.constants import InteractionType, OutboundStatus
from app.schemas.outbound import ClinicIn, InteractionIn, OutboundCreate, OutboundUpdate

logger = logging.getLogger("outbound")

INTERACTION_TYPES = [t.value for t in InteractionType]


class OutboundService:

    @staticmethod
    def list_for_user(db: Session, user: User) -> List[Outbound]:
        return (
            db.query(Outbound)
            .options(selectinload(Outbound.clinics))
            .filter(Outbound.user_id == user.id)
            .order_by(Outbound.created_at.desc(), Outbound.id.desc())
            .all()
        )

    @staticmethod
    def get_owned(db: Session, user: User, outbound_id: int) -> Outbound:
        outbound = db.get(Outbound, outbound_id)
        if not outbound or outbound.user_id != user.id:
            raise HTTPException(404, "Contato não encontrado")
        return outbound

    @staticmethod
    def _owned_clinic(db: Session, user: User, clinic_id: int) -> Clinic:
        clinic = (
            db.query(Clinic)
            .filter(Clinic.id == clinic_id, Clinic.outbounds.any(Outbound.user_id == user.id))
            .first()
        )
        if not clinic:
            raise HTTPException(404, "Clínica não encontrada")
        return clinic

    @staticmethod
    def _clinics(db: Session, user: User, clinics: List[ClinicIn]) -> List[Clinic]:
        """Clínicas com id do próprio usuário são atualizadas; as sem id são criadas."""
        result = []
        for item in clinics:
            values = item.model_dump(exclude={"id"})
            if item.id:
                clinic = OutboundService._owned_clinic(db, user, item.id)
                for field, value in values.items():
                    setattr(clinic, field, value)
            else:
                clinic = Clinic(**values)
                db.add(clinic)
            result.append(clinic)
        return result

    @staticmethod
    def create(db: Session, user: User, data: OutboundCreate) -> Outbound:
        if not data.nome.strip():
            raise HTTPException(400, "Nome é obrigatório")

        values = data.model_dump(exclude={"clinics", "status"})
        outbound = Outbound(
            user_id=user.id,
            status=(data.status or OutboundStatus.PROSPECTADO).value,
            **values,
        )
        if data.clinics:
            outbound.clinics = OutboundService._clinics(db, user, data.clinics)

        db.add(outbound)
        db.commit()
        db.refresh(outbound)
        logger.info("OUTBOUND_CREATED: user_id=%s outbound_id=%s", user.id, outbound.id)
        return outbound

    @staticmethod
    def update(db: Session, user: User, outbound: Outbound, data: OutboundUpdate) -> Outbound:
        values = data.model_dump(exclude_unset=True, exclude={"clinics"})

        if "nome" in values and not (values["nome"] or "").strip():
            raise HTTPException(400, "Nome é obrigatório")

        for field, value in values.items():
            if field == "status":
                if value is None:
                    continue
                value = OutboundStatus(value).value
            setattr(outbound, field, value)

        # clínicas só são substituídas quando enviadas
        if data.clinics is not None:
            outbound.clinics = OutboundService._clinics(db, user, data.clinics)

        db.commit()
        db.refresh(outbound)
        return outbound

    @staticmethod
    def delete(db: Session, outbound: Outbound) -> None:
        logger.info("OUTBOUND_DELETED: outbound_id=%s", outbound.id)
        db.delete(outbound)
        db.commit()

    @staticmethod
    def add_interaction(db: Session, outbound: Outbound, data: InteractionIn) -> ContactInteraction:
        if not (data.content or "").strip() or not data.type:
            raise HTTPException(400, "Conteúdo e tipo são obrigatórios")
        if data.type not in INTERACTION_TYPES:
            raise HTTPException(400, f"Tipo inválido. Use: {', '.join(INTERACTION_TYPES)}")

        interaction = ContactInteraction(
            outbound_id=outbound.id,
            type=data.type,
            content=data.content.strip(),
        )
        db.add(interaction)
        db.commit()
        db.refresh(interaction)
        return interaction

    @staticmethod
    def list_interactions(db: Session, outbound: Outbound) -> List[ContactInteraction]:
        return (
            db.query(ContactInteraction)
            .filter(ContactInteraction.outbound_id == outbound.id)
            .order_by(ContactInteraction.created_at.desc(), ContactInteraction.id.desc())
            .all()
        )

    @staticmethod
    def delete_interaction(db: Session, outbound: Outbound, interaction_id: Optional[int]) -> None:
        if not interaction_id:
            raise HTTPException(400, "ID da interação é obrigatório")

        interaction = db.get(ContactInteraction, interaction_id)
        if not interaction or interaction.outbound_id != outbound.id:
            raise HTTPException(404, "Interação não encontrada")

        db.delete(interaction)
        db.commit()
