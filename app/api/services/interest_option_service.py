from typing import List, Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from app.api.models.interest_option import InterestOption
from app.api.models.user import User
from app.core.utils import slugify
from app.schemas.interest_option import InterestOptionIn


class InterestOptionService:

    @staticmethod
    def list_for_user(db: Session, user_id: int) -> List[InterestOption]:
        return (
            db.query(InterestOption)
            .filter(InterestOption.user_id == user_id)
            .order_by(InterestOption.is_default.desc(), InterestOption.label.asc())
            .all()
        )

    @staticmethod
    def _value_taken(db: Session, user_id: int, value: str, exclude_id: Optional[int] = None) -> bool:
        query = db.query(InterestOption.id).filter(
            InterestOption.user_id == user_id, InterestOption.value == value
        )
        if exclude_id is not None:
            query = query.filter(InterestOption.id != exclude_id)
        return query.first() is not None

    @staticmethod
    def _clear_default(db: Session, user_id: int, keep_id: Optional[int] = None) -> None:
        query = db.query(InterestOption).filter(
            InterestOption.user_id == user_id, InterestOption.is_default.is_(True)
        )
        if keep_id is not None:
            query = query.filter(InterestOption.id != keep_id)
        for option in query.all():
            option.is_default = False

    @staticmethod
    def get_owned(db: Session, user: User, option_id: Optional[int]) -> InterestOption:
        if not option_id:
            raise HTTPException(400, "ID é obrigatório")
        option = db.get(InterestOption, option_id)
        if not option or option.user_id != user.id:
            raise HTTPException(404, "Opção de interesse não encontrada")
        return option

    @staticmethod
    def create(db: Session, user: User, data: InterestOptionIn) -> InterestOption:
        label = (data.label or "").strip()
        if not label:
            raise HTTPException(400, "Label é obrigatório")

        value = (data.value or "").strip() or slugify(label)
        if InterestOptionService._value_taken(db, user.id, value):
            raise HTTPException(400, "Já existe uma opção com este valor")

        if data.is_default:
            InterestOptionService._clear_default(db, user.id)

        option = InterestOption(
            user_id=user.id,
            label=label,
            value=value,
            redirect_url=data.redirect_url or None,
            is_default=data.is_default,
        )
        db.add(option)
        db.commit()
        db.refresh(option)
        return option

    @staticmethod
    def update(db: Session, user: User, data: InterestOptionIn) -> InterestOption:
        option = InterestOptionService.get_owned(db, user, data.id)

        if data.label is not None:
            if not data.label.strip():
                raise HTTPException(400, "Label é obrigatório")
            option.label = data.label.strip()

        if data.value is not None:
            value = data.value.strip() or slugify(option.label)
            if InterestOptionService._value_taken(db, user.id, value, exclude_id=option.id):
                raise HTTPException(400, "Já existe uma opção com este valor")
            option.value = value

        if "redirect_url" in data.model_fields_set:
            option.redirect_url = data.redirect_url or None

        if "is_default" in data.model_fields_set:
            if data.is_default:
                InterestOptionService._clear_default(db, user.id, keep_id=option.id)
            option.is_default = data.is_default

        db.commit()
        db.refresh(option)
        return option

    @staticmethod
    def delete(db: Session, user: User, option_id: Optional[int]) -> None:
        option = InterestOptionService.get_owned(db, user, option_id)
        db.delete(option)
        db.commit()
