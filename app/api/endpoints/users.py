## Rotas do médico logado (perfil e plano)
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.schemas.user import ProfileUpdate, UserPlanOut, UserProfileOut
from app.api.services.user_service import UserService
from app.api.models.user import User
from app.core.security import get_current_user

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("/me", response_model=UserProfileOut)
def me(current_user: User = Depends(get_current_user)):
    return current_user


@router.put("/me", response_model=UserProfileOut)
def update_me(
    payload: ProfileUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return UserService.update_profile(db, current_user, payload)


@router.get("/plan", response_model=UserPlanOut)
def plan(current_user: User = Depends(get_current_user)):
    return UserService.plan(current_user)
