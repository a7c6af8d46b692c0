from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.api.services.auth_service import AuthService
from app.schemas.user import AuthOut, LoginIn, LoginResponse, RegisterIn, UserOut

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/register", response_model=AuthOut, status_code=201)
def register(payload: RegisterIn, db: Session = Depends(get_db)):
    user, token = AuthService.register(db, payload)
    return {"user": user, "token": token}


@router.post("/login", response_model=LoginResponse)
def login(payload: LoginIn, db: Session = Depends(get_db)):
    user, token = AuthService.login(db, payload.email, payload.password)

    return LoginResponse(
        access_token=token,
        user=UserOut.model_validate(user),
    )
