## API do app mobile (/api/mobile). Toda rota protegida passa por validate_token.
from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException, Query, Response
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.api.models.user import User
from app.api.services.auth_service import AuthService
from app.api.services.lead_service import LeadService
from app.api.services.user_service import UserService
from app.core.security import validate_token
from app.schemas.lead import LeadCreate, LeadOut, LeadPageOut, LeadUpdate
from app.schemas.user import (
    AuthOut,
    LoginIn,
    MobileProfileOut,
    MobileProfileUpdate,
    ProfileUpdate,
    RefreshIn,
    RegisterIn,
    UserOut,
    UserProfileOut,
)

router = APIRouter(prefix="/api/mobile", tags=["Mobile"])


# =========================
# Auth
# =========================
@router.post("/auth/login", response_model=AuthOut)
def login(payload: LoginIn, db: Session = Depends(get_db)):
    user, token = AuthService.login(db, payload.email, payload.password)
    return {"user": user, "token": token}


@router.post("/auth/register", response_model=AuthOut, status_code=201)
def register(payload: RegisterIn, db: Session = Depends(get_db)):
    user, token = AuthService.register(db, payload)
    return {"user": user, "token": token}


@router.post("/auth/refresh")
def refresh(payload: RefreshIn, db: Session = Depends(get_db)):
    result = AuthService.refresh(db, payload.token)
    return {
        "message": result["message"],
        "token": result["token"],
        "user": UserOut.model_validate(result["user"]).model_dump(by_alias=True, mode="json"),
    }


@router.get("/auth/verify")
def verify(authorization: Optional[str] = Header(None), db: Session = Depends(get_db)):
    try:
        user = validate_token(authorization, db)
    except HTTPException as e:
        return JSONResponse(status_code=e.status_code, content={"valid": False, "error": e.detail})

    return {
        "valid": True,
        "user": UserOut.model_validate(user).model_dump(by_alias=True, mode="json"),
        "message": "Token válido",
    }


# =========================
# Perfil
# =========================
@router.get("/doctor/profile", response_model=UserProfileOut)
def doctor_profile(current_user: User = Depends(validate_token)):
    return current_user


@router.put("/doctor/profile", response_model=UserProfileOut)
def update_doctor_profile(
    payload: ProfileUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(validate_token),
):
    return UserService.update_profile(db, current_user, payload)


def _profile_out(db: Session, user: User) -> dict:
    data = UserProfileOut.model_validate(user).model_dump()
    data["plan"] = user.plan
    data["plan_expires_at"] = user.plan_expires_at
    data["stats"] = UserService.profile_stats(db, user, days=30)
    return data


@router.get("/profile", response_model=MobileProfileOut)
def profile(db: Session = Depends(get_db), current_user: User = Depends(validate_token)):
    return _profile_out(db, current_user)


@router.put("/profile", response_model=MobileProfileOut)
def update_profile(
    payload: MobileProfileUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(validate_token),
):
    user = UserService.update_mobile_profile(db, current_user, payload)
    return _profile_out(db, user)


# =========================
# Leads
# =========================
@router.get("/doctor/leads", response_model=LeadPageOut)
def list_leads(
    status: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user: User = Depends(validate_token),
):
    return LeadService.paginate(db, current_user, status=status, page=page, limit=limit)


@router.post("/doctor/leads", response_model=LeadOut, status_code=201)
def create_lead(
    payload: LeadCreate,
    response: Response,
    db: Session = Depends(get_db),
    current_user: User = Depends(validate_token),
):
    lead, created = LeadService.create_or_update(db, current_user, payload)
    if not created:
        response.status_code = 200
    return lead


@router.get("/doctor/leads/{lead_id}", response_model=LeadOut)
def get_lead(lead_id: int, db: Session = Depends(get_db), current_user: User = Depends(validate_token)):
    return LeadService.get_owned(db, current_user, lead_id)


@router.put("/doctor/leads/{lead_id}", response_model=LeadOut)
def update_lead(
    lead_id: int,
    payload: LeadUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(validate_token),
):
    lead = LeadService.get_owned(db, current_user, lead_id)
    return LeadService.update(db, current_user, lead, payload)


@router.delete("/doctor/leads/{lead_id}")
def delete_lead(lead_id: int, db: Session = Depends(get_db), current_user: User = Depends(validate_token)):
    lead = LeadService.get_owned(db, current_user, lead_id)
    LeadService.delete(db, lead)
    return {"success": True}
