from datetime import datetime
from typing import Optional

from pydantic import EmailStr

from app.schemas.base import CamelModel


# =========================
# Cadastro / login
# =========================
class RegisterIn(CamelModel):
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    password: Optional[str] = None
    specialty: Optional[str] = None
    phone: Optional[str] = None


class LoginIn(CamelModel):
    email: Optional[str] = None
    password: Optional[str] = None


class RefreshIn(CamelModel):
    token: Optional[str] = None


# =========================
# Retorno de usuário
# =========================
class UserOut(CamelModel):
    id: int
    name: str
    email: EmailStr
    specialty: Optional[str] = None
    slug: str
    image: Optional[str] = None


class UserProfileOut(UserOut):
    phone: Optional[str] = None
    created_at: datetime


class UserPlanOut(CamelModel):
    plan: str
    plan_expires_at: Optional[datetime] = None
    is_premium: bool


class PublicDoctorOut(CamelModel):
    id: int
    name: str
    specialty: Optional[str] = None
    image: Optional[str] = None
    slug: str


class LoginResponse(CamelModel):
    access_token: str
    token_type: str = "bearer"
    user: UserOut


class AuthOut(CamelModel):
    """Formato do app mobile: {user, token}."""
    user: UserOut
    token: str


class ProfileUpdate(CamelModel):
    name: Optional[str] = None
    specialty: Optional[str] = None
    phone: Optional[str] = None
    image: Optional[str] = None


class MobileProfileUpdate(CamelModel):
    name: Optional[str] = None
    phone: Optional[str] = None
    specialty: Optional[str] = None
    current_password: Optional[str] = None
    new_password: Optional[str] = None


class ProfileStats(CamelModel):
    total_indications: int
    total_leads: int
    recent_clicks: int
    recent_leads: int
    conversion_rate: int


class MobileProfileOut(UserProfileOut):
    plan: str
    plan_expires_at: Optional[datetime] = None
    stats: ProfileStats
