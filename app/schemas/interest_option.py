from datetime import datetime
from typing import Optional

from app.schemas.base import CamelModel


class InterestOptionIn(CamelModel):
    id: Optional[int] = None
    label: Optional[str] = None
    value: Optional[str] = None
    redirect_url: Optional[str] = None
    is_default: bool = False


class InterestOptionOut(CamelModel):
    id: int
    label: str
    value: str
    redirect_url: Optional[str] = None
    is_default: bool


class InterestOptionFullOut(InterestOptionOut):
    user_id: int
    created_at: datetime
