from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.api.models.user import User
from app.api.services.cycle_service import CycleService
from app.core.security import get_current_user
from app.schemas.cycle import CycleIn, CycleOut

router = APIRouter(prefix="/cycles", tags=["Cycles"])


@router.get("", response_model=List[CycleOut])
def list_cycles(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return CycleService.list_for_user(db, current_user)


@router.post("", response_model=CycleOut, status_code=201)
def create_cycle(payload: CycleIn, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return CycleService.create(db, current_user, payload)
