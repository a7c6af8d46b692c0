from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.api.models.user import User
from app.api.services.pipeline_service import LEADS_BOARD, OUTBOUND_BOARD, PipelineService
from app.core.security import get_current_user
from app.schemas.pipeline import MoveCardIn, MoveCardOut, PipelineBoardOut

router = APIRouter(prefix="/pipeline", tags=["Pipeline"])


@router.get("/leads", response_model=PipelineBoardOut)
def leads_board(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return PipelineService.board(db, current_user, LEADS_BOARD)


@router.post("/leads/move", response_model=MoveCardOut)
def move_lead(payload: MoveCardIn, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return PipelineService.move_card(db, current_user, LEADS_BOARD, payload)


@router.get("/outbound", response_model=PipelineBoardOut)
def outbound_board(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return PipelineService.board(db, current_user, OUTBOUND_BOARD)


@router.post("/outbound/move", response_model=MoveCardOut)
def move_outbound(payload: MoveCardIn, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return PipelineService.move_card(db, current_user, OUTBOUND_BOARD, payload)
