"""
Quadros kanban sobre os leads e sobre os contatos de outbound.

Os dois quadros usam a mesma lógica; só mudam as colunas, o modelo e o
schema de saída. Mover um card é sempre uma única atualização de status.
"""
import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple, Type

from fastapi import HTTPException
from sqlalchemy.orm import Session

from app.api.models.lead import Lead
from app.api.models.outbound import Outbound
from app.api.models.user import User
from app.api.services.lead_service import LeadService
from app.api.services.outbound_service import OutboundService
from app.core.constants import LEAD_PIPELINE_COLUMNS, OUTBOUND_PIPELINE_COLUMNS
from app.schemas.lead import LeadOut
from app.schemas.outbound import OutboundOut
from app.schemas.pipeline import MoveCardIn

logger = logging.getLogger("pipeline")


@dataclass(frozen=True)
class Board:
    name: str
    model: Type
    columns: Sequence[Tuple[str, str, object]]
    serializer: Type
    list_cards: Callable[[Session, User], list]
    not_found: str

    def column(self, key: Optional[str]):
        """Aceita o id da coluna ou o próprio status."""
        for column in self.columns:
            column_id, _, status = column
            if key == column_id or key == status.value:
                return column
        return None


LEADS_BOARD = Board(
    name="leads",
    model=Lead,
    columns=LEAD_PIPELINE_COLUMNS,
    serializer=LeadOut,
    list_cards=LeadService.list_for_user,
    not_found="Lead não encontrado",
)

OUTBOUND_BOARD = Board(
    name="outbound",
    model=Outbound,
    columns=OUTBOUND_PIPELINE_COLUMNS,
    serializer=OutboundOut,
    list_cards=OutboundService.list_for_user,
    not_found="Contato não encontrado",
)


class PipelineService:

    @staticmethod
    def board(db: Session, user: User, board: Board) -> dict:
        cards = board.list_cards(db, user)

        columns: List[dict] = []
        for column_id, title, status in board.columns:
            items = [
                board.serializer.model_validate(card).model_dump(by_alias=True, mode="json")
                for card in cards
                if card.status == status.value
            ]
            columns.append({
                "id": column_id,
                "title": title,
                "status": status.value,
                "items": items,
            })
        return {"columns": columns}

    @staticmethod
    def move_card(db: Session, user: User, board: Board, data: MoveCardIn) -> dict:
        destination = board.column(data.destination_column)
        if destination is None:
            raise HTTPException(400, "Coluna de destino inválida")

        if data.source_column is not None and board.column(data.source_column) is None:
            raise HTTPException(400, "Coluna de origem inválida")

        card = db.get(board.model, data.card_id)
        if not card or card.user_id != user.id:
            raise HTTPException(404, board.not_found)

        status = destination[2].value
        source = board.column(data.source_column) if data.source_column else None

        if (source is not None and source[0] == destination[0]) or card.status == status:
            return {"moved": False, "card_id": card.id, "status": card.status}

        previous = card.status
        card.status = status
        db.commit()

        logger.info(
            "PIPELINE_MOVE: board=%s card_id=%s %s -> %s", board.name, card.id, previous, status
        )
        return {"moved": True, "card_id": card.id, "status": status}
