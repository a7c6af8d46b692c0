from typing import Any, Dict, List, Optional

from app.schemas.base import CamelModel


class PipelineColumnOut(CamelModel):
    id: str
    title: str
    status: str
    items: List[Dict[str, Any]]


class PipelineBoardOut(CamelModel):
    columns: List[PipelineColumnOut]


class MoveCardIn(CamelModel):
    card_id: int
    destination_column: str
    source_column: Optional[str] = None


class MoveCardOut(CamelModel):
    moved: bool
    card_id: int
    status: str
