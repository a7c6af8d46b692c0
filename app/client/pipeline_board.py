# app/client/pipeline_board.py
"""
Cliente do quadro kanban usado pelos apps (mobile/desktop).

O card é movido localmente na hora e só depois a mudança de status é enviada
em um único PATCH. Se o PATCH falhar o erro fica em `last_error`; o card
continua na coluna nova até o próximo `load()`.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import requests

logger = logging.getLogger("pipeline.client")

# board -> rota de atualização do card
UPDATE_PATHS = {
    "leads": "/leads/{card_id}",
    "outbound": "/outbound/{card_id}",
}


class PipelineBoard:
    def __init__(
        self,
        base_url: str,
        token: str,
        board: str = "leads",
        session: Optional[requests.Session] = None,
        timeout: int = 20,
    ):
        if board not in UPDATE_PATHS:
            raise ValueError(f"Quadro desconhecido: {board}")
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.board = board
        self.session = session or requests.Session()
        self.timeout = timeout
        self.columns: List[Dict[str, Any]] = []
        self.last_error: Optional[str] = None

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.token}",
            "Content-Type": "application/json",
        }

    def load(self) -> List[Dict[str, Any]]:
        r = self.session.get(
            f"{self.base_url}/pipeline/{self.board}",
            headers=self._headers(),
            timeout=self.timeout,
        )
        r.raise_for_status()
        self.columns = r.json()["columns"]
        return self.columns

    def column(self, column_id: str) -> Optional[Dict[str, Any]]:
        for column in self.columns:
            if column["id"] == column_id:
                return column
        return None

    def move(self, card_id: int, source_column: str, destination_column: str) -> bool:
        """
        Retorna True quando o servidor confirmou a mudança. Mesma coluna de
        origem e destino não faz nada.
        """
        if source_column == destination_column:
            return False

        source = self.column(source_column)
        destination = self.column(destination_column)
        if source is None or destination is None:
            raise KeyError(f"Coluna inválida: {source_column} -> {destination_column}")

        card = next((item for item in source["items"] if item["id"] == card_id), None)
        if card is None:
            raise KeyError(f"Card {card_id} não está em {source_column}")

        # movimento otimista
        source["items"].remove(card)
        card["status"] = destination["status"]
        destination["items"].insert(0, card)

        self.last_error = None
        try:
            r = self.session.patch(
                self.base_url + UPDATE_PATHS[self.board].format(card_id=card_id),
                json={"status": destination["status"]},
                headers=self._headers(),
                timeout=self.timeout,
            )
            r.raise_for_status()
        except requests.RequestException as e:
            self.last_error = str(e)
            logger.warning("PIPELINE_MOVE_FAILED: board=%s card_id=%s error=%s", self.board, card_id, e)
            return False

        return True
