from datetime import datetime
from typing import List, Optional

from app.schemas.base import CamelModel


class TaskIn(CamelModel):
    title: str
    completed: bool = False
    time_block: Optional[str] = None
    scheduled_time: Optional[str] = None


class DayIn(CamelModel):
    # datas chegam em formatos variados do front (ISO, dd/mm/aaaa...)
    date: str
    notes: Optional[str] = None
    tasks: List[TaskIn] = []


class KeyResultIn(CamelModel):
    title: str
    target: float = 0
    current: float = 0


class WeekIn(CamelModel):
    week_number: int
    vision: Optional[str] = None
    reflection: Optional[str] = None
    is_expanded: bool = False
    goals: List[str] = []
    key_results: List[KeyResultIn] = []
    days: List[DayIn] = []


class CycleIn(CamelModel):
    start_date: str
    end_date: str
    vision: Optional[str] = None
    weeks: List[WeekIn] = []


class TaskOut(CamelModel):
    id: int
    title: str
    completed: bool
    time_block: Optional[str] = None
    scheduled_time: Optional[str] = None


class DayOut(CamelModel):
    id: int
    date: datetime
    notes: Optional[str] = None
    tasks: List[TaskOut] = []


class GoalOut(CamelModel):
    id: int
    title: str


class KeyResultOut(CamelModel):
    id: int
    title: str
    target: float
    current: float


class WeekOut(CamelModel):
    id: int
    week_number: int
    vision: Optional[str] = None
    reflection: Optional[str] = None
    is_expanded: bool
    goals: List[GoalOut] = []
    key_results: List[KeyResultOut] = []
    days: List[DayOut] = []


class CycleOut(CamelModel):
    id: int
    start_date: datetime
    end_date: datetime
    vision: Optional[str] = None
    weeks: List[WeekOut] = []
