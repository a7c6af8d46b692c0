from datetime import datetime
from typing import List

from dateutil import parser as date_parser
from fastapi import HTTPException
from sqlalchemy.orm import Session, selectinload

from app.api.models.cycle import Cycle, CycleDay, CycleTask, CycleWeek, KeyResult, WeekGoal
from app.api.models.user import User
from app.schemas.cycle import CycleIn


def parse_date(value: str, field: str) -> datetime:
    try:
        # ISO primeiro; dd/mm/aaaa quando vier no formato brasileiro
        if value and value[:4].isdigit():
            return date_parser.isoparse(value).replace(tzinfo=None)
        return date_parser.parse(value, dayfirst=True)
    except (ValueError, OverflowError, TypeError):
        raise HTTPException(400, f"Data inválida em {field}: {value!r}")


class CycleService:

    @staticmethod
    def list_for_user(db: Session, user: User) -> List[Cycle]:
        return (
            db.query(Cycle)
            .options(
                selectinload(Cycle.weeks).selectinload(CycleWeek.goals),
                selectinload(Cycle.weeks).selectinload(CycleWeek.key_results),
                selectinload(Cycle.weeks).selectinload(CycleWeek.days).selectinload(CycleDay.tasks),
            )
            .filter(Cycle.user_id == user.id)
            .order_by(Cycle.start_date.desc(), Cycle.id.desc())
            .all()
        )

    @staticmethod
    def create(db: Session, user: User, data: CycleIn) -> Cycle:
        start_date = parse_date(data.start_date, "startDate")
        end_date = parse_date(data.end_date, "endDate")
        if end_date < start_date:
            raise HTTPException(400, "A data final deve ser posterior à data inicial")

        cycle = Cycle(user_id=user.id, start_date=start_date, end_date=end_date, vision=data.vision)

        for week_in in data.weeks:
            week = CycleWeek(
                week_number=week_in.week_number,
                vision=week_in.vision,
                reflection=week_in.reflection,
                is_expanded=week_in.is_expanded,
                goals=[WeekGoal(title=title) for title in week_in.goals if title],
                key_results=[
                    KeyResult(title=kr.title, target=kr.target, current=kr.current)
                    for kr in week_in.key_results
                ],
            )
            for day_in in week_in.days:
                week.days.append(CycleDay(
                    date=parse_date(day_in.date, "date"),
                    notes=day_in.notes,
                    tasks=[
                        CycleTask(
                            title=task.title,
                            completed=task.completed,
                            time_block=task.time_block,
                            scheduled_time=task.scheduled_time,
                        )
                        for task in day_in.tasks
                    ],
                ))
            cycle.weeks.append(week)

        db.add(cycle)
        db.commit()
        db.refresh(cycle)
        return cycle
