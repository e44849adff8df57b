"""
Week plan repositories - week plans with their days and meals, and templates
"""

from datetime import date
from typing import List, Optional

from sqlalchemy.orm import Session, selectinload

from domain.models import WeekPlan, Day, WeekPlanTemplate
from repositories.base import BaseRepository


class WeekPlanRepository(BaseRepository[WeekPlan]):
    """Repository for week plan data access"""

    def __init__(self, db: Session):
        super().__init__(db, WeekPlan)

    def _query(self):
        return self.db.query(WeekPlan).options(
            selectinload(WeekPlan.days).selectinload(Day.meals)
        )

    def get_by_id(self, plan_id: str) -> Optional[WeekPlan]:
        return self._query().filter(WeekPlan.id == plan_id).first()

    def get_by_start_date(self, start_date: date) -> Optional[WeekPlan]:
        return self._query().filter(WeekPlan.start_date == start_date).first()

    def get_latest(self) -> Optional[WeekPlan]:
        """Most recently saved week plan"""
        return (
            self._query()
            .order_by(WeekPlan.updated_at.desc(), WeekPlan.start_date.desc())
            .first()
        )

    def delete_all(self) -> int:
        """Delete every week plan; days and meals go with them"""
        plans = self.db.query(WeekPlan).all()
        for plan in plans:
            self.db.delete(plan)
        self.db.commit()
        return len(plans)


class TemplateRepository(BaseRepository[WeekPlanTemplate]):
    """Repository for week plan templates"""

    def __init__(self, db: Session):
        super().__init__(db, WeekPlanTemplate)

    def list_all(self) -> List[WeekPlanTemplate]:
        return (
            self.db.query(WeekPlanTemplate)
            .order_by(WeekPlanTemplate.created_at.desc(), WeekPlanTemplate.name)
            .all()
        )
