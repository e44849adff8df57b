"""
Shopping Repository - manual items, weekly budgets and substitution preferences
"""

from datetime import date
from typing import List, Optional

from sqlalchemy.orm import Session

from repositories.base import BaseRepository
from domain.models import ManualShoppingItem, ShoppingBudget, SubstitutionPreference


class ManualItemRepository(BaseRepository[ManualShoppingItem]):
    """Repository for manual shopping items"""

    def __init__(self, db: Session):
        super().__init__(db, ManualShoppingItem)

    def list_all(self) -> List[ManualShoppingItem]:
        return (
            self.db.query(ManualShoppingItem)
            .order_by(ManualShoppingItem.created_at.desc(), ManualShoppingItem.name)
            .all()
        )

    def delete_all(self) -> int:
        result = self.db.query(ManualShoppingItem).delete()
        self.db.commit()
        return result


class BudgetRepository(BaseRepository[ShoppingBudget]):
    """Repository for weekly shopping budgets"""

    def __init__(self, db: Session):
        super().__init__(db, ShoppingBudget)

    def get_by_week_start(self, week_start: date) -> Optional[ShoppingBudget]:
        return (
            self.db.query(ShoppingBudget)
            .filter(ShoppingBudget.week_start == week_start)
            .first()
        )


class SubstitutionRepository(BaseRepository[SubstitutionPreference]):
    """Repository for ingredient substitution preferences"""

    def __init__(self, db: Session):
        super().__init__(db, SubstitutionPreference)

    def list_active(self) -> List[SubstitutionPreference]:
        return (
            self.db.query(SubstitutionPreference)
            .filter(SubstitutionPreference.is_active.is_(True))
            .order_by(SubstitutionPreference.created_at.desc(), SubstitutionPreference.id.desc())
            .all()
        )
