# /app/services/database_helpers/user_repository_sql.py

from datetime import datetime
from typing import Dict, Optional

from sqlalchemy.orm import Session

from app.db.models.user_models import User


class UserRepositorySQL:
    def __init__(self, db_session: Session):
        self.db = db_session

    def get_user_by_id(self, user_id: str) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def get_user_by_clerk_id(self, clerk_user_id: str, include_deleted: bool = False) -> Optional[User]:
        """Soft-deleted users are invisible unless `include_deleted` is set."""
        query = self.db.query(User).filter(User.clerk_user_id == clerk_user_id)
        if not include_deleted:
            query = query.filter(User.deleted_at.is_(None))
        return query.first()

    def get_user_by_stripe_customer_id(self, customer_id: str) -> Optional[User]:
        return self.db.query(User).filter(User.stripe_customer_id == customer_id).first()

    def create_user(self, record: Dict) -> User:
        new_user = User(**record)
        self.db.add(new_user)
        self.db.commit()
        self.db.refresh(new_user)
        return new_user

    def update_user(self, user_id: str, fields: Dict) -> Optional[User]:
        user = self.get_user_by_id(user_id)
        if not user:
            return None
        for key, value in fields.items():
            setattr(user, key, value)
        self.db.commit()
        self.db.refresh(user)
        return user

    def reset_usage_if_due(self, user_id: str, now: datetime, next_reset_at: datetime) -> bool:
        """
        Zeroes the monthly counter only if the stored reset time has passed.
        The condition lives in the UPDATE itself, so of two concurrent callers
        exactly one performs the reset.
        """
        updated = (
            self.db.query(User)
            .filter(User.id == user_id, User.usage_reset_at < now)
            .update(
                {User.generations_count_current_month: 0, User.usage_reset_at: next_reset_at},
                synchronize_session=False,
            )
        )
        self.db.commit()
        self.db.expire_all()
        return updated > 0

    def increment_generation_count(self, user_id: str, now: datetime) -> None:
        self.db.query(User).filter(User.id == user_id).update(
            {
                User.generations_count_current_month: User.generations_count_current_month + 1,
                User.last_generation_at: now,
            },
            synchronize_session=False,
        )
        self.db.commit()
        self.db.expire_all()
