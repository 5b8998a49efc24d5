# /app/services/database_helpers/generation_repository_sql.py

from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from app.db.models.generation_models import Generation, UsageLog


class GenerationRepositorySQL:
    def __init__(self, db_session: Session):
        self.db = db_session

    def add_generation_record(self, record: Dict) -> Generation:
        """Creates a new Generation record in the database from a dictionary."""
        new_generation = Generation(**record)
        self.db.add(new_generation)
        self.db.commit()
        self.db.refresh(new_generation)
        return new_generation

    def get_generation_by_id(self, generation_id: str) -> Optional[Generation]:
        return self.db.query(Generation).filter(Generation.id == generation_id).first()

    def finalize_generation(self, generation_id: str, fields: Dict) -> bool:
        """
        Writes status, outputs and metadata in a single UPDATE, so a reader
        never sees a terminal status without the outputs that go with it.
        """
        updated = (
            self.db.query(Generation)
            .filter(Generation.id == generation_id)
            .update(fields, synchronize_session=False)
        )
        self.db.commit()
        self.db.expire_all()
        return updated > 0

    def get_generations_by_user(self, user_id: str, limit: int) -> List[Generation]:
        """Newest first."""
        return (
            self.db.query(Generation)
            .filter(Generation.user_id == user_id)
            .order_by(Generation.created_at.desc())
            .limit(limit)
            .all()
        )

    def count_generations_by_user(self, user_id: str) -> int:
        return self.db.query(Generation).filter(Generation.user_id == user_id).count()

    def add_usage_log(self, record: Dict) -> UsageLog:
        log = UsageLog(**record)
        self.db.add(log)
        self.db.commit()
        self.db.refresh(log)
        return log

    def get_usage_logs_by_user(self, user_id: str) -> List[UsageLog]:
        return (
            self.db.query(UsageLog)
            .filter(UsageLog.user_id == user_id)
            .order_by(UsageLog.created_at.desc())
            .all()
        )
