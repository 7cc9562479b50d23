from sqlalchemy import Column, Integer, String, DateTime, UniqueConstraint
from sqlalchemy.sql import func

from core.database import Base

class Favorite(Base):
    __tablename__ = "favorites"

    # 저장소가 쓰기 시점에 부여하는 단조 증가 ID (created_at 동률 정렬용)
    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(128), index=True, nullable=False)
    coin_id = Column(String(100), nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    __table_args__ = (
        UniqueConstraint('user_id', 'coin_id', name='uq_favorite_user_coin'),
        {"sqlite_autoincrement": True},
    )

    # INSERT 직후 서버 기본값(created_at)을 바로 받아온다
    __mapper_args__ = {"eager_defaults": True}
