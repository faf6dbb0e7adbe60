from __future__ import annotations

from typing import Any, Dict, Generator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from starlette.requests import Request

from transactions_api.settings.db_settings import settings

Base = declarative_base()


class Store:
    """
    Владелец движка и фабрики сессий. Создаётся один раз на приложение,
    схема поднимается на старте, движок освобождается на остановке.
    """

    def __init__(self, database_url: Optional[str] = None) -> None:
        self.database_url = database_url or settings.SYNC_DATABASE_URL
        connect_args: Dict[str, Any] = {}
        if self.database_url.startswith("sqlite"):
            # sync-хендлеры FastAPI работают в threadpool
            connect_args["check_same_thread"] = False
        self.engine: Engine = create_engine(
            self.database_url,
            pool_pre_ping=True,
            future=True,
            connect_args=connect_args,
        )
        self.SessionLocal = sessionmaker(bind=self.engine, autoflush=False, autocommit=False)

    def ensure_schema(self) -> None:
        # модели должны быть импортированы до create_all
        from transactions_api.db.Models import transaction_models as _transaction_models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)

    def session(self) -> Generator[Session, None, None]:
        db = self.SessionLocal()
        try:
            yield db
        finally:
            db.close()

    def dispose(self) -> None:
        self.engine.dispose()


def get_db(request: Request) -> Generator[Session, None, None]:
    store: Store = request.app.state.store
    yield from store.session()
