from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

import requests  # type: ignore
from sqlalchemy import ColumnElement, Select, String, and_, cast, func, or_, select
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.engine import Row
from sqlalchemy.orm import Session

from transactions_api.common.logger import logger
from transactions_api.common.Schemas.transaction_schemas import TransactionIn, TransactionOut
from transactions_api.db.Models.transaction_models import Transaction
from transactions_api.settings.config import settings

INITIALIZED_MESSAGE = "Initialized database with third party API"

# ---------- служебные операции ----------

def fetch_all(db: Session, statement: Select) -> Sequence[Row]:
    return db.execute(statement).all()


def fetch_one(db: Session, statement: Select) -> Row:
    return db.execute(statement).one()


def upsert_transaction(db: Session, item: TransactionIn) -> bool:
    """
    INSERT ... ON CONFLICT(id) DO NOTHING.
    Существующий id не перезаписывается. True, если строка добавлена.
    """
    stmt = (
        sqlite_insert(Transaction)
        .values(**item.model_dump())
        .on_conflict_do_nothing(index_elements=["id"])
    )
    result = db.execute(stmt)
    db.commit()
    return result.rowcount == 1

# ---------- загрузка/парсинг JSON ----------

def __get_json_from_url(address: str) -> Any:
    resp = requests.get(address, timeout=settings.SEED_REQUEST_TIMEOUT)
    resp.raise_for_status()
    return resp.json()


def __parse_transactions(json_data: Any) -> List[TransactionIn]:
    if not isinstance(json_data, list):
        raise ValueError("Expected JSON array of transactions")
    # pydantic.ValidationError наследуется от ValueError
    return [TransactionIn.model_validate(it) for it in json_data]

# ---------- публичный импорт ----------

def update_db(db: Session, json_url: str = "") -> Dict[str, str]:
    """
    Тянет JSON-массив транзакций и вставляет каждую запись по отдельности.
    Уже существующие id пропускаются, повторный вызов строк не дублирует.
    Ошибка посередине не откатывает уже вставленное.
    """
    url = json_url or settings.SEED_DATA_URL
    items = __parse_transactions(__get_json_from_url(url))

    inserted = skipped = 0
    for item in items:
        if upsert_transaction(db, item):
            inserted += 1
        else:
            skipped += 1

    logger.info("update_db: inserted=%s, skipped=%s, total=%s", inserted, skipped, len(items))
    return {"msg": INITIALIZED_MESSAGE}

# ---------- фильтры ----------

def month_matches(month: str) -> ColumnElement[bool]:
    """Месяц продажи "01".."12" содержит month как подстроку. Год не учитывается."""
    sale_month = func.strftime("%m", Transaction.dateOfSale, type_=String)
    return sale_month.contains(month, autoescape=True)


def search_matches(s_query: str) -> ColumnElement[bool]:
    # цена сравнивается по текстовому виду: "1" найдёт 1.0, 15.5, 201.0
    return or_(
        Transaction.title.contains(s_query, autoescape=True),
        Transaction.description.contains(s_query, autoescape=True),
        cast(Transaction.price, String).contains(s_query, autoescape=True),
    )

# ---------- выборки ----------

def list_transactions(
    db: Session,
    month: str = "",
    s_query: str = "",
    limit: int = 10,
    offset: int = 0,
) -> Dict[str, Any]:
    """
    Страница транзакций и общее число совпадений.
    total считается отдельным COUNT без limit/offset. Порядок строк не задан.
    """
    criteria = and_(search_matches(s_query), month_matches(month))

    rows = fetch_all(db, select(Transaction).where(criteria).limit(limit).offset(offset))
    (total,) = fetch_one(db, select(func.count(Transaction.id)).where(criteria))

    return {
        "transactions": [TransactionOut.model_validate(transaction) for (transaction,) in rows],
        "total": {"total": total},
    }


def get_transactions_count(db: Session) -> int:
    return db.scalar(select(func.count(Transaction.id))) or 0


def get_db_version(db: Session) -> Optional[str]:
    return db.scalar(select(func.sqlite_version()))
