from __future__ import annotations

from typing import Any, Dict

from sqlalchemy.orm import Session

from transactions_api.db.aggregations import get_bar_chart, get_pie_chart, get_statistics
from transactions_api.db.CRUD import list_transactions, update_db


def build_combined_response(
    db: Session,
    month: str = "",
    s_query: str = "",
    limit: int = 10,
    offset: int = 0,
    json_url: str = "",
) -> Dict[str, Any]:
    """
    Все ответы одним payload. Вызовы идут напрямую в сервисы, без HTTP к самому себе.
    Любая ошибка пробрасывается наверх целиком, частичного ответа нет.
    """
    return {
        "initialize": update_db(db, json_url=json_url),
        "listTransactions": list_transactions(db, month, s_query, limit, offset),
        "statistics": get_statistics(db, month),
        "barChart": get_bar_chart(db, month),
        "pieChart": get_pie_chart(db, month),
    }
