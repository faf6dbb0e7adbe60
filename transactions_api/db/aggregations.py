from __future__ import annotations

from typing import Any, Dict, List, Tuple

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from transactions_api.db.CRUD import fetch_all, fetch_one, month_matches
from transactions_api.db.Models.transaction_models import Transaction

# Границы включительные. Цены выше 10000 и дробные промежутки (100.5) не попадают никуда.
PRICE_RANGES: Tuple[Tuple[int, int], ...] = (
    (0, 100),
    (101, 200),
    (201, 300),
    (301, 400),
    (401, 500),
    (501, 600),
    (601, 700),
    (701, 800),
    (801, 900),
    (901, 10000),
)


def get_statistics(db: Session, month: str = "") -> Dict[str, Any]:
    """
    Сумма продаж и количество проданных/непроданных позиций за месяц.
    Если ничего не найдено, total = None.
    """
    total, sold, not_sold = fetch_one(
        db,
        select(
            func.sum(Transaction.price),
            func.count(Transaction.id).filter(Transaction.sold.is_(True)),
            func.count(Transaction.id).filter(Transaction.sold.is_(False)),
        ).where(month_matches(month)),
    )
    return {
        "totalSaleAmount": {"total": total},
        "soldItems": {"count": sold},
        "notSoldItems": {"count": not_sold},
    }


def get_bar_chart(db: Session, month: str = "") -> Dict[str, List[Dict[str, Any]]]:
    counts = fetch_one(
        db,
        select(
            *[
                func.count(Transaction.id).filter(Transaction.price.between(low, high))
                for low, high in PRICE_RANGES
            ]
        ).where(month_matches(month)),
    )
    return {
        "barChartData": [
            {"range": f"{low} - {high}", "count": count}
            for (low, high), count in zip(PRICE_RANGES, counts)
        ]
    }


def get_pie_chart(db: Session, month: str = "") -> Dict[str, List[Dict[str, Any]]]:
    rows = fetch_all(
        db,
        select(Transaction.category, func.count(Transaction.id))
        .where(month_matches(month))
        .group_by(Transaction.category),
    )
    return {"pieChartData": [{"category": category, "count": count} for category, count in rows]}
