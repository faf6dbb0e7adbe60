from __future__ import annotations

from typing import Any, Dict

import requests  # type: ignore
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from starlette import status

from transactions_api.common.combined import build_combined_response
from transactions_api.common.logger import logger
from transactions_api.common.Schemas.transaction_schemas import (
    BarChart,
    CombinedResponse,
    InitializeResponse,
    PieChart,
    Statistics,
    TransactionsPage,
)
from transactions_api.db.aggregations import get_bar_chart, get_pie_chart, get_statistics
from transactions_api.db.CRUD import get_db_version, get_transactions_count, list_transactions, update_db
from transactions_api.db.database import get_db
from transactions_api.settings.config import settings

router: APIRouter = APIRouter()

# LIMIT/OFFSET биндятся как 64-битный INTEGER SQLite
SQLITE_MAX_INTEGER = 2**63 - 1

# Хендлеры синхронные: FastAPI гоняет их в threadpool, SQLAlchemy и requests блокирующие.

# ---------------- Seed ---------------- #

@router.get("/initialize-database", tags=["seed"], response_model=InitializeResponse)
def initialize_database(db: Session = Depends(get_db)) -> Dict[str, Any]:
    """
    Загружает транзакции из стороннего JSON. Повторный вызов дублей не создаёт.
    """
    try:
        return update_db(db, json_url=settings.SEED_DATA_URL)
    except requests.RequestException as e:
        logger.error("Seed fetch failed - %s", e)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Failed to fetch seed data: {e}",
        )
    except ValueError as e:
        logger.error("Seed payload rejected - %s", e)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Invalid seed data: {e}",
        )


# ---------------- Transactions ---------------- #

@router.get("/transactions", tags=["transactions"], response_model=TransactionsPage)
def get_transactions(
    month: str = "",
    s_query: str = "",
    limit: int = Query(10, ge=0, le=SQLITE_MAX_INTEGER),
    offset: int = Query(0, ge=0, le=SQLITE_MAX_INTEGER),
    db: Session = Depends(get_db),
) -> Dict[str, Any]:
    return list_transactions(db, month=month, s_query=s_query, limit=limit, offset=offset)


# ---------------- Charts ---------------- #

@router.get("/statistics", tags=["charts"], response_model=Statistics)
def get_month_statistics(month: str = "", db: Session = Depends(get_db)) -> Dict[str, Any]:
    return get_statistics(db, month)


@router.get("/bar-chart", tags=["charts"], response_model=BarChart)
def get_month_bar_chart(month: str = "", db: Session = Depends(get_db)) -> Dict[str, Any]:
    return get_bar_chart(db, month)


@router.get("/pie-chart", tags=["charts"], response_model=PieChart)
def get_month_pie_chart(month: str = "", db: Session = Depends(get_db)) -> Dict[str, Any]:
    return get_pie_chart(db, month)


@router.get("/combined-response", tags=["charts"], response_model=CombinedResponse)
def get_combined_response(
    month: str = "",
    s_query: str = "",
    limit: int = Query(10, ge=0, le=SQLITE_MAX_INTEGER),
    offset: int = Query(0, ge=0, le=SQLITE_MAX_INTEGER),
    db: Session = Depends(get_db),
) -> Dict[str, Any]:
    try:
        return build_combined_response(
            db,
            month=month,
            s_query=s_query,
            limit=limit,
            offset=offset,
            json_url=settings.SEED_DATA_URL,
        )
    except requests.RequestException as e:
        logger.error("Combined response failed on seed fetch - %s", e)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Failed to fetch seed data: {e}",
        )
    except ValueError as e:
        logger.error("Combined response failed on seed payload - %s", e)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Invalid seed data: {e}",
        )


# ---------------- DB utils ---------------- #

@router.get("/status-db", tags=["database"])
def get_db_status(db: Session = Depends(get_db)) -> Dict[str, Any]:
    """
    Возвращает версию SQLite и число транзакций. Полезно для health-check.
    """
    try:
        version = get_db_version(db)
        count = get_transactions_count(db)
        return {"status": status.HTTP_200_OK, "DB_version": version, "transactions": count}
    except SQLAlchemyError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error connecting to DB: {e}",
        )
