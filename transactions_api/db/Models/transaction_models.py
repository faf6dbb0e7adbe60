from sqlalchemy import Boolean, Column, DateTime, Float, Integer, String

from transactions_api.db.database import Base


class Transaction(Base):
    __tablename__ = "transactions"
    id = Column(Integer, primary_key=True, autoincrement=False)  # id из JSON, локально не генерируется
    title = Column(String)
    price = Column(Float)
    description = Column(String)
    category = Column(String, index=True)
    image = Column(String)
    sold = Column(Boolean)
    dateOfSale = Column(DateTime)  # UTC, без tzinfo
