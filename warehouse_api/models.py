"""
ORM models for the warehouse entities exposed by the API.

Every entity is read-only from the API's point of view: rows are created and
maintained by the ERP sync, and the columns are passed through untouched.
"""

from sqlalchemy import Column, Date, Integer, Numeric, String
from sqlalchemy.orm import DeclarativeBase


ERP_BIND = "erp"
DEFAULT_BIND = "default"


class Base(DeclarativeBase):
    pass


class StockByWarehouse(Base):
    """Stock position of a part in a warehouse (ERP database)."""
    __tablename__ = "stockbywh"
    __table_args__ = {"info": {"bind_key": ERP_BIND}}

    id = Column(Integer, primary_key=True)
    warehouse = Column(String(255), nullable=True)
    partno = Column(String(255), nullable=True)
    desc = Column(String(255), nullable=True)
    partname = Column(String(255), nullable=True)
    oldpartno = Column(String(255), nullable=True)
    group = Column(String(255), nullable=True)
    groupkey = Column(String(255), nullable=True)
    product_type = Column(String(255), nullable=True)
    model = Column(String(255), nullable=True)
    customer = Column(String(255), nullable=True)
    onhand = Column(Numeric(18, 2), nullable=True)
    allocated = Column(Numeric(18, 2), nullable=True)
    onorder = Column(Numeric(18, 2), nullable=True)
    economicstock = Column(Numeric(18, 2), nullable=True)
    safety_stock = Column(Numeric(18, 2), nullable=True)
    min_stock = Column(Numeric(18, 2), nullable=True)
    max_stock = Column(Numeric(18, 2), nullable=True)
    unit = Column(String(255), nullable=True)
    location = Column(String(255), nullable=True)


class WarehouseOrder(Base):
    """Warehouse order header."""
    __tablename__ = "view_warehouse_order"

    id = Column(Integer, primary_key=True)
    order_origin_code = Column(String(255), nullable=True)
    order_origin = Column(String(255), nullable=True)
    trx_type = Column(String(255), nullable=True)
    order_date = Column(Date, nullable=True)
    plan_delivery_date = Column(Date, nullable=True)
    ship_from_type = Column(String(255), nullable=True)
    ship_from = Column(String(255), nullable=True)
    ship_from_desc = Column(String(255), nullable=True)
    ship_to_type = Column(String(255), nullable=True)
    ship_to = Column(String(255), nullable=True)
    ship_to_desc = Column(String(255), nullable=True)


class WarehouseOrderLine(Base):
    """Single line of a warehouse order."""
    __tablename__ = "view_warehouse_order_line"

    id = Column(Integer, primary_key=True)
    order_origin_code = Column(String(255), nullable=True)
    order_origin = Column(String(255), nullable=True)
    trx_type = Column(String(255), nullable=True)
    order_date = Column(Date, nullable=True)
    delivery_date = Column(Date, nullable=True)
    receipt_date = Column(Date, nullable=True)
    order_no = Column(String(255), nullable=True)
    line_no = Column(Integer, nullable=True)
    ship_from_type = Column(String(255), nullable=True)
    ship_from = Column(String(255), nullable=True)
    ship_from_desc = Column(String(255), nullable=True)
    ship_to_type = Column(String(255), nullable=True)
    ship_to = Column(String(255), nullable=True)
    ship_to_desc = Column(String(255), nullable=True)
    item_code = Column(String(255), nullable=True)
    item_desc = Column(String(255), nullable=True)
    item_desc2 = Column(String(255), nullable=True)
    order_qty = Column(Numeric(18, 2), nullable=True)
    ship_qty = Column(Numeric(18, 2), nullable=True)
    unit = Column(String(255), nullable=True)
    line_status_code = Column(String(255), nullable=True)
    line_status = Column(String(255), nullable=True)


def bind_key_for(model) -> str:
    """Return the bind key an ORM model is routed to."""
    return model.__table__.info.get("bind_key", DEFAULT_BIND)
