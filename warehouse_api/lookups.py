"""
Read-only lookup services for warehouse entities.

Each service answers two questions against a single table, "give me all rows"
and "give me the row with this id", and reports the outcome as a typed
result instead of raising.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Tuple, Union

from loguru import logger
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from . import envelope
from .db_client import WarehouseDB
from .models import StockByWarehouse, WarehouseOrder, WarehouseOrderLine
from .utils import parse_record_id, record_to_dict, redact_detail


@dataclass(frozen=True)
class Resource:
    """Describes an entity exposed through the API."""
    name: str
    model: Any
    singular: str
    plural: str

    @property
    def path(self) -> str:
        return f"/{self.name}"


@dataclass
class Found:
    data: Union[Dict[str, Any], List[Dict[str, Any]]]


@dataclass
class NotFound:
    pass


@dataclass
class QueryFailure:
    """The database layer raised while running the query."""
    detail: str


@dataclass
class Unexpected:
    """Anything else went wrong while running the query."""
    detail: str


LookupResult = Union[Found, NotFound, QueryFailure, Unexpected]


STOCKS = Resource(
    name="stocks",
    model=StockByWarehouse,
    singular="stock",
    plural="stocks",
)

WAREHOUSE_ORDERS = Resource(
    name="warehouse-orders",
    model=WarehouseOrder,
    singular="warehouse order",
    plural="warehouse orders",
)

WAREHOUSE_ORDER_LINES = Resource(
    name="warehouse-order-lines",
    model=WarehouseOrderLine,
    singular="warehouse order line",
    plural="warehouse order lines",
)

RESOURCES: Dict[str, Resource] = {
    r.name: r for r in (STOCKS, WAREHOUSE_ORDERS, WAREHOUSE_ORDER_LINES)
}


class LookupService:
    """
    List and fetch records of a single resource.

    The service holds no state between calls; every call opens its own
    session on the client and closes it before returning.
    """

    def __init__(self, db: WarehouseDB, resource: Resource):
        self.db = db
        self.resource = resource

    def _run(self, action: str, query: Callable[[Any], LookupResult]) -> LookupResult:
        try:
            with self.db.session() as session:
                return query(session)
        except SQLAlchemyError as e:
            logger.error(f"Failed to {action} {self.resource.name}: {e}")
            return QueryFailure(detail=str(e))
        except Exception as e:
            logger.exception(f"Unexpected error during {action} {self.resource.name}: {e}")
            return Unexpected(detail=str(e))

    def list_all(self) -> LookupResult:
        """
        Fetch every record of the resource.

        Returns:
            Found with a (possibly empty) list of record dicts, or a failure
        """
        def query(session):
            rows = session.scalars(select(self.resource.model)).all()
            logger.debug(f"Retrieved {len(rows)} {self.resource.name} records")
            return Found(data=[record_to_dict(row) for row in rows])

        return self._run("list", query)

    def get_by_id(self, record_id: Any) -> LookupResult:
        """
        Fetch one record by primary key.

        Args:
            record_id: Primary key; non-integer values are reported as not found

        Returns:
            Found with a record dict, NotFound, or a failure
        """
        pk = parse_record_id(record_id)
        if pk is None:
            return NotFound()

        def query(session):
            record = session.get(self.resource.model, pk)
            if record is None:
                logger.debug(f"{self.resource.name} record {pk} not found")
                return NotFound()
            return Found(data=record_to_dict(record))

        return self._run("get", query)


class StockLookupService(LookupService):
    """Lookups over stock-by-warehouse records."""

    def __init__(self, db: WarehouseDB):
        super().__init__(db, STOCKS)


class OrderLookupService(LookupService):
    """Lookups over warehouse order headers."""

    def __init__(self, db: WarehouseDB):
        super().__init__(db, WAREHOUSE_ORDERS)


class OrderLineLookupService(LookupService):
    """Lookups over warehouse order lines."""

    def __init__(self, db: WarehouseDB):
        super().__init__(db, WAREHOUSE_ORDER_LINES)


SERVICES = {
    STOCKS.name: StockLookupService,
    WAREHOUSE_ORDERS.name: OrderLookupService,
    WAREHOUSE_ORDER_LINES.name: OrderLineLookupService,
}


def service_for(db: WarehouseDB, resource_name: str) -> LookupService:
    """
    Build the lookup service for a resource name.

    Raises:
        KeyError: If the resource name is unknown
    """
    return SERVICES[resource_name](db)


def render(resource: Resource, result: LookupResult, many: bool,
           expose_error_details: bool = True,
           failure_status: int = 404) -> Tuple[int, Dict[str, Any]]:
    """
    Map a lookup result to an HTTP status code and envelope.

    Args:
        resource: Resource the lookup ran against
        result: Outcome of the lookup
        many: True for list lookups, False for single-record lookups
        expose_error_details: Forward the underlying error text to the client
        failure_status: Status code for failed lookups

    Returns:
        tuple: (status_code, envelope dict)
    """
    label = resource.plural if many else resource.singular

    if isinstance(result, Found):
        message = f"{label.capitalize()} retrieved successfully."
        return 200, envelope.success(result.data, message)

    if isinstance(result, NotFound):
        return 404, envelope.error(f"{resource.singular.capitalize()} not found.")

    detail = redact_detail(result.detail, expose_error_details)
    return failure_status, envelope.error(f"Error retrieving {label}: {detail}")
