"""
Database client for the Warehouse Read API.

Provides SQLAlchemy engine and session management. Stock records may live on
a separate ERP database; models tagged with the ERP bind key are routed to
that engine, everything else goes to the primary one.
"""

from datetime import datetime
from typing import Optional, Dict, Any
from contextlib import contextmanager

from loguru import logger
from sqlalchemy import create_engine, func, select, text, Engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.exc import SQLAlchemyError

from warehouse_ops.config import get_settings
from .models import Base, ERP_BIND, bind_key_for


def _make_engine(dsn: str, echo: bool = False) -> Engine:
    connect_args = {}
    if dsn.startswith("sqlite"):
        # Sync handlers run in FastAPI's threadpool
        connect_args["check_same_thread"] = False
    return create_engine(dsn, echo=echo, connect_args=connect_args)


class WarehouseDB:
    """
    Warehouse database client.

    Owns the primary and ERP engines and hands out ORM sessions whose
    binds route each entity to the right database.
    """

    def __init__(self, dsn: Optional[str] = None, erp_dsn: Optional[str] = None,
                 echo: Optional[bool] = None):
        """
        Initialize database client.

        Args:
            dsn: Primary connection string. If None, uses settings from config.
            erp_dsn: ERP connection string. Read from settings only when dsn is
                also None; otherwise the primary connection is reused.
            echo: Echo emitted SQL. If None, uses settings from config.
        """
        settings = get_settings()
        if dsn is None:
            dsn = settings.database_url
            if erp_dsn is None:
                erp_dsn = settings.erp_database_url
        if echo is None:
            echo = settings.database_echo

        self.engine: Engine = _make_engine(dsn, echo=echo)
        if erp_dsn and erp_dsn != dsn:
            self.erp_engine: Engine = _make_engine(erp_dsn, echo=echo)
        else:
            self.erp_engine = self.engine

        binds = {
            mapper.class_: self.engine_for(mapper.class_)
            for mapper in Base.registry.mappers
        }
        self.SessionLocal = sessionmaker(bind=self.engine, binds=binds)

        logger.debug(f"Initialized WarehouseDB with engine: {self.engine.url}, "
                     f"erp engine: {self.erp_engine.url}")

    @property
    def has_separate_erp(self) -> bool:
        return self.erp_engine is not self.engine

    def engine_for(self, model) -> Engine:
        """Return the engine an ORM model is bound to."""
        if bind_key_for(model) == ERP_BIND:
            return self.erp_engine
        return self.engine

    @contextmanager
    def session(self):
        """Context manager for database sessions."""
        session: Session = self.SessionLocal()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def create_schema(self) -> None:
        """
        Create entity tables on their bound engines.

        Existing tables are left untouched.
        """
        for engine in {self.engine, self.erp_engine}:
            tables = [
                mapper.local_table
                for mapper in Base.registry.mappers
                if self.engine_for(mapper.class_) is engine
            ]
            Base.metadata.create_all(engine, tables=tables)
            logger.info(f"Ensured {len(tables)} tables on {engine.url}")

    def dispose(self) -> None:
        """Release pooled connections."""
        self.engine.dispose()
        if self.has_separate_erp:
            self.erp_engine.dispose()

    def _ping(self, engine: Engine) -> bool:
        try:
            with engine.connect() as conn:
                conn.execute(text("SELECT 1")).fetchone()
            return True
        except SQLAlchemyError as e:
            logger.error(f"Connection check failed for {engine.url}: {e}")
            return False

    def health_check(self) -> Dict[str, Any]:
        """
        Perform database health check.

        Returns:
            dict: Health check results
        """
        database_connected = self._ping(self.engine)
        erp_connected = self._ping(self.erp_engine) if self.has_separate_erp else database_connected

        if not (database_connected and erp_connected):
            return {
                'status': 'unhealthy',
                'database_connected': database_connected,
                'erp_database_connected': erp_connected,
                'error': 'Database connection failed',
                'timestamp': datetime.now().isoformat()
            }

        try:
            record_counts = {}
            with self.session() as session:
                for mapper in Base.registry.mappers:
                    model = mapper.class_
                    count = session.execute(
                        select(func.count()).select_from(model),
                        bind_arguments={"mapper": mapper}
                    ).scalar_one()
                    record_counts[model.__tablename__] = count

            return {
                'status': 'healthy',
                'database_connected': True,
                'erp_database_connected': True,
                'record_counts': record_counts,
                'timestamp': datetime.now().isoformat()
            }

        except Exception as e:
            logger.error(f"Database health check failed: {e}")
            return {
                'status': 'unhealthy',
                'database_connected': database_connected,
                'erp_database_connected': erp_connected,
                'error': str(e),
                'timestamp': datetime.now().isoformat()
            }
