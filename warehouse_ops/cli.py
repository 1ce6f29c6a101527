"""
Command-line interface for Warehouse Read API operations.

Provides commands for serving the API, creating the schema, checking
database health and running lookups from the shell.
"""

import json
import sys
from typing import Optional

import click
from fastapi.encoders import jsonable_encoder
from loguru import logger

from .config import get_settings


def setup_logging() -> None:
    """Configure logging for CLI operations."""
    settings = get_settings()

    # Remove default handler
    logger.remove()

    # Add console handler
    logger.add(
        sys.stderr,
        level=settings.log_level,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
    )

    # Add file handler if configured
    if settings.log_file:
        logger.add(
            settings.log_file,
            level=settings.log_level,
            rotation="10 MB",
            retention="30 days",
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"
        )


@click.group()
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
def main(verbose: bool) -> None:
    """Warehouse Read API Command Line Interface."""
    if verbose:
        # Override log level for verbose mode
        settings = get_settings()
        settings.log_level = "DEBUG"

    setup_logging()
    logger.debug("Warehouse Read API CLI started")


@main.command()
@click.option('--host', default=None, help='Bind host (default: API_HOST)')
@click.option('--port', default=None, type=int, help='Bind port (default: API_PORT)')
@click.option('--reload', is_flag=True, help='Reload on code changes')
def serve(host: Optional[str], port: Optional[int], reload: bool) -> None:
    """Run the API server."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "warehouse_api.fastapi_server:app",
        host=host or settings.api_host,
        port=port or settings.api_port,
        workers=1 if reload else settings.api_workers,
        reload=reload
    )


@main.command('init-db')
def init_db() -> None:
    """Create entity tables on their bound databases."""
    from warehouse_api.db_client import WarehouseDB

    try:
        db = WarehouseDB()
        db.create_schema()
        logger.success("Database schema is ready")

    except Exception as e:
        logger.error(f"Schema creation failed: {e}")
        sys.exit(1)


@main.command()
def health() -> None:
    """Show database health and record counts."""
    from warehouse_api.db_client import WarehouseDB

    report = WarehouseDB().health_check()

    click.echo("\n📊 Warehouse Health")
    click.echo("=" * 50)
    click.echo(f"Status:        {report['status']}")
    click.echo(f"Database:      {'✅' if report['database_connected'] else '❌'}")
    click.echo(f"ERP Database:  {'✅' if report['erp_database_connected'] else '❌'}")

    if 'error' in report:
        click.echo(f"❌ Error: {report['error']}")
        sys.exit(1)

    for table, count in report['record_counts'].items():
        click.echo(f"{table + ':':<28} {count:,}")


@main.command()
@click.argument('resource', type=click.Choice(['stocks', 'warehouse-orders', 'warehouse-order-lines']))
@click.argument('record_id', required=False)
def show(resource: str, record_id: Optional[str]) -> None:
    """
    Print a resource lookup as a JSON envelope.

    RESOURCE is the resource name; pass RECORD_ID to fetch a single record.
    """
    from warehouse_api.db_client import WarehouseDB
    from warehouse_api.lookups import RESOURCES, service_for, render

    settings = get_settings()
    service = service_for(WarehouseDB(), resource)

    if record_id is None:
        result = service.list_all()
    else:
        result = service.get_by_id(record_id)

    status_code, body = render(RESOURCES[resource], result, many=record_id is None,
                               expose_error_details=settings.expose_error_details,
                               failure_status=settings.failure_status_code)
    click.echo(json.dumps(jsonable_encoder(body), indent=2))

    if status_code != 200:
        sys.exit(1)


if __name__ == '__main__':
    main()
