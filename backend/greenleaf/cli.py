# Overview: Flask CLI command groups for storage bootstrap, demo data and exports.

# backend/greenleaf/cli.py
# Commands Legend (run from the backend directory):
# Prereqs:
# - Activate your virtualenv.
# - Set FLASK_APP to wsgi.py (PowerShell: $env:FLASK_APP="wsgi.py").
# - Pick a backend with STORAGE_BACKEND=records|relational (default records).
# - Use: python -m flask <group> <command> [options]
#
# Storage bootstrap/repair:
# - python -m flask store init
#   Idempotent: creates empty collections + counters (records) or tables (relational).
# - python -m flask store wipe --yes
#   Delete every record. Id counters are kept, so ids are never reused.
# - python -m flask store seed-demo
#   Insert a small demo catalog, one customer, one employee per role and a dispensary.
# - python -m flask store stats
#   Print record counts per table.
#
# Exports:
# - python -m flask export table products --format csv --out exports/
#   Write one table to <name>_<YYYY-MM-DD>.<csv|json>.
# - python -m flask export all --format json --out exports/
#   Write the complete dump.

from pathlib import Path

import click
from flask import current_app
from flask.cli import with_appcontext

from .entities import TABLE_NAMES
from .extensions import get_backend
from .services import (
    catalog_service,
    customers_service,
    dispensaries_service,
    employees_service,
    export_service,
    products_service,
)
from .services.export_service import EXPORT_TABLES, ExportError
from .validation import ConflictError

DEMO_PASSWORD = "Password123!"

DEMO_PRODUCTS = [
    {"name": "Blue Dream", "description": "Balanced hybrid flower", "price": 35.0, "stock_quantity": 24,
     "category": "Flower", "strain_type": "hybrid", "thc_content": 21.0, "cbd_content": 0.1},
    {"name": "Northern Lights", "description": "Classic indica", "price": 40.0, "stock_quantity": 8,
     "category": "Flower", "strain_type": "indica", "thc_content": 18.5, "cbd_content": 0.2},
    {"name": "Sour Diesel Pre-Roll", "price": 12.0, "stock_quantity": 50,
     "category": "Pre-Rolls", "strain_type": "sativa", "thc_content": 22.0},
    {"name": "Calm CBD Tincture", "description": "1000mg full spectrum", "price": 55.0, "stock_quantity": 5,
     "category": "Tinctures", "cbd_content": 33.0},
    {"name": "Watermelon Gummies", "price": 20.0, "stock_quantity": 30, "category": "Edibles",
     "thc_content": 1.0},
]

DEMO_EMPLOYEES = [
    {"first_name": "Alex", "last_name": "Admin", "email": "admin@greenleaf.local", "role": "admin"},
    {"first_name": "Morgan", "last_name": "Manager", "email": "manager@greenleaf.local", "role": "manager"},
    {"first_name": "Casey", "last_name": "Cashier", "email": "cashier@greenleaf.local", "role": "cashier"},
    {"first_name": "Blake", "last_name": "Budtender", "email": "budtender@greenleaf.local", "role": "budtender"},
]


@click.group('store')
def store_group():
    """Storage bootstrap and repair commands."""


@store_group.command('init')
@with_appcontext
def init_store():
    """Create empty collections and counters (records) or the schema (relational)."""
    backend = get_backend()
    backend.initialize()
    click.echo(f"PASS Storage initialized ({backend.kind})")


@store_group.command('wipe')
@click.option('--yes', is_flag=True, help='Confirm deleting every record')
@with_appcontext
def wipe_store(yes):
    """Delete every record; id counters are preserved."""
    if not yes:
        raise click.UsageError("Refusing to wipe without --yes")
    backend = get_backend()
    backend.wipe()
    current_app.logger.warning("Storage wiped (%s)", backend.kind)
    click.echo("PASS All records deleted")


@store_group.command('stats')
@with_appcontext
def store_stats():
    """Print record counts per table."""
    backend = get_backend()
    click.echo(f"Backend: {backend.kind}")
    for table in TABLE_NAMES:
        click.echo(f"  {table:<24} {backend.count(table)}")


@store_group.command('seed-demo')
@with_appcontext
def seed_demo():
    """
    Insert demo data for a fresh install.

    Employees whose email already exists are skipped, so the command can be
    re-run; catalog rows are only seeded into an empty products table.
    """
    backend = get_backend()
    backend.initialize()

    if backend.count("products") == 0:
        for product in DEMO_PRODUCTS:
            products_service.create_product(backend, patch=product)
        click.echo(f"PASS Created {len(DEMO_PRODUCTS)} products")

        catalog_service.create_listing(backend, patch={
            "name": "Blue Dream", "category": "Flower", "strain": "Blue Dream",
            "genetics": "Blueberry x Haze", "thc_percentage": 21.0, "cbd_percentage": 0.1,
            "featured": True,
        })
        click.echo("PASS Created 1 catalog listing")
    else:
        click.echo("SKIP Products already present")

    created = 0
    for employee in DEMO_EMPLOYEES:
        try:
            employees_service.create_employee(backend, patch=employee, password=DEMO_PASSWORD)
            created += 1
        except ConflictError:
            click.echo(f"SKIP Employee {employee['email']} already exists")
    click.echo(f"PASS Created {created} employees (password: {DEMO_PASSWORD})")

    try:
        customers_service.create_customer(backend, patch={
            "first_name": "Jamie", "last_name": "Customer", "email": "jamie@example.com",
            "phone": "555-0100", "date_of_birth": "1990-04-20",
        })
        click.echo("PASS Created 1 customer")
    except ConflictError:
        click.echo("SKIP Demo customer already exists")

    if backend.count("dispensaries") == 0:
        dispensaries_service.create_dispensary(backend, patch={
            "name": "Greenleaf Downtown", "address": "420 Main St", "city": "Denver",
            "phone": "555-0142", "hours": "9am-9pm", "license": "LIC-0001",
        })
        click.echo("PASS Created 1 dispensary")


@click.group('export')
def export_group():
    """Write data exports to disk."""


def _write_export(out_dir: str, filename: str, content: str) -> Path:
    target_dir = Path(out_dir)
    target_dir.mkdir(parents=True, exist_ok=True)
    path = target_dir / filename
    path.write_text(content, encoding="utf-8")
    return path


@export_group.command('table')
@click.argument('table', type=click.Choice(EXPORT_TABLES))
@click.option('--format', 'fmt', type=click.Choice(["csv", "json"]), default="csv", show_default=True)
@click.option('--out', 'out_dir', default=".", show_default=True, help='Output directory')
@with_appcontext
def export_table_cli(table, fmt, out_dir):
    """Export one table."""
    try:
        filename, content, _ = export_service.export_table(get_backend(), table, fmt)
    except ExportError as e:
        raise click.ClickException(str(e))
    path = _write_export(out_dir, filename, content)
    click.echo(f"PASS Wrote {path}")


@export_group.command('all')
@click.option('--format', 'fmt', type=click.Choice(["csv", "json"]), default="json", show_default=True)
@click.option('--out', 'out_dir', default=".", show_default=True, help='Output directory')
@with_appcontext
def export_all_cli(fmt, out_dir):
    """Export the complete database dump."""
    filename, content, _ = export_service.export_all(get_backend(), fmt)
    path = _write_export(out_dir, filename, content)
    click.echo(f"PASS Wrote {path}")


def register_commands(app):
    app.cli.add_command(store_group)
    app.cli.add_command(export_group)
