# Overview: Flask CLI command groups for bootstrap and inspection.

# backend/market/cli.py
# Commands Legend (run from the backend directory):
# Prereqs:
# - Activate your virtualenv.
# - Set FLASK_APP to "market:create_app" (PowerShell: $env:FLASK_APP="market:create_app").
# - Use: python -m flask <group> <command> [options]
#
# System bootstrap/repair:
# - python -m flask system init-db
#   Create missing tables and the stored-file folders (idempotent).
# - python -m flask system reset-db --yes
#   DEV/TEST only: drop and recreate all tables (deletes all data).
#
# User inspection/bootstrap:
# - python -m flask users list
#   List all registered users.
# - python -m flask users create --username alice --password pw1 --email a@x.com
#   Create a user (prompts if options are omitted).
#
# Ledger inspection:
# - python -m flask sales next-id
#   Show the sale number the next checkout will receive (does not consume it).

import os

import click
from flask import current_app
from flask.cli import with_appcontext

from .extensions import db
from .services import auth_service, sales_service
from .validation import ConflictError, ValidationError


@click.group('system')
def system_group():
    """System bootstrap and repair commands."""


@system_group.command('init-db')
@with_appcontext
def init_db():
    """Create tables and stored-file folders if they do not exist."""
    db.create_all()
    for key in ("UPLOAD_FOLDER", "PAYMENT_PROOF_FOLDER"):
        os.makedirs(current_app.config[key], exist_ok=True)
        click.echo(f"PASS {key}: {current_app.config[key]}")
    click.echo("PASS Database initialized.")


@system_group.command('reset-db')
@click.option('--yes', is_flag=True, help='Skip confirmation')
@with_appcontext
def reset_db(yes):
    """
    DANGER: Drop all tables and recreate schema.

    This will DELETE ALL DATA! Stored files are left in place.
    """
    if not yes:
        click.confirm("WARN This will DELETE ALL DATA. Are you sure?", abort=True)

    click.echo("DELETE  Dropping all tables...")
    db.drop_all()

    click.echo("BUILD  Creating all tables...")
    db.create_all()

    click.echo("PASS Database reset complete.")


@click.group('users')
def users_group():
    """User inspection and bootstrap."""


@users_group.command('list')
@with_appcontext
def list_users():
    """List all registered users."""
    users = auth_service.list_users()

    if not users:
        click.echo("No users found.")
        return

    click.echo("\n" + "=" * 60)
    click.echo(f"{'Username':<25} {'Email'}")
    click.echo("=" * 60)
    for user in users:
        click.echo(f"{user.username:<25} {user.email}")
    click.echo("=" * 60 + "\n")


@users_group.command('create')
@click.option('--username', prompt=True)
@click.option('--email', prompt=True)
@click.option('--password', prompt=True, hide_input=True)
@with_appcontext
def create_user_cmd(username, email, password):
    """Create a user account."""
    try:
        user = auth_service.create_user(username, password, email)
    except (ConflictError, ValidationError) as e:
        raise click.ClickException(str(e))
    click.echo(f"PASS Created user {user.username} <{user.email}>")


@click.group('sales')
def sales_group():
    """Sales ledger inspection."""


@sales_group.command('next-id')
@with_appcontext
def next_id():
    """Show the next sale number without consuming it."""
    number = sales_service.next_transaction_id()
    db.session.rollback()
    click.echo(number)


def register_commands(app):
    """Register all CLI commands with Flask app."""
    app.cli.add_command(system_group)
    app.cli.add_command(users_group)
    app.cli.add_command(sales_group)
