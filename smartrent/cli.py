# smartrent/cli.py
from datetime import timedelta

import click
from flask.cli import with_appcontext

from .extensions import db
from .models import User
from .models.user import ROLES
from .security import issue_token
from .services.tenants import reconcile_availability


@click.command("create-user")
@click.option("--name", required=True)
@click.option("--email", required=True)
@click.option("--role", type=click.Choice(ROLES), default="tenant", show_default=True)
@click.option("--phone", default=None)
@with_appcontext
def create_user(name, email, role, phone):
    """Upsert a user record by email."""
    u = User.query.filter_by(email=email).first()
    if not u:
        u = User(email=email)
        db.session.add(u)
    u.name = name
    u.role = role
    if phone is not None:
        u.phone = phone
    db.session.commit()
    click.echo(f"Upserted: {u.id} {u.email} {u.role}")


@click.command("issue-token")
@click.argument("email")
@click.option("--hours", type=int, default=None, help="Token lifetime override.")
@with_appcontext
def issue_token_command(email, hours):
    """Print a bearer token for a known user (local development)."""
    u = User.query.filter_by(email=email).first()
    if not u:
        raise click.ClickException(f"No user with email {email}")
    expires = timedelta(hours=hours) if hours else None
    click.echo(issue_token(u, expires_delta=expires))


@click.command("reconcile-availability")
@click.option("--dry-run", is_flag=True, help="Report without writing.")
@with_appcontext
def reconcile_availability_command(dry_run):
    """Recompute each property's isAvailable flag from its active tenants."""
    corrections = reconcile_availability(dry_run=dry_run)
    for prop, before, after in corrections:
        click.echo(f"property {prop.id} ({prop.name}): isAvailable {before} -> {after}")
    verb = "would be corrected" if dry_run else "corrected"
    click.echo(f"{len(corrections)} propert{'y' if len(corrections) == 1 else 'ies'} {verb}")


def register_cli(app):
    for command in (create_user, issue_token_command, reconcile_availability_command):
        app.cli.add_command(command)
