# expire_passwords/commands.py
"""Flask CLI commands for managing password expiration"""
from datetime import datetime, timezone

import click
from flask.cli import with_appcontext

from expire_passwords.models.user import User
from expire_passwords.services.auth_services import AuthService
from expire_passwords.services.expiration_policy import ExpirationPolicy, RotationMetadata
from expire_passwords.services.metadata_store import MetadataStore
from expire_passwords.services.settings_service import load_settings, save_settings


def _format_settings(settings):
    roles = ('all except ' + ', '.join(sorted(settings.exempt_roles))
             if settings.applicable_roles is None
             else ', '.join(sorted(settings.applicable_roles)))
    flow = 'email link' if settings.reset_via_email else 'login screen'
    return (f'Limit: {settings.limit_days} days\n'
            f'Roles: {roles}\n'
            f'Reset via: {flow}')


@click.group('expass')
def expass_cli():
    """Manage password expiration."""


@expass_cli.command('settings')
@with_appcontext
def show_settings():
    """Show the current rotation settings."""
    click.echo(_format_settings(load_settings()))


@expass_cli.command('configure')
@click.option('--limit', type=click.IntRange(1, 365), help='Days between required resets.')
@click.option('--role', 'roles', multiple=True, help='Role subject to rotation (repeatable).')
@click.option('--all-roles', is_flag=True, help='Clear the role selection.')
@click.option('--email/--inline', 'send_email', default=None,
              help='Reset through an emailed link or directly on the login screen.')
@with_appcontext
def configure(limit, roles, all_roles, send_email):
    """Update the rotation settings."""
    if all_roles and roles:
        raise click.UsageError('--role and --all-roles are mutually exclusive')
    selected = [] if all_roles else (list(roles) if roles else None)
    settings = save_settings(limit=limit, roles=selected, send_email=send_email)
    click.echo(_format_settings(settings))


@expass_cli.command('create-user')
@click.argument('username')
@click.option('--email', default=None)
@click.option('--role', 'roles', multiple=True, default=('subscriber',), show_default=True)
@click.password_option()
@with_appcontext
def create_user(username, email, roles, password):
    """Create an account whose rotation period starts now."""
    if User.query.filter_by(username=username).first():
        raise click.ClickException(f'User {username!r} already exists')
    user = AuthService.create_user(username, password, email=email, roles=roles)
    ExpirationPolicy(load_settings(), MetadataStore()).record_password_change(user)
    click.echo(f'Created {username}')


@expass_cli.command('status')
@click.argument('username')
@with_appcontext
def status(username):
    """Show the password expiration status of an account."""
    user = User.query.filter_by(username=username).first()
    if user is None:
        raise click.ClickException(f'No user {username!r}')

    policy = ExpirationPolicy(load_settings(), MetadataStore())
    if not policy.is_subject_to_rotation(user):
        click.echo(f'{username}: not subject to rotation')
        return

    last_reset = policy.store.get(user.id)
    if last_reset is None:
        click.echo(f'{username}: no reset recorded yet (starts at next login)')
        return

    metadata = RotationMetadata(last_reset)
    due = datetime.fromtimestamp(policy.expires_at(metadata), tz=timezone.utc)
    state = 'expired' if policy.is_expired(user, metadata) else 'valid'
    click.echo(f'{username}: {state}, reset due {due:%Y-%m-%d %H:%M} UTC')
