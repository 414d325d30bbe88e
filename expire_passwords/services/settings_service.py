# expire_passwords/services/settings_service.py
"""Rotation settings for Expire Passwords
Reads and writes the administrator-editable option that drives the rotation policy
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, Iterable, Optional

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from expire_passwords.exceptions import StoreUnavailable
from expire_passwords.extensions import db
from expire_passwords.models.option import Option

logger = logging.getLogger(__name__)

DEFAULT_LIMIT_DAYS = 90
MIN_LIMIT_DAYS = 1
MAX_LIMIT_DAYS = 365
DEFAULT_EXEMPT_ROLES = frozenset({'administrator'})


@dataclass(frozen=True)
class RotationSettings:
    """
    Process-wide rotation configuration.

    ``applicable_roles`` of None means no role selection was configured:
    every role except ``exempt_roles`` is then subject to rotation.
    """
    limit_days: int = DEFAULT_LIMIT_DAYS
    applicable_roles: Optional[FrozenSet[str]] = None
    reset_via_email: bool = True
    exempt_roles: FrozenSet[str] = DEFAULT_EXEMPT_ROLES

    @property
    def limit_seconds(self) -> int:
        return self.limit_days * 86400

    def applies_to(self, roles: Iterable[str]) -> bool:
        """True iff any of ``roles`` is subject to rotation"""
        roles = set(roles)
        if self.applicable_roles is None:
            return bool(roles - self.exempt_roles)
        return not roles.isdisjoint(self.applicable_roles)

    @classmethod
    def from_options(cls, options: Optional[Dict[str, Any]],
                     default_limit: int = DEFAULT_LIMIT_DAYS,
                     exempt_roles: Iterable[str] = DEFAULT_EXEMPT_ROLES) -> 'RotationSettings':
        """
        Resolve a stored option dict into settings

        Args:
            options: ``{"limit": int, "roles": {name: flag}, "send_email": flag}`` or None
            default_limit: limit used when none is stored
            exempt_roles: roles left out when no role selection is stored

        Returns:
            RotationSettings with every absent value defaulted
        """
        options = options if isinstance(options, dict) else {}

        limit = _positive_int(options.get('limit'))
        if limit is None:
            limit = default_limit

        selected = options.get('roles') or {}
        if isinstance(selected, dict):
            roles = frozenset(name for name, flag in selected.items() if _truthy(flag))
        elif isinstance(selected, str):
            roles = frozenset([selected])
        elif isinstance(selected, (list, tuple, set, frozenset)):
            roles = frozenset(name for name in selected if isinstance(name, str))
        else:
            roles = frozenset()

        send_email = options.get('send_email')

        return cls(
            limit_days=limit,
            applicable_roles=roles or None,
            reset_via_email=True if send_email is None else _truthy(send_email),
            exempt_roles=frozenset(exempt_roles),
        )

    def to_options(self) -> Dict[str, Any]:
        """Serialize back into the stored option shape"""
        options = {'limit': self.limit_days, 'send_email': int(self.reset_via_email)}
        if self.applicable_roles is not None:
            options['roles'] = {name: 1 for name in sorted(self.applicable_roles)}
        return options


def _truthy(value) -> bool:
    if isinstance(value, str):
        return value.strip().lower() not in ('', '0', 'false', 'no', 'off')
    return bool(value)


def _positive_int(value) -> Optional[int]:
    try:
        value = int(value)
    except (TypeError, ValueError):
        return None
    return value if value > 0 else None


def get_option(name: str) -> Optional[Any]:
    """Read a raw option value, None when absent"""
    try:
        option = Option.query.filter_by(name=name).first()
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.exception('Failed to read option %s', name)
        raise StoreUnavailable(f'option {name!r} could not be read') from exc
    return option.value if option is not None else None


def set_option(name: str, value: Any) -> None:
    """Create or replace an option value"""
    try:
        option = Option.query.filter_by(name=name).first()
        if option is None:
            option = Option(name=name)
            db.session.add(option)
        option.value = value
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.exception('Failed to write option %s', name)
        raise StoreUnavailable(f'option {name!r} could not be written') from exc


def load_settings() -> RotationSettings:
    """Load rotation settings for the current application"""
    config = current_app.config
    options = get_option(config['EXPIRE_PASSWORDS_OPTION_NAME'])
    return RotationSettings.from_options(
        options,
        default_limit=config['EXPIRE_PASSWORDS_DEFAULT_LIMIT'],
        exempt_roles=config['EXPIRE_PASSWORDS_EXEMPT_ROLES'],
    )


def save_settings(limit: Optional[int] = None,
                  roles: Optional[Iterable[str]] = None,
                  send_email: Optional[bool] = None) -> RotationSettings:
    """
    Sanitize and persist rotation settings, keeping unspecified values

    Args:
        limit: days between resets, clamped to 1..365
        roles: role names subject to rotation; empty clears the selection
        send_email: True for emailed reset links, False for inline reset

    Returns:
        The settings as they will be loaded from now on
    """
    name = current_app.config['EXPIRE_PASSWORDS_OPTION_NAME']
    options = dict(get_option(name) or {})

    if limit is not None:
        options['limit'] = min(max(int(limit), MIN_LIMIT_DAYS), MAX_LIMIT_DAYS)
    if roles is not None:
        cleaned = sorted({role.strip().lower() for role in roles if role and role.strip()})
        options['roles'] = {role: 1 for role in cleaned}
    if send_email is not None:
        options['send_email'] = int(bool(send_email))

    set_option(name, options)
    logger.info('Rotation settings updated: %s', options)
    return load_settings()
