# expire_passwords/services/expiration_policy.py
"""Expiration Policy for Expire Passwords
Decides whether an account's password is past its rotation limit
"""
import logging
import time
from dataclasses import dataclass
from typing import Callable, Union

from expire_passwords.services.settings_service import RotationSettings

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 86400


def epoch_now() -> int:
    """Current time as whole seconds since the epoch"""
    return int(time.time())


@dataclass(frozen=True)
class RotationMetadata:
    """When the current password was established or first observed"""
    last_reset_at: int


@dataclass(frozen=True)
class Created:
    """Metadata was missing and has just been backfilled"""
    metadata: RotationMetadata


@dataclass(frozen=True)
class Existing:
    """Metadata was already stored"""
    metadata: RotationMetadata


EnsureResult = Union[Created, Existing]


class ExpirationPolicy:
    """
    Pure rotation decisions plus the metadata bookkeeping they rely on

    Args:
        settings: resolved rotation settings
        store: object with ``get(user_id)``, ``add(user_id, ts)`` and ``set(user_id, ts)``
        clock: callable returning the current epoch seconds
    """

    def __init__(self, settings: RotationSettings, store, clock: Callable[[], int] = epoch_now):
        self.settings = settings
        self.store = store
        self.clock = clock

    def is_subject_to_rotation(self, user) -> bool:
        """True iff the account's roles intersect the applicable roles"""
        return self.settings.applies_to(user.role_names)

    def is_expired(self, user, metadata: RotationMetadata, now: int = None) -> bool:
        """
        Check if the password has exceeded the rotation limit

        Exactly ``limit_days`` old is still valid; one second more is expired.
        """
        if not self.is_subject_to_rotation(user):
            return False
        if now is None:
            now = self.clock()
        return now - metadata.last_reset_at > self.settings.limit_seconds

    def ensure_metadata(self, user) -> EnsureResult:
        """
        Fetch rotation metadata, backfilling it with "now" when absent

        Accounts without a timestamp are treated as freshly reset, never as
        already expired. Store failures propagate as StoreUnavailable.
        """
        stored = self.store.get(user.id)
        if stored is not None:
            return Existing(RotationMetadata(stored))

        stored = self.store.add(user.id, self.clock())
        logger.info('Backfilled rotation metadata for user %s at %s', user.id, stored)
        return Created(RotationMetadata(stored))

    def record_password_change(self, user) -> RotationMetadata:
        """Restart the rotation period after a new password was saved"""
        metadata = RotationMetadata(self.clock())
        self.store.set(user.id, metadata.last_reset_at)
        logger.info('Password change recorded for user %s', user.id)
        return metadata

    def expires_at(self, metadata: RotationMetadata) -> int:
        """Epoch seconds at which a reset becomes due"""
        return metadata.last_reset_at + self.settings.limit_seconds

    def days_until_expiry(self, metadata: RotationMetadata, now: int = None) -> int:
        """Calculate whole days until password expiration"""
        if now is None:
            now = self.clock()
        remaining = self.expires_at(metadata) - now
        return remaining // SECONDS_PER_DAY if remaining > 0 else 0
