# expire_passwords/services/metadata_store.py
"""Per-account rotation metadata storage backed by the user_meta table"""
import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from expire_passwords.exceptions import StoreUnavailable
from expire_passwords.extensions import db
from expire_passwords.models.user_meta import UserMeta

logger = logging.getLogger(__name__)

RESET_META_KEY = 'user_expass_reset'


class MetadataStore:
    """
    Reads and writes the last-reset timestamp of an account.

    ``add`` is the backfill path: it only writes when nothing usable is stored
    and never overwrites a valid timestamp. ``set`` is the password-changed path and always
    overwrites. Every database failure surfaces as StoreUnavailable.
    """

    def __init__(self, meta_key: str = RESET_META_KEY):
        self.meta_key = meta_key

    def _row(self, user_id):
        return UserMeta.query.filter_by(user_id=user_id, meta_key=self.meta_key).first()

    @staticmethod
    def _timestamp(row) -> Optional[int]:
        """Stored epoch seconds, or None when absent or unparseable"""
        if row is None or row.meta_value in (None, ''):
            return None
        try:
            return int(row.meta_value)
        except (TypeError, ValueError):
            logger.warning('Ignoring malformed rotation metadata for user %s: %r',
                           row.user_id, row.meta_value)
            return None

    def get(self, user_id) -> Optional[int]:
        try:
            row = self._row(user_id)
        except SQLAlchemyError as exc:
            db.session.rollback()
            logger.exception('Failed to read rotation metadata for user %s', user_id)
            raise StoreUnavailable(f'metadata for user {user_id} could not be read') from exc
        return self._timestamp(row)

    def add(self, user_id, value: int) -> int:
        """Insert ``value`` unless a timestamp exists; return what is stored"""
        try:
            row = self._row(user_id)
            stored = self._timestamp(row)
            if stored is not None:
                return stored
            if row is None:
                db.session.add(UserMeta(user_id=user_id, meta_key=self.meta_key,
                                        meta_value=str(int(value))))
            else:
                row.meta_value = str(int(value))
            db.session.commit()
            return int(value)
        except IntegrityError:
            # A concurrent login inserted first; keep its timestamp
            db.session.rollback()
            stored = self.get(user_id)
            return stored if stored is not None else int(value)
        except SQLAlchemyError as exc:
            db.session.rollback()
            logger.exception('Failed to backfill rotation metadata for user %s', user_id)
            raise StoreUnavailable(f'metadata for user {user_id} could not be written') from exc

    def set(self, user_id, value: int) -> None:
        """Overwrite the stored timestamp"""
        try:
            row = self._row(user_id)
            if row is None:
                db.session.add(UserMeta(user_id=user_id, meta_key=self.meta_key,
                                        meta_value=str(int(value))))
            else:
                row.meta_value = str(int(value))
            db.session.commit()
        except SQLAlchemyError as exc:
            db.session.rollback()
            logger.exception('Failed to write rotation metadata for user %s', user_id)
            raise StoreUnavailable(f'metadata for user {user_id} could not be written') from exc
