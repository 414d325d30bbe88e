"""Tests for the database-backed rotation metadata store"""
import pytest
from sqlalchemy.exc import OperationalError

from expire_passwords.exceptions import StoreUnavailable
from expire_passwords.extensions import db
from expire_passwords.models.user_meta import UserMeta
from expire_passwords.services.metadata_store import RESET_META_KEY, MetadataStore


def test_missing_metadata_reads_as_none(make_user):
    user = make_user()
    assert MetadataStore().get(user.id) is None


def test_add_never_overwrites(make_user):
    user = make_user()
    store = MetadataStore()

    assert store.add(user.id, 100) == 100
    assert store.add(user.id, 200) == 100
    assert store.get(user.id) == 100
    assert UserMeta.query.filter_by(user_id=user.id, meta_key=RESET_META_KEY).count() == 1


def test_set_overwrites(make_user):
    user = make_user()
    store = MetadataStore()
    store.add(user.id, 100)

    store.set(user.id, 300)

    assert store.get(user.id) == 300


def test_malformed_value_is_ignored(make_user):
    user = make_user()
    db.session.add(UserMeta(user_id=user.id, meta_key=RESET_META_KEY, meta_value='soon'))
    db.session.commit()

    assert MetadataStore().get(user.id) is None


def test_database_errors_surface_as_store_unavailable(make_user, monkeypatch):
    user = make_user()
    store = MetadataStore()

    def fail(*args, **kwargs):
        raise OperationalError('SELECT', {}, Exception('database is locked'))

    monkeypatch.setattr(MetadataStore, '_row', fail)

    with pytest.raises(StoreUnavailable):
        store.get(user.id)
    with pytest.raises(StoreUnavailable):
        store.add(user.id, 1)
    with pytest.raises(StoreUnavailable):
        store.set(user.id, 1)


def test_metadata_is_removed_with_account(make_user):
    user = make_user()
    MetadataStore().add(user.id, 100)

    db.session.delete(user)
    db.session.commit()

    assert UserMeta.query.count() == 0


def test_backfill_replaces_malformed_value(make_user):
    user = make_user()
    db.session.add(UserMeta(user_id=user.id, meta_key=RESET_META_KEY, meta_value='soon'))
    db.session.commit()
    store = MetadataStore()

    assert store.add(user.id, 100) == 100
    assert store.get(user.id) == 100
    assert UserMeta.query.filter_by(user_id=user.id, meta_key=RESET_META_KEY).count() == 1
