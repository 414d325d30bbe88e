"""Tests for the authentication-time interception"""
from urllib.parse import parse_qs, urlsplit

import pytest

from conftest import DAY, NOW, FakeClock, FakeStore, FakeUser
from expire_passwords.exceptions import ResetKeyError, StoreUnavailable
from expire_passwords.services.expiration_policy import ExpirationPolicy
from expire_passwords.services.login_interceptor import LoginInterceptor
from expire_passwords.services.settings_service import RotationSettings


class Platform:
    """Records the side effects requested by the interceptor"""

    def __init__(self, key='T1', fail=False):
        self.events = []
        self.key = key
        self.fail = fail

    def destroy_sessions(self, user):
        self.events.append(('destroy', user.id))

    def issue_reset_key(self, user):
        self.events.append(('issue', user.id))
        if self.fail:
            raise ResetKeyError('no key')
        return self.key


def make_interceptor(store, platform, login_url='/auth/login', **settings):
    settings.setdefault('limit_days', 90)
    policy = ExpirationPolicy(RotationSettings(**settings), store, FakeClock())
    return LoginInterceptor(policy, platform.destroy_sessions, platform.issue_reset_key, login_url)


def query(url):
    return {name: values[0] for name, values in parse_qs(urlsplit(url).query).items()}


def test_valid_password_proceeds_untouched():
    platform = Platform()
    interceptor = make_interceptor(FakeStore({1: NOW - 10 * DAY}), platform)

    decision = interceptor(FakeUser())

    assert decision.proceed
    assert not decision.expired
    assert not decision.backfilled
    assert platform.events == []


def test_missing_metadata_is_backfilled_not_expired():
    store = FakeStore()
    platform = Platform()
    interceptor = make_interceptor(store, platform, limit_days=1)

    decision = interceptor(FakeUser())

    assert decision.proceed
    assert decision.backfilled
    assert store.data[1] == NOW
    assert platform.events == []


def test_expired_email_flow_redirects_to_lost_password():
    platform = Platform()
    interceptor = make_interceptor(FakeStore({1: NOW - 91 * DAY}), platform,
                                   applicable_roles=frozenset({'subscriber'}),
                                   reset_via_email=True)

    decision = interceptor(FakeUser())

    assert decision.expired
    assert platform.events == [('destroy', 1)]
    assert urlsplit(decision.redirect_to).path == '/auth/login'
    assert query(decision.redirect_to) == {'action': 'lostpassword', 'user-expass': 'expired'}


def test_expired_inline_flow_redirects_with_reset_key():
    platform = Platform(key='T1')
    interceptor = make_interceptor(FakeStore({1: NOW - 91 * DAY}), platform,
                                   reset_via_email=False)

    decision = interceptor(FakeUser(username='alice'))

    assert platform.events == [('destroy', 1), ('issue', 1)]
    assert query(decision.redirect_to) == {
        'action': 'rp', 'fp': 'eup', 'key': 'T1', 'login': 'alice',
    }


def test_key_issuance_failure_falls_open_after_destroying_sessions():
    platform = Platform(fail=True)
    interceptor = make_interceptor(FakeStore({1: NOW - 91 * DAY}), platform,
                                   reset_via_email=False)

    decision = interceptor(FakeUser())

    assert decision.proceed
    assert decision.expired
    assert platform.events == [('destroy', 1), ('issue', 1)]


def test_exempt_account_with_old_password_proceeds():
    platform = Platform()
    interceptor = make_interceptor(FakeStore({1: 0}), platform)

    decision = interceptor(FakeUser(role_names=frozenset({'administrator'})))

    assert decision.proceed
    assert platform.events == []


def test_existing_login_url_query_is_kept():
    platform = Platform()
    interceptor = make_interceptor(FakeStore({1: 0}), platform,
                                   login_url='https://example.com/login?lang=en')

    decision = interceptor(FakeUser())

    assert decision.redirect_to.startswith('https://example.com/login?')
    assert query(decision.redirect_to)['lang'] == 'en'
    assert query(decision.redirect_to)['action'] == 'lostpassword'


def test_store_failure_is_not_treated_as_fresh_account():
    class BrokenStore(FakeStore):
        def get(self, user_id):
            raise StoreUnavailable('down')

    platform = Platform()
    interceptor = make_interceptor(BrokenStore(), platform)

    with pytest.raises(StoreUnavailable):
        interceptor(FakeUser())
    assert platform.events == []
