"""Tests for blocking reuse of the current password on reset"""
import pytest

from conftest import FakeStore, FakeUser
from expire_passwords.services.expiration_policy import ExpirationPolicy
from expire_passwords.services.reset_validator import (
    PASSWORD_ALREADY_USED, ResetValidator, ValidationErrors)
from expire_passwords.services.settings_service import RotationSettings
from expire_passwords.utils.security import hash_password

CURRENT = 'correct horse'


@pytest.fixture(scope='module')
def stored_hash():
    return hash_password(CURRENT, rounds=4)


@pytest.fixture
def validator():
    settings = RotationSettings(applicable_roles=frozenset({'subscriber'}))
    return ResetValidator(ExpirationPolicy(settings, FakeStore()))


def test_rejects_current_password_for_rotated_account(validator, stored_hash):
    errors = validator(ValidationErrors(), CURRENT, CURRENT, FakeUser(password_hash=stored_hash))

    assert errors.codes == [PASSWORD_ALREADY_USED]
    assert errors.messages == ['You cannot reuse your old password.']


def test_accepts_current_password_for_other_roles(validator, stored_hash):
    user = FakeUser(role_names=frozenset({'editor'}), password_hash=stored_hash)
    errors = validator(ValidationErrors(), CURRENT, CURRENT, user)
    assert not errors


def test_accepts_new_password(validator, stored_hash):
    errors = validator(ValidationErrors(), 'battery staple', 'battery staple',
                       FakeUser(password_hash=stored_hash))
    assert not errors


@pytest.mark.parametrize('password1, password2', [
    ('', CURRENT),
    (CURRENT, ''),
    (None, None),
    (CURRENT, CURRENT + 'x'),
])
def test_short_circuits_on_incomplete_submission(validator, stored_hash, password1, password2):
    errors = validator(ValidationErrors(), password1, password2, FakeUser(password_hash=stored_hash))
    assert not errors


def test_keeps_callers_errors(validator, stored_hash):
    errors = ValidationErrors()
    errors.add('password_reset_mismatch', 'The passwords do not match.')

    result = validator(errors, CURRENT, CURRENT, FakeUser(password_hash=stored_hash))

    assert result is errors
    assert result.codes == ['password_reset_mismatch', PASSWORD_ALREADY_USED]
    assert PASSWORD_ALREADY_USED in result
