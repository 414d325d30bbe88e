"""Tests for the login screen notice selection"""
from conftest import FakeStore
from expire_passwords.hooks import ExpirePasswords
from expire_passwords.services.login_messages import (
    LOST_PASSWORD_INSTRUCTION, expired_password_message, rotation_notice)
from expire_passwords.services.settings_service import RotationSettings

INSTRUCTION_START = 'Please enter your username or e-mail below'


def test_email_flow_shows_notice_and_instruction():
    message = expired_password_message('original', 'lostpassword', 'expired', None, 90)

    assert 'Your password must be reset every 90 days.' in message
    assert INSTRUCTION_START in message
    assert 'original' not in message


def test_email_flow_ignores_flow_origin():
    message = expired_password_message('original', 'lostpassword', 'expired', 'eup', 30)
    assert 'every 30 days' in message
    assert INSTRUCTION_START in message


def test_inline_flow_shows_notice_only():
    message = expired_password_message('original', 'rp', None, 'eup', 90)

    assert message == rotation_notice(90)
    assert INSTRUCTION_START not in message


def test_lost_password_without_expired_status_falls_back():
    assert expired_password_message('original', 'lostpassword', None, None, 90) == 'original'
    assert expired_password_message(None, 'lostpassword', 'other', 'eup', 90) == rotation_notice(90)


def test_other_flows_return_message_untouched():
    original = object()
    assert expired_password_message(original, None, None, None, 90) is original
    assert expired_password_message(original, 'rp', 'expired', 'xyz', 90) is original


def test_singular_limit():
    assert 'Your password must be reset every day.' in rotation_notice(1)
    assert 'every 2 days' in rotation_notice(2)


def test_notice_is_markup():
    notice = rotation_notice(90)
    assert str(notice).startswith('<p id="login_error">')
    assert LOST_PASSWORD_INSTRUCTION not in notice


def test_render_hook_reads_request_flags():
    hooks = ExpirePasswords(RotationSettings(limit_days=45), FakeStore(),
                            destroy_sessions=lambda user: None,
                            issue_reset_key=lambda user: 'key',
                            login_url='/auth/login')

    args = {'action': 'lostpassword', 'user-expass': 'expired'}
    assert 'every 45 days' in hooks.on_render_login_message('original', args)
    assert hooks.on_render_login_message('original', {'fp': 'eup'}) == rotation_notice(45)
    assert hooks.on_render_login_message('original', {}) == 'original'
