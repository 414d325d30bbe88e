# expire_passwords/hooks.py
"""Extension points called by the login system

The platform calls these three methods directly at authentication time,
on reset-form validation and when rendering the login screen.
"""
from typing import Callable, Mapping

from flask import current_app, url_for

from expire_passwords import markers
from expire_passwords.services.expiration_policy import ExpirationPolicy, epoch_now
from expire_passwords.services.login_interceptor import LoginDecision, LoginInterceptor
from expire_passwords.services.login_messages import expired_password_message
from expire_passwords.services.metadata_store import MetadataStore
from expire_passwords.services.reset_key_service import ResetKeyService
from expire_passwords.services.reset_validator import ResetValidator, ValidationErrors
from expire_passwords.services.session_service import SessionService
from expire_passwords.services.settings_service import RotationSettings, load_settings


class ExpirePasswords:
    """
    Password expiration enforcement bound to one settings snapshot

    Args:
        settings: resolved rotation settings
        store: rotation metadata store
        destroy_sessions: callable(user) revoking all sessions
        issue_reset_key: callable(user) -> key, raising ResetKeyError
        login_url: URL of the login screen
        clock: callable returning epoch seconds
    """

    def __init__(self, settings: RotationSettings, store,
                 destroy_sessions: Callable, issue_reset_key: Callable,
                 login_url: str, clock: Callable[[], int] = epoch_now):
        self.settings = settings
        self.policy = ExpirationPolicy(settings, store, clock=clock)
        self._interceptor = LoginInterceptor(self.policy, destroy_sessions,
                                             issue_reset_key, login_url)
        self._validator = ResetValidator(self.policy)

    def on_auth_success(self, user) -> LoginDecision:
        """Decide whether a freshly authenticated login may proceed"""
        return self._interceptor(user)

    def on_reset_validate(self, errors: ValidationErrors, password1, password2, user) -> ValidationErrors:
        """Add ``password_already_used`` to ``errors`` when the current password is resubmitted"""
        return self._validator(errors, password1, password2, user)

    def on_render_login_message(self, message, args: Mapping[str, str]):
        """Select the login screen message from the request's flow markers"""
        return expired_password_message(
            message,
            args.get(markers.ACTION_PARAM),
            args.get(markers.STATUS_PARAM),
            args.get(markers.FLOW_ORIGIN_PARAM),
            self.settings.limit_days,
        )


def current_hooks() -> ExpirePasswords:
    """Build the extension points for the current application and request"""
    reset_keys = ResetKeyService(current_app.config['PASSWORD_RESET_KEY_LIFETIME'])
    return ExpirePasswords(
        settings=load_settings(),
        store=MetadataStore(),
        destroy_sessions=SessionService.destroy_all_sessions,
        issue_reset_key=reset_keys.issue,
        login_url=url_for('auth.login'),
    )
