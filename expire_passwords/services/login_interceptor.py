# expire_passwords/services/login_interceptor.py
"""Login Interceptor for Expire Passwords
Runs after every successful authentication and forces a reset when the password expired
"""
import logging
from dataclasses import dataclass
from typing import Callable, Optional

from expire_passwords import markers
from expire_passwords.exceptions import ResetKeyError
from expire_passwords.services.expiration_policy import Created, ExpirationPolicy

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoginDecision:
    """Outcome of intercepting one authentication"""
    redirect_to: Optional[str] = None
    expired: bool = False
    backfilled: bool = False

    @property
    def proceed(self) -> bool:
        """True when the default login response should continue"""
        return self.redirect_to is None


class LoginInterceptor:
    """
    Enforce password reset after user login, when applicable

    Args:
        policy: expiration policy for the current settings
        destroy_sessions: callable(user) revoking every session of the account
        issue_reset_key: callable(user) -> key, raising ResetKeyError on failure
        login_url: absolute or relative URL of the login screen
    """

    def __init__(self, policy: ExpirationPolicy,
                 destroy_sessions: Callable,
                 issue_reset_key: Callable,
                 login_url: str):
        self.policy = policy
        self.destroy_sessions = destroy_sessions
        self.issue_reset_key = issue_reset_key
        self.login_url = login_url

    def __call__(self, user) -> LoginDecision:
        result = self.policy.ensure_metadata(user)
        backfilled = isinstance(result, Created)

        if not self.policy.is_expired(user, result.metadata):
            return LoginDecision(backfilled=backfilled)

        logger.info('Password expired for user %s, forcing reset', user.id)

        # Revoke before any redirect so no stale session outlives the expiry
        self.destroy_sessions(user)

        if self.policy.settings.reset_via_email:
            location = markers.add_query_args(self.login_url, {
                markers.ACTION_PARAM: markers.ACTION_LOST_PASSWORD,
                markers.STATUS_PARAM: markers.STATUS_EXPIRED,
            })
            return LoginDecision(redirect_to=location, expired=True, backfilled=backfilled)

        try:
            reset_key = self.issue_reset_key(user)
        except ResetKeyError:
            logger.warning('Could not issue reset key for expired user %s; '
                           'continuing with default login', user.id, exc_info=True)
            return LoginDecision(expired=True, backfilled=backfilled)

        location = markers.add_query_args(self.login_url, {
            markers.ACTION_PARAM: markers.ACTION_RESET_PASSWORD,
            markers.FLOW_ORIGIN_PARAM: markers.FLOW_ORIGIN_EXPIRED,
            markers.KEY_PARAM: reset_key,
            markers.LOGIN_PARAM: user.username,
        })
        return LoginDecision(redirect_to=location, expired=True, backfilled=backfilled)
