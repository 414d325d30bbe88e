# expire_passwords/services/reset_validator.py
"""Reset Validator for Expire Passwords
Disallows setting the current password again during a reset
"""
import logging
from typing import Callable, List, Tuple

from expire_passwords.services.expiration_policy import ExpirationPolicy
from expire_passwords.utils.security import verify_password

logger = logging.getLogger(__name__)

PASSWORD_ALREADY_USED = 'password_already_used'


class ValidationErrors:
    """Accumulating collection of (code, message) validation errors"""

    def __init__(self):
        self._errors: List[Tuple[str, str]] = []

    def add(self, code: str, message: str) -> None:
        self._errors.append((code, message))

    @property
    def codes(self) -> List[str]:
        return [code for code, _ in self._errors]

    @property
    def messages(self) -> List[str]:
        return [message for _, message in self._errors]

    def __contains__(self, code) -> bool:
        return code in self.codes

    def __bool__(self) -> bool:
        return bool(self._errors)

    def __len__(self) -> int:
        return len(self._errors)

    def __iter__(self):
        return iter(self._errors)

    def __repr__(self):
        return f'<ValidationErrors {self.codes}>'


class ResetValidator:
    """
    Reject a new password identical to the stored credential

    Only the current credential is checked; there is no history.
    """

    def __init__(self, policy: ExpirationPolicy, verify: Callable[[str, str], bool] = verify_password):
        self.policy = policy
        self.verify = verify

    def __call__(self, errors: ValidationErrors, password1, password2, user) -> ValidationErrors:
        if (
            not password1
            or not password2
            or password1 != password2
            or not self.policy.is_subject_to_rotation(user)
        ):
            return errors

        if self.verify(password1, user.password_hash):
            logger.info('Rejected reuse of current password for user %s', user.id)
            errors.add(PASSWORD_ALREADY_USED, 'You cannot reuse your old password.')

        return errors
