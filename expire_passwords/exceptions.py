"""Exceptions raised by the password expiration core"""


class ExpirePasswordsError(Exception):
    """Base class for all expire_passwords errors"""


class StoreUnavailable(ExpirePasswordsError):
    """
    Metadata or option storage could not be read or written.

    Never treated as "no metadata": the rotation decision cannot be made
    without the store, so callers must surface this to the user.
    """


class ResetKeyError(ExpirePasswordsError):
    """A password reset key could not be issued"""


class InvalidResetKey(ResetKeyError):
    """The supplied reset key does not match the account"""


class ExpiredResetKey(InvalidResetKey):
    """The supplied reset key matched but is past its lifetime"""
