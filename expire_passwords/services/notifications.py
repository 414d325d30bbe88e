# expire_passwords/services/notifications.py
"""Hand-off of password reset links to the delivery channel"""
import logging

from flask import current_app

logger = logging.getLogger(__name__)

def send_password_reset_link(user, url):
    """
    Deliver a reset link through the configured notifier

    Delivery itself is up to the host platform: ``PASSWORD_RESET_NOTIFIER``
    is called as ``notifier(user, url)``. Without one the link is only logged.
    """
    notifier = current_app.config.get('PASSWORD_RESET_NOTIFIER')
    if notifier is None:
        logger.info('Password reset link for %s: %s', user.username, url)
        return
    notifier(user, url)
    logger.info('Password reset link sent to %s', user.username)
