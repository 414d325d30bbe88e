# expire_passwords/services/login_messages.py
"""Login-Screen Messenger for Expire Passwords"""
from markupsafe import Markup, escape

from expire_passwords import markers

LOST_PASSWORD_INSTRUCTION = ('Please enter your username or e-mail below and a '
                             'password reset link will be sent to you.')


def rotation_notice(limit_days: int) -> Markup:
    """Base notice telling the user how often the password must be reset"""
    if limit_days == 1:
        text = 'Your password must be reset every day.'
    else:
        text = f'Your password must be reset every {limit_days} days.'
    return Markup('<p id="login_error">{}</p>').format(text)


def expired_password_message(message, action, status, flow_origin, limit_days: int):
    """
    Pick the login screen message for the current flow markers

    Args:
        message: message the login screen would show otherwise
        action: ``action`` query parameter
        status: email-flow status marker
        flow_origin: inline-flow origin marker
        limit_days: rotation limit used in the notice

    Returns:
        The notice for an expired-password flow, else ``message`` untouched
    """
    notice = rotation_notice(limit_days)

    if action != markers.ACTION_LOST_PASSWORD or status != markers.STATUS_EXPIRED:
        if flow_origin == markers.FLOW_ORIGIN_EXPIRED:
            return notice
        return message

    return notice + Markup('<p>{}</p>').format(escape(LOST_PASSWORD_INSTRUCTION))
