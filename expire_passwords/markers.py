"""Query parameters that carry the reset flow between requests"""
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

ACTION_PARAM = 'action'
STATUS_PARAM = 'user-expass'
FLOW_ORIGIN_PARAM = 'fp'
KEY_PARAM = 'key'
LOGIN_PARAM = 'login'

ACTION_LOST_PASSWORD = 'lostpassword'
ACTION_RESET_PASSWORD = 'rp'
ACTION_RESET_SUBMIT = 'resetpass'
STATUS_EXPIRED = 'expired'
FLOW_ORIGIN_EXPIRED = 'eup'


def add_query_args(url: str, args: dict) -> str:
    """Return ``url`` with ``args`` merged into its query string"""
    parts = urlsplit(url)
    query = dict(parse_qsl(parts.query, keep_blank_values=True))
    query.update(args)
    return urlunsplit(parts._replace(query=urlencode(query)))
