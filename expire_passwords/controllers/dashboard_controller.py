"""Dashboard controller"""
from datetime import datetime, timezone

from flask import Blueprint, g, render_template

from expire_passwords.hooks import current_hooks
from expire_passwords.utils.decorators import login_required

dashboard_bp = Blueprint('dashboard', __name__)

@dashboard_bp.route('/')
@login_required
def index():
    """Show the password status of the logged-in user"""
    user = g.user
    policy = current_hooks().policy
    context = {'user': user, 'subject': policy.is_subject_to_rotation(user)}

    if context['subject']:
        metadata = policy.ensure_metadata(user).metadata
        context.update(
            limit_days=policy.settings.limit_days,
            expires_at=datetime.fromtimestamp(policy.expires_at(metadata), tz=timezone.utc),
            days_left=policy.days_until_expiry(metadata)
        )

    return render_template('dashboard.html', **context)
