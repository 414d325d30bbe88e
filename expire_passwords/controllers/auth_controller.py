# expire_passwords/controllers/auth_controller.py
"""Authentication Controller for Expire Passwords
Login, lost-password and reset-password screens share the /auth/login endpoint
and are selected by the ``action`` query parameter.
"""
import logging

from flask import Blueprint, current_app, flash, g, redirect, render_template, request, url_for

from expire_passwords import markers
from expire_passwords.exceptions import ExpiredResetKey, InvalidResetKey, ResetKeyError
from expire_passwords.hooks import current_hooks
from expire_passwords.models.user import User
from expire_passwords.services.auth_services import AuthService
from expire_passwords.services.notifications import send_password_reset_link
from expire_passwords.services.reset_key_service import ResetKeyService
from expire_passwords.services.reset_validator import ValidationErrors
from expire_passwords.services.session_service import SessionService
from expire_passwords.utils.decorators import login_required
from expire_passwords.utils.security import BCRYPT_MAX_PASSWORD_BYTES

logger = logging.getLogger(__name__)

auth_bp = Blueprint('auth', __name__)

STATUS_MESSAGES = {
    ('checkemail', 'confirm'): 'Check your email for the confirmation link.',
    ('password', 'changed'): 'Your password has been reset.',
    ('error', 'invalidkey'): 'Your password reset link appears to be invalid. Please request a new link below.',
    ('error', 'expiredkey'): 'Your password reset link has expired. Please request a new link below.',
}


def _reset_keys():
    return ResetKeyService(current_app.config['PASSWORD_RESET_KEY_LIFETIME'])


def _flow_markers():
    """Query flags plus the flow origin carried through the reset form"""
    args = request.args.to_dict()
    if markers.FLOW_ORIGIN_PARAM in request.form:
        args[markers.FLOW_ORIGIN_PARAM] = request.form[markers.FLOW_ORIGIN_PARAM]
    return args


def _render(template, hooks, errors=None, **context):
    """Render a login screen with the message selected for the current flow"""
    args = _flow_markers()
    default = None
    for (name, value), text in STATUS_MESSAGES.items():
        if args.get(name) == value:
            default = text
            break
    message = hooks.on_render_login_message(default, args)
    return render_template(template, message=message, errors=errors, **context)


def _password_errors(errors, password1, password2):
    if not password1:
        errors.add('password_reset_empty', 'Please enter a password.')
    elif password1 != password2:
        errors.add('password_reset_mismatch', 'The passwords do not match.')
    elif len(password1.encode('utf-8')) > BCRYPT_MAX_PASSWORD_BYTES:
        errors.add('password_too_long', f'Passwords cannot be longer than {BCRYPT_MAX_PASSWORD_BYTES} bytes.')
    return errors


@auth_bp.route('/login', methods=['GET', 'POST'])
def login():
    """Log in, or dispatch to the lost/reset password screens"""
    action = request.args.get(markers.ACTION_PARAM, 'login')
    hooks = current_hooks()

    if action == markers.ACTION_LOST_PASSWORD:
        return _lost_password(hooks)
    if action in (markers.ACTION_RESET_PASSWORD, markers.ACTION_RESET_SUBMIT):
        return _reset_password(hooks)

    if request.method == 'POST':
        username = request.form.get('username', '').strip()
        password = request.form.get('password', '')

        user = AuthService.authenticate(username, password)
        if user is None:
            flash('Invalid username or password', 'error')
            return _render('login.html', hooks), 401

        decision = hooks.on_auth_success(user)
        if not decision.proceed:
            return redirect(decision.redirect_to, 302)

        SessionService.create_session(user)
        _warn_if_expiring(hooks, user)
        flash('Login successful!', 'success')
        return redirect(url_for('dashboard.index'))

    return _render('login.html', hooks)


def _warn_if_expiring(hooks, user):
    policy = hooks.policy
    if not policy.is_subject_to_rotation(user):
        return
    metadata = policy.ensure_metadata(user).metadata
    days_left = policy.days_until_expiry(metadata)
    if days_left >= current_app.config['EXPIRY_WARNING_DAYS']:
        return
    if days_left == 0:
        flash('Your password will expire today.', 'warning')
    elif days_left == 1:
        flash('Your password will expire tomorrow.', 'warning')
    else:
        flash(f'Your password will expire in {days_left} days.', 'warning')


def _lost_password(hooks):
    errors = ValidationErrors()

    if request.method == 'POST':
        user = AuthService.find_by_login(request.form.get('user_login'))
        if user is None:
            errors.add('invalid_username', 'There is no account with that username or email address.')
            return _render('lost_password.html', hooks, errors=errors)

        try:
            key = _reset_keys().issue(user)
        except ResetKeyError:
            logger.warning('Reset key refused for user %s', user.id, exc_info=True)
            errors.add('no_password_reset', 'Password reset is not allowed for this user.')
            return _render('lost_password.html', hooks, errors=errors)

        url = url_for('auth.login', _external=True, **{
            markers.ACTION_PARAM: markers.ACTION_RESET_PASSWORD,
            markers.KEY_PARAM: key,
            markers.LOGIN_PARAM: user.username,
        })
        send_password_reset_link(user, url)
        return redirect(url_for('auth.login', checkemail='confirm'))

    return _render('lost_password.html', hooks)


def _reset_password(hooks):
    source = request.form if request.method == 'POST' else request.args
    key = source.get(markers.KEY_PARAM, '')
    login_name = source.get(markers.LOGIN_PARAM, '')
    flow_origin = source.get(markers.FLOW_ORIGIN_PARAM)

    reset_keys = _reset_keys()
    try:
        user = reset_keys.check(key, login_name)
    except ExpiredResetKey:
        return redirect(url_for('auth.login', action=markers.ACTION_LOST_PASSWORD, error='expiredkey'))
    except InvalidResetKey:
        return redirect(url_for('auth.login', action=markers.ACTION_LOST_PASSWORD, error='invalidkey'))

    if request.method == 'POST':
        password1 = request.form.get('pass1', '')
        password2 = request.form.get('pass2', '')

        errors = _password_errors(ValidationErrors(), password1, password2)
        hooks.on_reset_validate(errors, password1, password2, user)

        if errors:
            return _render('reset_password.html', hooks, errors=errors,
                           key=key, login=login_name, fp=flow_origin)

        AuthService.set_password(user, password1)
        hooks.policy.record_password_change(user)
        reset_keys.consume(user)
        SessionService.destroy_all_sessions(user)
        logger.info('Password reset completed for user %s', user.id)
        return redirect(url_for('auth.login', password='changed'))

    return _render('reset_password.html', hooks, key=key, login=login_name, fp=flow_origin)


@auth_bp.route('/register', methods=['GET', 'POST'])
def register():
    """Account registration; the rotation period starts with the first password"""
    min_length = current_app.config['MIN_PASSWORD_LENGTH']
    hooks = current_hooks()

    if request.method == 'POST':
        username = request.form.get('username', '').strip()
        email = request.form.get('email', '').strip() or None
        password = request.form.get('password', '')

        if not username or not password:
            flash('Username and password are required', 'error')
            return _render('register.html', hooks, min_length=min_length), 400

        if len(password) < min_length:
            flash(f'Password must be at least {min_length} characters', 'error')
            return _render('register.html', hooks, min_length=min_length), 400

        if len(password.encode('utf-8')) > BCRYPT_MAX_PASSWORD_BYTES:
            flash(f'Passwords cannot be longer than {BCRYPT_MAX_PASSWORD_BYTES} bytes', 'error')
            return _render('register.html', hooks, min_length=min_length), 400

        if User.query.filter_by(username=username).first() or \
                (email and AuthService.find_by_login(email)):
            flash('Username or email already exists', 'error')
            return _render('register.html', hooks, min_length=min_length), 400

        user = AuthService.create_user(username, password, email=email,
                                       roles=[current_app.config['DEFAULT_ROLE']])
        hooks.policy.record_password_change(user)

        flash('Registration successful! Please log in.', 'success')
        return redirect(url_for('auth.login'))

    return _render('register.html', hooks, min_length=min_length)


@auth_bp.route('/update-password', methods=['GET', 'POST'])
@login_required
def update_password():
    """Change the password of the logged-in user"""
    min_length = current_app.config['MIN_PASSWORD_LENGTH']
    hooks = current_hooks()
    user = g.user

    if request.method == 'POST':
        current_password = request.form.get('current_password', '')
        new_password = request.form.get('new_password', '')
        confirm_password = request.form.get('confirm_password', '')

        errors = ValidationErrors()
        if not AuthService.verify_password(current_password, user.password_hash):
            errors.add('incorrect_password', 'Current password is incorrect')
        else:
            _password_errors(errors, new_password, confirm_password)
            if not errors and len(new_password) < min_length:
                errors.add('password_too_short', f'Password must be at least {min_length} characters')
            hooks.on_reset_validate(errors, new_password, confirm_password, user)

        if errors:
            return _render('update_password.html', hooks, errors=errors, min_length=min_length)

        AuthService.set_password(user, new_password)
        hooks.policy.record_password_change(user)
        flash('Password updated successfully', 'success')
        return redirect(url_for('dashboard.index'))

    return _render('update_password.html', hooks, min_length=min_length)


@auth_bp.route('/logout')
def logout():
    """End the current session"""
    SessionService.end_session()
    flash('You have been logged out', 'info')
    return redirect(url_for('auth.login'))
