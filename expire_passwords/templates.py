# expire_passwords/templates.py
"""HTML templates (embedded for simplicity), served through a DictLoader"""
from jinja2 import DictLoader

BASE_TEMPLATE = """
<!DOCTYPE html>
<html>
<head>
    <title>{% block title %}Log In{% endblock %}</title>
    <style>
        body { font-family: Arial, sans-serif; max-width: 480px; margin: 0 auto; padding: 20px; }
        .form-group { margin-bottom: 15px; }
        label { display: block; margin-bottom: 5px; font-weight: bold; }
        input[type="text"], input[type="password"], input[type="email"] { width: 100%; padding: 8px; box-sizing: border-box; }
        button { background-color: #007bff; color: white; padding: 10px 20px; border: none; cursor: pointer; }
        #login_error, .error { color: red; }
        .success { color: green; }
        .warning { color: orange; }
        .navigation { margin-bottom: 20px; }
        .navigation a { margin-right: 15px; }
    </style>
</head>
<body>
    <div class="navigation">
        {% if session.get('user_id') %}
            <a href="{{ url_for('dashboard.index') }}">Dashboard</a>
            <a href="{{ url_for('auth.update_password') }}">Change Password</a>
            <a href="{{ url_for('auth.logout') }}">Logout</a>
        {% else %}
            <a href="{{ url_for('auth.login') }}">Log in</a>
            <a href="{{ url_for('auth.login', action='lostpassword') }}">Lost your password?</a>
        {% endif %}
    </div>

    {% if message %}<div class="message">{{ message }}</div>{% endif %}

    {% with messages = get_flashed_messages(with_categories=true) %}
        {% for category, text in messages %}
            <div class="{{ category }}">{{ text }}</div>
        {% endfor %}
    {% endwith %}

    {% if errors %}
        {% for code, text in errors %}
            <p class="error" data-code="{{ code }}">{{ text }}</p>
        {% endfor %}
    {% endif %}

    {% block content %}{% endblock %}
</body>
</html>
"""

LOGIN_TEMPLATE = """
{% extends "base.html" %}
{% block content %}
<form method="POST" action="{{ url_for('auth.login') }}">
    <div class="form-group">
        <label>Username:</label>
        <input type="text" name="username" required>
    </div>
    <div class="form-group">
        <label>Password:</label>
        <input type="password" name="password" required>
    </div>
    <button type="submit">Log In</button>
</form>
{% endblock %}
"""

LOST_PASSWORD_TEMPLATE = """
{% extends "base.html" %}
{% block title %}Lost Password{% endblock %}
{% block content %}
<form method="POST" action="{{ url_for('auth.login', action='lostpassword') }}">
    <div class="form-group">
        <label>Username or Email Address:</label>
        <input type="text" name="user_login" required>
    </div>
    <button type="submit">Get New Password</button>
</form>
{% endblock %}
"""

RESET_PASSWORD_TEMPLATE = """
{% extends "base.html" %}
{% block title %}Reset Password{% endblock %}
{% block content %}
<p>Enter your new password below.</p>
<form method="POST" action="{{ url_for('auth.login', action='resetpass') }}">
    <input type="hidden" name="key" value="{{ key }}">
    <input type="hidden" name="login" value="{{ login }}">
    {% if fp %}<input type="hidden" name="fp" value="{{ fp }}">{% endif %}
    <div class="form-group">
        <label>New password:</label>
        <input type="password" name="pass1" required>
    </div>
    <div class="form-group">
        <label>Confirm new password:</label>
        <input type="password" name="pass2" required>
    </div>
    <button type="submit">Reset Password</button>
</form>
{% endblock %}
"""

REGISTER_TEMPLATE = """
{% extends "base.html" %}
{% block title %}Registration{% endblock %}
{% block content %}
<form method="POST">
    <div class="form-group">
        <label>Username:</label>
        <input type="text" name="username" required>
    </div>
    <div class="form-group">
        <label>Email:</label>
        <input type="email" name="email">
    </div>
    <div class="form-group">
        <label>Password:</label>
        <input type="password" name="password" required minlength="{{ min_length }}">
        <small>Minimum {{ min_length }} characters.</small>
    </div>
    <button type="submit">Register</button>
</form>
{% endblock %}
"""

UPDATE_PASSWORD_TEMPLATE = """
{% extends "base.html" %}
{% block title %}Change Password{% endblock %}
{% block content %}
<form method="POST">
    <div class="form-group">
        <label>Current Password:</label>
        <input type="password" name="current_password" required>
    </div>
    <div class="form-group">
        <label>New Password:</label>
        <input type="password" name="new_password" required minlength="{{ min_length }}">
    </div>
    <div class="form-group">
        <label>Confirm New Password:</label>
        <input type="password" name="confirm_password" required>
    </div>
    <button type="submit">Update Password</button>
</form>
{% endblock %}
"""

DASHBOARD_TEMPLATE = """
{% extends "base.html" %}
{% block title %}Dashboard{% endblock %}
{% block content %}
<h2>Dashboard</h2>
<p>Welcome, <strong>{{ user.username }}</strong>!</p>

<h3>Password Status</h3>
{% if subject %}
<ul>
    <li>Rotation period: {{ limit_days }} days</li>
    <li>Password reset due: {{ expires_at.strftime('%Y-%m-%d') }}</li>
    <li>Days until expiry: {{ days_left }}</li>
</ul>
{% else %}
<p>Your password does not expire.</p>
{% endif %}
{% endblock %}
"""

TEMPLATES = {
    'base.html': BASE_TEMPLATE,
    'login.html': LOGIN_TEMPLATE,
    'lost_password.html': LOST_PASSWORD_TEMPLATE,
    'reset_password.html': RESET_PASSWORD_TEMPLATE,
    'register.html': REGISTER_TEMPLATE,
    'update_password.html': UPDATE_PASSWORD_TEMPLATE,
    'dashboard.html': DASHBOARD_TEMPLATE,
}

template_loader = DictLoader(TEMPLATES)
