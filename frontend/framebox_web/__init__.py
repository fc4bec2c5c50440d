"""
FrameBOX web frontend: server-rendered pages over the FrameBOX API
"""
import os
import logging
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from functools import wraps

import requests
from dotenv import load_dotenv
from flask import Flask, render_template, redirect, url_for, session, request
from flask_wtf.csrf import CSRFProtect

load_dotenv()

logger = logging.getLogger(__name__)

# Initialize app
app = Flask(__name__)
app.secret_key = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')
app.config['BACKEND_URL'] = os.getenv('BACKEND_URL', 'http://localhost:8000')
app.config['BACKEND_TIMEOUT'] = float(os.getenv('BACKEND_TIMEOUT', '10'))
app.config['SESSION_COOKIE_HTTPONLY'] = True
app.config['SESSION_COOKIE_SAMESITE'] = 'Lax'
app.config['WTF_CSRF_TIME_LIMIT'] = None
csrf = CSRFProtect(app)


# ==================== HELPERS ====================

def get_backend_url(endpoint):
    """Get full backend URL"""
    return f"{app.config['BACKEND_URL']}/api/v1{endpoint}"


def api_request(method, endpoint, data=None, params=None, include_auth=True):
    """
    Make request to backend API.
    Returns (body, status_code); on connection problems status is an error string.
    """
    url = get_backend_url(endpoint)
    headers = {'Content-Type': 'application/json'}
    timeout = app.config['BACKEND_TIMEOUT']

    if include_auth and 'access_token' in session:
        headers['Authorization'] = f"Bearer {session['access_token']}"

    if method not in ('GET', 'POST', 'PUT', 'DELETE'):
        return None, "Invalid method"

    try:
        response = requests.request(
            method, url,
            headers=headers,
            params=params,
            json=data if method in ('POST', 'PUT') else None,
            timeout=timeout,
        )
    except requests.exceptions.ConnectionError:
        logger.error("Backend unreachable: %s %s", method, url)
        return None, "Backend connection error"
    except requests.exceptions.Timeout:
        logger.error("Backend timed out: %s %s", method, url)
        return None, "Backend timeout"

    if response.status_code == 401 and include_auth:
        # token expired or revoked, next protected page goes to login
        session.pop('access_token', None)

    try:
        body = response.json() if response.content else {}
    except ValueError:
        body = {}

    if response.status_code >= 400:
        logger.warning("Backend answered %s for %s %s", response.status_code, method, url)

    return body, response.status_code


def error_detail(response, default):
    """Human readable error from a backend answer"""
    if isinstance(response, dict):
        detail = response.get('detail')
        if isinstance(detail, str):
            return detail
        if isinstance(detail, list) and detail:
            return '; '.join(str(err.get('msg', err)) for err in detail if isinstance(err, dict)) or default
    return default


def login_required(f):
    """Decorator to require login"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if 'access_token' not in session:
            return redirect(url_for('auth.login', next=request.path))
        return f(*args, **kwargs)
    return decorated_function


@app.context_processor
def inject_globals():
    """Inject global variables into templates"""
    return {
        'app_name': 'FrameBOX',
        'current_email': session.get('email'),
        'current_year': datetime.now().year,
    }


# ==================== TEMPLATE FILTERS ====================

STATUS_LABELS = {
    'scheduled': 'Agendado',
    'completed': 'Concluído',
    'cancelled': 'Cancelado',
}

TYPE_LABELS = {
    'income': 'Receita',
    'expense': 'Despesa',
}


def to_decimal(value, default=Decimal("0")):
    try:
        return Decimal(str(value)) if value not in (None, '') else default
    except (InvalidOperation, ValueError):
        return default


@app.template_filter('currency')
def currency_filter(value):
    """Format number as Brazilian reais: R$ 1.234,56"""
    amount = to_decimal(value).quantize(Decimal("0.01"))
    sign = '-' if amount < 0 else ''
    text = f"{abs(amount):,.2f}".replace(',', '_').replace('.', ',').replace('_', '.')
    return f"{sign}R$ {text}"


def _parse_datetime(value):
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    try:
        return datetime.fromisoformat(str(value))
    except (TypeError, ValueError):
        return None


@app.template_filter('date')
def date_filter(value, format='%d/%m/%Y'):
    """Format date"""
    parsed = _parse_datetime(value) if value else None
    return parsed.strftime(format) if parsed else (value or '')


@app.template_filter('datetime')
def datetime_filter(value, format='%d/%m/%Y %H:%M'):
    parsed = _parse_datetime(value) if value else None
    return parsed.strftime(format) if parsed else (value or '')


@app.template_filter('datetime_local')
def datetime_local_filter(value):
    """Value for an <input type="datetime-local">"""
    parsed = _parse_datetime(value) if value else None
    return parsed.strftime('%Y-%m-%dT%H:%M') if parsed else ''


@app.template_filter('status_label')
def status_label_filter(value):
    return STATUS_LABELS.get(value, value)


@app.template_filter('type_label')
def type_label_filter(value):
    return TYPE_LABELS.get(value, value)


# ==================== ERROR HANDLERS ====================

@app.errorhandler(404)
def not_found(error):
    return render_template('shared/404.html', title='Página não encontrada'), 404


@app.errorhandler(500)
def server_error(error):
    return render_template('shared/500.html', title='Erro'), 500


# ==================== REGISTER BLUEPRINTS ====================

from framebox_web.views import auth, dashboard, clients, catalog, cashflow, categories, schedule  # noqa: E402

app.register_blueprint(auth.bp)
app.register_blueprint(dashboard.bp)
app.register_blueprint(clients.bp)
app.register_blueprint(catalog.bp)
app.register_blueprint(cashflow.bp)
app.register_blueprint(categories.bp)
app.register_blueprint(schedule.bp)
