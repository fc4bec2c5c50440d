"""
Dashboard Views
"""
from flask import Blueprint, render_template, flash
from framebox_web import api_request, login_required

bp = Blueprint('dashboard', __name__)

PLACEHOLDER_STATS = {
    'total_clients': 0,
    'total_services': 0,
    'monthly_income': 0,
    'monthly_expense': 0,
    'yearly_income': 0,
    'upcoming_appointments': 0,
    'monthly_balance': 0,
}


@bp.route('/')
@login_required
def index():
    """Main dashboard"""
    stats, status = api_request('GET', '/dashboard/stats')

    if status != 200:
        flash('Falha ao carregar estatísticas.', 'error')
        stats = dict(PLACEHOLDER_STATS)

    return render_template('dashboard/index.html', title='Dashboard', stats=stats)


@bp.route('/relatorios')
@login_required
def reports():
    """Reports placeholder"""
    return render_template('dashboard/reports.html', title='Relatórios')
