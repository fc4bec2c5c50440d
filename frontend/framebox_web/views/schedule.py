"""
Schedule Views - Appointments and their service line items
"""
from flask import Blueprint, render_template, request, redirect, url_for, flash, session
from framebox_web import api_request, error_detail, login_required
from framebox_web.line_items import LineItemDraft

bp = Blueprint('schedule', __name__, url_prefix='/agenda')

DRAFT_KEY = 'appointment_draft'
HEADER_FIELDS = ('title', 'description', 'client_id', 'start_date', 'end_date', 'location', 'status')
STATUS_FILTERS = ('all', 'scheduled', 'completed', 'cancelled')


def _header_data():
    data = {field: request.form.get(field, '').strip() for field in HEADER_FIELDS}
    data['client_id'] = data['client_id'] or None
    data['status'] = data['status'] or 'scheduled'
    return data


def _load_services():
    """Service catalog for the line-item selects"""
    services, status = api_request('GET', '/services')
    if status != 200:
        return []
    return services


def _load_clients(appointment=None):
    """Clients for the select, always including the one already linked"""
    clients, status = api_request('GET', '/clients')
    clients = clients if status == 200 else []
    current = (appointment or {}).get('client')
    if current and all(str(client['id']) != str(current['id']) for client in clients):
        clients = clients + [current]
    return clients


def _load_draft(appointment_id):
    stored = session.get(DRAFT_KEY) or {}
    if stored.get('id') != appointment_id:
        return LineItemDraft()
    return LineItemDraft.from_session(stored.get('items'))


def _store_draft(appointment_id, draft):
    session[DRAFT_KEY] = {'id': appointment_id, 'items': draft.to_session()}


def _render_form(title, appointment, draft, services=None, status_code=200):
    return render_template(
        'schedule/form.html',
        title=title,
        appointment=appointment,
        items=draft.items,
        total_value=draft.total_value(),
        services=services if services is not None else _load_services(),
        clients=_load_clients(appointment)
    ), status_code


@bp.route('')
@login_required
def list_appointments():
    """Appointments, soonest first"""
    status_filter = request.args.get('status', 'all')
    if status_filter not in STATUS_FILTERS:
        status_filter = 'all'
    params = {'status': status_filter} if status_filter != 'all' else None

    appointments, status = api_request('GET', '/appointments', params=params)
    if status != 200:
        flash('Falha ao carregar agendamentos', 'error')
        appointments = []

    return render_template(
        'schedule/list.html',
        title='Agenda',
        appointments=appointments,
        status_filter=status_filter
    )


@bp.route('/novo', methods=['GET', 'POST'])
@login_required
def new_appointment():
    """New appointment form; every add/remove of a line posts back here"""
    if request.method == 'GET':
        draft = LineItemDraft()
        _store_draft(None, draft)
        return _render_form('Novo Agendamento', {'status': 'scheduled'}, draft)
    return _handle_form(None, 'Novo Agendamento')


@bp.route('/<appointment_id>/editar', methods=['GET', 'POST'])
@login_required
def edit_appointment(appointment_id):
    """Edit appointment form"""
    if request.method == 'GET':
        appointment, status = api_request('GET', f'/appointments/{appointment_id}')
        if status != 200:
            flash('Agendamento não encontrado', 'error')
            return redirect(url_for('schedule.list_appointments'))
        draft = LineItemDraft.from_appointment(appointment)
        _store_draft(appointment_id, draft)
        return _render_form('Editar Agendamento', appointment, draft)
    return _handle_form(appointment_id, 'Editar Agendamento')


def _handle_form(appointment_id, title):
    header = _header_data()
    if appointment_id:
        header['id'] = appointment_id

    services = _load_services()
    draft = _load_draft(appointment_id)
    draft.apply_form(
        request.form.getlist('service_id'),
        request.form.getlist('quantity'),
        request.form.getlist('price'),
        {str(service['id']): service for service in services}
    )

    action = request.form.get('action', 'save')
    if action == 'add_item':
        draft.add_line_item()
    elif action.startswith('remove_item:'):
        try:
            draft.remove_line_item(int(action.split(':', 1)[1]))
        except (ValueError, IndexError):
            pass

    if action != 'save':
        _store_draft(appointment_id, draft)
        return _render_form(title, header, draft, services)

    payload = {key: value for key, value in header.items() if key != 'id'}
    payload['services'] = draft.to_payload()

    if appointment_id:
        response, status = api_request('PUT', f'/appointments/{appointment_id}', data=payload)
    else:
        response, status = api_request('POST', '/appointments', data=payload)

    if status != 200:
        _store_draft(appointment_id, draft)
        flash(error_detail(response, 'Falha ao salvar agendamento'), 'error')
        return _render_form(title, header, draft, services, 400)

    session.pop(DRAFT_KEY, None)
    flash('Agendamento salvo com sucesso', 'success')
    if response.get('income_transaction_id'):
        flash('Receita registrada no caixa', 'success')
    return redirect(url_for('schedule.list_appointments'))


@bp.route('/<appointment_id>/excluir', methods=['POST'])
@login_required
def delete_appointment(appointment_id):
    """Delete appointment with its line items"""
    response, status = api_request('DELETE', f'/appointments/{appointment_id}')

    if status == 200:
        flash('Agendamento excluído com sucesso', 'success')
    else:
        flash(error_detail(response, 'Falha ao excluir agendamento'), 'error')

    return redirect(url_for('schedule.list_appointments'))
