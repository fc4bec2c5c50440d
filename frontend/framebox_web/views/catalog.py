"""
Service Catalog Views
"""
from flask import Blueprint, render_template, request, redirect, url_for, flash
from framebox_web import api_request, error_detail, login_required

bp = Blueprint('catalog', __name__, url_prefix='/servicos')


def _form_data():
    return {
        'name': request.form.get('name', '').strip(),
        'description': request.form.get('description', '').strip(),
        'base_price': request.form.get('base_price', '').strip() or '0',
        'duration_hours': request.form.get('duration_hours', '').strip() or '1',
    }


@bp.route('')
@login_required
def list_services():
    """List services, filtered by the search box"""
    search = request.args.get('q', '').strip()
    params = {'search': search} if search else None
    services, status = api_request('GET', '/services', params=params)

    if status != 200:
        flash('Falha ao carregar serviços', 'error')
        services = []

    return render_template('catalog/list.html', title='Serviços', services=services, search=search)


@bp.route('/novo', methods=['GET', 'POST'])
@login_required
def new_service():
    """Create new service"""
    if request.method == 'GET':
        return render_template('catalog/form.html', title='Novo Serviço', service={'duration_hours': 1})

    data = _form_data()
    response, status = api_request('POST', '/services', data=data)

    if status == 200:
        flash('Serviço criado com sucesso', 'success')
        return redirect(url_for('catalog.list_services'))

    flash(error_detail(response, 'Falha ao salvar serviço'), 'error')
    return render_template('catalog/form.html', title='Novo Serviço', service=data), 400


@bp.route('/<service_id>/editar', methods=['GET', 'POST'])
@login_required
def edit_service(service_id):
    """Edit service"""
    if request.method == 'GET':
        service, status = api_request('GET', f'/services/{service_id}')
        if status != 200:
            flash('Serviço não encontrado', 'error')
            return redirect(url_for('catalog.list_services'))
        return render_template('catalog/form.html', title='Editar Serviço', service=service)

    data = _form_data()
    response, status = api_request('PUT', f'/services/{service_id}', data=data)

    if status == 200:
        flash('Serviço atualizado com sucesso', 'success')
        return redirect(url_for('catalog.list_services'))

    flash(error_detail(response, 'Falha ao salvar serviço'), 'error')
    return render_template('catalog/form.html', title='Editar Serviço', service=dict(data, id=service_id)), 400


@bp.route('/<service_id>/excluir', methods=['POST'])
@login_required
def delete_service(service_id):
    """Delete service"""
    response, status = api_request('DELETE', f'/services/{service_id}')

    if status == 200:
        flash('Serviço excluído com sucesso', 'success')
    else:
        flash(error_detail(response, 'Falha ao excluir serviço'), 'error')

    return redirect(url_for('catalog.list_services'))
