"""
Client Views
"""
from flask import Blueprint, render_template, request, redirect, url_for, flash
from framebox_web import api_request, error_detail, login_required

bp = Blueprint('clients', __name__, url_prefix='/clientes')

FIELDS = ('name', 'email', 'phone', 'address', 'notes')


def _form_data():
    return {field: request.form.get(field, '').strip() for field in FIELDS}


@bp.route('')
@login_required
def list_clients():
    """List clients, filtered by the search box"""
    search = request.args.get('q', '').strip()
    params = {'search': search} if search else None
    clients, status = api_request('GET', '/clients', params=params)

    if status != 200:
        flash('Falha ao carregar clientes. Tente novamente.', 'error')
        clients = []

    return render_template('clients/list.html', title='Clientes', clients=clients, search=search)


@bp.route('/novo', methods=['GET', 'POST'])
@login_required
def new_client():
    """Create new client"""
    if request.method == 'GET':
        return render_template('clients/form.html', title='Novo Cliente', client={})

    data = _form_data()
    response, status = api_request('POST', '/clients', data=data)

    if status == 200:
        flash('Cliente cadastrado com sucesso', 'success')
        return redirect(url_for('clients.list_clients'))

    flash(error_detail(response, 'Falha ao salvar cliente. Verifique os dados e tente novamente.'), 'error')
    return render_template('clients/form.html', title='Novo Cliente', client=data), 400


@bp.route('/<client_id>/editar', methods=['GET', 'POST'])
@login_required
def edit_client(client_id):
    """Edit client"""
    if request.method == 'GET':
        client, status = api_request('GET', f'/clients/{client_id}')
        if status != 200:
            flash('Cliente não encontrado', 'error')
            return redirect(url_for('clients.list_clients'))
        return render_template('clients/form.html', title='Editar Cliente', client=client)

    data = _form_data()
    response, status = api_request('PUT', f'/clients/{client_id}', data=data)

    if status == 200:
        flash('Cliente atualizado com sucesso', 'success')
        return redirect(url_for('clients.list_clients'))

    flash(error_detail(response, 'Falha ao salvar cliente. Verifique os dados e tente novamente.'), 'error')
    return render_template('clients/form.html', title='Editar Cliente', client=dict(data, id=client_id)), 400


@bp.route('/<client_id>/excluir', methods=['POST'])
@login_required
def delete_client(client_id):
    """Delete client"""
    response, status = api_request('DELETE', f'/clients/{client_id}')

    if status == 200:
        flash('Cliente excluído com sucesso', 'success')
    else:
        flash(error_detail(response, 'Falha ao excluir cliente. Tente novamente.'), 'error')

    return redirect(url_for('clients.list_clients'))
