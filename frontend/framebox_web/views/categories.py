"""
Category Views
"""
from flask import Blueprint, render_template, request, redirect, url_for, flash
from framebox_web import api_request, error_detail, login_required

bp = Blueprint('categories', __name__, url_prefix='/categorias')


def _form_data():
    return {
        'name': request.form.get('name', '').strip(),
        'type': request.form.get('type', 'income'),
        'color': request.form.get('color', '').strip() or '#8B5CF6',
        'description': request.form.get('description', '').strip(),
    }


@bp.route('')
@login_required
def list_categories():
    categories, status = api_request('GET', '/categories')

    if status != 200:
        flash('Falha ao carregar categorias', 'error')
        categories = []

    return render_template('categories/list.html', title='Categorias', categories=categories)


@bp.route('/nova', methods=['GET', 'POST'])
@login_required
def new_category():
    if request.method == 'GET':
        return render_template('categories/form.html', title='Nova Categoria',
                               category={'type': 'income', 'color': '#8B5CF6'})

    data = _form_data()
    response, status = api_request('POST', '/categories', data=data)

    if status == 200:
        flash('Categoria criada com sucesso', 'success')
        return redirect(url_for('categories.list_categories'))

    flash(error_detail(response, 'Falha ao salvar categoria'), 'error')
    return render_template('categories/form.html', title='Nova Categoria', category=data), 400


@bp.route('/<category_id>/editar', methods=['GET', 'POST'])
@login_required
def edit_category(category_id):
    if request.method == 'GET':
        category, status = api_request('GET', f'/categories/{category_id}')
        if status != 200:
            flash('Categoria não encontrada', 'error')
            return redirect(url_for('categories.list_categories'))
        return render_template('categories/form.html', title='Editar Categoria', category=category)

    data = _form_data()
    response, status = api_request('PUT', f'/categories/{category_id}', data=data)

    if status == 200:
        flash('Categoria atualizada com sucesso', 'success')
        return redirect(url_for('categories.list_categories'))

    flash(error_detail(response, 'Falha ao salvar categoria'), 'error')
    return render_template('categories/form.html', title='Editar Categoria', category=dict(data, id=category_id)), 400


@bp.route('/<category_id>/excluir', methods=['POST'])
@login_required
def delete_category(category_id):
    """Delete category; refused by the backend while transactions use it"""
    response, status = api_request('DELETE', f'/categories/{category_id}')

    if status == 200:
        flash('Categoria excluída com sucesso', 'success')
    else:
        flash(error_detail(response, 'Falha ao excluir categoria'), 'error')

    return redirect(url_for('categories.list_categories'))
