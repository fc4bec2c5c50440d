"""
Cash Flow Views - Income and expense transactions
"""
from datetime import date
from io import BytesIO

import openpyxl
from openpyxl.styles import Font, PatternFill, Border, Side
from openpyxl.utils import get_column_letter
from flask import Blueprint, render_template, request, redirect, url_for, flash, make_response
from framebox_web import TYPE_LABELS, api_request, error_detail, login_required, to_decimal

bp = Blueprint('cashflow', __name__, url_prefix='/caixa')

TYPE_FILTERS = ('all', 'income', 'expense')


def _form_data():
    return {
        'type': request.form.get('type', 'income'),
        'amount': request.form.get('amount', '').strip(),
        'description': request.form.get('description', '').strip(),
        'category_id': request.form.get('category_id') or None,
        'client_id': request.form.get('client_id') or None,
        'transaction_date': request.form.get('transaction_date') or date.today().isoformat(),
    }


def _form_choices():
    """Categories and clients for the form selects"""
    categories, status = api_request('GET', '/categories')
    if status != 200:
        categories = []
    clients, status = api_request('GET', '/clients')
    if status != 200:
        clients = []
    return categories, clients


def _render_form(title, transaction, status_code=200):
    categories, clients = _form_choices()
    return render_template(
        'cashflow/form.html',
        title=title,
        transaction=transaction,
        categories=categories,
        clients=clients
    ), status_code


@bp.route('')
@login_required
def list_transactions():
    """List transactions with totals"""
    type_filter = request.args.get('type', 'all')
    if type_filter not in TYPE_FILTERS:
        type_filter = 'all'
    params = {'type': type_filter} if type_filter != 'all' else None

    transactions, status = api_request('GET', '/transactions', params=params)
    if status != 200:
        flash('Falha ao carregar dados', 'error')
        transactions = []

    summary, status = api_request('GET', '/transactions/summary')
    if status != 200:
        summary = {'total_income': 0, 'total_expense': 0, 'balance': 0}

    return render_template(
        'cashflow/list.html',
        title='Controle de Caixa',
        transactions=transactions,
        summary=summary,
        type_filter=type_filter
    )


@bp.route('/novo', methods=['GET', 'POST'])
@login_required
def new_transaction():
    """Record a transaction"""
    if request.method == 'GET':
        return _render_form('Nova Transação', {
            'type': request.args.get('type', 'income'),
            'transaction_date': date.today().isoformat()
        })

    data = _form_data()
    response, status = api_request('POST', '/transactions', data=data)

    if status == 200:
        flash('Transação registrada com sucesso', 'success')
        return redirect(url_for('cashflow.list_transactions'))

    flash(error_detail(response, 'Falha ao salvar transação'), 'error')
    return _render_form('Nova Transação', data, 400)


@bp.route('/<transaction_id>/editar', methods=['GET', 'POST'])
@login_required
def edit_transaction(transaction_id):
    """Edit transaction"""
    if request.method == 'GET':
        transaction, status = api_request('GET', f'/transactions/{transaction_id}')
        if status != 200:
            flash('Transação não encontrada', 'error')
            return redirect(url_for('cashflow.list_transactions'))
        return _render_form('Editar Transação', transaction)

    data = _form_data()
    response, status = api_request('PUT', f'/transactions/{transaction_id}', data=data)

    if status == 200:
        flash('Transação atualizada com sucesso', 'success')
        return redirect(url_for('cashflow.list_transactions'))

    flash(error_detail(response, 'Falha ao salvar transação'), 'error')
    return _render_form('Editar Transação', dict(data, id=transaction_id), 400)


@bp.route('/<transaction_id>/excluir', methods=['POST'])
@login_required
def delete_transaction(transaction_id):
    """Delete transaction"""
    response, status = api_request('DELETE', f'/transactions/{transaction_id}')

    if status == 200:
        flash('Transação excluída com sucesso', 'success')
    else:
        flash(error_detail(response, 'Falha ao excluir transação'), 'error')

    return redirect(url_for('cashflow.list_transactions'))


@bp.route('/exportar')
@login_required
def export_excel():
    """Export the listed transactions and their totals to Excel"""
    type_filter = request.args.get('type', 'all')
    params = {'type': type_filter} if type_filter in ('income', 'expense') else None

    transactions, status = api_request('GET', '/transactions', params=params)
    if status != 200:
        flash('Falha ao exportar transações', 'error')
        return redirect(url_for('cashflow.list_transactions'))

    summary, status = api_request('GET', '/transactions/summary', params=params)
    if status != 200:
        summary = {}

    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = "Caixa"

    currency_format = '"R$" #,##0.00'
    header_fill = PatternFill(start_color="2D1B4E", end_color="2D1B4E", fill_type="solid")
    header_font = Font(bold=True, color="FFFFFF")
    income_fill = PatternFill(start_color="C6EFCE", end_color="C6EFCE", fill_type="solid")
    expense_fill = PatternFill(start_color="FFC7CE", end_color="FFC7CE", fill_type="solid")
    thin_border = Border(
        left=Side(style='thin'),
        right=Side(style='thin'),
        top=Side(style='thin'),
        bottom=Side(style='thin')
    )

    ws['A1'] = "FrameBOX - Controle de Caixa"
    ws['A1'].font = Font(bold=True, size=16)
    ws.merge_cells('A1:F1')
    ws['A2'] = f"Gerado em {date.today().strftime('%d/%m/%Y')}"
    ws.merge_cells('A2:F2')

    row = 4
    headers = ['Data', 'Tipo', 'Descrição', 'Categoria', 'Cliente', 'Valor']
    for col, header in enumerate(headers, 1):
        cell = ws.cell(row=row, column=col, value=header)
        cell.font = header_font
        cell.fill = header_fill
        cell.border = thin_border
    row += 1

    for transaction in transactions or []:
        category = transaction.get('category') or {}
        client = transaction.get('client') or {}
        values = [
            transaction.get('transaction_date'),
            TYPE_LABELS.get(transaction.get('type'), transaction.get('type')),
            transaction.get('description'),
            category.get('name', '-'),
            client.get('name', '-'),
            float(to_decimal(transaction.get('amount'))),
        ]
        for col, value in enumerate(values, 1):
            ws.cell(row=row, column=col, value=value).border = thin_border
        amount_cell = ws.cell(row=row, column=6)
        amount_cell.number_format = currency_format
        amount_cell.fill = income_fill if transaction.get('type') == 'income' else expense_fill
        row += 1

    row += 1
    for label, key in (('Receitas:', 'total_income'), ('Despesas:', 'total_expense'), ('Saldo:', 'balance')):
        ws.cell(row=row, column=5, value=label).font = Font(bold=True)
        total_cell = ws.cell(row=row, column=6, value=float(to_decimal(summary.get(key))))
        total_cell.number_format = currency_format
        total_cell.font = Font(bold=True)
        row += 1

    for col, width in enumerate((12, 10, 40, 20, 25, 15), 1):
        ws.column_dimensions[get_column_letter(col)].width = width

    output = BytesIO()
    wb.save(output)
    output.seek(0)

    response = make_response(output.getvalue())
    response.headers['Content-Type'] = 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'
    response.headers['Content-Disposition'] = f'attachment; filename=caixa_{date.today().isoformat()}.xlsx'
    return response
