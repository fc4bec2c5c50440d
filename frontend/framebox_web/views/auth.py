"""
Authentication Views
"""
from flask import Blueprint, render_template, request, redirect, url_for, session, flash
from framebox_web import api_request, error_detail

bp = Blueprint('auth', __name__)


@bp.route('/login', methods=['GET', 'POST'])
def login():
    """Login page"""
    if request.method == 'GET':
        if 'access_token' in session:
            return redirect(url_for('dashboard.index'))
        return render_template('auth/login.html', title='Entrar')

    data = {
        'email': request.form.get('email', '').strip(),
        'password': request.form.get('password', '')
    }

    response, status = api_request('POST', '/auth/login', data=data, include_auth=False)

    if status == 200 and response and 'access_token' in response:
        session.clear()
        session['access_token'] = response['access_token']
        session['email'] = data['email']
        flash('Login realizado com sucesso!', 'success')

        next_url = request.args.get('next')
        if next_url and next_url.startswith('/') and not next_url.startswith('//'):
            return redirect(next_url)
        return redirect(url_for('dashboard.index'))

    if status == 401:
        error = 'Email ou senha incorretos. Verifique suas credenciais.'
    else:
        error = error_detail(response, 'Não foi possível entrar agora.')
    flash(error, 'error')
    return render_template('auth/login.html', title='Entrar', email=data['email']), 401


@bp.route('/logout', methods=['GET', 'POST'])
def logout():
    """Clear the session"""
    session.clear()
    flash('Logout realizado. Até logo!', 'success')
    return redirect(url_for('auth.login'))
