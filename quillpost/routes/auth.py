import logging
from urllib.parse import urlsplit
from flask import Blueprint, render_template, redirect, url_for, flash, request, session
from flask_login import login_user, logout_user
from ..accounts import authenticate, register_user
from ..errors import SAVE_FAILED, EmailTaken, InvalidCredentials, StoreUnavailable
from ..forms import ConfirmForm, LoginForm, RegisterForm
from ..gate import current_principal, principal_required
from ..sessions import create_session, destroy_session

logger = logging.getLogger(__name__)

auth_bp = Blueprint('auth', __name__)


def _safe_next(target):
    if not target:
        return None
    parts = urlsplit(target)
    if parts.scheme or parts.netloc or not target.startswith('/') or target.startswith('//'):
        return None
    return target


@auth_bp.route('/register', methods=['GET', 'POST'])
def register():
    form = RegisterForm()
    if form.validate_on_submit():
        try:
            register_user(form.email.data, form.password.data)
        except EmailTaken:
            flash("That email address cannot be used to register.", "error")
            return redirect(url_for('auth.register'))
        except StoreUnavailable:
            flash(SAVE_FAILED, "error")
            return redirect(url_for('auth.register'))

        flash("Registration successful. Please log in.", "success")
        return redirect(url_for('auth.login'))

    return render_template('auth/register.html', form=form)


@auth_bp.route('/login', methods=['GET', 'POST'])
def login():
    form = LoginForm()
    if form.validate_on_submit():
        email = form.email.data
        try:
            user = authenticate(email, form.password.data)
        except InvalidCredentials as e:
            logger.info("[Auth] Failed login for %s", email)
            flash(str(e), "error")
            return redirect(url_for('auth.login', next=request.args.get('next')))

        # A fresh login replaces any session this client already holds
        previous = current_principal()
        if previous is not None:
            destroy_session(previous.token)
            logout_user()

        principal = create_session(user)
        login_user(principal)
        session.permanent = True
        logger.info("[Auth] User %s logged in", user.id)
        return redirect(_safe_next(request.args.get('next')) or url_for('main.blogs'))

    return render_template('auth/login.html', form=form)


@auth_bp.route('/logout', methods=['POST'])
@principal_required
def logout(principal):
    # Keep the user logged in if the server-side session could not be removed
    destroy_session(principal.token)
    logout_user()
    logger.info("[Auth] User %s logged out", principal.user_id)
    flash("You have been logged out.", "success")
    return redirect(url_for('main.index'))


@auth_bp.app_context_processor
def inject_logout_form():
    return {"logout_form": ConfirmForm()}
