"""
Auth Routes

User authentication routes using Flask-Login.
"""

import logging

from flask import render_template, request, redirect, url_for, flash, session, current_app
from flask_login import login_user, logout_user, current_user
from werkzeug.security import generate_password_hash, check_password_hash
from storefront.auth import auth_bp
from storefront.extensions import db
from storefront.models import User

logger = logging.getLogger(__name__)


def _render_signup(email='', status=200):
    return render_template('auth/signup.html',
                           page_title='Signup',
                           path='/signup',
                           old_input={'email': email}), status


def _render_login(email='', status=200):
    return render_template('auth/login.html',
                           page_title='Login',
                           path='/login',
                           old_input={'email': email}), status


@auth_bp.route('/signup', methods=['GET', 'POST'])
def signup():
    """User registration route"""
    if current_user.is_authenticated:
        return redirect(url_for('shop.index'))

    if request.method == 'POST':
        email = request.form.get('email', '').strip().lower()
        password = request.form.get('password', '')
        confirm_password = request.form.get('confirm_password', '')

        # Validation
        if not email or '@' not in email:
            flash('Please enter a valid email address.', 'danger')
            return _render_signup(email, 422)

        if len(password) < 5 or not password.isalnum():
            flash('Please enter a password with only numbers and text and at least 5 characters.', 'danger')
            return _render_signup(email, 422)

        if password != confirm_password:
            flash('Passwords have to match.', 'danger')
            return _render_signup(email, 422)

        if User.query.filter_by(email=email).first():
            flash('E-Mail exists already, please pick a different one.', 'danger')
            return _render_signup(email, 422)

        new_user = User(email=email, password_hash=generate_password_hash(password))
        db.session.add(new_user)
        db.session.commit()
        logger.info("Registered user %s", new_user.id)
        flash('Signup successful! Please login.', 'success')
        return redirect(url_for('auth.login'))

    return _render_signup()


@auth_bp.route('/login', methods=['GET', 'POST'])
def login():
    """User login route"""
    if current_user.is_authenticated:
        return redirect(url_for('shop.index'))

    if request.method == 'POST':
        email = request.form.get('email', '').strip().lower()
        password = request.form.get('password', '')

        if not email or not password:
            flash('Please provide both email and password.', 'danger')
            return _render_login(email, 422)

        user = User.query.filter_by(email=email).first()

        if user and check_password_hash(user.password_hash, password):
            login_user(user)
            session['is_logged_in'] = True
            # New session id for the logged-in session, the old one is deleted
            current_app.session_interface.regenerate(session)
            flash('Welcome back!', 'success')

            next_page = request.args.get('next')
            if next_page and next_page.startswith('/') and not next_page.startswith('//'):
                return redirect(next_page)
            return redirect(url_for('shop.index'))

        flash('Invalid email or password.', 'danger')
        return _render_login(email, 422)

    return _render_login()


@auth_bp.route('/logout', methods=['POST'])
def logout():
    """User logout route"""
    logout_user()
    session.clear()
    return redirect(url_for('shop.index'))
