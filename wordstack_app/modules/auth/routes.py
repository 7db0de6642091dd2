# File: wordstack_app/modules/auth/routes.py
from flask import request
from flask_login import current_user, login_required, login_user, logout_user

from ...core.error_handlers import error_response, success_response
from . import blueprint
from .schemas import LoginSchema, RegisterSchema
from .services.auth_service import AuthService


@blueprint.route('/register', methods=['POST'])
def register():
    data = RegisterSchema().load(request.get_json(silent=True) or {})
    user = AuthService.register_user(data['username'], data['email'], data['password'])
    login_user(user)
    return success_response(data=user.to_dict(), message='Registered.'), 201


@blueprint.route('/login', methods=['POST'])
def login():
    data = LoginSchema().load(request.get_json(silent=True) or {})
    user = AuthService.authenticate(data['login'], data['password'])
    if user is None:
        return error_response('Invalid username or password.', 'UNAUTHORIZED', 401)
    login_user(user, remember=data['remember'])
    return success_response(data=user.to_dict())


@blueprint.route('/logout', methods=['POST'])
@login_required
def logout():
    logout_user()
    return success_response(message='Logged out.')


@blueprint.route('/me', methods=['GET'])
@login_required
def me():
    return success_response(data=current_user.to_dict())
