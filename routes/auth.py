from flask import Blueprint, jsonify, request, current_app, g
from flask_login import login_required, current_user

from extensions import limiter
from services.auth_service import AuthService
from utils.http import request_payload

auth_bp = Blueprint('auth', __name__, url_prefix='/api/auth')

auth_service = AuthService()


def _login_rate_limit():
    return current_app.config.get('LOGIN_RATE_LIMIT', '10 per minute')


def _token_response(user, plain_text):
    return {
        'user': user.to_dict(),
        'access_token': plain_text,
        'token_type': 'Bearer',
    }


@auth_bp.route('/register', methods=['POST'])
def register():
    user, plain_text = auth_service.register(request_payload(), request.files.get('avatar'))
    return jsonify({'success': True, **_token_response(user, plain_text)}), 201


@auth_bp.route('/login', methods=['POST'])
@limiter.limit(_login_rate_limit)
def login():
    user, plain_text = auth_service.login(request_payload())
    return jsonify({'success': True, **_token_response(user, plain_text)})


@auth_bp.route('/forgot-password', methods=['POST'])
def forgot_password():
    reset_base_url = current_app.config.get('PASSWORD_RESET_URL') or f'{request.host_url}reset-password'
    message = auth_service.forgot_password(request_payload(), reset_base_url)
    return jsonify({'success': True, 'message': message})


@auth_bp.route('/reset-password', methods=['POST'])
def reset_password():
    message = auth_service.reset_password(request_payload())
    return jsonify({'success': True, 'message': message})


@auth_bp.route('/update-avatar', methods=['POST'])
@login_required
def update_avatar():
    avatar_url = auth_service.update_avatar(current_user, request.files.get('avatar'))
    return jsonify({
        'success': True,
        'message': 'Avatar updated successfully',
        'avatar': avatar_url,
    })


@auth_bp.route('/logout', methods=['POST'])
@login_required
def logout():
    auth_service.logout(g.get('access_token'))
    return jsonify({'success': True, 'message': 'Logged out successfully'})


@auth_bp.route('/user', methods=['GET'])
@login_required
def user():
    return jsonify({'success': True, 'data': current_user.to_dict()})
