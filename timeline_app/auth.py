from flask import Blueprint, request, jsonify, current_app

from .credentials import authenticate
from .errors import ValidationError, InvalidCredentials

auth_bp = Blueprint('auth', __name__, url_prefix='/api/auth')

@auth_bp.post('/login')
def login():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError('Username and password are required.')
    username = data.get('username')
    password = data.get('password')
    if not isinstance(username, str) or not isinstance(password, str) or not username or not password:
        raise ValidationError('Username and password are required.')
    try:
        token, user = authenticate(username, password)
    except InvalidCredentials:
        current_app.logger.info('Failed login for %r', username)
        raise
    current_app.logger.info('Login: %s (%s)', user['username'], user['company'])
    return jsonify({'token': token, 'user': user})
