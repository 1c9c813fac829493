from functools import wraps
from flask import request
from flask_login import LoginManager, UserMixin, current_user

from .credentials import verify_token
from .errors import MissingToken, InvalidToken

login_manager = LoginManager()


class SessionPrincipal(UserMixin):
    """Identity decoded from a verified session token."""
    def __init__(self, id, username, company):
        self.id = id
        self.username = username
        self.company = company

    def get_id(self):
        return str(self.id)


def bearer_token(req):
    header = req.headers.get('Authorization', '')
    scheme, _, token = header.partition(' ')
    if scheme.lower() != 'bearer' or not token.strip():
        return None
    return token.strip()


@login_manager.request_loader
def load_principal(req):
    token = bearer_token(req)
    if token is None:
        return None
    try:
        claims = verify_token(token)
    except InvalidToken:
        return None
    return SessionPrincipal(claims['id'], claims['username'], claims['company'])


def token_required(f):
    """Reject the request unless it carries a valid bearer token."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if bearer_token(request) is None:
            raise MissingToken()
        if not current_user.is_authenticated:
            raise InvalidToken()
        return f(*args, **kwargs)
    return decorated_function
