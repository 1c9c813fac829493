"""Credential checks and session tokens.

Tokens are signed with the app's ``SECRET_KEY`` and carry the account id,
username and company. They are not stored server-side; a token is valid
while its signature checks out and it is younger than ``TOKEN_MAX_AGE``.
"""
from flask import current_app
from itsdangerous import URLSafeTimedSerializer, BadSignature
from werkzeug.security import generate_password_hash, check_password_hash

from .db import AccountDB
from .errors import InvalidCredentials, InvalidToken

TOKEN_SALT = 'session-token'
DEFAULT_TOKEN_MAX_AGE = 24 * 60 * 60

# Compared against when the username is unknown so both failure paths hash once
_DUMMY_HASH = generate_password_hash('not-a-real-password')


def _serializer():
    return URLSafeTimedSerializer(current_app.config['SECRET_KEY'], salt=TOKEN_SALT)


def issue_token(account):
    claims = {'id': account.id, 'username': account.username, 'company': account.company}
    return _serializer().dumps(claims)


def verify_token(token):
    """Return the claims dict of a valid token, else raise InvalidToken."""
    max_age = current_app.config.get('TOKEN_MAX_AGE', DEFAULT_TOKEN_MAX_AGE)
    try:
        claims = _serializer().loads(token, max_age=max_age)
    except BadSignature:
        # SignatureExpired is a BadSignature too
        raise InvalidToken()
    if not isinstance(claims, dict) or not all(k in claims for k in ('id', 'username', 'company')):
        raise InvalidToken()
    return claims


def authenticate(username, password):
    """Check a username/password pair and issue a session token.

    Returns ``(token, summary)``. Unknown users and wrong passwords raise
    the same InvalidCredentials error.
    """
    account = AccountDB.query.filter_by(username=username).first()
    if account is None:
        check_password_hash(_DUMMY_HASH, password)
        raise InvalidCredentials()
    if not check_password_hash(account.password_hash, password):
        raise InvalidCredentials()
    return issue_token(account), account.summary()
