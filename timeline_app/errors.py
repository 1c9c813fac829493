"""Error taxonomy for the timeline API and the JSON handlers that render it.

Every error that reaches the request boundary is turned into
``{"success": false, "error": <message>}`` with the matching status code.
Storage faults are logged with their traceback but only a generic message
is returned to the caller.
"""
from flask import jsonify, current_app
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from .db import db


class APIError(Exception):
    status_code = 500
    message = 'Internal server error.'

    def __init__(self, message=None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ValidationError(APIError):
    status_code = 400
    message = 'Required fields are missing.'


class AuthError(APIError):
    status_code = 400
    message = 'Authentication failed.'


class InvalidCredentials(AuthError):
    status_code = 400
    message = 'Invalid username or password.'


class MissingToken(AuthError):
    status_code = 401
    message = 'Access token is required.'


class InvalidToken(AuthError):
    status_code = 403
    message = 'Invalid token.'


class NotFound(APIError):
    status_code = 404
    message = 'Task not found.'


class ServerError(APIError):
    status_code = 500
    message = 'Internal server error.'


def error_response(message, status_code):
    return jsonify({'success': False, 'error': message}), status_code


def register_error_handlers(app):
    @app.errorhandler(APIError)
    def handle_api_error(e):
        return error_response(e.message, e.status_code)

    @app.errorhandler(SQLAlchemyError)
    def handle_storage_error(e):
        db.session.rollback()
        current_app.logger.exception('Storage failure')
        return error_response(ServerError.message, ServerError.status_code)

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        code = e.code or 500
        if code >= 500:
            return error_response(ServerError.message, code)
        return error_response(e.description or e.name, code)
