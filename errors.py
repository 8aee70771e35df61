# errors.py

import enum
import logging
from functools import wraps

from sqlalchemy.exc import SQLAlchemyError

from extensions import db

logger = logging.getLogger(__name__)


class ErrorKind(str, enum.Enum):
    UNAUTHORIZED = 'UNAUTHORIZED'
    FORBIDDEN = 'FORBIDDEN'
    NOT_FOUND = 'NOT_FOUND'
    VALIDATION = 'VALIDATION'
    ALREADY_EXISTS = 'ALREADY_EXISTS'
    CLOSED = 'CLOSED'
    STORE_ERROR = 'STORE_ERROR'


HTTP_STATUS = {
    ErrorKind.UNAUTHORIZED: 401,
    ErrorKind.FORBIDDEN: 403,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.VALIDATION: 400,
    ErrorKind.ALREADY_EXISTS: 409,
    ErrorKind.CLOSED: 409,
    ErrorKind.STORE_ERROR: 503,
}


class HackathonError(Exception):
    """Domain failure with a kind the calling layer can render precisely."""

    def __init__(self, kind, message=None):
        self.kind = ErrorKind(kind)
        self.message = message or self.kind.value.replace('_', ' ').capitalize()
        super().__init__(self.message)

    @property
    def retryable(self):
        return self.kind is ErrorKind.STORE_ERROR

    @property
    def status_code(self):
        return HTTP_STATUS[self.kind]

    def to_dict(self):
        return {'error': self.kind.value, 'message': self.message, 'retryable': self.retryable}


def store_errors(f):
    """Rolls the session back and turns any SQLAlchemy failure into STORE_ERROR."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error("Store error in %s: %s", f.__name__, e)
            raise HackathonError(ErrorKind.STORE_ERROR, 'Storage operation failed') from e
    return decorated_function
