from collections import namedtuple
from flask import current_app
from itsdangerous import URLSafeTimedSerializer, BadData, BadSignature, SignatureExpired
from bloodlink.errors import InvalidToken
from bloodlink.models.enums import Role

TokenClaims = namedtuple('TokenClaims', ['subject', 'role'])


def _serializer():
    return URLSafeTimedSerializer(current_app.config['SECRET_KEY'],
                                  salt=current_app.config['TOKEN_SALT'])


def issue_token(user):
    """
    Generate a signed bearer token carrying the username and role.
    The serializer embeds its own timestamp, so two tokens for the same
    user differ once a second has passed.
    """
    return _serializer().dumps({'sub': user.username, 'role': user.role_enum.value})


def parse_token(token):
    """
    Verify the token and return its claims
    """
    if not token:
        raise InvalidToken('Missing token.')

    try:
        payload = _serializer().loads(token, max_age=current_app.config['TOKEN_MAX_AGE'])
    except SignatureExpired:
        raise InvalidToken('Token has expired.')
    except BadSignature:
        raise InvalidToken('Token signature is invalid.')
    except BadData:
        raise InvalidToken('Malformed token.')

    if not isinstance(payload, dict):
        raise InvalidToken('Malformed token.')

    subject = payload.get('sub')
    role = Role.parse(payload.get('role'))
    if not subject or not isinstance(subject, str) or role is None:
        raise InvalidToken('Malformed token.')

    return TokenClaims(subject, role)
