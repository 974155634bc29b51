"""
Error kinds raised by the services and turned into JSON responses by the
error handler registered in create_app.
"""


class BloodLinkError(Exception):
    status_code = 400
    default_message = 'Request could not be processed.'

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInput(BloodLinkError):
    status_code = 400
    default_message = 'Invalid input.'


class NotFound(BloodLinkError):
    status_code = 404
    default_message = 'Resource not found.'


class UnknownUser(BloodLinkError):
    status_code = 404
    default_message = 'User not found.'


class UnknownEmail(BloodLinkError):
    status_code = 404
    default_message = 'User with that email not found.'


class DuplicateIdentity(BloodLinkError):
    status_code = 409
    default_message = 'Username or email already exists.'


class InvalidCredentials(BloodLinkError):
    status_code = 401
    default_message = 'Invalid username or password.'


class InvalidOtp(BloodLinkError):
    status_code = 400
    default_message = 'Invalid or expired OTP.'


class InvalidTransition(BloodLinkError):
    status_code = 409
    default_message = 'Invalid state transition.'


class Forbidden(BloodLinkError):
    status_code = 403
    default_message = 'You are not allowed to perform this action.'


class InvalidToken(BloodLinkError):
    status_code = 401
    default_message = 'Invalid or expired token.'


class NotificationError(BloodLinkError):
    status_code = 502
    default_message = 'Failed to send email.'
