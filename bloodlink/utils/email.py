from flask import current_app
from flask_mail import Message
from bloodlink import mail
from bloodlink.errors import NotificationError
import smtplib
import logging

logger = logging.getLogger(__name__)


def send_email(to_address, subject, body):
    """
    Send a plain-text email, raising NotificationError if delivery fails
    """
    msg = Message(subject,
                  recipients=[to_address],
                  sender=current_app.config.get('MAIL_DEFAULT_SENDER'))
    msg.body = body
    try:
        mail.send(msg)
    except (smtplib.SMTPException, OSError) as e:
        logger.error(f"Error sending email '{subject}' to {to_address}: {str(e)}")
        raise NotificationError(f"Failed to send email: {str(e)}") from e
    logger.info(f"Email '{subject}' sent to {to_address}")


def send_welcome_email(user):
    """
    Best effort: a failed welcome email never undoes a registration
    """
    try:
        send_email(user.email,
                   'Welcome to Blood Donation System',
                   'Thank you for registering. You can now log in.')
        return True
    except NotificationError:
        logger.error(f"Welcome email for {user.username} could not be delivered")
        return False


def send_otp_email(user, code):
    ttl = current_app.config['OTP_TTL_MINUTES']
    send_email(user.email,
               'Your OTP Code',
               f'''Your OTP code is: {code}

This code is valid for {ttl} minutes. If you did not request it, simply ignore this email.
''')
