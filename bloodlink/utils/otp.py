from datetime import timedelta
from flask import current_app
from bloodlink.utils import clock
from bloodlink.utils.email import send_otp_email
import hmac
import logging
import secrets

logger = logging.getLogger(__name__)


def generate_otp():
    """
    Returns a 6-digit code drawn uniformly from [100000, 999999]
    """
    return str(100000 + secrets.randbelow(900000))


def issue_otp(user):
    """
    Store a fresh code on the user, persist it, then email it.

    A previously issued code is overwritten, so only the latest one stays
    valid. Delivery failures propagate as NotificationError: the caller
    cannot finish logging in without the code.
    """
    code = generate_otp()
    expiry = clock.utcnow() + timedelta(minutes=current_app.config['OTP_TTL_MINUTES'])
    user.set_otp(code, expiry)
    user.save()
    logger.info(f"OTP issued for {user.username}, valid until {expiry.isoformat()}")

    send_otp_email(user, code)


def verify_otp(user, candidate):
    if not user.has_otp():
        return False

    # Expired codes are never valid, even when they match
    if clock.utcnow() > user.otp_expiry:
        return False

    if candidate is None:
        return False
    return hmac.compare_digest(user.otp.encode('utf-8'), str(candidate).encode('utf-8'))
