"""
Registration, the two-step login and the OTP-based password reset.

A login attempt moves Start -> CredentialsChecked -> OtpSent ->
Authenticated, and any failure rejects it. Only login_step2 hands out a
bearer token.
"""
from sqlalchemy.exc import IntegrityError
from bloodlink import db, bcrypt
from bloodlink.errors import (
    DuplicateIdentity, InvalidCredentials, InvalidInput, InvalidOtp, UnknownEmail
)
from bloodlink.models.enums import Role, normalize_role
from bloodlink.models.user import User
from bloodlink.utils.email import send_welcome_email
from bloodlink.utils.otp import issue_otp, verify_otp
from bloodlink.utils.tokens import issue_token
from bloodlink.utils.validators import check_age, parse_blood_type
import logging

logger = logging.getLogger(__name__)


def hash_password(password):
    return bcrypt.generate_password_hash(password).decode('utf-8')


def register(username, email, password, role=None, age=None, contact=None, blood_type=None):
    if not username or not email or not password:
        raise InvalidInput('Username, email and password are required.')

    if User.find_by_username(username):
        logger.warning(f"Registration attempt with existing username: {username}")
        raise DuplicateIdentity('Username already exists.')

    if User.find_by_email(email):
        logger.warning(f"Registration attempt with existing email: {email}")
        raise DuplicateIdentity('Email already exists.')

    role = normalize_role(role)
    user = User(username=username,
                email=email,
                password=hash_password(password),
                role=role.value)

    # Donor-specific fields
    if role is Role.DONOR:
        if blood_type is not None:
            user.blood_type = parse_blood_type(blood_type)
        user.age = check_age(age) if age is not None else None
        user.contact = contact

    try:
        user.save()
    except IntegrityError:
        # Lost a race against a concurrent registration
        db.session.rollback()
        raise DuplicateIdentity('Username or email already exists.')

    logger.info(f"New user {username} registered as {role.value}")
    send_welcome_email(user)
    return user


def login_step1(username, password):
    """
    Check the password and, if it matches, send a one-time code
    """
    user = User.find_by_username(username)
    if not user or not password or not bcrypt.check_password_hash(user.password, password):
        # Same error for unknown users and bad passwords
        logger.warning(f"Failed login attempt for username: {username}")
        raise InvalidCredentials()

    issue_otp(user)
    return user


def login_step2(username, code):
    """
    Exchange a valid one-time code for a bearer token
    """
    user = User.find_by_username(username)
    if not user or not verify_otp(user, code):
        logger.warning(f"Failed OTP verification for username: {username}")
        raise InvalidOtp()

    user.clear_otp()
    user.save()

    token = issue_token(user)
    logger.info(f"User {username} logged in successfully")
    return {'token': token, 'username': user.username, 'role': user.role}


def request_password_reset(email):
    user = User.find_by_email(email)
    if not user:
        raise UnknownEmail()

    issue_otp(user)
    return user


def reset_password(email, code, new_password):
    user = User.find_by_email(email)
    if not user:
        raise UnknownEmail()

    if not verify_otp(user, code):
        logger.warning(f"Failed OTP verification during password reset for {email}")
        raise InvalidOtp()

    if not new_password:
        raise InvalidInput('New password is required.')

    user.password = hash_password(new_password)
    user.clear_otp()
    user.save()
    logger.info(f"Password reset for {user.username}")
    return user
