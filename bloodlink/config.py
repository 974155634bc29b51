import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


class Config:
    SECRET_KEY = os.getenv('SECRET_KEY', 'default_secret_key_for_development')

    SQLALCHEMY_DATABASE_URI = os.getenv('DATABASE_URI', 'sqlite:///blood_donation.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Email configuration
    MAIL_SERVER = os.getenv('MAIL_SERVER', 'smtp.gmail.com')
    MAIL_PORT = int(os.getenv('MAIL_PORT', 587))
    MAIL_USE_TLS = True
    MAIL_USERNAME = os.getenv('MAIL_USERNAME')
    MAIL_PASSWORD = os.getenv('MAIL_PASSWORD')
    MAIL_DEFAULT_SENDER = os.getenv('MAIL_DEFAULT_SENDER')

    # Bearer tokens
    TOKEN_SALT = os.getenv('TOKEN_SALT', 'bloodlink-bearer-token')
    TOKEN_MAX_AGE = int(os.getenv('TOKEN_MAX_AGE', 24 * 60 * 60))

    # One-time codes
    OTP_TTL_MINUTES = int(os.getenv('OTP_TTL_MINUTES', 10))

    # Donor eligibility
    DONATION_INTERVAL_DAYS = 56
    DONOR_MIN_AGE = 18
    DONOR_MAX_AGE = 65

    BCRYPT_LOG_ROUNDS = int(os.getenv('BCRYPT_LOG_ROUNDS', 12))
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')


class TestingConfig(Config):
    TESTING = True
    SECRET_KEY = 'testing_secret_key'
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    MAIL_SUPPRESS_SEND = True
    MAIL_DEFAULT_SENDER = 'noreply@bloodlink.test'
    BCRYPT_LOG_ROUNDS = 4
    LOG_LEVEL = 'DEBUG'
