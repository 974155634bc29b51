from bloodlink import db, login_manager
from bloodlink.models.enums import Role, can_administer
from bloodlink.utils import clock
from bloodlink.errors import InvalidToken
from bloodlink.utils.tokens import parse_token
from flask_login import UserMixin
import logging

logger = logging.getLogger(__name__)


class TokenIdentity(UserMixin):
    """
    The caller behind a request, as asserted by a verified bearer token.
    The role is the one embedded at issuance time.
    """

    def __init__(self, username, role):
        self.username = username
        self.role = role

    def get_id(self):
        return self.username

    @property
    def authority(self):
        return self.role.authority

    def __repr__(self):
        return f"TokenIdentity('{self.username}', '{self.role}')"


@login_manager.request_loader
def load_identity_from_request(req):
    auth_header = req.headers.get('Authorization', '')
    if not auth_header.startswith('Bearer '):
        return None

    try:
        claims = parse_token(auth_header[7:].strip())
    except InvalidToken as e:
        # Invalid tokens leave the caller anonymous
        logger.debug(f"Rejected bearer token on {req.path}: {e.message}")
        return None
    return TokenIdentity(claims.subject, claims.role)


class User(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(80), unique=True, nullable=False)
    email = db.Column(db.String(120), unique=True, nullable=False)
    password = db.Column(db.String(60), nullable=False)
    role = db.Column(db.String(20), nullable=False, default=Role.USER.value)  # USER, DONOR, ADMIN

    # Donor attributes
    age = db.Column(db.Integer, nullable=True)
    contact = db.Column(db.String(30), nullable=True)
    blood_type = db.Column(db.String(3), nullable=True)

    # One-time code slot
    otp = db.Column(db.String(6), nullable=True)
    otp_expiry = db.Column(db.DateTime, nullable=True)

    created_at = db.Column(db.DateTime, default=clock.utcnow)

    @property
    def role_enum(self):
        return Role.parse(self.role) or Role.USER

    def is_donor(self):
        return self.role_enum is Role.DONOR

    def is_admin(self):
        return can_administer(self.role)

    def has_otp(self):
        return self.otp is not None and self.otp_expiry is not None

    def set_otp(self, code, expiry):
        self.otp = code
        self.otp_expiry = expiry

    def clear_otp(self):
        self.otp = None
        self.otp_expiry = None

    @classmethod
    def find_by_username(cls, username):
        if not username:
            return None
        return cls.query.filter_by(username=username).first()

    @classmethod
    def find_by_email(cls, email):
        if not email:
            return None
        return cls.query.filter_by(email=email).first()

    @classmethod
    def find_by_id(cls, user_id):
        return db.session.get(cls, user_id)

    @classmethod
    def count_all(cls):
        return cls.query.count()

    @classmethod
    def delete_by_id(cls, user_id):
        user = cls.find_by_id(user_id)
        if user is not None:
            db.session.delete(user)
            db.session.commit()

    def save(self):
        db.session.add(self)
        db.session.commit()
        return self

    def to_dict(self):
        data = {
            'id': self.id,
            'username': self.username,
            'email': self.email,
            'role': self.role,
        }
        if self.is_donor():
            data.update({
                'age': self.age,
                'contact': self.contact,
                'blood_type': self.blood_type,
            })
        return data

    def __repr__(self):
        return f"User('{self.username}', '{self.role}')"
