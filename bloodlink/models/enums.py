from enum import Enum


class CaseInsensitiveEnum(str, Enum):
    """
    String enum whose members can be looked up ignoring case and
    surrounding whitespace.
    """

    @classmethod
    def parse(cls, value):
        if value is None or not isinstance(value, str) or not value.strip():
            return None
        wanted = value.strip().lower()
        for member in cls:
            if member.value.lower() == wanted:
                return member
        return None

    @classmethod
    def is_valid(cls, value):
        return cls.parse(value) is not None

    def __str__(self):
        return self.value


class Role(CaseInsensitiveEnum):
    USER = 'USER'
    DONOR = 'DONOR'
    ADMIN = 'ADMIN'

    @property
    def authority(self):
        return f"ROLE_{self.value.upper()}"


class BloodType(CaseInsensitiveEnum):
    A_POS = 'A+'
    A_NEG = 'A-'
    B_POS = 'B+'
    B_NEG = 'B-'
    AB_POS = 'AB+'
    AB_NEG = 'AB-'
    O_POS = 'O+'
    O_NEG = 'O-'


class Urgency(CaseInsensitiveEnum):
    LOW = 'Low'
    MEDIUM = 'Medium'
    HIGH = 'High'


class RequestStatus(CaseInsensitiveEnum):
    PENDING = 'Pending'
    FULFILLED = 'Fulfilled'
    CANCELLED = 'Cancelled'

    @property
    def is_terminal(self):
        return self in (RequestStatus.FULFILLED, RequestStatus.CANCELLED)


class AppointmentStatus(CaseInsensitiveEnum):
    PENDING = 'Pending'
    CONFIRMED = 'Confirmed'
    COMPLETED = 'Completed'
    CANCELLED = 'Cancelled'


def normalize_role(value):
    # Absent or unrecognized roles fall back to USER
    return Role.parse(value) or Role.USER


def can_administer(role):
    return Role.parse(role) is Role.ADMIN


def is_valid_blood_type(value):
    return BloodType.is_valid(value)


def is_valid_urgency(value):
    return Urgency.is_valid(value)


def is_valid_status(value):
    return RequestStatus.is_valid(value)


def is_valid_appointment_status(value):
    return AppointmentStatus.is_valid(value)
