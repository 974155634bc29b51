from bloodlink.errors import InvalidInput
from bloodlink.models.enums import AppointmentStatus, BloodType, RequestStatus, Urgency
from bloodlink.utils import clock

# Largest amount (pints) a single donation or request may carry
MAX_AMOUNT = 100

MIN_AGE = 1
MAX_AGE = 120


def _parse(enum_cls, value, label):
    parsed = enum_cls.parse(value)
    if parsed is None:
        raise InvalidInput(f"Invalid {label}: {value}")
    return parsed.value


def parse_blood_type(value):
    return _parse(BloodType, value, 'blood type')


def parse_urgency(value):
    return _parse(Urgency, value, 'urgency level')


def parse_request_status(value):
    return _parse(RequestStatus, value, 'status')


def parse_appointment_status(value):
    return _parse(AppointmentStatus, value, 'appointment status')


def check_amount(amount, what='Amount'):
    if not isinstance(amount, int) or isinstance(amount, bool) or amount <= 0:
        raise InvalidInput(f"{what} must be positive")
    if amount > MAX_AMOUNT:
        raise InvalidInput(f"{what} cannot exceed {MAX_AMOUNT}")
    return amount


def check_age(age):
    if not isinstance(age, int) or isinstance(age, bool) or not MIN_AGE <= age <= MAX_AGE:
        raise InvalidInput(f"Age must be between {MIN_AGE} and {MAX_AGE}")
    return age


def check_not_past(value):
    if value is not None and value < clock.today():
        raise InvalidInput('Needed by date cannot be in the past')
    return value
