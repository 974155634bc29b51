from bloodlink import db
from bloodlink.errors import InvalidInput, NotFound, UnknownUser
from bloodlink.models.donation import Appointment
from bloodlink.models.enums import AppointmentStatus
from bloodlink.models.user import User
from bloodlink.utils.validators import parse_appointment_status, parse_blood_type
import logging

logger = logging.getLogger(__name__)


def book_appointment(acting_username, appointment_date, blood_type=None, location=None):
    """
    New appointments are always Pending, whatever the caller sent
    """
    user = User.find_by_username(acting_username)
    if user is None:
        raise UnknownUser(f"User not found: {acting_username}")

    if appointment_date is None:
        raise InvalidInput('Appointment date is required')

    appointment = Appointment(
        user=user,
        appointment_date=appointment_date,
        blood_type=parse_blood_type(blood_type) if blood_type is not None else None,
        location=location,
        status=AppointmentStatus.PENDING.value
    )
    db.session.add(appointment)
    db.session.commit()

    logger.info(f"Appointment {appointment.id} booked by {acting_username} for {appointment_date}")
    return appointment


def appointments_for_user(username, page=1, per_page=10):
    user = User.find_by_username(username)
    if user is None:
        raise UnknownUser(f"User not found: {username}")
    return Appointment.query.filter_by(user_id=user.id)\
        .order_by(Appointment.appointment_date.desc())\
        .paginate(page=page, per_page=per_page, error_out=False)


def all_appointments(page=1, per_page=10):
    return Appointment.query.order_by(Appointment.appointment_date.desc())\
        .paginate(page=page, per_page=per_page, error_out=False)


def update_appointment_status(appointment_id, status):
    appointment = db.session.get(Appointment, appointment_id)
    if appointment is None:
        raise NotFound(f"Appointment not found with id: {appointment_id}")

    appointment.status = parse_appointment_status(status)
    db.session.commit()
    logger.info(f"Appointment {appointment_id} set to {appointment.status}")
    return appointment


def count_appointments(status=None):
    if status is None:
        return Appointment.query.count()
    return Appointment.query.filter_by(status=parse_appointment_status(status)).count()
