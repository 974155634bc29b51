from dataclasses import dataclass
from typing import Optional
from bloodlink import db
from bloodlink.errors import InvalidInput, NotFound
from bloodlink.models.donation import Appointment, BloodRequest, Donation
from bloodlink.models.enums import AppointmentStatus, Role
from bloodlink.models.user import User
from bloodlink.services.appointments import count_appointments
from bloodlink.utils.validators import check_age, parse_blood_type
import logging

logger = logging.getLogger(__name__)


@dataclass
class DonorPatch:
    """Fields left as None are not touched."""
    age: Optional[int] = None
    contact: Optional[str] = None
    blood_type: Optional[str] = None


def all_users():
    return User.query.order_by(User.id).all()


def all_donors():
    return User.query.filter_by(role=Role.DONOR.value).order_by(User.username).all()


def get_donor(user_id):
    user = User.find_by_id(user_id)
    if user is None or not user.is_donor():
        raise NotFound(f"Donor not found with id: {user_id}")
    return user


def update_donor(user_id, patch):
    donor = get_donor(user_id)

    try:
        if patch.age is not None:
            donor.age = check_age(patch.age)
        if patch.contact is not None:
            donor.contact = patch.contact
        if patch.blood_type is not None:
            donor.blood_type = parse_blood_type(patch.blood_type)
    except InvalidInput:
        db.session.rollback()
        raise

    db.session.commit()
    logger.info(f"Donor {donor.username} updated")
    return donor


def delete_user(user_id):
    """
    Users that still own donations, requests or appointments are kept
    """
    user = User.find_by_id(user_id)
    if user is None:
        raise NotFound(f"User not found with id: {user_id}")

    linked = (Donation.query.filter_by(donor_id=user.id).count()
              + BloodRequest.query.filter_by(requester_id=user.id).count()
              + Appointment.query.filter_by(user_id=user.id).count())
    if linked:
        raise InvalidInput('User still has donations, requests or appointments on file')

    username = user.username
    User.delete_by_id(user_id)
    logger.info(f"User {username} deleted")


def summary():
    data = {
        'total_users': User.count_all(),
        'total_appointments': count_appointments(),
    }
    for status in AppointmentStatus:
        data[f"{status.value.lower()}_appointments"] = count_appointments(status.value)
    return data
