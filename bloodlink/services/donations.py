from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional
from flask import current_app
from bloodlink import db
from bloodlink.errors import InvalidInput, NotFound, UnknownUser
from bloodlink.models.donation import Donation
from bloodlink.models.user import User
from bloodlink.utils import clock
from bloodlink.utils.validators import check_amount, parse_blood_type
import logging

logger = logging.getLogger(__name__)


@dataclass
class DonationPatch:
    """Fields left as None are not touched."""
    blood_type: Optional[str] = None
    amount: Optional[int] = None
    donation_date: Optional[date] = None
    location: Optional[str] = None
    notes: Optional[str] = None
    available: Optional[bool] = None
    donor_id: Optional[int] = None


def _merge(donation, patch):
    if patch.blood_type is not None:
        donation.blood_type = parse_blood_type(patch.blood_type)
    if patch.amount is not None:
        donation.amount = check_amount(patch.amount, 'Donation amount')
    if patch.donation_date is not None:
        donation.donation_date = patch.donation_date
    if patch.location is not None:
        donation.location = patch.location
    if patch.notes is not None:
        donation.notes = patch.notes
    if patch.available is not None:
        donation.available = patch.available
    if patch.donor_id is not None:
        donor = User.find_by_id(patch.donor_id)
        if donor is None:
            raise NotFound(f"Donor not found with id: {patch.donor_id}")
        donation.donor = donor


def get_donation(donation_id):
    donation = db.session.get(Donation, donation_id)
    if donation is None:
        raise NotFound(f"Donation not found with id: {donation_id}")
    return donation


def create_donation(acting_username, blood_type, amount, donation_date=None,
                    location=None, notes=None, available=None):
    logger.info(f"Creating new blood donation for user: {acting_username}")

    donor = User.find_by_username(acting_username)
    if donor is None:
        raise UnknownUser(f"User not found: {acting_username}")

    donation = Donation(
        donor=donor,
        blood_type=parse_blood_type(blood_type),
        amount=check_amount(amount, 'Donation amount'),
        donation_date=donation_date or clock.today(),
        available=True if available is None else available,
        location=location,
        notes=notes
    )
    db.session.add(donation)
    db.session.commit()

    logger.info(f"Blood donation created successfully with ID: {donation.id}")
    return donation


def update_donation(donation_id, patch):
    logger.info(f"Updating blood donation with ID: {donation_id}")
    donation = get_donation(donation_id)

    try:
        _merge(donation, patch)
    except (InvalidInput, NotFound):
        db.session.rollback()
        raise

    db.session.commit()
    logger.info(f"Blood donation updated successfully with ID: {donation.id}")
    return donation


def delete_donation(donation_id):
    donation = get_donation(donation_id)
    db.session.delete(donation)
    db.session.commit()
    logger.info(f"Blood donation deleted successfully with ID: {donation_id}")


def mark_used(donation_id):
    """
    Marking an already used donation again is a no-op success
    """
    donation = get_donation(donation_id)
    donation.mark_used()
    db.session.commit()
    logger.info(f"Donation marked as used with ID: {donation_id}")
    return donation


def last_donation_date(user):
    dates = [d.donation_date for d in Donation.query.filter_by(donor_id=user.id).all()
             if d.donation_date is not None]
    return max(dates) if dates else None


def can_donate(username):
    """
    Donors must be within the allowed age range (when an age is on file)
    and must have waited the donation interval since their latest donation.
    Unknown users are never eligible.
    """
    user = User.find_by_username(username)
    if user is None:
        return False

    config = current_app.config
    if user.age is not None and not (config['DONOR_MIN_AGE'] <= user.age <= config['DONOR_MAX_AGE']):
        return False

    # Latest by date, whatever order storage returns rows in
    last_date = last_donation_date(user)
    if last_date is not None:
        eligible_date = last_date + timedelta(days=config['DONATION_INTERVAL_DAYS'])
        if eligible_date > clock.today():
            return False

    return True


def all_donations():
    return Donation.query.all()


def available_donations():
    return Donation.query.filter_by(available=True).all()


def available_donations_by_blood_type(blood_type):
    return Donation.query.filter_by(blood_type=parse_blood_type(blood_type), available=True).all()


def donations_by_user(username):
    user = User.find_by_username(username)
    if user is None:
        raise UnknownUser(f"User not found: {username}")
    return Donation.query.filter_by(donor_id=user.id).order_by(Donation.donation_date.desc()).all()


def recent_donations(limit=10):
    return Donation.query.order_by(Donation.donation_date.desc(), Donation.id.desc()).limit(limit).all()


def available_count_by_blood_type(blood_type):
    return Donation.query.filter_by(blood_type=parse_blood_type(blood_type), available=True).count()
