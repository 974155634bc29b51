"""
Blood request lifecycle.

A request starts Pending and ends either Fulfilled or Cancelled; both end
states are absorbing. Transitions reload the row under a row lock right
before checking the guard, so a transition that lost a race sees the
winner's state and fails instead of overwriting it.
"""
from dataclasses import dataclass
from datetime import date
from typing import Optional
from bloodlink import db
from bloodlink.errors import Forbidden, InvalidInput, InvalidTransition, NotFound, UnknownUser
from bloodlink.models.donation import BloodRequest
from bloodlink.models.enums import RequestStatus, Urgency
from bloodlink.models.user import User
from bloodlink.utils import clock
from bloodlink.utils.validators import (
    check_amount, check_not_past, parse_blood_type, parse_request_status, parse_urgency
)
import logging

logger = logging.getLogger(__name__)


@dataclass
class BloodRequestPatch:
    """Fields left as None are not touched."""
    blood_type: Optional[str] = None
    amount: Optional[int] = None
    urgency: Optional[str] = None
    requester_name: Optional[str] = None
    hospital_name: Optional[str] = None
    reason: Optional[str] = None
    needed_by_date: Optional[date] = None
    status: Optional[str] = None


def _merge(blood_request, patch):
    if patch.blood_type is not None:
        blood_request.blood_type = parse_blood_type(patch.blood_type)
    # A present amount is validated on its own, zero included
    if patch.amount is not None:
        blood_request.amount = check_amount(patch.amount, 'Request amount')
    if patch.urgency is not None:
        blood_request.urgency = parse_urgency(patch.urgency)
    if patch.requester_name is not None:
        blood_request.requester_name = patch.requester_name
    if patch.hospital_name is not None:
        blood_request.hospital_name = patch.hospital_name
    if patch.reason is not None:
        blood_request.reason = patch.reason
    if patch.needed_by_date is not None:
        blood_request.needed_by_date = check_not_past(patch.needed_by_date)
    if patch.status is not None:
        blood_request.status = _check_status_change(blood_request, patch.status)


def _check_status_change(blood_request, status):
    """
    Fulfilled and Cancelled are final: a patch may repeat them but never
    move a request out of them
    """
    wanted = RequestStatus(parse_request_status(status))
    current = blood_request.status_enum
    if current is not None and current.is_terminal and wanted is not current:
        raise InvalidTransition(f"Cannot change the status of a {current.value.lower()} request")
    return wanted.value


def get_blood_request(request_id, for_update=False):
    blood_request = db.session.get(BloodRequest, request_id,
                                   with_for_update=for_update, populate_existing=for_update)
    if blood_request is None:
        raise NotFound(f"Request not found with id: {request_id}")
    return blood_request


def create_blood_request(acting_username, blood_type, amount, urgency,
                         requester_name=None, hospital_name=None, reason=None,
                         needed_by_date=None, request_date=None, status=None):
    logger.info(f"Creating new blood request for user: {acting_username}")

    requester = User.find_by_username(acting_username)
    if requester is None:
        raise UnknownUser(f"User not found: {acting_username}")

    if status is None or not str(status).strip():
        status = RequestStatus.PENDING.value
    else:
        status = parse_request_status(status)

    blood_request = BloodRequest(
        requester=requester,
        blood_type=parse_blood_type(blood_type),
        amount=check_amount(amount, 'Request amount'),
        urgency=parse_urgency(urgency),
        needed_by_date=check_not_past(needed_by_date),
        request_date=request_date or clock.today(),
        status=status,
        requester_name=requester_name,
        hospital_name=hospital_name,
        reason=reason
    )
    db.session.add(blood_request)
    db.session.commit()

    logger.info(f"Blood request created successfully with ID: {blood_request.id}")
    return blood_request


def update_blood_request(request_id, patch):
    logger.info(f"Updating blood request with ID: {request_id}")
    # Status changes are transitions and take the row lock
    blood_request = get_blood_request(request_id, for_update=patch.status is not None)

    try:
        _merge(blood_request, patch)
    except (InvalidInput, InvalidTransition):
        db.session.rollback()
        raise

    db.session.commit()
    logger.info(f"Blood request updated successfully with ID: {blood_request.id}")
    return blood_request


def delete_blood_request(request_id):
    blood_request = get_blood_request(request_id)
    db.session.delete(blood_request)
    db.session.commit()
    logger.info(f"Blood request deleted successfully with ID: {request_id}")


def fulfill_request(request_id):
    logger.info(f"Fulfilling blood request with ID: {request_id}")
    blood_request = get_blood_request(request_id, for_update=True)

    current = blood_request.status_enum
    if current.is_terminal:
        db.session.rollback()
        if current is RequestStatus.FULFILLED:
            raise InvalidTransition('Request is already fulfilled')
        raise InvalidTransition('Cannot fulfill a cancelled request')

    blood_request.mark_fulfilled()
    db.session.commit()
    logger.info(f"Blood request fulfilled successfully with ID: {request_id}")
    return blood_request


def cancel_request(request_id, acting_username):
    """
    Requesters may cancel their own requests; admins may cancel any
    """
    logger.info(f"Cancelling blood request with ID: {request_id} by user: {acting_username}")
    blood_request = get_blood_request(request_id, for_update=True)

    owner = blood_request.requester
    if owner is None or owner.username != acting_username:
        acting_user = User.find_by_username(acting_username)
        if acting_user is None or not acting_user.is_admin():
            db.session.rollback()
            logger.warning(f"User {acting_username} is not allowed to cancel request {request_id}")
            raise Forbidden('You can only cancel your own requests')

    current = blood_request.status_enum
    if current.is_terminal:
        db.session.rollback()
        if current is RequestStatus.FULFILLED:
            raise InvalidTransition('Cannot cancel a fulfilled request')
        raise InvalidTransition('Request is already cancelled')

    blood_request.mark_cancelled()
    db.session.commit()
    logger.info(f"Blood request cancelled successfully with ID: {request_id}")
    return blood_request


def all_requests():
    return BloodRequest.query.all()


def requests_by_blood_type(blood_type):
    return BloodRequest.query.filter_by(blood_type=parse_blood_type(blood_type)).all()


def requests_by_status(status):
    return BloodRequest.query.filter_by(status=parse_request_status(status)).all()


def pending_requests():
    return requests_by_status(RequestStatus.PENDING.value)


def urgent_requests():
    return BloodRequest.query.filter_by(urgency=Urgency.HIGH.value,
                                        status=RequestStatus.PENDING.value).all()


def requests_by_user(username):
    user = User.find_by_username(username)
    if user is None:
        raise UnknownUser(f"User not found: {username}")
    return BloodRequest.query.filter_by(requester_id=user.id).all()


def requests_by_hospital(hospital_name):
    return BloodRequest.query.filter_by(hospital_name=hospital_name).all()


def overdue_requests():
    return BloodRequest.query.filter(
        BloodRequest.needed_by_date < clock.today(),
        BloodRequest.status == RequestStatus.PENDING.value
    ).all()


def recent_requests(limit=10):
    return BloodRequest.query.order_by(BloodRequest.request_date.desc(),
                                       BloodRequest.id.desc()).limit(limit).all()


def count_by_status(status):
    return BloodRequest.query.filter_by(status=parse_request_status(status)).count()


def urgent_count():
    return BloodRequest.query.filter_by(urgency=Urgency.HIGH.value,
                                        status=RequestStatus.PENDING.value).count()
