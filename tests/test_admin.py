from datetime import date
import pytest
from bloodlink.errors import InvalidInput, NotFound
from bloodlink.models.user import User
from bloodlink.services import users as user_service
from bloodlink.services.appointments import book_appointment, update_appointment_status
from bloodlink.services.donations import can_donate, create_donation
from bloodlink.services.users import DonorPatch

pytestmark = pytest.mark.usefixtures('ctx')


def test_summary_counts_users_and_appointments(make_user):
    make_user('erin')
    make_user('root', role='ADMIN')
    appointment = book_appointment('erin', date(2024, 7, 1))
    book_appointment('erin', date(2024, 7, 2))
    update_appointment_status(appointment.id, 'Confirmed')

    summary = user_service.summary()

    assert summary['total_users'] == 2
    assert summary['total_appointments'] == 2
    assert summary['pending_appointments'] == 1
    assert summary['confirmed_appointments'] == 1
    assert summary['completed_appointments'] == 0
    assert summary['cancelled_appointments'] == 0


def test_donor_listing(make_user):
    make_user('zed', role='DONOR')
    make_user('amy', role='DONOR')
    make_user('erin')

    assert [u.username for u in user_service.all_donors()] == ['amy', 'zed']
    assert len(user_service.all_users()) == 3


def test_delete_user(make_user):
    user = make_user('erin')
    user_id = user.id

    user_service.delete_user(user_id)

    assert User.find_by_id(user_id) is None
    with pytest.raises(NotFound):
        user_service.delete_user(user_id)


def test_users_with_records_are_kept(make_user):
    user = make_user('dora', role='DONOR')
    create_donation('dora', 'A+', 1)

    with pytest.raises(InvalidInput):
        user_service.delete_user(user.id)
    assert User.find_by_username('dora') is not None


def test_get_donor(make_user):
    donor = make_user('zed', role='DONOR', age=30)
    plain = make_user('erin')

    assert user_service.get_donor(donor.id).username == 'zed'
    with pytest.raises(NotFound):
        user_service.get_donor(plain.id)
    with pytest.raises(NotFound):
        user_service.get_donor(9999)


def test_update_donor_applies_supplied_fields(make_user):
    donor = make_user('zed', role='DONOR', age=30, contact='555-0100', blood_type='A+')

    updated = user_service.update_donor(donor.id, DonorPatch(age=70, blood_type='o-'))

    assert updated.age == 70
    assert updated.blood_type == 'O-'
    assert updated.contact == '555-0100'
    assert not can_donate('zed')


def test_update_donor_validates(make_user):
    donor = make_user('zed', role='DONOR', age=30, blood_type='A+')

    with pytest.raises(InvalidInput):
        user_service.update_donor(donor.id, DonorPatch(age=40, blood_type='Q'))
    with pytest.raises(InvalidInput):
        user_service.update_donor(donor.id, DonorPatch(age=10 ** 20))
    with pytest.raises(NotFound):
        user_service.update_donor(9999, DonorPatch(age=40))

    reloaded = user_service.get_donor(donor.id)
    assert (reloaded.age, reloaded.blood_type) == (30, 'A+')
