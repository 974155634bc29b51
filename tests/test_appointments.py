from datetime import date
import pytest
from bloodlink.errors import InvalidInput, NotFound, UnknownUser
from bloodlink.services import appointments as appointment_service

pytestmark = pytest.mark.usefixtures('ctx')


def test_booking_is_always_pending(make_user):
    make_user('erin')
    appointment = appointment_service.book_appointment('erin', date(2024, 7, 1),
                                                       blood_type='ab+', location='Clinic 2')

    assert appointment.status == 'Pending'
    assert appointment.blood_type == 'AB+'
    assert appointment.user.username == 'erin'


def test_booking_validation(make_user):
    make_user('erin')
    with pytest.raises(InvalidInput):
        appointment_service.book_appointment('erin', None)
    with pytest.raises(InvalidInput):
        appointment_service.book_appointment('erin', date(2024, 7, 1), blood_type='X')
    with pytest.raises(UnknownUser):
        appointment_service.book_appointment('ghost', date(2024, 7, 1))


def test_pagination(make_user):
    make_user('erin')
    make_user('finn')
    for day in (1, 2, 3):
        appointment_service.book_appointment('erin', date(2024, 7, day))
    appointment_service.book_appointment('finn', date(2024, 7, 9))

    first_page = appointment_service.appointments_for_user('erin', page=1, per_page=2)
    assert first_page.total == 3
    assert [a.appointment_date.day for a in first_page.items] == [3, 2]
    assert len(appointment_service.appointments_for_user('erin', page=2, per_page=2).items) == 1

    everything = appointment_service.all_appointments(page=1, per_page=10)
    assert everything.total == 4
    assert everything.items[0].user.username == 'finn'


def test_status_update(make_user):
    make_user('erin')
    appointment = appointment_service.book_appointment('erin', date(2024, 7, 1))

    assert appointment_service.update_appointment_status(appointment.id, 'confirmed').status == 'Confirmed'
    with pytest.raises(InvalidInput):
        appointment_service.update_appointment_status(appointment.id, 'Rescheduled')
    with pytest.raises(NotFound):
        appointment_service.update_appointment_status(404, 'Completed')


def test_counts(make_user):
    make_user('erin')
    first = appointment_service.book_appointment('erin', date(2024, 7, 1))
    appointment_service.book_appointment('erin', date(2024, 7, 2))
    appointment_service.update_appointment_status(first.id, 'Completed')

    assert appointment_service.count_appointments() == 2
    assert appointment_service.count_appointments('pending') == 1
    assert appointment_service.count_appointments('Completed') == 1
    assert appointment_service.count_appointments('Cancelled') == 0
