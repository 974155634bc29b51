import smtplib
import pytest
from bloodlink import bcrypt, mail
from bloodlink.errors import (
    DuplicateIdentity, InvalidCredentials, InvalidInput, InvalidOtp,
    NotificationError, UnknownEmail
)
from bloodlink.models.user import User
from bloodlink.services import auth as auth_service
from bloodlink.utils.tokens import parse_token

PASSWORD = 'secret123'

pytestmark = pytest.mark.usefixtures('ctx')


def _failing_send(message):
    raise smtplib.SMTPException('mail server unavailable')


def test_register_hashes_the_password_and_defaults_to_user():
    user = auth_service.register('bob', 'bob@x.com', PASSWORD)

    assert user.id is not None
    assert user.role == 'USER'
    assert user.password != PASSWORD
    assert bcrypt.check_password_hash(user.password, PASSWORD)


def test_duplicate_username_is_rejected():
    auth_service.register('bob', 'bob@x.com', PASSWORD)
    with pytest.raises(DuplicateIdentity):
        auth_service.register('bob', 'bob@x.com', PASSWORD)
    assert User.count_all() == 1


def test_duplicate_email_is_rejected():
    auth_service.register('bob', 'bob@x.com', PASSWORD)
    with pytest.raises(DuplicateIdentity):
        auth_service.register('robert', 'bob@x.com', PASSWORD)


def test_missing_fields_are_rejected():
    with pytest.raises(InvalidInput):
        auth_service.register('bob', '', PASSWORD)


def test_unknown_role_becomes_user():
    user = auth_service.register('bob', 'bob@x.com', PASSWORD, role='superuser')
    assert user.role == 'USER'


def test_donor_fields_are_kept_only_for_donors():
    donor = auth_service.register('dora', 'dora@x.com', PASSWORD, role='donor',
                                  age=30, contact='555-0100', blood_type='o-')
    plain = auth_service.register('paul', 'paul@x.com', PASSWORD,
                                  age=30, contact='555-0101', blood_type='A+')

    assert donor.role == 'DONOR'
    assert (donor.age, donor.contact, donor.blood_type) == (30, '555-0100', 'O-')
    assert (plain.age, plain.contact, plain.blood_type) == (None, None, None)


def test_register_sends_a_welcome_email(outbox):
    auth_service.register('bob', 'bob@x.com', PASSWORD)
    assert [m.recipients for m in outbox] == [['bob@x.com']]


def test_failed_welcome_email_keeps_the_registration(monkeypatch):
    monkeypatch.setattr(mail, 'send', _failing_send)

    auth_service.register('bob', 'bob@x.com', PASSWORD)
    assert User.find_by_username('bob') is not None


def test_login_step1_gives_the_same_error_for_unknown_user_and_bad_password(make_user):
    make_user('bob')

    with pytest.raises(InvalidCredentials) as unknown:
        auth_service.login_step1('nobody', PASSWORD)
    with pytest.raises(InvalidCredentials) as wrong:
        auth_service.login_step1('bob', 'not-the-password')
    assert unknown.value.message == wrong.value.message


def test_login_step1_issues_an_otp_without_a_token(make_user, outbox):
    make_user('bob')
    result = auth_service.login_step1('bob', PASSWORD)

    assert result.has_otp()
    assert any(m.subject == 'Your OTP Code' and result.otp in m.body for m in outbox)


def test_otp_delivery_failure_surfaces(make_user, monkeypatch):
    make_user('bob')
    monkeypatch.setattr(mail, 'send', _failing_send)

    with pytest.raises(NotificationError):
        auth_service.login_step1('bob', PASSWORD)


def test_full_login_returns_a_token_and_clears_the_slot(make_user, frozen_clock):
    make_user('dora', role='DONOR')
    code = auth_service.login_step1('dora', PASSWORD).otp

    result = auth_service.login_step2('dora', code)

    assert result['username'] == 'dora'
    assert result['role'] == 'DONOR'
    claims = parse_token(result['token'])
    assert claims.subject == 'dora'
    user = User.find_by_username('dora')
    assert user.otp is None and user.otp_expiry is None

    # The code cannot be replayed
    with pytest.raises(InvalidOtp):
        auth_service.login_step2('dora', code)


def test_login_step2_rejects_wrong_code_and_unknown_user(make_user, frozen_clock):
    make_user('bob')
    code = auth_service.login_step1('bob', PASSWORD).otp
    wrong = '100000' if code != '100000' else '100001'

    with pytest.raises(InvalidOtp):
        auth_service.login_step2('bob', wrong)
    with pytest.raises(InvalidOtp):
        auth_service.login_step2('nobody', code)

    # A failed attempt does not burn the code
    assert auth_service.login_step2('bob', code)['username'] == 'bob'


def test_login_step2_rejects_an_expired_code(make_user, frozen_clock):
    make_user('bob')
    code = auth_service.login_step1('bob', PASSWORD).otp
    frozen_clock.advance(minutes=10, seconds=1)

    with pytest.raises(InvalidOtp):
        auth_service.login_step2('bob', code)


def test_password_reset_flow(make_user, frozen_clock):
    make_user('bob')
    code = auth_service.request_password_reset('bob@example.com').otp

    auth_service.reset_password('bob@example.com', code, 'brand-new-pass')

    user = User.find_by_username('bob')
    assert not user.has_otp()
    assert bcrypt.check_password_hash(user.password, 'brand-new-pass')
    with pytest.raises(InvalidCredentials):
        auth_service.login_step1('bob', PASSWORD)


def test_password_reset_errors(make_user, frozen_clock):
    make_user('bob')
    with pytest.raises(UnknownEmail):
        auth_service.request_password_reset('ghost@example.com')
    with pytest.raises(UnknownEmail):
        auth_service.reset_password('ghost@example.com', '123456', 'whatever')

    code = auth_service.request_password_reset('bob@example.com').otp
    wrong = '100000' if code != '100000' else '100001'
    with pytest.raises(InvalidOtp):
        auth_service.reset_password('bob@example.com', wrong, 'brand-new-pass')


def test_register_rejects_an_implausible_donor_age():
    with pytest.raises(InvalidInput):
        auth_service.register('dora', 'dora@x.com', PASSWORD, role='DONOR', age=10 ** 20)
    assert User.find_by_username('dora') is None
