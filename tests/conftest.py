from datetime import datetime, timedelta
import pytest
from bloodlink import create_app, db, mail
from bloodlink.services import auth as auth_service
from bloodlink.utils import clock
from bloodlink.utils.tokens import issue_token

PASSWORD = 'secret123'


class FrozenClock:
    """
    Stand-in for clock.utcnow that only moves when told to
    """

    def __init__(self, now):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)

    def today(self):
        return self.now.date()


@pytest.fixture
def app():
    app = create_app('bloodlink.config.TestingConfig')
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def ctx(app):
    # Service tests run inside one app context; HTTP tests must not, so
    # that Flask-Login resolves the caller afresh on every request.
    with app.app_context():
        yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def outbox(app):
    with mail.record_messages() as outbox:
        yield outbox


@pytest.fixture
def frozen_clock(monkeypatch):
    fake = FrozenClock(datetime(2024, 6, 1, 12, 0, 0))
    monkeypatch.setattr(clock, 'utcnow', fake)
    return fake


@pytest.fixture
def make_user():
    """
    Register a user through the auth service. Needs an active app context.
    """
    def _make_user(username, role=None, password=PASSWORD, **donor_fields):
        return auth_service.register(username, f'{username}@example.com', password,
                                     role=role, **donor_fields)
    return _make_user


@pytest.fixture
def bearer(app):
    """
    Register a user in a throwaway app context and return the headers
    that authenticate as them.
    """
    def _bearer(username, role=None):
        with app.app_context():
            user = auth_service.register(username, f'{username}@example.com', PASSWORD, role=role)
            token = issue_token(user)
        return {'Authorization': f'Bearer {token}'}
    return _bearer
