import pytest

from app import create_app
from config import TestConfig
from extensions import db
from models import User, Participation
from hackathons import create_hackathon
from policy import Caller


@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def make_user(name, role='USER'):
    user = User(name=name, username=name.lower(), role=role)
    db.session.add(user)
    db.session.commit()
    return user


def caller_of(user):
    return Caller(user.id, user.role)


def login(client, user):
    with client.session_transaction() as sess:
        sess['user_id'] = user.id


@pytest.fixture
def users(app):
    return {
        'admin': make_user('Admin', 'ADMIN'),
        'organizer': make_user('Olga', 'ORGANIZER'),
        'other_organizer': make_user('Oscar', 'ORGANIZER'),
        'judge': make_user('Jamal'),
        'user': make_user('Uma'),
    }


@pytest.fixture
def hackathon(users):
    return create_hackathon(caller_of(users['organizer']), 'Spring Hack', 'spring-hack',
                            min_judges_required=2)


def add_participation(hackathon, creator, title):
    p = Participation(hackathon_id=hackathon.id, hackathon_url=hackathon.url,
                      creator_id=creator.id, title=title)
    db.session.add(p)
    db.session.commit()
    return p
