# seed_data.py
# `flask seed`: wipes the database and fills it with demo data

import click
from flask.cli import with_appcontext

from extensions import db
from models import User, Hackathon, Judge, Participation, Score
from judges import grant_creator


def seed():
    # Reverse dependency order
    db.session.query(Score).delete()
    db.session.query(Participation).delete()
    db.session.query(Judge).delete()
    db.session.query(Hackathon).delete()
    db.session.query(User).delete()
    db.session.commit()

    admin = User(name='Admin', username='admin', role='ADMIN')
    organizer = User(name='Olga Organizer', username='olga', role='ORGANIZER')
    judge = User(name='Jamal Judge', username='jamal', role='USER')
    alice = User(name='Alice', username='alice', role='USER')
    bob = User(name='Bob', username='bob', role='USER')
    db.session.add_all([admin, organizer, judge, alice, bob])
    db.session.commit()

    hackathon = Hackathon(name='Spring Hack 2026', url='spring-hack-2026',
                          creator_id=organizer.id, min_judges_required=2)
    db.session.add(hackathon)
    organizer_judge = grant_creator(hackathon)
    second_judge = Judge(user_id=judge.id, hackathon=hackathon, invited_by=organizer.id)
    db.session.add(second_judge)
    db.session.commit()

    p1 = Participation(hackathon_id=hackathon.id, hackathon_url=hackathon.url, creator_id=alice.id,
                       title='Solar Planner', project_url='https://example.com/solar')
    p2 = Participation(hackathon_id=hackathon.id, hackathon_url=hackathon.url, creator_id=bob.id,
                       title='Bus Tracker', project_url='https://example.com/bus')
    db.session.add_all([p1, p2])
    db.session.commit()

    db.session.add_all([
        Score(judge_id=organizer_judge.id, participation_id=p1.id, value=8),
        Score(judge_id=second_judge.id, participation_id=p1.id, value=9),
        Score(judge_id=organizer_judge.id, participation_id=p2.id, value=7),
    ])
    db.session.commit()


@click.command('seed')
@with_appcontext
def seed_command():
    """Replace all data with a demo hackathon."""
    click.echo('Clearing old data and adding demo data...')
    try:
        seed()
    except Exception:
        db.session.rollback()
        raise
    click.echo('Demo data added.')
