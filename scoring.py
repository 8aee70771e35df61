# scoring.py
# Score submission and leaderboard queries.

import logging

from sqlalchemy.dialects import mysql, postgresql, sqlite
from sqlalchemy.orm import joinedload

from extensions import db
from errors import ErrorKind, HackathonError, store_errors
from judges import get_judge
from models import Hackathon, Judge, Participation, Score
from models.score import MIN_SCORE, MAX_SCORE
from policy import Level, require
from ranking import rank_submissions, scoring_progress

logger = logging.getLogger(__name__)


def _on_conflict_upsert(insert):
    def build(values):
        stmt = insert(Score).values(**values)
        return stmt.on_conflict_do_update(
            index_elements=['judge_id', 'participation_id'],
            set_={'value': stmt.excluded.value, 'updated_at': stmt.excluded.updated_at},
        )
    return build


def _mysql_upsert(values):
    stmt = mysql.insert(Score).values(**values)
    return stmt.on_duplicate_key_update(value=stmt.inserted.value, updated_at=stmt.inserted.updated_at)


# Each builder returns one INSERT that updates in place on the
# (judge_id, participation_id) unique key
UPSERT_BUILDERS = {
    'sqlite': _on_conflict_upsert(sqlite.insert),
    'postgresql': _on_conflict_upsert(postgresql.insert),
    'mysql': _mysql_upsert,
    'mariadb': _mysql_upsert,
}


def upsert_statement(dialect_name, judge_id, participation_id, value):
    values = {
        'judge_id': judge_id,
        'participation_id': participation_id,
        'value': value,
        'updated_at': db.func.current_timestamp(),
    }
    return UPSERT_BUILDERS[dialect_name](values)


def validate_score_value(value):
    # bool is an int subclass, but True is not a score
    if isinstance(value, bool) or not isinstance(value, int):
        raise HackathonError(ErrorKind.VALIDATION, 'Score must be a whole number')
    if not MIN_SCORE <= value <= MAX_SCORE:
        raise HackathonError(ErrorKind.VALIDATION, f'Score must be between {MIN_SCORE} and {MAX_SCORE}')
    return value


def _upsert_score(judge_id, participation_id, value):
    # Unsupported backends are refused by create_app, never mid-request
    dialect = db.session.get_bind().dialect.name
    db.session.execute(upsert_statement(dialect, judge_id, participation_id, value))


@store_errors
def submit_score(caller, participation_id, value):
    """
    Records the caller's score for one participation, replacing any earlier
    score by the same judge. The judge identity comes from the caller's own
    judge grant, never from the request.
    """
    require(caller, Level.AUTHENTICATED)
    validate_score_value(value)

    participation = db.session.get(Participation, participation_id)
    if participation is None:
        raise HackathonError(ErrorKind.NOT_FOUND, 'Participation not found')
    hackathon = db.session.get(Hackathon, participation.hackathon_id)
    if hackathon is None:
        raise HackathonError(ErrorKind.NOT_FOUND, 'Hackathon not found')

    require(caller, Level.JUDGE, hackathon.id)

    if hackathon.is_finished:
        raise HackathonError(ErrorKind.CLOSED, 'Scoring is closed for this hackathon')

    judge = get_judge(hackathon.id, caller.id)
    if judge is None:
        raise HackathonError(ErrorKind.FORBIDDEN, 'Judge record not found')

    _upsert_score(judge.id, participation.id, value)
    db.session.commit()

    logger.info("Judge %s scored participation %s: %s", judge.id, participation.id, value)
    return Score.query.filter_by(judge_id=judge.id, participation_id=participation.id).one()


@store_errors
def get_rankings(hackathon_id):
    hackathon = db.session.get(Hackathon, hackathon_id)
    if hackathon is None:
        raise HackathonError(ErrorKind.NOT_FOUND, 'Hackathon not found')

    participations = Participation.query.options(joinedload(Participation.scores)) \
        .filter_by(hackathon_id=hackathon.id) \
        .order_by(Participation.created_at, Participation.id).all()

    submissions = [{
        'participation_id': p.id,
        'title': p.title,
        'project_url': p.project_url,
        'creator_id': p.creator_id,
        'scores': [s.value for s in p.scores],
    } for p in participations]

    return rank_submissions(submissions, hackathon.min_judges_required)


@store_errors
def get_submission_scores(participation_id):
    if db.session.get(Participation, participation_id) is None:
        raise HackathonError(ErrorKind.NOT_FOUND, 'Participation not found')

    scores = Score.query.options(joinedload(Score.judge).joinedload(Judge.user)) \
        .filter_by(participation_id=participation_id).order_by(Score.id).all()
    results = []
    for s in scores:
        data = s.to_dict()
        data['judge_name'] = s.judge.user.name if s.judge.user else None
        results.append(data)
    return results


@store_errors
def get_judge_scores(caller, hackathon_id):
    require(caller, Level.AUTHENTICATED)

    judge = get_judge(hackathon_id, caller.id)
    if judge is None:
        raise HackathonError(ErrorKind.NOT_FOUND, 'Judge record not found')
    return Score.query.filter_by(judge_id=judge.id).order_by(Score.id).all()


@store_errors
def get_judge_progress(caller, hackathon_id):
    require(caller, Level.JUDGE, hackathon_id)

    total = Participation.query.filter_by(hackathon_id=hackathon_id).count()
    judge = get_judge(hackathon_id, caller.id)
    scored = Score.query.filter_by(judge_id=judge.id).count() if judge else 0
    return scoring_progress(total, scored)
