# judges.py
# Judge assignments: who may score which hackathon.

import logging

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError

from extensions import db
from errors import ErrorKind, HackathonError, store_errors
from models import Hackathon, Judge, User
from models.judge import get_judge, is_judge
from policy import Level, require

logger = logging.getLogger(__name__)

CANDIDATE_LIMIT = 10


@store_errors
def add_judge(caller, hackathon_id, user_id):
    """
    Grants `user_id` the right to score `hackathon_id`.

    Re-inviting an existing judge is an error, not a no-op: the existing
    row (and its invited_by) is left as it was.
    """
    require(caller, Level.MANAGER, hackathon_id)

    if isinstance(user_id, bool) or not isinstance(user_id, int):
        raise HackathonError(ErrorKind.VALIDATION, 'user_id required')
    if db.session.get(Hackathon, hackathon_id) is None:
        raise HackathonError(ErrorKind.NOT_FOUND, 'Hackathon not found')
    if db.session.get(User, user_id) is None:
        raise HackathonError(ErrorKind.NOT_FOUND, 'User not found')
    if is_judge(hackathon_id, user_id):
        raise HackathonError(ErrorKind.ALREADY_EXISTS, 'User is already a judge for this hackathon')

    judge = Judge(user_id=user_id, hackathon_id=hackathon_id, invited_by=caller.id)
    db.session.add(judge)
    try:
        db.session.commit()
    except IntegrityError:
        # Lost a race with a concurrent invite of the same user
        db.session.rollback()
        raise HackathonError(ErrorKind.ALREADY_EXISTS, 'User is already a judge for this hackathon')

    logger.info("User %s added judge %s to hackathon %s", caller.id, user_id, hackathon_id)
    return judge


@store_errors
def remove_judge(caller, hackathon_id, user_id):
    require(caller, Level.MANAGER, hackathon_id)

    judge = get_judge(hackathon_id, user_id)
    if judge is None:
        raise HackathonError(ErrorKind.NOT_FOUND, 'Judge not found')

    db.session.delete(judge)
    db.session.commit()
    logger.info("User %s removed judge %s from hackathon %s", caller.id, user_id, hackathon_id)


def grant_creator(hackathon):
    """Self-invite of the hackathon's creator. Joins the caller's transaction."""
    judge = Judge(user_id=hackathon.creator_id, hackathon=hackathon, invited_by=hackathon.creator_id)
    db.session.add(judge)
    return judge


def list_judges(hackathon_id):
    return Judge.query.filter_by(hackathon_id=hackathon_id) \
        .order_by(Judge.created_at, Judge.id).all()


def list_judged_hackathons(user_id):
    return Hackathon.query.join(Judge, Judge.hackathon_id == Hackathon.id) \
        .filter(Judge.user_id == user_id) \
        .order_by(Judge.created_at, Judge.id).all()


@store_errors
def search_candidates(caller, hackathon_id, query):
    """
    Users whose name or username contains `query` (case-insensitive) and who
    do not judge `hackathon_id` yet. At most CANDIDATE_LIMIT results.
    """
    require(caller, Level.AUTHENTICATED)

    query = (query or '').strip()
    if not query:
        raise HackathonError(ErrorKind.VALIDATION, 'Search query required')

    existing = db.select(Judge.user_id).where(Judge.hackathon_id == hackathon_id)
    pattern = f'%{query}%'
    return User.query.filter(
        or_(User.name.ilike(pattern), User.username.ilike(pattern)),
        User.id.notin_(existing),
    ).order_by(User.id).limit(CANDIDATE_LIMIT).all()
