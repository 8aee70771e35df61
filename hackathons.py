# hackathons.py
# Hackathon and participation lifecycle operations that feed the judging core.

import logging

from flask import current_app
from sqlalchemy.exc import IntegrityError

from extensions import db
from errors import ErrorKind, HackathonError, store_errors
from judges import grant_creator
from models import Hackathon, Participation, User
from policy import Level, require

logger = logging.getLogger(__name__)


def validate_min_judges(value):
    max_judges = current_app.config['MAX_MIN_JUDGES_REQUIRED']
    if isinstance(value, bool) or not isinstance(value, int) or not 1 <= value <= max_judges:
        raise HackathonError(ErrorKind.VALIDATION, f'Minimum judges must be between 1 and {max_judges}')
    return value


def _get_hackathon_or_404(hackathon_id):
    hackathon = db.session.get(Hackathon, hackathon_id)
    if hackathon is None:
        raise HackathonError(ErrorKind.NOT_FOUND, 'Hackathon not found')
    return hackathon


@store_errors
def create_hackathon(caller, name, url, min_judges_required=None):
    """Creates a hackathon owned by the caller, who becomes its first judge."""
    require(caller, Level.ORGANIZER)

    if not name or not url:
        raise HackathonError(ErrorKind.VALIDATION, 'Name and url are required')
    if min_judges_required is None:
        min_judges_required = current_app.config['DEFAULT_MIN_JUDGES_REQUIRED']
    validate_min_judges(min_judges_required)

    hackathon = Hackathon(name=name, url=url, creator_id=caller.id,
                          min_judges_required=min_judges_required)
    db.session.add(hackathon)
    # Same transaction: a hackathon never exists without its creator's grant
    grant_creator(hackathon)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise HackathonError(ErrorKind.ALREADY_EXISTS, f'Hackathon with url "{url}" already exists')

    logger.info("User %s created hackathon %s (%s)", caller.id, hackathon.id, url)
    return hackathon


@store_errors
def update_hackathon(caller, hackathon_id, min_judges_required=None, is_finished=None):
    require(caller, Level.MANAGER, hackathon_id)
    hackathon = _get_hackathon_or_404(hackathon_id)

    if min_judges_required is not None:
        validate_min_judges(min_judges_required)
    if is_finished is not None and not isinstance(is_finished, bool):
        raise HackathonError(ErrorKind.VALIDATION, 'is_finished must be a boolean')

    if min_judges_required is not None:
        hackathon.min_judges_required = min_judges_required
    if is_finished is not None:
        hackathon.is_finished = is_finished

    db.session.commit()
    logger.info("User %s updated hackathon %s", caller.id, hackathon.id)
    return hackathon


@store_errors
def create_participation(caller, hackathon_id, title, description=None, project_url=None):
    require(caller, Level.AUTHENTICATED)
    hackathon = _get_hackathon_or_404(hackathon_id)

    if hackathon.is_finished:
        raise HackathonError(ErrorKind.CLOSED, 'Hackathon is finished')
    if not title:
        raise HackathonError(ErrorKind.VALIDATION, 'Title is required')

    participation = Participation(
        hackathon_id=hackathon.id, hackathon_url=hackathon.url, creator_id=caller.id,
        title=title, description=description, project_url=project_url,
    )
    db.session.add(participation)
    db.session.commit()
    logger.info("User %s submitted participation %s to hackathon %s", caller.id, participation.id, hackathon.id)
    return participation


@store_errors
def review_participation(caller, participation_id, is_reviewed=None, is_winner=None):
    """
    Sets the manual review/winner flags. These are independent of the
    winner the leaderboard derives from scores.
    """
    require(caller, Level.AUTHENTICATED)

    participation = db.session.get(Participation, participation_id)
    if participation is None:
        raise HackathonError(ErrorKind.NOT_FOUND, 'Participation not found')
    hackathon = _get_hackathon_or_404(participation.hackathon_id)

    require(caller, Level.JUDGE, hackathon.id)
    if hackathon.is_finished:
        raise HackathonError(ErrorKind.CLOSED, 'Hackathon is finished')

    flags = {k: v for k, v in (('is_reviewed', is_reviewed), ('is_winner', is_winner)) if v is not None}
    for field, value in flags.items():
        if not isinstance(value, bool):
            raise HackathonError(ErrorKind.VALIDATION, f'{field} must be a boolean')
    for field, value in flags.items():
        setattr(participation, field, value)

    db.session.commit()
    return participation


@store_errors
def promote_to_organizer(caller, user_id):
    require(caller, Level.AUTHENTICATED)
    if caller.role != 'ADMIN':
        raise HackathonError(ErrorKind.FORBIDDEN, 'Admin role required')

    user = db.session.get(User, user_id)
    if user is None:
        raise HackathonError(ErrorKind.NOT_FOUND, 'User not found')
    user.role = 'ORGANIZER'
    db.session.commit()
    logger.info("Admin %s promoted user %s to ORGANIZER", caller.id, user.id)
    return user
