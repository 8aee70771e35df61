# policy.py
# Authorization decisions for every protected operation.
#
# Two independent axes are consulted: the caller's global role and the
# caller's relation to one hackathon (owner or judge). The relation is
# loaded from the database on every call, so revoking a judge or changing
# the owner applies to the very next request.

import enum
import logging
from collections import namedtuple

from extensions import db
from errors import ErrorKind, HackathonError
from models import Hackathon
from models.judge import is_judge

logger = logging.getLogger(__name__)


class Level(enum.Enum):
    PUBLIC = 'public'
    AUTHENTICATED = 'authenticated'
    ORGANIZER = 'organizer'     # manage-capable global role
    MANAGER = 'manager'         # owner of the hackathon
    JUDGE = 'judge'             # may score the hackathon


RELATION_LEVELS = (Level.MANAGER, Level.JUDGE)

Caller = namedtuple('Caller', ['id', 'role'])

# creator_id is None when the hackathon does not exist
Relation = namedtuple('Relation', ['hackathon_id', 'creator_id', 'is_judge'])
NO_RELATION = Relation(None, None, False)


class Decision(namedtuple('Decision', ['allowed', 'reason'])):
    __slots__ = ()

    def __bool__(self):
        return self.allowed


ALLOW = Decision(True, None)


def deny(reason):
    return Decision(False, ErrorKind(reason))


def authorize(caller, level, relation=NO_RELATION):
    """
    Decides whether `caller` may act at `level` on `relation`.

    First match wins:
      1. no caller            -> UNAUTHORIZED (anything above PUBLIC)
      2. relation level but no hackathon id -> VALIDATION
      3. ADMIN                -> allow
      4. ORGANIZER level      -> role is ORGANIZER or ADMIN
      5. MANAGER level        -> caller created the hackathon
      6. JUDGE level          -> caller created it or holds a judge grant
    """
    if level is Level.PUBLIC:
        return ALLOW
    if caller is None:
        return deny(ErrorKind.UNAUTHORIZED)
    if level in RELATION_LEVELS and relation.hackathon_id is None:
        return deny(ErrorKind.VALIDATION)
    if caller.role == 'ADMIN':
        return ALLOW

    if level is Level.AUTHENTICATED:
        return ALLOW
    if level is Level.ORGANIZER:
        return ALLOW if caller.role in ('ORGANIZER', 'ADMIN') else deny(ErrorKind.FORBIDDEN)

    is_owner = relation.creator_id is not None and relation.creator_id == caller.id
    if level is Level.MANAGER:
        return ALLOW if is_owner else deny(ErrorKind.FORBIDDEN)
    if level is Level.JUDGE:
        return ALLOW if is_owner or relation.is_judge else deny(ErrorKind.FORBIDDEN)

    raise ValueError(f'Unknown authorization level: {level!r}')


def resolve_relation(caller, hackathon_id):
    if hackathon_id is None:
        return NO_RELATION
    hackathon = db.session.get(Hackathon, hackathon_id)
    creator_id = hackathon.creator_id if hackathon else None
    judging = caller is not None and hackathon is not None and is_judge(hackathon_id, caller.id)
    return Relation(hackathon_id, creator_id, judging)


def require(caller, level, hackathon_id=None):
    """Raises HackathonError unless `caller` passes `level`."""
    relation = resolve_relation(caller, hackathon_id) if level in RELATION_LEVELS else NO_RELATION
    decision = authorize(caller, level, relation)
    if not decision:
        logger.info(
            "Denied %s: caller=%s level=%s hackathon=%s",
            decision.reason.value, caller.id if caller else None, level.value, hackathon_id,
        )
        raise HackathonError(decision.reason, _DENY_MESSAGES.get((decision.reason, level)))
    return caller


_DENY_MESSAGES = {
    (ErrorKind.FORBIDDEN, Level.ORGANIZER): 'Organizer or admin role required',
    (ErrorKind.FORBIDDEN, Level.MANAGER): 'Not authorized to manage this hackathon',
    (ErrorKind.FORBIDDEN, Level.JUDGE): 'Not authorized to judge this hackathon',
    (ErrorKind.VALIDATION, Level.MANAGER): 'hackathon_id required',
    (ErrorKind.VALIDATION, Level.JUDGE): 'hackathon_id required',
}
