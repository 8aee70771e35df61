import pytest
from sqlalchemy.exc import IntegrityError

from extensions import db
from errors import ErrorKind, HackathonError
from hackathons import create_hackathon
from judges import (add_judge, remove_judge, is_judge, get_judge, list_judges,
                    list_judged_hackathons, search_candidates)
from models import Hackathon, Judge
from policy import Caller
from conftest import caller_of, make_user


def test_creator_is_judge_after_creation(hackathon, users):
    judge = get_judge(hackathon.id, users['organizer'].id)
    assert judge is not None
    assert judge.invited_by == users['organizer'].id


def test_user_role_cannot_create_hackathon(users):
    with pytest.raises(HackathonError) as exc:
        create_hackathon(caller_of(users['user']), 'Nope', 'nope')
    assert exc.value.kind is ErrorKind.FORBIDDEN
    assert Hackathon.query.count() == 0


def test_owner_adds_and_removes_judge(hackathon, users):
    owner = caller_of(users['organizer'])
    judge = add_judge(owner, hackathon.id, users['judge'].id)

    assert judge.invited_by == owner.id
    assert is_judge(hackathon.id, users['judge'].id)

    remove_judge(owner, hackathon.id, users['judge'].id)
    assert not is_judge(hackathon.id, users['judge'].id)


def test_plain_user_cannot_add_judge(hackathon, users):
    with pytest.raises(HackathonError) as exc:
        add_judge(caller_of(users['user']), hackathon.id, users['judge'].id)
    assert exc.value.kind is ErrorKind.FORBIDDEN


def test_organizer_of_another_hackathon_cannot_add_judge(hackathon, users):
    with pytest.raises(HackathonError) as exc:
        add_judge(caller_of(users['other_organizer']), hackathon.id, users['judge'].id)
    assert exc.value.kind is ErrorKind.FORBIDDEN


def test_owner_demoted_to_user_still_manages_own_hackathon(hackathon, users):
    owner = users['organizer']
    owner.role = 'USER'
    db.session.commit()

    judge = add_judge(Caller(owner.id, 'USER'), hackathon.id, users['judge'].id)
    assert judge.hackathon_id == hackathon.id


def test_admin_adds_judge_anywhere(hackathon, users):
    judge = add_judge(caller_of(users['admin']), hackathon.id, users['judge'].id)
    assert judge.invited_by == users['admin'].id


def test_unauthenticated_cannot_add_judge(hackathon, users):
    with pytest.raises(HackathonError) as exc:
        add_judge(None, hackathon.id, users['judge'].id)
    assert exc.value.kind is ErrorKind.UNAUTHORIZED


def test_reinvite_fails_and_keeps_inviter(hackathon, users):
    add_judge(caller_of(users['organizer']), hackathon.id, users['judge'].id)

    with pytest.raises(HackathonError) as exc:
        add_judge(caller_of(users['admin']), hackathon.id, users['judge'].id)
    assert exc.value.kind is ErrorKind.ALREADY_EXISTS

    rows = Judge.query.filter_by(hackathon_id=hackathon.id, user_id=users['judge'].id).all()
    assert len(rows) == 1
    assert rows[0].invited_by == users['organizer'].id


def test_add_judge_for_unknown_user_or_hackathon(hackathon, users):
    admin = caller_of(users['admin'])
    with pytest.raises(HackathonError) as exc:
        add_judge(admin, hackathon.id, 4242)
    assert exc.value.kind is ErrorKind.NOT_FOUND

    with pytest.raises(HackathonError) as exc:
        add_judge(admin, 4242, users['judge'].id)
    assert exc.value.kind is ErrorKind.NOT_FOUND


def test_remove_missing_judge_is_not_found(hackathon, users):
    with pytest.raises(HackathonError) as exc:
        remove_judge(caller_of(users['organizer']), hackathon.id, users['judge'].id)
    assert exc.value.kind is ErrorKind.NOT_FOUND


def test_listings_follow_creation_order(hackathon, users):
    owner = caller_of(users['organizer'])
    late = make_user('Late')
    add_judge(owner, hackathon.id, users['judge'].id)
    add_judge(owner, hackathon.id, late.id)

    assert [j.user_id for j in list_judges(hackathon.id)] == \
        [users['organizer'].id, users['judge'].id, late.id]

    second = create_hackathon(caller_of(users['other_organizer']), 'Autumn Hack', 'autumn-hack')
    add_judge(caller_of(users['other_organizer']), second.id, users['judge'].id)

    assert [h.url for h in list_judged_hackathons(users['judge'].id)] == ['spring-hack', 'autumn-hack']
    assert list_judged_hackathons(users['user'].id) == []


def test_creator_grant_gets_creation_timestamp(hackathon, users):
    assert get_judge(hackathon.id, users['organizer'].id).created_at is not None
    assert hackathon.created_at is not None


def test_search_candidates_excludes_current_judges(hackathon, users):
    owner = caller_of(users['organizer'])
    make_user('Jamie')
    add_judge(owner, hackathon.id, users['judge'].id)

    found = search_candidates(owner, hackathon.id, 'JAM')
    assert [u.name for u in found] == ['Jamie']

    # username matches too; the creator already judges and is left out
    assert [u.username for u in search_candidates(owner, hackathon.id, 'olg')] == []
    assert [u.username for u in search_candidates(owner, hackathon.id, 'osc')] == ['oscar']


def test_search_candidates_returns_at_most_ten(hackathon, users):
    for i in range(12):
        make_user(f'Candidate{i}')

    found = search_candidates(caller_of(users['user']), hackathon.id, 'candidate')
    assert len(found) == 10


def test_search_candidates_needs_login_and_query(hackathon, users):
    with pytest.raises(HackathonError) as exc:
        search_candidates(None, hackathon.id, 'jam')
    assert exc.value.kind is ErrorKind.UNAUTHORIZED

    with pytest.raises(HackathonError) as exc:
        search_candidates(caller_of(users['user']), hackathon.id, '  ')
    assert exc.value.kind is ErrorKind.VALIDATION


def test_add_judge_checks_caller_before_input(hackathon, users):
    with pytest.raises(HackathonError) as exc:
        add_judge(None, hackathon.id, 'not-an-id')
    assert exc.value.kind is ErrorKind.UNAUTHORIZED

    with pytest.raises(HackathonError) as exc:
        add_judge(caller_of(users['organizer']), hackathon.id, 'not-an-id')
    assert exc.value.kind is ErrorKind.VALIDATION


def test_min_judges_default_comes_from_config(app, users):
    app.config['DEFAULT_MIN_JUDGES_REQUIRED'] = 3
    hackathon = Hackathon(name='Config Hack', url='config-hack', creator_id=users['organizer'].id)
    db.session.add(hackathon)
    db.session.commit()

    assert hackathon.min_judges_required == 3


@pytest.mark.parametrize('value', [0, 11])
def test_min_judges_out_of_range_is_rejected_by_database(users, value):
    db.session.add(Hackathon(name='Bad', url='bad', creator_id=users['organizer'].id,
                             min_judges_required=value))
    with pytest.raises(IntegrityError):
        db.session.commit()
    db.session.rollback()
