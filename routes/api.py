# routes/api.py
# JSON endpoints of the judging core

from flask import Blueprint, jsonify, request, session

from extensions import db
from errors import ErrorKind, HackathonError
from models import User
from policy import Caller
import hackathons
import judges
import scoring

api_bp = Blueprint('api', __name__, url_prefix='/api')


def current_caller():
    """
    Builds the caller identity from the session user id set at sign-in.
    The user is reloaded on every request so a role change applies at once.
    """
    user_id = session.get('user_id')
    if user_id is None:
        return None
    user = db.session.get(User, user_id)
    if user is None:
        session.clear()
        return None
    return Caller(user.id, user.role)


def _json_body():
    # Missing or malformed fields are reported by the service, after the
    # caller has been authenticated
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


# --- Hackathons ---

@api_bp.route('/hackathons', methods=['POST'])
def create_hackathon():
    data = _json_body()
    hackathon = hackathons.create_hackathon(
        current_caller(), data.get('name'), data.get('url'), data.get('min_judges_required'),
    )
    return jsonify(hackathon.to_dict()), 201


@api_bp.route('/hackathons/<int:hackathon_id>', methods=['PATCH'])
def update_hackathon(hackathon_id):
    data = _json_body()
    hackathon = hackathons.update_hackathon(
        current_caller(), hackathon_id,
        min_judges_required=data.get('min_judges_required'),
        is_finished=data.get('is_finished'),
    )
    return jsonify(hackathon.to_dict())


@api_bp.route('/hackathons/<int:hackathon_id>/rankings')
def get_rankings(hackathon_id):
    return jsonify(scoring.get_rankings(hackathon_id))


@api_bp.route('/hackathons/<int:hackathon_id>/participations', methods=['POST'])
def create_participation(hackathon_id):
    data = _json_body()
    participation = hackathons.create_participation(
        current_caller(), hackathon_id, data.get('title'),
        description=data.get('description'), project_url=data.get('project_url'),
    )
    return jsonify(participation.to_dict()), 201


# --- Judges ---

@api_bp.route('/hackathons/<int:hackathon_id>/judges', methods=['GET'])
def list_judges(hackathon_id):
    return jsonify([j.to_dict() for j in judges.list_judges(hackathon_id)])


@api_bp.route('/hackathons/<int:hackathon_id>/judges', methods=['POST'])
def add_judge(hackathon_id):
    judge = judges.add_judge(current_caller(), hackathon_id, _json_body().get('user_id'))
    return jsonify(judge.to_dict()), 201


@api_bp.route('/hackathons/<int:hackathon_id>/judges/candidates')
def judge_candidates(hackathon_id):
    users = judges.search_candidates(current_caller(), hackathon_id, request.args.get('q'))
    return jsonify([u.to_dict() for u in users])


@api_bp.route('/hackathons/<int:hackathon_id>/judges/<int:user_id>', methods=['DELETE'])
def remove_judge(hackathon_id, user_id):
    judges.remove_judge(current_caller(), hackathon_id, user_id)
    return '', 204


@api_bp.route('/me/judging')
def judged_hackathons():
    caller = current_caller()
    if caller is None:
        raise HackathonError(ErrorKind.UNAUTHORIZED)
    return jsonify([h.to_dict() for h in judges.list_judged_hackathons(caller.id)])


# --- Scores ---

@api_bp.route('/participations/<int:participation_id>/score', methods=['POST'])
def submit_score(participation_id):
    score = scoring.submit_score(current_caller(), participation_id, _json_body().get('value'))
    return jsonify(score.to_dict())


@api_bp.route('/participations/<int:participation_id>/scores')
def submission_scores(participation_id):
    return jsonify(scoring.get_submission_scores(participation_id))


@api_bp.route('/participations/<int:participation_id>', methods=['PATCH'])
def review_participation(participation_id):
    data = _json_body()
    participation = hackathons.review_participation(
        current_caller(), participation_id,
        is_reviewed=data.get('is_reviewed'), is_winner=data.get('is_winner'),
    )
    return jsonify(participation.to_dict())


@api_bp.route('/hackathons/<int:hackathon_id>/my-scores')
def my_scores(hackathon_id):
    scores = scoring.get_judge_scores(current_caller(), hackathon_id)
    return jsonify([s.to_dict() for s in scores])


@api_bp.route('/hackathons/<int:hackathon_id>/progress')
def judge_progress(hackathon_id):
    return jsonify(scoring.get_judge_progress(current_caller(), hackathon_id))


# --- Users ---

@api_bp.route('/users/<int:user_id>/promote', methods=['POST'])
def promote_user(user_id):
    user = hackathons.promote_to_organizer(current_caller(), user_id)
    return jsonify(user.to_dict())
