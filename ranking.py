# ranking.py
# Leaderboard computation. Pure functions only: no database access here.


def average_score(values):
    if not values:
        return 0.0
    return sum(values) / len(values)


def _annotate(submission):
    values = list(submission['scores'])
    entry = dict(submission)
    entry['scores'] = values
    entry['average_score'] = average_score(values)
    entry['total_scores'] = len(values)
    return entry


def rank_submissions(submissions, min_judges_required):
    """
    Builds the leaderboard for one hackathon.

    `submissions` is a list of dicts with at least 'participation_id' and
    'scores' (the list of score values). Extra keys are carried over.

    Submissions with fewer than `min_judges_required` scores are never ranked
    and go to 'ineligible'. Eligible ones are ordered by average score, then
    by number of scores, both descending. Exact ties keep their input order.
    Ranks are 1..n with no gaps and no shared places.
    """
    eligible = []
    ineligible = []
    for submission in submissions:
        entry = _annotate(submission)
        if entry['total_scores'] >= min_judges_required:
            eligible.append(entry)
        else:
            ineligible.append(entry)

    # sorted() is stable, which keeps exact ties in input order
    ranked = sorted(eligible, key=lambda e: (-e['average_score'], -e['total_scores']))
    for position, entry in enumerate(ranked):
        entry['rank'] = position + 1
        entry['is_winner'] = entry['rank'] == 1
        entry['is_podium'] = entry['rank'] <= 3

    return {
        'eligible': ranked,
        'ineligible': ineligible,
        'min_judges_required': min_judges_required,
    }


def scoring_progress(total_submissions, scored_submissions):
    remaining = max(0, total_submissions - scored_submissions)
    percentage = (scored_submissions / total_submissions) * 100 if total_submissions > 0 else 0
    return {
        'completed': scored_submissions,
        'remaining': remaining,
        'percentage': round(percentage),
    }
