from extensions import db
from sqlalchemy import CheckConstraint

MIN_SCORE = 1
MAX_SCORE = 10


class Score(db.Model):
    __tablename__ = 'scores'
    id = db.Column(db.Integer, primary_key=True)
    judge_id = db.Column(db.Integer, db.ForeignKey('judges.id', ondelete='CASCADE'), nullable=False)
    participation_id = db.Column(db.Integer, db.ForeignKey('participations.id', ondelete='CASCADE'), nullable=False)
    value = db.Column(db.Integer, nullable=False)
    created_at = db.Column(db.DateTime, server_default=db.func.current_timestamp())
    updated_at = db.Column(db.DateTime, server_default=db.func.current_timestamp())

    __table_args__ = (
        # The upsert in scoring.submit_score targets this constraint
        db.UniqueConstraint('judge_id', 'participation_id', name='unique_judge_participation'),
        CheckConstraint("value BETWEEN 1 AND 10", name="check_score_value"),
    )

    def to_dict(self):
        return {
            'id': self.id,
            'judge_id': self.judge_id,
            'participation_id': self.participation_id,
            'value': self.value,
        }
