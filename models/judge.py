from extensions import db


class Judge(db.Model):
    __tablename__ = 'judges'
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    hackathon_id = db.Column(db.Integer, db.ForeignKey('hackathons.id', ondelete='CASCADE'), nullable=False)
    invited_by = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    created_at = db.Column(db.DateTime, server_default=db.func.current_timestamp())

    user = db.relationship('User', foreign_keys=[user_id])
    inviter = db.relationship('User', foreign_keys=[invited_by])
    scores = db.relationship('Score', backref='judge', lazy=True, cascade="all, delete-orphan")

    __table_args__ = (
        db.UniqueConstraint('user_id', 'hackathon_id', name='unique_judge_hackathon'),
    )

    def to_dict(self):
        return {
            'id': self.id,
            'user_id': self.user_id,
            'hackathon_id': self.hackathon_id,
            'invited_by': self.invited_by,
            'name': self.user.name if self.user else None,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }


# Lookups shared by the judge registry and the authorization policy

def get_judge(hackathon_id, user_id):
    return Judge.query.filter_by(user_id=user_id, hackathon_id=hackathon_id).first()


def is_judge(hackathon_id, user_id):
    return get_judge(hackathon_id, user_id) is not None
