# models/participation.py

from extensions import db


class Participation(db.Model):
    __tablename__ = 'participations'

    id = db.Column(db.Integer, primary_key=True)
    hackathon_id = db.Column(db.Integer, db.ForeignKey('hackathons.id', ondelete='CASCADE'), nullable=False)
    # Denormalized: the leaderboard and public pages look submissions up by url
    hackathon_url = db.Column(db.String(200), nullable=False, index=True)
    creator_id = db.Column(db.Integer, db.ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=True)
    project_url = db.Column(db.String(500), nullable=True)
    is_reviewed = db.Column(db.Boolean, nullable=False, default=False)
    is_winner = db.Column(db.Boolean, nullable=False, default=False)
    created_at = db.Column(db.DateTime, server_default=db.func.current_timestamp())

    creator = db.relationship('User')
    scores = db.relationship('Score', backref='participation', lazy=True, cascade="all, delete-orphan")

    def to_dict(self):
        return {
            'id': self.id,
            'hackathon_id': self.hackathon_id,
            'hackathon_url': self.hackathon_url,
            'creator_id': self.creator_id,
            'title': self.title,
            'description': self.description,
            'project_url': self.project_url,
            'is_reviewed': self.is_reviewed,
            'is_winner': self.is_winner,
        }
