# models/hackathon.py

from flask import current_app

from extensions import db
from sqlalchemy import CheckConstraint


def default_min_judges():
    return current_app.config['DEFAULT_MIN_JUDGES_REQUIRED']


class Hackathon(db.Model):
    __tablename__ = 'hackathons'
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    url = db.Column(db.String(200), unique=True, nullable=False)
    creator_id = db.Column(db.Integer, db.ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    min_judges_required = db.Column(db.Integer, nullable=False, default=default_min_judges)
    is_finished = db.Column(db.Boolean, nullable=False, default=False)
    created_at = db.Column(db.DateTime, server_default=db.func.current_timestamp())
    updated_at = db.Column(db.DateTime, server_default=db.func.current_timestamp(),
                           onupdate=db.func.current_timestamp())

    creator = db.relationship('User')
    judges = db.relationship('Judge', backref='hackathon', lazy=True, cascade="all, delete-orphan")
    participations = db.relationship('Participation', backref='hackathon', lazy=True, cascade="all, delete-orphan")

    __table_args__ = (
        CheckConstraint("min_judges_required BETWEEN 1 AND 10", name="check_min_judges_required"),
    )

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'url': self.url,
            'creator_id': self.creator_id,
            'min_judges_required': self.min_judges_required,
            'is_finished': self.is_finished,
        }
