from extensions import db
from sqlalchemy import CheckConstraint

ROLES = ('USER', 'ORGANIZER', 'ADMIN')


class User(db.Model):
    __tablename__ = 'users'
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=True)
    username = db.Column(db.String(100), unique=True, nullable=True, index=True)
    role = db.Column(db.String(20), nullable=False, default='USER')
    created_at = db.Column(db.DateTime, server_default=db.func.current_timestamp())

    __table_args__ = (
        CheckConstraint("role IN ('USER', 'ORGANIZER', 'ADMIN')", name="check_role"),
    )

    def to_dict(self):
        return {'id': self.id, 'name': self.name, 'username': self.username, 'role': self.role}
