import json
from datetime import datetime, UTC
from flask_sqlalchemy import SQLAlchemy
from werkzeug.security import generate_password_hash

# SQLAlchemy instance
db = SQLAlchemy()

class AccountDB(db.Model):
    __tablename__ = 'accounts'
    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    username = db.Column(db.String(120), unique=True, nullable=False, index=True)
    email = db.Column(db.String(200), unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    company = db.Column(db.String(200))
    created_at = db.Column(db.DateTime, default=lambda: datetime.now(UTC))
    tasks = db.relationship('TaskDB', backref='owner', lazy=True)

    def summary(self):
        return {'id': self.id, 'username': self.username, 'email': self.email, 'company': self.company}

class TaskDB(db.Model):
    __tablename__ = 'project_tasks'
    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    account_id = db.Column(db.Integer, db.ForeignKey('accounts.id'))
    name = db.Column(db.String(300), nullable=False)
    start = db.Column(db.Date, nullable=False)
    end = db.Column(db.Date, nullable=False)
    progress = db.Column(db.Integer, default=0, nullable=False)
    type = db.Column(db.String(50), default='task', nullable=False)
    is_disabled = db.Column(db.Boolean, default=False, nullable=False)
    # Tenant; set once at creation
    company = db.Column(db.String(200), nullable=False, index=True)
    styles_json = db.Column('styles', db.Text)
    created_at = db.Column(db.DateTime, default=lambda: datetime.now(UTC))

    @property
    def styles(self):
        return json.loads(self.styles_json) if self.styles_json else {}

    @styles.setter
    def styles(self, value):
        self.styles_json = json.dumps(value or {})

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'start': self.start.isoformat(),
            'end': self.end.isoformat(),
            'progress': self.progress,
            'type': self.type,
            'isDisabled': self.is_disabled,
            'styles': self.styles,
        }

# Fixed accounts provisioned at startup
BOOTSTRAP_ACCOUNTS = [
    {'username': 'admin', 'password': 'admin!', 'email': 'admin@crossingdelta.com', 'company': 'CrossingDelta'},
    {'username': 'StudioFree', 'password': 'StudioFree!', 'email': 'admin@free.com', 'company': 'StudioFree'},
]


def ensure_bootstrap_accounts(db_session, logger=None):
    """Create the fixed accounts that are missing. Returns the usernames created."""
    created = []
    for entry in BOOTSTRAP_ACCOUNTS:
        if AccountDB.query.filter_by(username=entry['username']).first():
            continue
        db_session.add(AccountDB(
            username=entry['username'],
            email=entry['email'],
            password_hash=generate_password_hash(entry['password']),
            company=entry['company'],
        ))
        created.append(entry['username'])
    if created:
        db_session.commit()
        if logger:
            logger.info('Bootstrap accounts created: %s', ', '.join(created))
    return created
