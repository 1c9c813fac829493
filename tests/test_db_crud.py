from datetime import date

import pytest
from sqlalchemy.exc import IntegrityError
from werkzeug.security import generate_password_hash, check_password_hash

from timeline_app import db, AccountDB, TaskDB


def _seed_account(username='tester', company='Acme'):
    a = AccountDB(username=username, email=f'{username}@example.com',
                  password_hash=generate_password_hash('Passw0rd!'), company=company)
    db.session.add(a)
    db.session.commit()
    return a


def test_account_crud(app_ctx):
    a = _seed_account()
    assert AccountDB.query.filter_by(username='tester').first() is not None
    a.password_hash = generate_password_hash('NewPassw0rd!')
    db.session.commit()
    updated = db.session.get(AccountDB, a.id)
    assert check_password_hash(updated.password_hash, 'NewPassw0rd!')
    db.session.delete(updated)
    db.session.commit()
    assert db.session.get(AccountDB, a.id) is None


def test_account_username_unique(app_ctx):
    _seed_account()
    db.session.add(AccountDB(username='tester', email='other@example.com', password_hash='x', company='Acme'))
    with pytest.raises(IntegrityError):
        db.session.commit()
    db.session.rollback()


def test_task_crud_and_styles_blob(app_ctx):
    owner = _seed_account()
    t = TaskDB(account_id=owner.id, company='Acme', name='Item A',
               start=date(2025, 1, 1), end=date(2025, 1, 10))
    t.styles = {'progressColor': '#667eea'}
    db.session.add(t)
    db.session.commit()

    fetched = TaskDB.query.filter_by(name='Item A').first()
    assert fetched.progress == 0
    assert fetched.type == 'task'
    assert fetched.is_disabled is False
    assert fetched.styles_json == '{"progressColor": "#667eea"}'
    assert fetched.styles == {'progressColor': '#667eea'}
    assert fetched.owner.username == 'tester'

    fetched.progress = 100
    fetched.styles = None
    db.session.commit()
    again = db.session.get(TaskDB, fetched.id)
    assert again.progress == 100
    assert again.styles == {}

    db.session.delete(again)
    db.session.commit()
    assert TaskDB.query.filter_by(name='Item A').first() is None


def test_task_to_dict(app_ctx):
    t = TaskDB(company='Acme', name='Item B', start=date(2025, 2, 1), end=date(2025, 2, 3), progress=20)
    db.session.add(t)
    db.session.commit()
    assert t.to_dict() == {
        'id': t.id,
        'name': 'Item B',
        'start': '2025-02-01',
        'end': '2025-02-03',
        'progress': 20,
        'type': 'task',
        'isDisabled': False,
        'styles': {},
    }
