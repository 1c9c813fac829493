"""Tenant-scoped access to task records.

A ``TaskRepository`` is bound to one company when it is built and every
query it runs is filtered by that company, so there is no code path that
reads or writes tasks without a tenant.
"""
from dataclasses import dataclass, fields
from datetime import date, datetime
import pytz

from .db import db, TaskDB
from .errors import ValidationError


class _Missing:
    def __repr__(self):
        return 'MISSING'

    def __bool__(self):
        return False


MISSING = _Missing()

DEFAULT_TYPE = 'task'

# Wire name -> model attribute
FIELD_MAP = {
    'name': 'name',
    'start': 'start',
    'end': 'end',
    'progress': 'progress',
    'type': 'type',
    'isDisabled': 'is_disabled',
    'styles': 'styles',
}


def parse_date(value, field='date'):
    """Parse ``YYYY-MM-DD`` or an ISO-8601 datetime into a calendar date.

    Aware datetimes are converted to UTC before the date is taken.
    """
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        return value
    elif isinstance(value, str) and value.strip():
        raw = value.strip()
        try:
            if len(raw) == 10:
                return date.fromisoformat(raw)
            dt = datetime.fromisoformat(raw.replace('Z', '+00:00'))
        except ValueError:
            raise ValidationError(f'Invalid date: {field}')
    else:
        raise ValidationError(f'Invalid date: {field}')
    if dt.tzinfo is not None:
        dt = dt.astimezone(pytz.utc)
    return dt.date()


def parse_progress(value):
    if isinstance(value, bool):
        raise ValidationError('Invalid progress')
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise ValidationError('Invalid progress')


def parse_styles(value):
    if not isinstance(value, dict):
        raise ValidationError('Invalid styles')
    return {str(k): str(v) for k, v in value.items() if v is not None}


def parse_flag(value, field):
    if not isinstance(value, bool):
        raise ValidationError(f'Invalid {field}')
    return value


def require_object(data):
    """Request bodies must be JSON objects; an absent body counts as empty."""
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError('Request body must be a JSON object.')
    return data


@dataclass
class TaskPatch:
    """Field-by-field update; ``MISSING`` means keep the stored value."""
    name: object = MISSING
    start: object = MISSING
    end: object = MISSING
    progress: object = MISSING
    type: object = MISSING
    is_disabled: object = MISSING
    styles: object = MISSING

    @classmethod
    def from_json(cls, data):
        patch = cls()
        data = require_object(data)
        for wire, attr in FIELD_MAP.items():
            if wire not in data or data[wire] is None:
                continue
            value = data[wire]
            if attr in ('name', 'type'):
                value = str(value).strip()
                if not value:
                    continue
            elif attr in ('start', 'end'):
                value = parse_date(value, wire)
            elif attr == 'progress':
                value = parse_progress(value)
            elif attr == 'is_disabled':
                value = parse_flag(value, wire)
            elif attr == 'styles':
                value = parse_styles(value)
            setattr(patch, attr, value)
        return patch

    def present(self):
        """Pairs of (attribute, value) for the fields that were supplied."""
        return [(f.name, getattr(self, f.name)) for f in fields(self) if getattr(self, f.name) is not MISSING]


def new_task_fields(data):
    """Validate a create payload and fill in defaults."""
    data = require_object(data)
    patch = TaskPatch.from_json(data)
    if patch.name is MISSING or patch.start is MISSING or patch.end is MISSING:
        raise ValidationError()
    return {
        'name': patch.name,
        'start': patch.start,
        'end': patch.end,
        'progress': patch.progress if patch.progress is not MISSING else 0,
        'type': patch.type if patch.type is not MISSING else DEFAULT_TYPE,
        'is_disabled': patch.is_disabled if patch.is_disabled is not MISSING else False,
        'styles': patch.styles if patch.styles is not MISSING else {},
    }


class TaskRepository:
    def __init__(self, company):
        if not company:
            raise ValueError('TaskRepository requires a tenant')
        self.company = company

    def _query(self):
        return TaskDB.query.filter_by(company=self.company)

    def list(self):
        return self._query().order_by(TaskDB.start.asc(), TaskDB.id.asc()).all()

    def get(self, task_id):
        return self._query().filter_by(id=task_id).first()

    def create(self, values, account_id):
        task = TaskDB(company=self.company, account_id=account_id, **values)
        db.session.add(task)
        db.session.commit()
        return task

    def update(self, task_id, patch):
        task = self.get(task_id)
        if task is None:
            return None
        for attr, value in patch.present():
            setattr(task, attr, value)
        db.session.commit()
        return task

    def delete(self, task_id):
        task = self.get(task_id)
        if task is None:
            return False
        db.session.delete(task)
        db.session.commit()
        return True
