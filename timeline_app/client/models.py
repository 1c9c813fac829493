"""Client-side task view models.

The client holds two kinds of task: ``RealTask`` mirrors a server record
and carries its integer id, ``PlaceholderTask`` is a local sample shown
while the company has no tasks. Placeholders never reach a mutating
endpoint.
"""
from dataclasses import dataclass, field, replace
from datetime import date, datetime
from typing import Dict, List, Union

PLACEHOLDER_PREFIX = 'default-'

DEFAULT_STYLES = {
    'progressColor': '#667eea',
    'progressSelectedColor': '#667eea',
    'backgroundColor': '#e5e7eb',
    'backgroundSelectedColor': '#d1d5db',
}


def default_styles() -> Dict[str, str]:
    return dict(DEFAULT_STYLES)


def to_date(value) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def _styles_from_api(value) -> Dict[str, str]:
    # An empty mapping is kept as stored; the chart fills in the defaults
    if value is None:
        return default_styles()
    return dict(value)


@dataclass
class RealTask:
    id: int
    name: str
    start: date
    end: date
    progress: int = 0
    type: str = 'task'
    is_disabled: bool = False
    styles: Dict[str, str] = field(default_factory=default_styles)

    @property
    def key(self) -> str:
        return str(self.id)

    @classmethod
    def from_api(cls, data: dict) -> 'RealTask':
        return cls(
            id=int(data['id']),
            name=data['name'],
            start=to_date(data['start']),
            end=to_date(data['end']),
            progress=data.get('progress') or 0,
            type=data.get('type') or 'task',
            is_disabled=bool(data.get('isDisabled', False)),
            styles=_styles_from_api(data.get('styles')),
        )

    def to_payload(self) -> dict:
        """Full body for an update request; unchanged fields included."""
        return {
            'name': self.name,
            'start': self.start.isoformat(),
            'end': self.end.isoformat(),
            'progress': self.progress,
            'type': self.type,
            'isDisabled': self.is_disabled,
            'styles': dict(self.styles),
        }

    def copy(self, **changes) -> 'RealTask':
        return replace(self, styles=dict(self.styles), **changes)


@dataclass(frozen=True)
class PlaceholderTask:
    key: str
    name: str
    start: date
    end: date
    progress: int = 0
    type: str = 'task'
    is_disabled: bool = False
    styles: Dict[str, str] = field(default_factory=default_styles, compare=False, hash=False)


ClientTask = Union[RealTask, PlaceholderTask]


def placeholder_tasks() -> List[PlaceholderTask]:
    """The fixed sample set shown when there is nothing real to show."""
    return [
        PlaceholderTask(
            key=PLACEHOLDER_PREFIX + '1',
            name='Sample Project',
            start=date(2025, 1, 1),
            end=date(2025, 12, 31),
            progress=30,
        ),
    ]


def is_placeholder(task) -> bool:
    return isinstance(task, PlaceholderTask)


@dataclass
class NewTaskForm:
    name: str = ''
    start: str = ''
    end: str = ''
    progress: int = 0

    def to_payload(self) -> dict:
        return {
            'name': self.name,
            'start': self.start,
            'end': self.end,
            'progress': self.progress,
            'type': 'task',
            'isDisabled': False,
            'styles': default_styles(),
        }
