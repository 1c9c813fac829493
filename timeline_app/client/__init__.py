from .api import TimelineAPI, APIRequestError
from .controller import SyncController, Mode
from .models import RealTask, PlaceholderTask, NewTaskForm, placeholder_tasks, is_placeholder
from .session import Session, SessionFile, login, logout
from .view import TimelineView

__all__ = [
    'TimelineAPI', 'APIRequestError',
    'SyncController', 'Mode',
    'RealTask', 'PlaceholderTask', 'NewTaskForm', 'placeholder_tasks', 'is_placeholder',
    'Session', 'SessionFile', 'login', 'logout',
    'TimelineView',
]
