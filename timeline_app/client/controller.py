"""Client-side owner of the task list.

The controller keeps the list the view renders, calls the API for every
change and only touches the list once the server has confirmed. When the
company has no real tasks (or the list cannot be fetched) the list holds
the placeholder set instead, never a mix of both.

Interaction modes::

    VIEWING --open_add--> ADD_EDITING --submit ok / cancel--> VIEWING
    VIEWING --open_edit(real)--> EDIT_EDITING --submit ok / cancel--> VIEWING

Opening an edit on a placeholder stays in VIEWING and sets a notice.
"""
import enum
import logging
from datetime import date
from typing import List, Optional

from .api import APIRequestError, TimelineAPI
from .models import (
    ClientTask,
    NewTaskForm,
    RealTask,
    is_placeholder,
    placeholder_tasks,
)
from .session import Session

logger = logging.getLogger(__name__)

SAMPLE_EDIT_NOTICE = 'Sample tasks cannot be edited.'
SAMPLE_DELETE_NOTICE = 'Sample tasks cannot be deleted.'


class Mode(enum.Enum):
    VIEWING = 'viewing'
    ADD_EDITING = 'add_editing'
    EDIT_EDITING = 'edit_editing'


class SyncController:
    def __init__(self, api: TimelineAPI, session: Session):
        self.api = api
        self.session = session
        self.tasks: List[ClientTask] = []
        self.loading = True
        self.mode = Mode.VIEWING
        self.new_task = NewTaskForm()
        self.selected: Optional[RealTask] = None
        self.notice: Optional[str] = None

    # --- queries ---

    def find(self, key: str) -> Optional[ClientTask]:
        return next((t for t in self.tasks if t.key == key), None)

    @property
    def showing_placeholders(self) -> bool:
        return bool(self.tasks) and all(is_placeholder(t) for t in self.tasks)

    # --- load ---

    def load(self) -> None:
        self.loading = True
        try:
            data = self.api.list_tasks()
            tasks = [RealTask.from_api(item) for item in data]
        except (APIRequestError, KeyError, TypeError, ValueError) as e:
            logger.warning('Falling back to sample tasks: %s', e)
            tasks = []
        finally:
            self.loading = False
        self.tasks = tasks if tasks else placeholder_tasks()

    # --- add ---

    def open_add(self) -> bool:
        if self.mode is not Mode.VIEWING:
            return False
        self.mode = Mode.ADD_EDITING
        return True

    def update_new_task(self, **fields) -> None:
        for name, value in fields.items():
            if not hasattr(self.new_task, name):
                raise AttributeError(name)
            setattr(self.new_task, name, value)

    def submit_add(self) -> Optional[RealTask]:
        if self.mode is not Mode.ADD_EDITING:
            return None
        try:
            created = RealTask.from_api(self.api.create_task(self.new_task.to_payload()))
        except (APIRequestError, KeyError, TypeError, ValueError) as e:
            self._fail('add', e)
            return None
        # First real task replaces the whole sample set
        kept = [t for t in self.tasks if not is_placeholder(t)]
        self.tasks = kept + [created]
        self.new_task = NewTaskForm()
        self.mode = Mode.VIEWING
        return created

    # --- edit ---

    def open_edit(self, task: ClientTask) -> bool:
        """Click intent from the list or the chart."""
        if is_placeholder(task):
            self.notice = SAMPLE_EDIT_NOTICE
            return False
        if self.mode is not Mode.VIEWING:
            return False
        self.selected = task.copy()
        self.mode = Mode.EDIT_EDITING
        return True

    def update_selected(self, **fields) -> None:
        if self.selected is None:
            return
        for name, value in fields.items():
            if name in ('id', 'key') or not hasattr(self.selected, name):
                raise AttributeError(name)
            setattr(self.selected, name, value)

    def submit_edit(self) -> Optional[RealTask]:
        if self.mode is not Mode.EDIT_EDITING or self.selected is None:
            return None
        updated = self._save(self.selected)
        if updated is not None:
            self.selected = None
            self.mode = Mode.VIEWING
        return updated

    def reschedule(self, task: ClientTask, start: date, end: date) -> Optional[RealTask]:
        """Drag/resize from the chart; same guard and request as an edit."""
        if is_placeholder(task):
            self.notice = SAMPLE_EDIT_NOTICE
            return None
        return self._save(task.copy(start=start, end=end))

    def _save(self, task: RealTask) -> Optional[RealTask]:
        if not isinstance(task, RealTask):
            self.notice = SAMPLE_EDIT_NOTICE
            return None
        try:
            updated = RealTask.from_api(self.api.update_task(task.id, task.to_payload()))
        except (APIRequestError, KeyError, TypeError, ValueError) as e:
            self._fail('edit', e)
            return None
        self.tasks = [updated if t.key == updated.key else t for t in self.tasks]
        return updated

    # --- delete ---

    def delete(self, task: ClientTask) -> bool:
        if not isinstance(task, RealTask):
            self.notice = SAMPLE_DELETE_NOTICE
            return False
        try:
            self.api.delete_task(task.id)
        except APIRequestError as e:
            self._fail('delete', e)
            return False
        remaining = [t for t in self.tasks if t.key != task.key]
        self.tasks = remaining if remaining else placeholder_tasks()
        return True

    # --- misc ---

    def cancel(self) -> None:
        self.mode = Mode.VIEWING
        self.selected = None
        self.new_task = NewTaskForm()

    def dismiss_notice(self) -> None:
        self.notice = None

    def _fail(self, action, error):
        logger.error('Task %s failed: %s', action, error)
        self.notice = f'Could not {action} task: {getattr(error, "message", error)}'
