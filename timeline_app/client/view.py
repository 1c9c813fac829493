"""Presentation over a SyncController.

The view renders what the controller holds and forwards user gestures
back to it. It keeps no task state of its own.
"""
from .chart import MatplotlibGanttRenderer, display_rows
from .controller import Mode, SyncController
from .models import is_placeholder


class TimelineView:
    def __init__(self, controller: SyncController, renderer=None):
        self.controller = controller
        self.renderer = renderer or MatplotlibGanttRenderer()

    def mount(self):
        self.controller.load()

    # --- rendering ---

    def render_text(self):
        c = self.controller
        lines = [c.session.company, f'Hello, {c.session.username}!', '']
        if c.loading:
            lines.append('Loading...')
            return '\n'.join(lines)
        lines.append('Tasks')
        for t in c.tasks:
            lines.append(f'- {t.name}')
            lines.append(f'  Start: {t.start.isoformat()}')
            lines.append(f'  End: {t.end.isoformat()}')
            lines.append(f'  Progress: {t.progress}%')
        if c.mode is Mode.ADD_EDITING:
            lines += ['', '[New task]']
        elif c.mode is Mode.EDIT_EDITING and c.selected is not None:
            lines += ['', f'[Edit task: {c.selected.name}]']
        if c.notice:
            lines += ['', f'! {c.notice}']
        return '\n'.join(lines)

    def render_chart(self):
        return self.renderer.render(display_rows(self.controller.tasks))

    # --- intents ---

    def on_add_clicked(self):
        return self.controller.open_add()

    def on_edit_clicked(self, key):
        task = self.controller.find(key)
        if task is None:
            return False
        return self.controller.open_edit(task)

    # Chart click and double-click behave like the list's edit button
    on_chart_click = on_edit_clicked
    on_chart_double_click = on_edit_clicked

    def on_delete_clicked(self, key, confirm=None):
        task = self.controller.find(key)
        if task is None:
            return False
        if not is_placeholder(task) and confirm is not None and not confirm(task):
            return False
        return self.controller.delete(task)

    def on_date_change(self, key, start, end):
        task = self.controller.find(key)
        if task is None:
            return None
        return self.controller.reschedule(task, start, end)

    def on_cancel(self):
        self.controller.cancel()
