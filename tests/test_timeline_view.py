from datetime import date

import httpx
import pytest

from timeline_app.client import Mode, Session, SyncController, TimelineAPI, TimelineView
from timeline_app.client.chart import MatplotlibGanttRenderer, display_rows
from timeline_app.client.models import DEFAULT_STYLES, placeholder_tasks


class RecordingRenderer:
    def __init__(self):
        self.rows = None

    def render(self, rows):
        self.rows = rows
        return b'chart'


TASKS = [
    {'id': 1, 'name': 'Design', 'start': '2025-01-01', 'end': '2025-02-01', 'progress': 50,
     'type': 'task', 'isDisabled': False, 'styles': {}},
    {'id': 2, 'name': 'Build', 'start': '2025-02-01', 'end': '2025-03-01', 'progress': 0,
     'type': 'task', 'isDisabled': True, 'styles': {'progressColor': '#123456'}},
]


@pytest.fixture()
def calls():
    return []


@pytest.fixture()
def view(calls):
    def handler(request):
        calls.append((request.method, request.url.path))
        if request.method == 'GET':
            return httpx.Response(200, json=TASKS)
        if request.method == 'DELETE':
            return httpx.Response(200, json={'success': True, 'message': 'Task deleted.'})
        body = dict(TASKS[0])
        body.update({'start': '2025-01-05', 'end': '2025-02-05'})
        return httpx.Response(200, json=body)
    api = TimelineAPI('http://timeline.test', token='tok', transport=httpx.MockTransport(handler))
    session = Session(token='tok', username='admin', company='CrossingDelta')
    v = TimelineView(SyncController(api, session), renderer=RecordingRenderer())
    yield v
    api.close()


def test_text_before_mount_shows_loading(view):
    text = view.render_text()
    assert 'CrossingDelta' in text
    assert 'Loading...' in text


def test_text_lists_every_task(view):
    view.mount()
    text = view.render_text()
    assert 'Hello, admin!' in text
    assert '- Design' in text
    assert 'Start: 2025-01-01' in text
    assert 'End: 2025-03-01' in text
    assert 'Progress: 50%' in text


def test_chart_rows_use_keys_and_filled_styles(view):
    view.mount()
    assert view.render_chart() == b'chart'
    rows = view.renderer.rows
    assert [r['id'] for r in rows] == ['1', '2']
    assert rows[0]['styles'] == DEFAULT_STYLES
    assert rows[1]['styles']['progressColor'] == '#123456'
    assert rows[1]['styles']['backgroundColor'] == DEFAULT_STYLES['backgroundColor']
    assert rows[1]['isDisabled'] is True


@pytest.mark.parametrize('intent', ['on_edit_clicked', 'on_chart_click', 'on_chart_double_click'])
def test_click_intents_open_editor(view, intent):
    view.mount()
    assert getattr(view, intent)('2') is True
    assert view.controller.mode is Mode.EDIT_EDITING
    assert view.controller.selected.name == 'Build'
    assert '[Edit task: Build]' in view.render_text()
    view.on_cancel()
    assert view.controller.mode is Mode.VIEWING


def test_unknown_key_is_ignored(view, calls):
    view.mount()
    assert view.on_chart_double_click('404') is False
    assert view.on_delete_clicked('404') is False
    assert view.on_date_change('404', date(2025, 1, 1), date(2025, 1, 2)) is None
    assert calls == [('GET', '/api/tasks')]


def test_delete_asks_for_confirmation(view, calls):
    view.mount()
    asked = []
    assert view.on_delete_clicked('1', confirm=lambda t: asked.append(t.name) or False) is False
    assert asked == ['Design']
    assert ('DELETE', '/api/tasks/1') not in calls
    assert view.on_delete_clicked('1', confirm=lambda t: True) is True
    assert calls[-1] == ('DELETE', '/api/tasks/1')
    assert [t.key for t in view.controller.tasks] == ['2']


def test_drag_forwards_to_reschedule(view, calls):
    view.mount()
    moved = view.on_date_change('1', date(2025, 1, 5), date(2025, 2, 5))
    assert moved.start == date(2025, 1, 5)
    assert calls[-1] == ('PUT', '/api/tasks/1')


def test_placeholder_intents_raise_notice(calls):
    api = TimelineAPI('http://timeline.test', transport=httpx.MockTransport(
        lambda r: calls.append((r.method, r.url.path)) or httpx.Response(200, json=[])))
    v = TimelineView(SyncController(api, Session('t', 'u', 'Co')), renderer=RecordingRenderer())
    v.mount()
    assert v.on_chart_double_click('default-1') is False
    assert '! Sample tasks cannot be edited.' in v.render_text()
    assert v.on_delete_clicked('default-1', confirm=lambda t: pytest.fail('no confirm for samples')) is False
    assert v.on_date_change('default-1', date(2025, 2, 1), date(2025, 3, 1)) is None
    assert calls == [('GET', '/api/tasks')]


def test_matplotlib_renderer_produces_png():
    rows = display_rows(placeholder_tasks())
    png = MatplotlibGanttRenderer(figsize=(4, 2)).render(rows)
    assert png.startswith(b'\x89PNG')


def test_matplotlib_renderer_empty():
    png = MatplotlibGanttRenderer(figsize=(4, 2)).render([])
    assert png.startswith(b'\x89PNG')
