from flask import Blueprint, request, jsonify, current_app
from flask_login import current_user

from .errors import NotFound
from .guard import token_required
from .repository import TaskRepository, TaskPatch, new_task_fields

tasks_bp = Blueprint('tasks', __name__, url_prefix='/api/tasks')


def _repository():
    # Tenant always comes from the verified token, never the request body
    return TaskRepository(current_user.company)


def _task_id(raw):
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise NotFound()


@tasks_bp.get('')
@token_required
def list_tasks():
    tasks = _repository().list()
    return jsonify([t.to_dict() for t in tasks])


@tasks_bp.post('')
@token_required
def create_task():
    values = new_task_fields(request.get_json(silent=True))
    task = _repository().create(values, account_id=current_user.id)
    current_app.logger.info('Task %s created for %s by %s', task.id, current_user.company, current_user.username)
    return jsonify(task.to_dict()), 201


@tasks_bp.put('/<task_id>')
@token_required
def update_task(task_id):
    tid = _task_id(task_id)
    patch = TaskPatch.from_json(request.get_json(silent=True))
    task = _repository().update(tid, patch)
    if task is None:
        raise NotFound()
    current_app.logger.info('Task %s updated for %s', task.id, current_user.company)
    return jsonify(task.to_dict())


@tasks_bp.delete('/<task_id>')
@token_required
def delete_task(task_id):
    tid = _task_id(task_id)
    if not _repository().delete(tid):
        raise NotFound()
    current_app.logger.info('Task %s deleted for %s', tid, current_user.company)
    return jsonify({'success': True, 'message': 'Task deleted.'})
