"""Logged-in session state for the client.

A ``Session`` is handed explicitly to whatever needs it. ``SessionFile``
can keep one on disk between runs, but only when the caller asks it to.
"""
import json
import logging
import os
import tempfile
from contextlib import contextmanager
from dataclasses import dataclass, asdict
from typing import Optional

import portalocker

from .api import TimelineAPI

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Session:
    token: str
    username: str
    company: str
    user_id: Optional[int] = None
    email: Optional[str] = None


def login(api: TimelineAPI, username: str, password: str) -> Session:
    """Authenticate and point ``api`` at the new token."""
    data = api.login(username, password)
    user = data.get('user') or {}
    session = Session(
        token=data['token'],
        username=user.get('username', username),
        company=user.get('company', ''),
        user_id=user.get('id'),
        email=user.get('email'),
    )
    api.token = session.token
    return session


def logout(api: TimelineAPI, session_file: Optional['SessionFile'] = None) -> None:
    api.token = None
    if session_file is not None:
        session_file.clear()


def _atomic_write_json(path, data):
    """Write JSON atomically to avoid partial writes (write temp then replace)."""
    dir_ = os.path.dirname(path) or '.'
    os.makedirs(dir_, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(dir=dir_, prefix='.tmp_', suffix='.json')
    try:
        with os.fdopen(fd, 'w', encoding='utf-8') as tmp_f:
            json.dump(data, tmp_f, indent=2, ensure_ascii=False)
        os.replace(tmp_path, path)
    finally:
        if os.path.exists(tmp_path):
            try:
                os.remove(tmp_path)
            except OSError:
                pass


class SessionFile:
    def __init__(self, path):
        self.path = os.fspath(path)
        self.lock_path = self.path + '.lock'

    @contextmanager
    def _locked(self, flags):
        os.makedirs(os.path.dirname(self.path) or '.', exist_ok=True)
        with open(self.lock_path, 'a') as lock_f:
            portalocker.lock(lock_f, flags)
            try:
                yield
            finally:
                portalocker.unlock(lock_f)

    def save(self, session: Session) -> None:
        # Readers and writers share the companion .lock file
        with self._locked(portalocker.LOCK_EX):
            _atomic_write_json(self.path, asdict(session))

    def load(self) -> Optional[Session]:
        if not os.path.exists(self.path):
            return None
        with self._locked(portalocker.LOCK_SH):
            try:
                with open(self.path, 'r', encoding='utf-8') as f:
                    data = json.load(f)
            except FileNotFoundError:
                return None
            except ValueError:
                logger.warning('Ignoring unreadable session file %s', self.path)
                return None
        if not isinstance(data, dict) or not data.get('token'):
            return None
        return Session(
            token=data['token'],
            username=data.get('username', ''),
            company=data.get('company', ''),
            user_id=data.get('user_id'),
            email=data.get('email'),
        )

    def clear(self) -> None:
        if not os.path.exists(self.path) and not os.path.exists(self.lock_path):
            return
        with self._locked(portalocker.LOCK_EX):
            if os.path.exists(self.path):
                os.remove(self.path)
        if os.path.exists(self.lock_path):
            os.remove(self.lock_path)
