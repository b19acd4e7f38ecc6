from api import state
from api.backend import BackendAPI
from storage.task_store import TaskStore

_backend = BackendAPI()


def get_task_store() -> TaskStore:
    return state.task_store


def get_backend() -> BackendAPI:
    return _backend
