import pytest

from todolist import db
from todolist.config import Settings
from todolist.exceptions import StorageError


@pytest.fixture(autouse=True)
def fresh_client():
    db.get_client.cache_clear()
    yield
    db.get_client.cache_clear()


def test_client_uses_short_server_selection_timeout(mocker):
    mocker.patch("todolist.db.get_settings", return_value=Settings(mongo_uri="mongodb://db.test:27017", mongo_timeout_ms=1500))
    motor_client = mocker.patch("todolist.db.AsyncIOMotorClient")
    db.get_client()
    motor_client.assert_called_once_with("mongodb://db.test:27017", serverSelectionTimeoutMS=1500)


def test_missing_uri(mocker):
    mocker.patch("todolist.db.get_settings", return_value=Settings(mongo_uri=""))
    with pytest.raises(StorageError):
        db.get_client()
