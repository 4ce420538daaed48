import pytest

from tests.api_helpers import FakeBackend, NavigationRecorder


@pytest.fixture
def navigation() -> NavigationRecorder:
    return NavigationRecorder()


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch) -> None:
    for key in (
        "HR_API_BASE_URL",
        "HR_API_TIMEOUT",
        "HR_API_REFRESH_TIMEOUT",
        "HR_API_LOCALE",
        "HR_API_LOGIN_PATH",
        "HR_API_REFRESH_PATH",
        "HR_API_LOGIN_ROUTE",
        "HR_CREDENTIAL_STORE_PATH",
        "HR_API_DEBUG",
        "HR_API_USERNAME",
        "HR_API_PASSWORD",
    ):
        monkeypatch.delenv(key, raising=False)
