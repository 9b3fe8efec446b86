import pytest

from fakes import FakeUninstaller


@pytest.fixture
def uninstaller():
    return FakeUninstaller()
