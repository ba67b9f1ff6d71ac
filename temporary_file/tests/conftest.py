import pytest

from temporary_file.core import TemporaryFile


@pytest.fixture
def instance():
    tmp = TemporaryFile()
    yield tmp
    tmp.close()
