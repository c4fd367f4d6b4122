import pytest

from bindery import Container


@pytest.fixture(autouse=True)
def _flush_global_container():
    Container.get_instance().flush()
    yield
    Container.get_instance().flush()
