import pytest

from writing_guard import Analyzer


@pytest.fixture(scope="session")
def analyzer():
    return Analyzer()


def categories(report):
    return [d.category.value for d in report.diagnostics]


def char_offset(text, byte_offset):
    return len(text.encode("utf-8")[:byte_offset].decode("utf-8"))
