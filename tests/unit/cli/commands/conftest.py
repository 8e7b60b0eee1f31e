import pytest
from click.testing import CliRunner

from techgraph.core.demo import DemoManager


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def demo_dir(tmp_path):
    return DemoManager(tmp_path).provision()
