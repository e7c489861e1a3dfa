import pathlib
import sys

import pytest

# Ensure repo root is on path
REPO_ROOT = pathlib.Path(__file__).parent.parent
sys.path.insert(0, str(REPO_ROOT))

from matrix_wechat_launcher.config import LauncherConfig  # noqa: E402

TEMPLATE_TEXT = "homeserver:\n  address: https://matrix.example.com\n  domain: example.com\n"


class ExecCalled(Exception):
    """Raised by the fake os.execv so the test process is never replaced."""

    def __init__(self, path, argv):
        super().__init__(path)
        self.path = path
        self.argv = list(argv)


@pytest.fixture
def fake_execv(monkeypatch):
    calls = []

    def _execv(path, argv):
        calls.append((path, list(argv)))
        raise ExecCalled(path, argv)

    monkeypatch.setattr("matrix_wechat_launcher.handoff.os.execv", _execv)
    return calls


@pytest.fixture
def layout(tmp_path):
    """A template, an empty data volume and a bridge path under tmp_path."""
    opt = tmp_path / "opt"
    data = tmp_path / "data"
    opt.mkdir()
    data.mkdir()
    template = opt / "example-config.yaml"
    template.write_text(TEMPLATE_TEXT, encoding="utf-8")
    return LauncherConfig(
        template_path=template,
        runtime_path=data / "config.yaml",
        binary_path=tmp_path / "bin" / "matrix-wechat",
    )
