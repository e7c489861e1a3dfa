import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from matrix_wechat_launcher.errors import LauncherConfigError


TEMPLATE_CONFIG_PATH = Path("/opt/matrix-wechat/example-config.yaml")
RUNTIME_CONFIG_PATH = Path("/data/config.yaml")
BRIDGE_BINARY_PATH = Path("/usr/bin/matrix-wechat")

HANDOFF_MODES = ("exec", "spawn")


@dataclass(frozen=True)
class LauncherConfig:
    template_path: Path = TEMPLATE_CONFIG_PATH
    runtime_path: Path = RUNTIME_CONFIG_PATH
    binary_path: Path = BRIDGE_BINARY_PATH
    handoff_mode: str = "exec"

    def bridge_argv(self) -> list:
        """Arguments the bridge is started with, argv[0] included."""
        return [str(self.binary_path), "--config", str(self.runtime_path)]


def _path(env: Mapping[str, str], key: str, default: Path) -> Path:
    val = str(env.get(key, "")).strip()
    return Path(val) if val else default


def _choice(env: Mapping[str, str], key: str, default: str, allowed) -> str:
    val = str(env.get(key, "")).strip().lower() or default
    if val not in allowed:
        raise LauncherConfigError(f"{key} must be one of: {', '.join(allowed)} (got {val!r})")
    return val


def load_launcher_config(env: Optional[Mapping[str, str]] = None) -> LauncherConfig:
    env = os.environ if env is None else env
    return LauncherConfig(
        template_path=_path(env, "MATRIX_WECHAT_TEMPLATE", TEMPLATE_CONFIG_PATH),
        runtime_path=_path(env, "MATRIX_WECHAT_CONFIG", RUNTIME_CONFIG_PATH),
        binary_path=_path(env, "MATRIX_WECHAT_BIN", BRIDGE_BINARY_PATH),
        handoff_mode=_choice(env, "MATRIX_WECHAT_HANDOFF", "exec", HANDOFF_MODES),
    )
