"""Bootstrap launcher: provision /data/config.yaml, then start the bridge.

First start on an empty volume copies the bundled example config, tells the
operator to edit it and exits 0 without starting the bridge. Every later
start replaces this process with ``matrix-wechat --config /data/config.yaml``.
"""

from __future__ import annotations

import argparse
import logging
import os
import shutil
import sys
from typing import List, Optional

from matrix_wechat_launcher.config import LauncherConfig, load_launcher_config
from matrix_wechat_launcher.errors import LauncherError, ProvisionError
from matrix_wechat_launcher.handoff import hand_off
from matrix_wechat_launcher.provision import ensure_runtime_config

log = logging.getLogger(__name__)


def setup_logging() -> None:
    level = os.getenv("LOG_LEVEL", "INFO").upper().strip()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _say(message: str) -> None:
    print(message, flush=True)


def bootstrap_messages(cfg: LauncherConfig) -> List[str]:
    return [
        f"No config file found at {cfg.runtime_path}.",
        "A default config has been copied.",
        f"Update {cfg.runtime_path} and restart the container.",
    ]


def run(cfg: LauncherConfig) -> int:
    """Provision the runtime config or hand off to the bridge.

    Returns 0 after a first-run copy. In exec mode a successful hand-off
    never returns; in spawn mode the bridge's exit status is returned.
    """
    if ensure_runtime_config(cfg.template_path, cfg.runtime_path):
        for line in bootstrap_messages(cfg):
            _say(line)
        return 0
    return hand_off(cfg.bridge_argv(), mode=cfg.handoff_mode)


def generate_config(cfg: LauncherConfig) -> int:
    try:
        with open(cfg.template_path, "rb") as f:
            shutil.copyfileobj(f, sys.stdout.buffer)
    except OSError as e:
        raise ProvisionError(f"Failed to read {cfg.template_path}: {e}") from e
    sys.stdout.flush()
    return 0


def _parse_args(argv: Optional[List[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="matrix-wechat-launcher",
        description="Provision /data/config.yaml and start the matrix-wechat bridge.",
    )
    parser.add_argument(
        "--generate-config",
        action="store_true",
        help="print the bundled example config and exit",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = _parse_args(argv)
    setup_logging()
    try:
        cfg = load_launcher_config()
        if args.generate_config:
            sys.exit(generate_config(cfg))
        sys.exit(run(cfg))
    except LauncherError as e:
        log.error("%s", e)
        sys.exit(e.exit_code)


if __name__ == "__main__":
    main()
