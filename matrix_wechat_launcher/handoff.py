"""
Hand-off to the bridge binary.

exec mode replaces the current process image; the bridge inherits the PID,
standard streams and signal disposition. spawn mode runs the bridge as a
child with inherited streams and mirrors its exit status, for platforms
without process replacement.
"""

from __future__ import annotations

import logging
import os
import signal
import subprocess
import sys
from typing import List, NoReturn

from matrix_wechat_launcher.errors import HandoffError

log = logging.getLogger(__name__)

FORWARDED_SIGNALS = (signal.SIGINT, signal.SIGTERM)


def exec_supported() -> bool:
    return hasattr(os, "execv") and os.name == "posix"


def _handoff_error(binary: str, e: OSError) -> HandoffError:
    if isinstance(e, FileNotFoundError):
        return HandoffError(f"Bridge binary not found: {binary}", exit_code=127)
    return HandoffError(f"Cannot execute bridge binary {binary}: {e}", exit_code=126)


def exec_bridge(argv: List[str]) -> NoReturn:
    """Replace this process with argv[0]. Only returns by raising HandoffError."""
    log.info("Starting %s", " ".join(argv))
    # Buffered output would be lost once the process image is replaced.
    sys.stdout.flush()
    sys.stderr.flush()
    try:
        os.execv(argv[0], argv)
    except OSError as e:
        raise _handoff_error(argv[0], e) from e
    raise HandoffError(f"execv returned for {argv[0]}")


def child_exit_status(returncode: int) -> int:
    """Map a subprocess returncode to the status a shell would report."""
    if returncode < 0:
        return 128 + (-returncode)
    return returncode


def spawn_bridge(argv: List[str]) -> int:
    """Run argv as a child with inherited streams and return its exit status."""
    log.info("Spawning %s", " ".join(argv))
    sys.stdout.flush()
    sys.stderr.flush()

    proc = None
    pending: List[int] = []

    def _forward(signum, _frame):
        # Signals that arrive before the child exists are delivered once it does.
        if proc is None:
            pending.append(signum)
            return
        log.debug("Forwarding signal %s to bridge pid %s", signum, proc.pid)
        proc.send_signal(signum)

    previous = {signum: signal.signal(signum, _forward) for signum in FORWARDED_SIGNALS}
    try:
        try:
            proc = subprocess.Popen(argv)
        except OSError as e:
            raise _handoff_error(argv[0], e) from e
        for signum in pending:
            log.debug("Forwarding early signal %s to bridge pid %s", signum, proc.pid)
            proc.send_signal(signum)
        returncode = proc.wait()
    finally:
        for signum, handler in previous.items():
            signal.signal(signum, handler)
    return child_exit_status(returncode)


def hand_off(argv: List[str], mode: str = "exec") -> int:
    """Transfer control to the bridge.

    In exec mode this never returns. In spawn mode, or where exec is not
    available, it returns the bridge's exit status for the caller to exit with.
    """
    if mode == "exec" and exec_supported():
        exec_bridge(argv)
    if mode == "exec":
        log.warning("Process replacement unavailable on this platform; spawning bridge instead")
    return spawn_bridge(argv)
