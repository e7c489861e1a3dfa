"""
Runtime config provisioning: copy the bundled template onto the data volume.
"""

from __future__ import annotations

import logging
import os
import pathlib
import shutil
import uuid

from matrix_wechat_launcher.errors import ProvisionError

log = logging.getLogger(__name__)


def atomic_copy_file(src: pathlib.Path, dst: pathlib.Path) -> None:
    """Copy src to dst byte-for-byte; dst either appears complete or not at all.

    The parent directory of dst must already exist.
    """
    tmp = dst.with_name(f".{dst.name}.tmp.{uuid.uuid4().hex}")
    try:
        with open(src, "rb") as fsrc, open(tmp, "xb") as fdst:
            shutil.copyfileobj(fsrc, fdst)
            fdst.flush()
            os.fsync(fdst.fileno())
        shutil.copymode(src, tmp)
        os.replace(tmp, dst)
    except BaseException:
        try:
            tmp.unlink()
        except FileNotFoundError:
            pass
        raise


def ensure_runtime_config(template: pathlib.Path, target: pathlib.Path) -> bool:
    """Create target from template if it is missing.

    Returns True when the file was just created, False when it already existed.
    An existing target is never read or modified.
    """
    if target.exists():
        log.debug("Runtime config present at %s", target)
        return False

    log.debug("Copying %s to %s", template, target)
    try:
        atomic_copy_file(template, target)
    except OSError as e:
        raise ProvisionError(f"Failed to copy {template} to {target}: {e}") from e
    return True
