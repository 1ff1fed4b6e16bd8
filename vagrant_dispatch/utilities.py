from __future__ import annotations

import logging
import os

from vagrant_dispatch.config import DispatchConfig
from vagrant_dispatch.exceptions import MachineListingError, VagrantfileNotFound

logger = logging.getLogger(__name__)


def find_marker_dir(start_dir: str, marker_file: str) -> str | None:
    """
    Walk up from start_dir until a directory holding marker_file is found.
    Returns None once the filesystem root has been checked.
    """
    cur = os.path.abspath(start_dir)
    while True:
        if os.path.isfile(os.path.join(cur, marker_file)):
            return cur
        parent = os.path.dirname(cur)
        if parent == cur:
            return None
        cur = parent


def locate_project_root(start_dir: str, config: DispatchConfig) -> str:
    root = find_marker_dir(start_dir, config.marker_file)
    if root is not None:
        logger.debug("Found %s in %s", config.marker_file, root)
        return root

    fallback = config.fallback_project_dir
    if fallback and fallback.strip():
        logger.debug(
            "No %s above %s, using fallback %s", config.marker_file, start_dir, fallback
        )
        return fallback

    raise VagrantfileNotFound(start_dir)


def locate_vagrantfile(start_dir: str, config: DispatchConfig) -> str:
    return os.path.join(locate_project_root(start_dir, config), config.marker_file)


def list_machines(project_root: str, config: DispatchConfig) -> list[str]:
    """
    Names of the machines vagrant has created for this project, one per
    directory under ``.vagrant/machines``. Plain files are skipped and the
    listing order is kept. A project that was never brought up has no
    machines directory and yields an empty list.
    """
    path = os.path.join(project_root, config.machines_dir)
    try:
        entries = os.listdir(path)
    except FileNotFoundError:
        logger.debug("No machines directory at %s", path)
        return []
    except OSError as e:
        raise MachineListingError(path, e.strerror or str(e)) from e

    return [
        name
        for name in entries
        if name not in (".", "..") and os.path.isdir(os.path.join(path, name))
    ]
