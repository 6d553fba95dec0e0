"""Path-derived cross-process locks guarding kubeconfig read-modify-write cycles."""

from __future__ import annotations

import hashlib
import os
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path

import structlog
from filelock import FileLock, Timeout

from kubeconfig_merge.config import LockConfig, get_lock_config
from kubeconfig_merge.errors import LockAcquisitionError

log = structlog.get_logger()

_NAME_PREFIX = "kc"
_NAME_LENGTH = 40


@dataclass(frozen=True)
class MutexSpec:
    """A named lock plus the policy used to wait for it."""

    name: str
    timeout: float
    delay: float
    lock_dir: str

    @property
    def lock_file(self) -> Path:
        return Path(self.lock_dir) / f"{self.name}.lock"


def mutex_name(path: str) -> str:
    """Return the lock name for *path*: a fixed prefix plus a truncated SHA-1 of the path."""
    # Lock names are capped at 40 characters, so the prefixed digest is cut to
    # fit. SHA-1 only maps the path to a fixed-width safe name here.
    digest = hashlib.sha1(path.encode("utf-8")).hexdigest()
    return f"{_NAME_PREFIX}{digest}"[:_NAME_LENGTH]


def path_mutex_spec(path: str, config: LockConfig | None = None) -> MutexSpec:
    """Build the lock spec for *path*.

    The path is made absolute first so relative and absolute references to the
    same file share one lock.
    """
    config = config or get_lock_config()
    return MutexSpec(
        name=mutex_name(os.path.abspath(path)),
        timeout=config.timeout,
        delay=config.delay,
        lock_dir=config.lock_dir,
    )


@contextmanager
def acquire(spec: MutexSpec) -> Iterator[MutexSpec]:
    """Hold the lock described by *spec* for the duration of the ``with`` block.

    Raises:
        LockAcquisitionError: If the lock is not acquired within ``spec.timeout`` seconds,
            or the lock directory or lock file cannot be created.
    """
    log.info("acquiring_lock", name=spec.name, timeout=spec.timeout, delay=spec.delay)
    lock = FileLock(str(spec.lock_file))
    try:
        os.makedirs(spec.lock_dir, exist_ok=True)
        lock.acquire(timeout=spec.timeout, poll_interval=spec.delay)
    except (Timeout, OSError) as e:
        raise LockAcquisitionError(spec) from e
    log.debug("lock_acquired", name=spec.name)
    try:
        yield spec
    finally:
        lock.release()
        log.debug("lock_released", name=spec.name)
