"""Loading and atomically persisting kubeconfig files."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

import structlog
import yaml
from pydantic import ValidationError

from kubeconfig_merge.errors import DocumentLoadError, DocumentWriteError
from kubeconfig_merge.models import Config

log = structlog.get_logger()

_FILE_MODE = 0o600
_DIR_MODE = 0o755


def read_or_new(path: str) -> Config:
    """Load the kubeconfig at *path*, or return an empty document if it does not exist.

    Args:
        path: Location of the kubeconfig file.

    Returns:
        The parsed document. A missing or empty file yields an empty Config.

    Raises:
        DocumentLoadError: If the file exists but cannot be read or parsed.
            The file is never modified.
    """
    file = Path(path)
    try:
        text = file.read_text(encoding="utf-8")
    except FileNotFoundError:
        log.info("kubeconfig_not_found", path=path)
        return Config()
    except (OSError, UnicodeDecodeError) as e:
        raise DocumentLoadError(path, str(e)) from e

    try:
        raw = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise DocumentLoadError(path, "invalid YAML") from e

    try:
        return Config.from_yaml_dict(raw)
    except (ValueError, ValidationError) as e:
        raise DocumentLoadError(path, str(e)) from e


def write_to_file(config: Config, path: str) -> None:
    """Persist *config* to *path*, replacing the file atomically.

    The document is written to a sibling temporary file, synced, then renamed
    over *path*, so readers see either the old or the new content. Missing
    parent directories are created. A symlinked *path* is written through, so
    the link survives and its target receives the new content.

    Raises:
        DocumentWriteError: If serialization or any filesystem step fails.
    """
    target = Path(path).resolve()
    tmp_name: str | None = None
    try:
        content = yaml.safe_dump(config.to_yaml_dict(), default_flow_style=False, sort_keys=False)
        target.parent.mkdir(mode=_DIR_MODE, parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=target.parent)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        os.chmod(tmp_name, _FILE_MODE)
        os.replace(tmp_name, target)
    except (OSError, yaml.YAMLError) as e:
        if tmp_name is not None:
            Path(tmp_name).unlink(missing_ok=True)
        raise DocumentWriteError(path) from e
    log.info("kubeconfig_written", path=path)
