"""
Secret file resolution for kubecheck settings.

Webhook URLs and probe URLs often embed tokens or basic auth credentials,
so deployments mount them as files (Docker / Kubernetes secrets) and point
``KUBECHECK_<SETTING>_FILE`` at them. Only kubecheck's own variables are
resolved; the rest of the environment is left alone.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List, Mapping, MutableMapping, Optional

logger = logging.getLogger(__name__)

SECRET_ENV_PREFIX = "KUBECHECK_"
SECRET_FILE_SUFFIX = "_FILE"


def _read_secret(key: str, file_path: str) -> Optional[str]:
    try:
        return Path(file_path).read_text(encoding="utf-8").strip()
    except FileNotFoundError as exc:
        event = "env.secret_file.missing"
        error = str(exc)
    except (OSError, UnicodeDecodeError) as exc:
        event = "env.secret_file.load_failed"
        error = str(exc)

    logger.warning(event, extra={"key": key, "path": file_path, "error": error})
    return None


def load_secret_file_variables(
    environ: Optional[MutableMapping[str, str]] = None,
    prefix: str = SECRET_ENV_PREFIX,
) -> List[str]:
    """
    Expose ``<prefix>NAME_FILE`` secrets as ``<prefix>NAME`` variables.

    A variable that is already set wins over its file. Unreadable files are
    logged and skipped.

    Returns:
        The variable names that were populated from files.
    """
    environ = os.environ if environ is None else environ
    candidates: Mapping[str, str] = dict(environ)
    resolved: List[str] = []

    for key, file_path in candidates.items():
        if not (key.startswith(prefix) and key.endswith(SECRET_FILE_SUFFIX)):
            continue

        target_key = key[: -len(SECRET_FILE_SUFFIX)]
        if not file_path or environ.get(target_key):
            continue

        value = _read_secret(key, file_path)
        if value is not None:
            environ[target_key] = value
            resolved.append(target_key)

    return resolved
