"""Infrastructure: variable sets persisted in a single JSON document.

Layout on disk::

    {
      "<project>": {
        "<environment>": {"KEY": "value"}
      }
    }

Rules
-----
* A missing file reads as an empty store.
* Every write rewrites the whole document (two-space indent, trailing
  newline).
* ``OSError`` and malformed JSON are re-raised as
  :class:`~lecoffre.exceptions.StorageError`.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path

from lecoffre.config import Settings
from lecoffre.exceptions import StorageError

logger = logging.getLogger(__name__)

StoreData = dict[str, dict[str, dict[str, str]]]


class JsonStorage:
    """File-backed implementation of :class:`~lecoffre.core.protocols.Storage`."""

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    # -- raw document -------------------------------------------------------

    def _read(self) -> StoreData:
        try:
            content = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as exc:
            raise StorageError(f"Cannot read {self._path}: {exc.strerror}") from exc

        try:
            data = json.loads(content)
        except json.JSONDecodeError as exc:
            raise StorageError(
                f"Storage file {self._path} is not valid JSON",
                hint="Fix or remove the file, or point LECOFFRE_STORAGE_PATH elsewhere.",
            ) from exc
        if not isinstance(data, dict):
            raise StorageError(f"Storage file {self._path} does not hold a JSON object")
        return data

    def _write(self, data: StoreData) -> None:
        logger.debug("Writing %d project(s) to %s", len(data), self._path)
        try:
            self._path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
        except OSError as exc:
            raise StorageError(f"Cannot write {self._path}: {exc.strerror}") from exc

    # -- Storage protocol ---------------------------------------------------

    def get_projects(self) -> list[str]:
        return list(self._read())

    def get_environments(self, project: str) -> list[str]:
        return list(self._read().get(project, {}))

    def get_variables(self, project: str, env: str) -> dict[str, str]:
        return dict(self._read().get(project, {}).get(env, {}))

    def set_variables(self, project: str, env: str, variables: Mapping[str, str]) -> None:
        data = self._read()
        data.setdefault(project, {})[env] = dict(variables)
        self._write(data)

    def delete_environment(self, project: str, env: str) -> None:
        data = self._read()
        environments = data.get(project)
        if environments is None:
            return
        environments.pop(env, None)
        if not environments:
            del data[project]
        self._write(data)

    def delete_project(self, project: str) -> None:
        data = self._read()
        data.pop(project, None)
        self._write(data)


def get_storage(settings: Settings) -> JsonStorage:
    """Build the storage backend configured by *settings*."""
    return JsonStorage(settings.storage_path)
