from __future__ import annotations

import json
import os
import tempfile
from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass
from pathlib import Path


@dataclass(frozen=True)
class Credential:
    access_token: str
    refresh_token: str


class CredentialStore(ABC):
    """Holds the current credential pair for one session.

    Writes replace the whole pair in a single assignment, so a reader never
    observes an access token from one pair next to a refresh token from another.
    """

    @abstractmethod
    def get(self) -> Credential | None:
        raise NotImplementedError

    @abstractmethod
    def set(self, credential: Credential) -> None:
        raise NotImplementedError

    @abstractmethod
    def clear(self) -> None:
        raise NotImplementedError


class MemoryCredentialStore(CredentialStore):
    def __init__(self, credential: Credential | None = None) -> None:
        self._credential = credential

    def get(self) -> Credential | None:
        return self._credential

    def set(self, credential: Credential) -> None:
        self._credential = credential

    def clear(self) -> None:
        self._credential = None


class FileCredentialStore(CredentialStore):
    def __init__(self, path: str | Path = ".credentials.json") -> None:
        self._path = Path(path)

    def get(self) -> Credential | None:
        payload = self._read()
        if payload is None:
            return None
        return Credential(**payload)

    def set(self, credential: Credential) -> None:
        self._write(asdict(credential))

    def clear(self) -> None:
        if self._path.exists():
            self._path.unlink()

    def _read(self) -> dict | None:
        if not self._path.exists():
            return None

        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as error:
            raise RuntimeError("Credential store file is not valid JSON.") from error
        if not isinstance(raw, dict) or set(raw) != {"access_token", "refresh_token"}:
            raise RuntimeError(
                "Credential store file is invalid; expected access_token and refresh_token."
            )
        return raw

    def _write(self, payload: dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(
            prefix=f"{self._path.name}.",
            suffix=".tmp",
            dir=self._path.parent,
        )
        tmp_path = Path(tmp_name)

        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(payload, handle, indent=2, sort_keys=True)
            os.replace(tmp_path, self._path)
        finally:
            if tmp_path.exists():
                tmp_path.unlink()
