"""Publication through the Actions runner: step outputs, PATH and failure status."""

from __future__ import annotations

import os
import sys
import uuid
from pathlib import Path
from typing import MutableMapping, TextIO

from .logging_setup import escape_data


class ActionsHost:
    def __init__(
        self,
        environ: MutableMapping[str, str] | None = None,
        stdout: TextIO | None = None,
    ) -> None:
        self.environ = os.environ if environ is None else environ
        self.stdout = stdout or sys.stdout
        self.exit_code = 0

    def _env_file(self, name: str) -> Path | None:
        value = (self.environ.get(name) or "").strip()
        if not value:
            return None
        path = Path(value)
        if not path.exists():
            raise FileNotFoundError(f"Unable to find environment file {name} at {value}")
        return path

    def _issue(self, command: str, message: str) -> None:
        self.stdout.write(f"::{command}::{escape_data(message)}\n")
        self.stdout.flush()

    def set_output(self, name: str, value: str) -> None:
        target = self._env_file("GITHUB_OUTPUT")
        if target is None:
            self.stdout.write(f"\n::set-output name={name}::{escape_data(value)}\n")
            self.stdout.flush()
            return

        delimiter = f"ghadelimiter_{uuid.uuid4()}"
        if delimiter in name or delimiter in value:
            raise ValueError(f"Unexpected input: output {name} contains the delimiter {delimiter}")
        with target.open("a", encoding="utf-8") as fh:
            fh.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")

    def add_path(self, directory: str | os.PathLike[str]) -> None:
        entry = str(directory)
        target = self._env_file("GITHUB_PATH")
        if target is None:
            self._issue("add-path", entry)
        else:
            with target.open("a", encoding="utf-8") as fh:
                fh.write(f"{entry}\n")

        current = self.environ.get("PATH", "")
        self.environ["PATH"] = f"{entry}{os.pathsep}{current}" if current else entry

    def set_failed(self, message: str) -> None:
        self.exit_code = 1
        self._issue("error", message)
