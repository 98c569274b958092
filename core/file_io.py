"""
File access for repository content, saved settings and index exports.

Readers and writers are protocols so the CLI and the settings layer can be tested
with the in-memory mocks at the bottom of this module.
"""

from contextlib import contextmanager
from dataclasses import asdict
import json
import os
from pathlib import Path
from typing import Callable, Iterable, Iterator, Protocol, TextIO

from core.exceptions import (
    FileReadError,
    FileWriteError,
    InvalidFilePathError,
)
from core.models import FileIndexEntry

# Bytes inspected when sniffing for binary content
BINARY_SNIFF_BYTES = 1024


class FileReader(Protocol):
    def read_file(self, file_path: Path) -> str:
        """
        Return the UTF-8 text of `file_path`.

        Missing and binary files read as an empty string.
        """


class FileWriter(Protocol):
    def write_file(self, data: str, mode: str = "w") -> None:
        """Write `data` with the given mode ("w" truncates, "a" appends)."""

    def append_index_entries(
        self, entries: Iterable[FileIndexEntry], mode: str = "a"
    ) -> None:
        """Write one JSON record per index entry."""


def index_entry_to_record(entry: FileIndexEntry) -> dict:
    """
    Convert an index entry to a JSON-serializable dictionary.

    Enum fields come out as their string values, reasons as a list and
    `last_modified` as an ISO 8601 timestamp.
    """
    record = asdict(entry)
    record["importance"]["reasons"] = list(entry.importance.reasons)
    record["last_modified"] = entry.last_modified.isoformat()
    return record


class FilesystemFileReader:
    def read_file(self, file_path: Path) -> str:
        """
        Read a text file from disk.

        Undecodable bytes are dropped.

        Args:
            file_path: The file to read.

        Returns:
            The file content, or "" when the file is missing or binary.

        Raises:
            FileReadError: If the file exists but cannot be read.
        """
        if not file_path.is_file() or self._is_binary_file(file_path):
            return ""

        try:
            with file_path.open("r", encoding="utf-8", errors="ignore") as f:
                return f.read()
        except OSError as e:
            raise FileReadError(
                message=f"Failed to read file: {file_path}",
                file_path=str(file_path),
                original_exception=e,
            ) from e

    def _is_binary_file(self, file_path: Path) -> bool:
        # A null byte near the start means images, fonts, archives and the like.
        # Unreadable files are treated as binary so they are skipped.
        try:
            with open(file_path, "rb") as f:
                return b"\0" in f.read(BINARY_SNIFF_BYTES)
        except OSError:
            return True


class FilesystemFileWriter:
    """
    Writes text and JSONL exports to a single file.

    Attributes:
        file_path: Destination file. Writes fail until it is set.
    """

    def __init__(self, file_path: Path | None = None):
        self.file_path = file_path

    @classmethod
    def from_path(cls, file_path: Path) -> "FilesystemFileWriter":
        """
        Create a writer after checking that `file_path` can be created.

        Raises:
            InvalidFilePathError: If the parent directory is missing or read-only.
        """
        parent = file_path.parent
        if not parent.exists():
            raise InvalidFilePathError(
                message=f"Parent directory does not exist: {parent}",
                file_path=str(file_path),
            )
        if not os.access(parent, os.W_OK):
            raise InvalidFilePathError(
                message=f"Parent directory is not writable: {parent}",
                file_path=str(file_path),
            )

        return cls(file_path)

    def write_file(self, data: str, mode: str = "w") -> None:
        with self._open(mode, "Failed to write to file") as f:
            f.write(data)

    def append_index_entries(
        self, entries: Iterable[FileIndexEntry], mode: str = "a"
    ) -> None:
        """
        Export index entries as JSON lines, keeping their order.

        Pass mode="w" to replace an earlier export instead of extending it.

        Raises:
            InvalidFilePathError: If no file path is set.
            FileWriteError: If the file cannot be written.
        """
        with self._open(mode, "Failed to write index entries to file") as f:
            for entry in entries:
                f.write(json.dumps(index_entry_to_record(entry)) + "\n")

    @contextmanager
    def _open(self, mode: str, failure: str) -> Iterator[TextIO]:
        if self.file_path is None:
            raise InvalidFilePathError("No file path set. Use from_path() first.")

        try:
            with open(self.file_path, mode, encoding="utf-8") as f:
                yield f
        except OSError as e:
            raise FileWriteError(
                message=f"{failure}: {self.file_path}",
                file_path=str(self.file_path),
                original_exception=e,
            ) from e


class MockFileReader:
    """
    In-memory FileReader for tests.

    `return_value` wins over `read_file_fn`; with neither, every file reads as "".
    Requested paths are recorded in `read_file_calls`.
    """

    def __init__(
        self,
        return_value: str | None = None,
        read_file_fn: Callable[[Path], str] | None = None,
    ):
        self.return_value = return_value
        self.read_file_fn = read_file_fn
        self.read_file_calls: list[Path] = []

    def read_file(self, file_path: Path) -> str:
        self.read_file_calls.append(file_path)
        if self.return_value is not None:
            return self.return_value
        if self.read_file_fn is not None:
            return self.read_file_fn(file_path)
        return ""


class MockFileWriter:
    """
    In-memory FileWriter for tests.

    Every call is recorded. With `store_written_data=True` the text lands in
    `written_data` and exported entries in `written_records`, honoring the
    truncate and append modes.
    """

    def __init__(self, store_written_data: bool = False):
        self.store_written_data = store_written_data

        self.write_file_calls: list[tuple[str, str]] = []
        self.append_index_entries_calls: list[tuple[list[FileIndexEntry], str]] = []

        self.written_data = ""
        self.written_records: list[dict] = []

    def write_file(self, data: str, mode: str = "w") -> None:
        self.write_file_calls.append((data, mode))
        if not self.store_written_data:
            return
        self.written_data = data if mode == "w" else self.written_data + data

    def append_index_entries(
        self, entries: Iterable[FileIndexEntry], mode: str = "a"
    ) -> None:
        entries = list(entries)
        self.append_index_entries_calls.append((entries, mode))
        if not self.store_written_data:
            return
        records = [index_entry_to_record(e) for e in entries]
        self.written_records = records if mode == "w" else self.written_records + records
