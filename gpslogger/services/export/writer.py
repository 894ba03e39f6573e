"""
Export Writer

Writes the current log text to a timestamped plain-text file.
The file is written before the record is returned, so a caller that
shows a confirmation only ever confirms a file that exists.
"""

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Iterator

from gpslogger.common.config import ExportSettings
from gpslogger.common.exceptions import ExportError
from gpslogger.common.logging_setup import get_service_logger
from gpslogger.common.timestamp import format_filename_time
from gpslogger.services.logs import LogRepository, LogView, feed

logger = get_service_logger("export")


@dataclass
class ExportRecord:
    """Result of one export, kept until the user acknowledges it"""
    filename: str
    content: str
    path: Path


def generate_filename(prefix: str, extension: str, now: datetime | None = None) -> str:
    """
    Build an export filename from a prefix and the current time.

    Examples:
        generate_filename("export_", ".txt") → "export_20210827_143017_123456.txt"
    """
    return f"{prefix}{format_filename_time(now)}{extension}"


class FileWriter:
    """Durable UTF-8 writes into a single directory."""

    def __init__(self, directory: Path | str):
        self.directory = Path(directory)

    @staticmethod
    def _candidates(filename: str) -> Iterator[str]:
        yield filename
        stem, suffix = Path(filename).stem, Path(filename).suffix
        counter = 1
        while True:
            yield f"{stem}_{counter}{suffix}"
            counter += 1

    def write(self, filename: str, content: str) -> str:
        """
        Write content to a file in the export directory.

        Args:
            filename: Requested filename (no directory part)
            content: Text to write

        Returns:
            The filename actually used (suffixed if the name was taken)

        Raises:
            ExportError: If the file could not be written
        """
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            for used in self._candidates(filename):
                try:
                    with open(self.directory / used, "x", encoding="utf-8") as f:
                        f.write(content)
                        f.flush()
                except FileExistsError:
                    continue
                return used
        except OSError as e:
            raise ExportError(str(e), filename=filename) from e


class ExportWriter:
    """Refreshes the view from the store and exports its text."""

    def __init__(
        self,
        repository: LogRepository,
        view: LogView,
        writer: FileWriter,
        settings: ExportSettings | None = None,
    ):
        self.repository = repository
        self.view = view
        self.writer = writer
        self.settings = settings or ExportSettings()

    def export(self) -> ExportRecord | None:
        """
        Export the current log.

        Returns:
            The export record, or None when no log has been stored yet

        Raises:
            ExportError: If the write failed
        """
        if not feed(self.repository, self.view):
            logger.info("Nothing to export: no logs stored")
            return None

        content = self.view.text
        requested = generate_filename(self.settings.prefix, self.settings.extension)
        try:
            filename = self.writer.write(requested, content)
        except ExportError as e:
            logger.error(f"Export failed: {e}", extra={"export_file": requested})
            raise

        logger.info(
            f"Exported {len(self.view.lines)} lines to {filename}",
            extra={"export_file": filename, "lines": len(self.view.lines)},
        )
        return ExportRecord(
            filename=filename,
            content=content,
            path=self.writer.directory / filename,
        )
