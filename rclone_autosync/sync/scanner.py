"""Directory scanning utilities for local change detection."""

import logging
import stat
from dataclasses import dataclass, field
from pathlib import Path

from ..exceptions import ListError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileRecord:
    """Identity-relevant metadata of one file system entry."""

    name: str
    """Base name of the entry"""

    size: int
    """Size in bytes"""

    mode: int
    """Full st_mode (type and permission bits)"""

    mtime_ns: int
    """Last modification time in nanoseconds"""

    relative_path: str = field(default="", compare=False)
    """Relative path from the scan root (forward slashes, logging only)"""

    @classmethod
    def from_path(cls, entry_path: Path, base_path: Path) -> "FileRecord":
        """Create a FileRecord from a path without following symlinks.

        Args:
            entry_path: Absolute path to the entry
            base_path: Scan root for calculating the relative path

        Returns:
            FileRecord instance
        """
        entry_stat = entry_path.lstat()
        return cls(
            name=entry_path.name,
            size=entry_stat.st_size,
            mode=entry_stat.st_mode,
            mtime_ns=entry_stat.st_mtime_ns,
            relative_path=entry_path.relative_to(base_path).as_posix(),
        )


Snapshot = list[FileRecord]


class DirectoryScanner:
    """Lists every entry below a directory into a Snapshot.

    Entries are visited depth-first with each directory's children in
    lexical order, so listing an unchanged tree twice yields the same
    sequence. The scan root itself is not part of the snapshot.

    Examples:
        >>> scanner = DirectoryScanner()
        >>> snapshot = scanner.scan(Path("/sync/folder"))
        >>> [record.relative_path for record in snapshot]
        ['docs', 'docs/a.txt', 'notes.md']
    """

    def scan(self, root: Path) -> Snapshot:
        """Recursively list a local directory.

        Args:
            root: Directory to scan

        Returns:
            Snapshot with one FileRecord per file and directory

        Raises:
            ListError: If the root can't be read or a subdirectory
                can't be traversed
        """
        root = Path(root)
        try:
            if not root.is_dir():
                raise ListError(f"walk: {root}: not a directory")
        except OSError as e:
            raise ListError(f"walk: {e}") from e

        records: Snapshot = []
        self._scan_directory(root, root, records)
        logger.debug("Listed %d entries under %s", len(records), root)
        return records

    def _scan_directory(self, directory: Path, base_path: Path, records: Snapshot) -> None:
        """Append the entries of one directory, recursing into subdirectories."""
        try:
            children = sorted(directory.iterdir(), key=lambda item: item.name)
        except (FileNotFoundError, NotADirectoryError) as e:
            if directory == base_path:
                raise ListError(f"walk: {e}") from e
            # Removed or replaced by a file after it was stat'ed
            logger.debug("Directory vanished during scan: %s", directory)
            return
        except OSError as e:
            raise ListError(f"walk: {e}") from e

        for item in children:
            try:
                record = FileRecord.from_path(item, base_path)
            except FileNotFoundError:
                # Removed between listing and stat
                logger.debug("Entry vanished during scan: %s", item)
                continue
            except OSError as e:
                raise ListError(f"walk: {e}") from e

            records.append(record)
            if stat.S_ISDIR(record.mode):
                self._scan_directory(item, base_path, records)

