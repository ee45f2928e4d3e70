"""View folder reading templates from a directory on disk."""

from __future__ import annotations

from pathlib import Path

from viewchain.errors import ViewSourceError

from .base import join_path, normalize_path


class FileSystemViewFolder:
    """Serve template sources stored below ``root``.

    Parameters
    ----------
    root : Path
        Directory that virtual paths are resolved against. Paths that would
        escape the directory (for example through ``..``) never exist.
    encoding : str, optional
        Text encoding used to decode template files. Defaults to ``"utf-8"``.
    """

    def __init__(self, root: Path | str, *, encoding: str = "utf-8") -> None:
        self.root = Path(root)
        self.encoding = encoding

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self.root)!r})"

    def _resolve(self, path: str) -> Path | None:
        """Map a virtual path onto the filesystem.

        Returns ``None`` for paths outside the root and for names the platform
        cannot represent (for example, names containing a NUL byte).
        """
        try:
            root = self.root.resolve()
            candidate = (root / normalize_path(path)).resolve()
        except (OSError, ValueError):
            return None
        if candidate != root and root not in candidate.parents:
            return None
        return candidate

    def has_view(self, path: str) -> bool:
        target = self._resolve(path)
        return target is not None and target.is_file()

    def get_view_source(self, path: str) -> str:
        target = self._resolve(path)
        if target is None:
            msg = f"View path '{path}' escapes the view folder root or is not a valid path."
            raise ViewSourceError(msg)
        try:
            return target.read_text(encoding=self.encoding)
        except OSError as exc:
            msg = f"Unable to read view '{normalize_path(path)}' from {self.root}: {exc}"
            raise ViewSourceError(msg) from exc

    def list_views(self, path: str) -> list[str]:
        target = self._resolve(path)
        if target is None or not target.is_dir():
            return []
        prefix = normalize_path(path)
        return sorted(
            join_path(prefix, entry.name) for entry in target.iterdir() if entry.is_file()
        )


__all__ = ["FileSystemViewFolder"]
