import posixpath
import threading
from typing import Dict, Optional, Set

class InMemoryStorageProvider:
    """Same surface as LocalStorageProvider, kept in a dict. Used by tests."""

    def __init__(self, base_dir: str = "/memory"):
        self.base_dir = base_dir
        self.files: Dict[str, str] = {}
        self.dirs: Set[str] = set()
        self._lock = threading.Lock()

    def path(self, *parts: str) -> str:
        return posixpath.join(self.base_dir, *parts)

    def make_dirs(self, path: str) -> None:
        with self._lock:
            while path and path not in self.dirs:
                self.dirs.add(path)
                parent = posixpath.dirname(path)
                if parent == path:
                    break
                path = parent

    def read_text(self, path: str) -> Optional[str]:
        with self._lock:
            return self.files.get(path)

    def write_text(self, path: str, text: str) -> None:
        with self._lock:
            if posixpath.dirname(path) not in self.dirs:
                raise FileNotFoundError(path)
            self.files[path] = text

    def exists(self, path: str) -> bool:
        with self._lock:
            return path in self.files

    def delete(self, path: str) -> bool:
        with self._lock:
            return self.files.pop(path, None) is not None

    def ping(self) -> bool:
        return True
