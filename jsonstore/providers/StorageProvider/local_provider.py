import os
import tempfile
from pathlib import Path
from typing import Optional

class LocalStorageProvider:
    """
    Text storage on the local filesystem, rooted at `base_dir`.

    Every write goes to a temp file in the target's own directory and is then
    renamed over the target, so readers see either the old or the new content.
    """
    def __init__(self, base_dir: str):
        self.base_dir = Path(base_dir)

    def path(self, *parts: str) -> str:
        return str(self.base_dir.joinpath(*parts))

    def make_dirs(self, path: str) -> None:
        Path(path).mkdir(parents=True, exist_ok=True)

    def read_text(self, path: str) -> Optional[str]:
        try:
            # undecodable bytes surface later as a JSON parse failure
            return Path(path).read_text(encoding="utf-8", errors="replace")
        except FileNotFoundError:
            return None

    def write_text(self, path: str, text: str) -> None:
        target = Path(path)
        fd, tmp = tempfile.mkstemp(dir=str(target.parent), prefix=f".{target.name}.", suffix=".tmp")
        try:
            with open(fd, "w", encoding="utf-8") as f:
                f.write(text)
            os.replace(tmp, target)
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise

    def exists(self, path: str) -> bool:
        return Path(path).is_file()

    def delete(self, path: str) -> bool:
        try:
            Path(path).unlink()
            return True
        except FileNotFoundError:
            return False

    def ping(self) -> bool:
        self.base_dir.mkdir(parents=True, exist_ok=True)
        return os.access(self.base_dir, os.W_OK)
