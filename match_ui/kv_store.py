import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

PROGRESS_PATH = Path(__file__).with_name("progress.json")


class MemoryStore:
    def __init__(self, data: dict | None = None):
        self.data = dict(data or {})

    def get(self, key, default=None):
        return self.data.get(key, default)

    def set(self, key, value):
        # Round-trip through JSON so callers see the same shapes a file store returns.
        self.data[key] = json.loads(json.dumps(value, ensure_ascii=False))

    def delete(self, key):
        self.data.pop(key, None)


class JsonFileStore:
    """All keys live in one JSON object file; a missing or unreadable file reads as empty."""

    def __init__(self, path: Path | str | None = None):
        self.path = Path(path) if path is not None else PROGRESS_PATH

    def _read(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except Exception:
            logger.warning("Unreadable progress file %s, starting from defaults", self.path)
            return {}
        if not isinstance(data, dict):
            logger.warning("Progress file %s does not hold an object, starting from defaults", self.path)
            return {}
        return data

    def _write(self, data: dict):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")

    def get(self, key, default=None):
        return self._read().get(key, default)

    def set(self, key, value):
        data = self._read()
        data[key] = value
        self._write(data)

    def delete(self, key):
        data = self._read()
        if key in data:
            del data[key]
            self._write(data)
