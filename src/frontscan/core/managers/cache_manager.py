# src/frontscan/core/managers/cache_manager.py
import logging
import time
from pathlib import Path
from typing import Callable, Dict, Optional, Union

from pydantic import BaseModel, ValidationError

from auditor.model import ConsolidatedResult, FileFormat, compute_digest
from frontscan.core.utils.path_utils import PathUtils
from frontscan.model import CacheSettings

logger = logging.getLogger(__name__)


def cache_key(content: Union[str, bytes], file_format: Optional[FileFormat] = None) -> str:
    """
    Digest identifying a cached result. The format is folded into the key, so
    identical bytes scanned as markup and as a stylesheet get separate entries.
    """
    if file_format is None:
        return compute_digest(content)
    raw = content.encode("utf-8") if isinstance(content, str) else content
    return compute_digest(file_format.value.encode("utf-8") + b"\0" + raw)


class CacheEntry(BaseModel):
    digest: str
    payload: ConsolidatedResult
    created_at: float
    last_accessed: float
    access_count: int = 0
    expires_at: float
    compute_ms: float = 0.0


class CacheMetadata(BaseModel):
    hits: int = 0
    misses: int = 0
    saved_time_ms: float = 0.0


class ScanCache:
    """
    Content-addressed, two-tier cache of scan results.

    Keys are SHA-256 digests of the raw content and its format, so the same
    bytes under a different path hit the same entry. The memory tier is bounded and short
    lived; the disk tier keeps one `<digest>.json` file per entry and is
    only ever trimmed by TTL or `clear()`.

    No locking is done: concurrent writers of the same digest are unordered
    and the last write wins.
    """

    def __init__(
            self,
            settings: Optional[CacheSettings] = None,
            cache_dir: Optional[Union[str, Path]] = None,
            clock: Callable[[], float] = time.time,
    ):
        self.settings = settings or CacheSettings()
        self.cache_dir = PathUtils.get_cache_root(cache_dir or self.settings.dir)
        self.clock = clock

        self._memory: Dict[str, CacheEntry] = {}
        self._disk: Dict[str, Path] = {}
        self._metadata = CacheMetadata()

        self._initialize_disk_cache()

    # --- DISK TIER ---

    def _initialize_disk_cache(self) -> None:
        """Indexes the persisted entries and purges expired or unreadable ones."""
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        now = self.clock()
        purged = 0

        for path in sorted(self.cache_dir.glob("*.json")):
            entry = self._load_file(path)
            if entry is None or self._disk_expired(entry, now):
                self._remove_file(path)
                purged += 1
                continue
            self._disk[entry.digest] = path

        logger.debug(f"Cache index loaded: {len(self._disk)} entries, {purged} purged ({self.cache_dir})")

    def _entry_path(self, digest: str) -> Path:
        return self.cache_dir / f"{digest}.json"

    def _disk_expired(self, entry: CacheEntry, now: float) -> bool:
        return now - entry.created_at > self.settings.disk_ttl_s

    def _load_file(self, path: Path) -> Optional[CacheEntry]:
        """Reads one entry file. Corrupt or foreign files yield None."""
        try:
            entry = CacheEntry.model_validate_json(path.read_text(encoding="utf-8"))
        except (OSError, ValueError, ValidationError) as e:
            logger.warning(f"Discarding unreadable cache file {path.name}: {e}")
            return None
        if entry.digest != path.stem:
            logger.warning(f"Discarding cache file {path.name}: digest mismatch")
            return None
        return entry

    def _remove_file(self, path: Path) -> None:
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning(f"Could not remove cache file {path}: {e}")

    def _read_disk(self, digest: str, now: float) -> Optional[CacheEntry]:
        path = self._disk.get(digest)
        if path is None:
            return None

        entry = self._load_file(path) if path.exists() else None
        if entry is None or self._disk_expired(entry, now):
            self._remove_file(path)
            self._disk.pop(digest, None)
            return None
        return entry

    def _write_disk(self, entry: CacheEntry) -> None:
        path = self._entry_path(entry.digest)
        try:
            path.write_text(entry.model_dump_json(by_alias=True), encoding="utf-8")
            self._disk[entry.digest] = path
        except OSError as e:
            logger.warning(f"Could not persist cache entry {entry.digest[:12]}: {e}")

    # --- MEMORY TIER ---

    def _prune_memory(self) -> None:
        """Evicts least-used, then least-recently-used entries until within capacity."""
        overflow = len(self._memory) - self.settings.max_memory_entries
        if overflow <= 0:
            return
        victims = sorted(self._memory.values(), key=lambda e: (e.access_count, e.last_accessed))
        for entry in victims[:overflow]:
            del self._memory[entry.digest]

    def _hit(self, entry: CacheEntry, file_name: Optional[str]) -> ConsolidatedResult:
        self._metadata.hits += 1
        self._metadata.saved_time_ms += entry.compute_ms
        update = {"file_name": file_name} if file_name else {}
        return entry.payload.model_copy(update=update, deep=True)

    # --- PUBLIC API ---

    async def get(
            self,
            content: Union[str, bytes],
            file_name: Optional[str] = None,
            file_format: Optional[FileFormat] = None,
    ) -> Optional[ConsolidatedResult]:
        """
        Looks up the result for `content`: memory first, then disk.

        A disk hit is promoted into memory. The returned result is a copy with
        `file_name` rewritten to the caller's path when one is given.
        """
        digest = cache_key(content, file_format)
        now = self.clock()

        entry = self._memory.get(digest)
        if entry is not None:
            if now < entry.expires_at:
                entry.last_accessed = now
                entry.access_count += 1
                return self._hit(entry, file_name)
            del self._memory[digest]

        entry = self._read_disk(digest, now)
        if entry is not None:
            promoted = entry.model_copy(update={
                "last_accessed": now,
                "access_count": 1,
                "expires_at": now + self.settings.memory_ttl_s,
            })
            self._memory[digest] = promoted
            self._prune_memory()
            return self._hit(promoted, file_name)

        self._metadata.misses += 1
        return None

    async def set(
            self,
            content: Union[str, bytes],
            result: ConsolidatedResult,
            compute_ms: float = 0.0,
            file_format: Optional[FileFormat] = None,
    ) -> None:
        """Stores `result` in both tiers. `compute_ms` is the cost of producing it."""
        digest = cache_key(content, file_format)
        now = self.clock()
        entry = CacheEntry(
            digest=digest,
            payload=result.model_copy(deep=True),
            created_at=now,
            last_accessed=now,
            access_count=0,
            expires_at=now + self.settings.memory_ttl_s,
            compute_ms=compute_ms,
        )
        self._memory[digest] = entry
        self._write_disk(entry)
        self._prune_memory()

    def metadata(self) -> CacheMetadata:
        return self._metadata.model_copy()

    def clear(self) -> None:
        """Empties both tiers and resets the counters."""
        self._memory.clear()
        for path in list(self._disk.values()):
            self._remove_file(path)
        self._disk.clear()
        self._metadata = CacheMetadata()

    @property
    def memory_size(self) -> int:
        return len(self._memory)

    @property
    def disk_size(self) -> int:
        return len(self._disk)

    def contains_in_memory(self, content: Union[str, bytes], file_format: Optional[FileFormat] = None) -> bool:
        return cache_key(content, file_format) in self._memory
