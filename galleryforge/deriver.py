"""
AssetDeriver - Produces cached thumbnails and split halves on a worker pool.
"""

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor, wait
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, Optional, Set

from .derivation_stats import DerivationStats
from .errors import DerivationFailure
from .thumbnail_generator import ThumbnailGenerator

THUMBNAIL_DIR = 'thumbnails'
SPLIT_DIR = 'split'


class DerivationOutcome(Enum):
    """What happened to one derived asset."""
    GENERATED = 'generated'
    FRESH = 'fresh'
    FAILED = 'failed'


@dataclass
class DerivedPaths:
    """Manifest paths of an image's derived assets, relative to the output dir."""
    thumb: str
    src_a: str
    src_b: str


def thumbnail_rel_path(album_id: str, name: str) -> str:
    return f"{THUMBNAIL_DIR}/{album_id}/{name}"


def split_rel_paths(album_id: str, name: str) -> tuple:
    base = Path(name).stem
    return (
        f"{SPLIT_DIR}/{album_id}/{base}_a.jpg",
        f"{SPLIT_DIR}/{album_id}/{base}_b.jpg",
    )


def is_fresh(source: Path, target: Path) -> bool:
    """A derived file is fresh if it exists and is not older than its source."""
    try:
        return target.stat().st_mtime >= source.stat().st_mtime
    except FileNotFoundError:
        return False


class AssetDeriver:
    """
    Derives a thumbnail and a two-part split for each source image.

    Paths are handed back immediately; the files themselves are written by
    tasks on a thread pool. Every task is tracked in a pending set and
    join() is the single point where the build waits for all of them.
    Use as a context manager so the pool is always joined and shut down.
    """

    def __init__(
        self,
        output_dir: Path,
        thumbnail_generator: ThumbnailGenerator,
        workers: Optional[int] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize asset deriver.

        Args:
            output_dir: Directory that derived paths are relative to
            thumbnail_generator: Generator that writes the image files
            workers: Maximum worker threads (None lets the executor decide)
            logger: Optional logger instance
        """
        self.output_dir = Path(output_dir)
        self.thumb_gen = thumbnail_generator
        self.logger = logger or logging.getLogger(__name__)
        self.stats = DerivationStats()
        self.outcomes: Dict[str, DerivationOutcome] = {}
        self._executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix='derive')
        self._pending: Set[Future] = set()
        self._lock = threading.Lock()

    def __enter__(self) -> 'AssetDeriver':
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def derive(self, source: Path, album_id: str, name: str) -> DerivedPaths:
        """
        Schedule derivation of the assets for one image.

        Stale or missing assets are regenerated on the pool; fresh ones are
        left alone. Returns without waiting for any task.

        Args:
            source: Path of the source image
            album_id: Album the image is attributed to (namespaces the output)
            name: Image filename within the album

        Returns:
            DerivedPaths for the manifest
        """
        thumb = thumbnail_rel_path(album_id, name)
        src_a, src_b = split_rel_paths(album_id, name)

        thumb_target = self.output_dir / thumb
        if is_fresh(source, thumb_target):
            self._record_fresh(thumb)
        else:
            self._submit(
                thumb,
                source,
                lambda: self.thumb_gen.make_thumbnail(source, thumb_target),
            )

        left_target = self.output_dir / src_a
        right_target = self.output_dir / src_b
        if is_fresh(source, left_target) and is_fresh(source, right_target):
            self._record_fresh(src_a)
        else:
            self._submit(
                src_a,
                source,
                lambda: self.thumb_gen.make_split(source, left_target, right_target),
            )

        return DerivedPaths(thumb=thumb, src_a=src_a, src_b=src_b)

    @property
    def pending_count(self) -> int:
        with self._lock:
            return len(self._pending)

    def join(self) -> DerivationStats:
        """Wait until every submitted task has finished."""
        while True:
            with self._lock:
                pending = set(self._pending)
            if not pending:
                break
            self.logger.debug(f"Waiting for {self.stats.pending_count} derivation tasks")
            wait(pending)
            with self._lock:
                self._pending -= pending

        self.logger.info(
            f"Derivation complete: {self.stats.generated} generated, "
            f"{self.stats.fresh} fresh, {self.stats.errors} errors "
            f"({self.stats.elapsed_seconds:.1f}s, {self.stats.rate_per_second:.1f}/sec)"
        )
        return self.stats

    def close(self) -> None:
        """Join all tasks and release the worker pool."""
        self.join()
        self._executor.shutdown(wait=True)

    def _record_fresh(self, key: str) -> None:
        self.logger.debug(f"Fresh: {key}")
        with self._lock:
            self.stats.fresh += 1
            self.outcomes[key] = DerivationOutcome.FRESH

    def _submit(self, key: str, source: Path, work: Callable[[], object]) -> None:
        with self._lock:
            self.stats.submitted += 1
            future = self._executor.submit(self._run, key, source, work)
            self._pending.add(future)

    def _run(self, key: str, source: Path, work: Callable[[], object]) -> DerivationOutcome:
        try:
            self.logger.debug(f"Generating: {key}")
            work()
        except Exception as e:
            failure = DerivationFailure(str(source), key, str(e))
            self.logger.error(str(failure))
            with self._lock:
                self.stats.errors += 1
                self.stats.error_details.append(str(failure))
                self.outcomes[key] = DerivationOutcome.FAILED
            return DerivationOutcome.FAILED

        with self._lock:
            self.stats.generated += 1
            self.outcomes[key] = DerivationOutcome.GENERATED
        return DerivationOutcome.GENERATED
