"""
Reporter - Generates human-readable reports from builds and manifests.
"""

import logging
import sys
from typing import Optional, TextIO

from .manifest import Manifest


class Reporter:
    """
    Generates human-readable reports from manifest data.
    """

    def __init__(
        self,
        output: Optional[TextIO] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize reporter.

        Args:
            output: Output stream (default: stdout)
            logger: Optional logger instance
        """
        self.output = output or sys.stdout
        self.logger = logger or logging.getLogger(__name__)

    def _print(self, text: str = "") -> None:
        """Print to output stream."""
        print(text, file=self.output)

    def _format_duration(self, seconds: float) -> str:
        """Format duration as human-readable string."""
        if seconds < 60:
            return f"{seconds:.1f} seconds"
        elif seconds < 3600:
            return f"{seconds / 60:.1f} minutes"
        else:
            return f"{seconds / 3600:.1f} hours"

    def report_summary(self, manifest: Manifest) -> None:
        """Print a summary of a manifest."""
        self._print("=" * 70)
        self._print("GALLERY MANIFEST SUMMARY")
        self._print("=" * 70)
        self._print()

        config = manifest.config
        self._print("Gallery:")
        self._print(f"  Name:        {config.get('projectName') or '(untitled)'}")
        self._print(f"  Layout:      {config.get('layout', 'grid')}")
        self._print(f"  Master code: {'set' if config.get('masterHash') else 'not set'}")
        self._print()

        self._print("Overall Statistics:")
        self._print(f"  Albums:      {manifest.total_albums:,}")
        self._print(f"  Images:      {manifest.total_images:,}")
        self._print(f"  Locked:      {len(manifest.locked_albums):,}")
        self._print(f"  Categories:  {len(manifest.categories):,}")
        self._print(f"  Tags:        {len(manifest.tags):,}")
        self._print()

        self._print("Albums:")
        self._print("-" * 70)
        self._print(f"{'Album':<30} {'Images':>8} {'Locked':>8}  {'Categories'}")
        self._print("-" * 70)
        for album in manifest.albums:
            self._print(
                f"{album.get('title', album.get('id', '')):<30} "
                f"{len(album.get('images', [])):>8,} "
                f"{'yes' if album.get('locked') else 'no':>8}  "
                f"{', '.join(album.get('categories', []))}"
            )
        self._print("-" * 70)
        self._print()

        if manifest.categories:
            self._print("Categories:")
            for name, cover in manifest.categories.items():
                self._print(f"  {name:<28} {cover or '(no cover)'}")
            self._print()

        if manifest.tags:
            self._print("Top Tags:")
            ranked = sorted(manifest.tags.items(), key=lambda item: (-item[1]['count'], item[0]))
            for name, info in ranked[:10]:
                self._print(f"  {name:<28} {info['count']:>6,}")
            self._print()

    def report_build(self, report) -> None:
        """
        Print the outcome of a build.

        Args:
            report: BuildReport returned by Builder.build()
        """
        self.report_summary(report.manifest)

        scan = report.scan
        derivation = report.derivation
        self._print("Build:")
        self._print(f"  Folders scanned:     {scan.folders_scanned:,}")
        self._print(f"  Duplicates dropped:  {scan.duplicates_dropped:,}")
        self._print(f"  Split collisions:    {scan.split_collisions:,}")
        self._print(f"  Assets generated:    {derivation.generated:,}")
        self._print(f"  Assets fresh:        {derivation.fresh:,}")
        self._print(f"  Asset errors:        {derivation.errors:,}")
        self._print(f"  Pages written:       {report.pages_written:,}")
        self._print(f"  Time:                {self._format_duration(report.duration_seconds)}")
        self._print()

        problems = [str(e) for e in report.config_errors]
        problems += [str(w) for w in report.warnings]
        problems += derivation.error_details
        if report.manifest_error is not None:
            problems.append(str(report.manifest_error))

        if problems:
            self._print("Problems:")
            for problem in problems:
                self._print(f"  - {problem}")
            self._print()
