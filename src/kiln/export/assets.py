"""Asset handling — mirror the public directory into the export output.

Copies every file from the site's ``public/`` directory into the output
root, preserving directory structure, so ``public/favicon.ico`` is served
as ``/favicon.ico``.
"""

from __future__ import annotations

import shutil
import time
from pathlib import Path

from kiln.export.static import ExportedFile


def copy_assets(
    public_path: Path,
    output_dir: Path,
) -> tuple[ExportedFile, ...]:
    """Recursively copy static assets into *output_dir*.

    Returns an empty tuple when *public_path* does not exist.

    Args:
        public_path: Source directory (e.g., ``root/public/``).
        output_dir: Root export output directory.

    Returns:
        Tuple of :class:`ExportedFile` entries, one per copied file.

    Raises:
        OSError: If a file cannot be read or written.

    """
    if not public_path.is_dir():
        return ()

    results: list[ExportedFile] = []

    for src_file in sorted(public_path.rglob("*")):
        if not src_file.is_file():
            continue

        t0 = time.perf_counter()

        relative = src_file.relative_to(public_path)
        dest_file = output_dir / relative
        dest_file.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(src_file, dest_file)

        size = dest_file.stat().st_size
        elapsed = (time.perf_counter() - t0) * 1000

        results.append(ExportedFile(
            source_path=f"/{relative.as_posix()}",
            output_path=dest_file,
            source_type="asset",
            size_bytes=size,
            duration_ms=elapsed,
        ))

    return tuple(results)
