"""Asset copying — mirror the build output's asset tree into the export.

Every regular file below the asset root lands at the same relative
location under the export directory, so ``build/output/css/site.css``
becomes ``dist/css/site.css``.
"""

from __future__ import annotations

import logging
import shutil
import time
from pathlib import Path

from tabby._errors import ExportError
from tabby.export.static import ExportedFile

logger = logging.getLogger("tabby.export")


def copy_assets(
    asset_root: Path,
    dist_dir: Path,
) -> tuple[ExportedFile, ...]:
    """Recursively copy every file under *asset_root* into *dist_dir*.

    Args:
        asset_root: Source directory (e.g., ``build/output/``).
        dist_dir: Root export directory.

    Returns:
        Tuple of :class:`ExportedFile` entries, one per copied file.
        Empty when *asset_root* does not exist.

    Raises:
        ExportError: If any file cannot be copied.

    """
    if not asset_root.is_dir():
        logger.warning("asset directory %s not found, no assets exported", asset_root)
        return ()

    results: list[ExportedFile] = []

    for src_file in sorted(asset_root.rglob("*")):
        if not src_file.is_file():
            continue

        t0 = time.perf_counter()

        relative = src_file.relative_to(asset_root)
        dest_file = dist_dir / relative
        try:
            dest_file.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(src_file, dest_file)
            size = dest_file.stat().st_size
        except OSError as exc:
            msg = f"Failed to copy asset {str(src_file)!r}: {exc}"
            raise ExportError(msg) from exc

        elapsed = (time.perf_counter() - t0) * 1000
        logger.debug("copied %s", relative.as_posix())

        results.append(ExportedFile(
            source_path=relative.as_posix(),
            output_path=dest_file,
            source_type="asset",
            size_bytes=size,
            duration_ms=elapsed,
        ))

    return tuple(results)
