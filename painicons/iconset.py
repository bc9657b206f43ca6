"""macOS .iconset staging and .icns packing via ``iconutil``.

``iconutil`` only exists on macOS. Staging works everywhere; packing is
skipped on other hosts and reported as a deferred step.
"""
import logging
import shutil
import subprocess
from pathlib import Path
from typing import List, Tuple

from painicons.errors import ExternalToolError
from painicons.scanner import IconSet
from painicons.targets import (
    ICONUTIL, ConversionTarget, Platform, SkippedPlatformStep, TargetResult, TargetState,
)

logger = logging.getLogger(__name__)

# iconutil file name -> pixel size it must contain
ICONSET_NAMES = [
    ("icon_16x16.png", 16),
    ("icon_16x16@2x.png", 32),
    ("icon_32x32.png", 32),
    ("icon_32x32@2x.png", 64),
    ("icon_128x128.png", 128),
    ("icon_128x128@2x.png", 256),
    ("icon_256x256.png", 256),
    ("icon_256x256@2x.png", 512),
    ("icon_512x512.png", 512),
    ("icon_512x512@2x.png", 1024),
]


def iconset_layout(icon_set: IconSet) -> List[Tuple[str, int]]:
    """The (file name, resolution) pairs *icon_set* can fill."""
    present = set(icon_set.resolutions)
    return [(name, size) for name, size in ICONSET_NAMES if size in present]


def iconutil_command(staging_dir, output_path) -> tuple:
    return (ICONUTIL, "-c", "icns", str(staging_dir), "-o", str(output_path))


def stage_iconset(icon_set: IconSet, staging_dir) -> Path:
    """Copy the sources into a fresh ``.iconset`` directory under iconutil names."""
    staging_dir = Path(staging_dir)
    layout = iconset_layout(icon_set)
    if not layout:
        raise ValueError(f"icon set '{icon_set.identity.name}' has no size iconutil accepts")

    for resolution in icon_set.resolutions:
        if not any(size == resolution for _, size in layout):
            logger.debug("%s: %dx%d has no iconset slot, skipping", icon_set.identity.name,
                         resolution, resolution)

    if staging_dir.exists():
        shutil.rmtree(staging_dir)
    staging_dir.mkdir(parents=True)
    for name, size in layout:
        (staging_dir / name).write_bytes(icon_set.get(size).data)
    logger.info("%s: staged %d file(s) in %s", icon_set.identity.name, len(layout), staging_dir)
    logger.debug("%s: %s", icon_set.identity.name, TargetState.STAGED.value)
    return staging_dir


def pack_icns(icon_set: IconSet, staging_dir, target: ConversionTarget) -> TargetResult:
    """Stage *icon_set* then run iconutil, or defer when it is unavailable."""
    identity = icon_set.identity.name
    output_path = Path(target.output_path)
    if not iconset_layout(icon_set):
        # drop any tree left by an earlier, larger set
        if Path(staging_dir).exists():
            shutil.rmtree(staging_dir)
        logger.warning("%s: no source size fits an iconset (have %s); skipping .icns", identity,
                       ", ".join(str(r) for r in icon_set.resolutions))
        return TargetResult(identity, Platform.ICNS, TargetState.NOTHING_TO_STAGE, output_path)

    staging_dir = stage_iconset(icon_set, staging_dir)

    tool = target.tool_path()
    if tool is None:
        result = SkippedPlatformStep(
            identity, Platform.ICNS, TargetState.AWAITING_EXTERNAL_TOOL, output_path,
            staging_dir=staging_dir, command=iconutil_command(staging_dir, output_path))
        logger.warning("%s: %s not found; leaving %s for a macOS host", identity, ICONUTIL, staging_dir)
        return result

    output_path.parent.mkdir(parents=True, exist_ok=True)
    cmd = (tool,) + iconutil_command(staging_dir, output_path)[1:]
    logger.debug("Running %s", " ".join(cmd))
    proc = subprocess.run(cmd, capture_output=True, text=True)
    if proc.returncode != 0:
        raise ExternalToolError(cmd, proc.returncode, proc.stderr)
    logger.info("%s: wrote %s", identity, output_path)
    return TargetResult(identity, Platform.ICNS, TargetState.PACKED, output_path, staging_dir=staging_dir)
