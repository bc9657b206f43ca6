"""Discover the PNG sources for each icon identity.

Sources live in a single directory and are named ``<identity>_<N>x<N>.png``.
Every resolution that is present is read as raw bytes; nothing is decoded
beyond the header check that the pixel size matches the filename.
"""
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Sequence, Tuple

from PIL import Image, UnidentifiedImageError

from painicons.errors import MissingSourceError, SourceDimensionError

logger = logging.getLogger(__name__)

# Sizes the two platforms expect between them, smallest first.
DEFAULT_RESOLUTIONS = (16, 32, 48, 64, 128, 256, 512)


@dataclass(frozen=True)
class Identity:
    name: str
    purpose: str = ""


@dataclass(frozen=True)
class SourceImage:
    resolution: int
    path: Path
    data: bytes


@dataclass
class IconSet:
    """One identity's rasters, keyed by unique resolution in ascending order."""

    identity: Identity
    images: List[SourceImage] = field(default_factory=list)

    def __post_init__(self):
        resolutions = [img.resolution for img in self.images]
        if len(set(resolutions)) != len(resolutions):
            raise ValueError(f"duplicate resolutions in icon set '{self.identity.name}'")
        self.images.sort(key=lambda img: img.resolution)

    @property
    def resolutions(self) -> List[int]:
        return [img.resolution for img in self.images]

    def get(self, resolution: int):
        for img in self.images:
            if img.resolution == resolution:
                return img
        return None

    def __len__(self):
        return len(self.images)


def source_filename(identity_name: str, resolution: int) -> str:
    return f"{identity_name}_{resolution}x{resolution}.png"


def _check_dimensions(path: Path, resolution: int) -> None:
    try:
        with Image.open(path) as im:
            fmt = im.format
            size = im.size
    except (UnidentifiedImageError, OSError) as e:
        logger.debug("Could not identify %s: %s", path, e)
        raise SourceDimensionError(path, resolution, None) from e
    if fmt != "PNG":
        raise SourceDimensionError(path, resolution, None)
    if size != (resolution, resolution):
        raise SourceDimensionError(path, resolution, size)


def scan_identity(source_dir, identity: Identity, resolutions: Sequence[int] = DEFAULT_RESOLUTIONS) -> IconSet:
    """Return the IconSet for *identity*, skipping absent resolutions.

    Raises MissingSourceError when not a single resolution is present.
    """
    source_dir = Path(source_dir)
    images = []
    for resolution in sorted(set(resolutions)):
        path = source_dir / source_filename(identity.name, resolution)
        if not path.is_file():
            logger.info("%s: no %dx%d source, skipping", identity.name, resolution, resolution)
            continue
        _check_dimensions(path, resolution)
        images.append(SourceImage(resolution, path, path.read_bytes()))

    if not images:
        raise MissingSourceError(identity.name, source_dir)

    icon_set = IconSet(identity, images)
    logger.info("%s: found %d source image(s): %s", identity.name, len(icon_set),
                ", ".join(str(r) for r in icon_set.resolutions))
    return icon_set


def scan_sources(source_dir, identities: Sequence[Identity],
                 resolutions: Sequence[int] = DEFAULT_RESOLUTIONS) -> List[IconSet]:
    """Scan every identity up front so a missing one aborts before any output is written."""
    sets = [scan_identity(source_dir, identity, resolutions) for identity in identities]
    _warn_unused(Path(source_dir), {i.name for i in identities}, set(resolutions))
    return sets


def _warn_unused(source_dir: Path, names, resolutions) -> None:
    if not source_dir.is_dir():
        return
    for path in sorted(source_dir.iterdir()):
        if path.suffix.lower() != ".png":
            continue
        try:
            name, resolution = parse_source_name(path.name)
        except ValueError:
            logger.warning("Ignoring %s: name is not <identity>_<N>x<N>.png", path.name)
            continue
        if name not in names or resolution not in resolutions:
            logger.warning("Ignoring %s: no configured identity/resolution uses it", path.name)
        elif path.name != source_filename(name, resolution):
            expected = source_dir / source_filename(name, resolution)
            # case-insensitive filesystems resolve the expected name to this file
            if expected.exists() and expected.samefile(path):
                continue
            logger.warning("Ignoring %s: expected the name %s", path.name, expected.name)


def parse_source_name(filename: str) -> Tuple[str, int]:
    """Split ``lsp_32x32.png`` into ``('lsp', 32)``; raise ValueError otherwise."""
    stem, dot, ext = filename.rpartition(".")
    if not dot or ext.lower() != "png":
        raise ValueError(f"not a PNG source name: {filename}")
    name, sep, dims = stem.rpartition("_")
    width, x, height = dims.partition("x")
    if not sep or not name or not x or width != height or not width.isdigit():
        raise ValueError(f"not a PNG source name: {filename}")
    return name, int(width)
