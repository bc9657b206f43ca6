"""Windows ICO container packing.

The PNG payloads are embedded as-is (Vista+ ICO files may carry PNG images),
so packing never re-encodes or rescales anything. Layout::

    ICONDIR       reserved=0, type=1, count          (<HHH, 6 bytes)
    ICONDIRENTRY  width, height, colors, reserved,
                  planes, bit_count, size, offset    (<BBBBHHII, 16 bytes each)
    payloads      in the same order as the entries

Width/height are single bytes; 0 stands for 256 or anything larger, in which
case the real size is taken from the PNG header.
"""
import logging
import struct
from dataclasses import dataclass
from pathlib import Path
from typing import List

from painicons.errors import ContainerFormatError
from painicons.scanner import IconSet

logger = logging.getLogger(__name__)

ICONDIR = struct.Struct('<HHH')
ICONDIRENTRY = struct.Struct('<BBBBHHII')
ICO_TYPE = 1

PNG_MAGIC = b'\x89PNG\r\n\x1a\n'
# 8-byte magic, 4-byte length, b'IHDR', then big-endian width and height
PNG_IHDR = struct.Struct('>8sI4sII')


@dataclass(frozen=True)
class IcoEntry:
    resolution: int
    offset: int
    length: int
    data: bytes


def _dim_byte(resolution: int) -> int:
    return resolution if resolution < 256 else 0


def pack_ico(icon_set: IconSet) -> bytes:
    """Return the ICO container bytes for every image in *icon_set*."""
    if not icon_set.images:
        raise ValueError(f"icon set '{icon_set.identity.name}' is empty")

    count = len(icon_set.images)
    offset = ICONDIR.size + ICONDIRENTRY.size * count
    header = [ICONDIR.pack(0, ICO_TYPE, count)]
    payloads = []
    for img in icon_set.images:
        dim = _dim_byte(img.resolution)
        header.append(ICONDIRENTRY.pack(dim, dim, 0, 0, 1, 32, len(img.data), offset))
        payloads.append(img.data)
        offset += len(img.data)
    return b''.join(header + payloads)


def write_ico(icon_set: IconSet, path) -> Path:
    """Pack *icon_set* and write it to *path*, replacing any existing file."""
    path = Path(path)
    data = pack_ico(icon_set)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    logger.info("%s: wrote %s (%d image(s), %d bytes)", icon_set.identity.name, path,
                len(icon_set), len(data))
    return path


def _png_size(payload: bytes):
    if len(payload) < PNG_IHDR.size or not payload.startswith(PNG_MAGIC):
        return None
    _, _, chunk, width, height = PNG_IHDR.unpack_from(payload)
    if chunk != b'IHDR':
        return None
    return width, height


def read_ico(data: bytes) -> List[IcoEntry]:
    """Parse an ICO container into its directory entries and payloads."""
    if len(data) < ICONDIR.size:
        raise ContainerFormatError("truncated ICO header")
    reserved, kind, count = ICONDIR.unpack_from(data)
    if reserved != 0 or kind != ICO_TYPE:
        raise ContainerFormatError("not an ICO file")
    if len(data) < ICONDIR.size + ICONDIRENTRY.size * count:
        raise ContainerFormatError("truncated ICO directory")

    entries = []
    for i in range(count):
        width, height, _, _, _, _, length, offset = ICONDIRENTRY.unpack_from(
            data, ICONDIR.size + ICONDIRENTRY.size * i)
        if offset + length > len(data):
            raise ContainerFormatError(f"entry {i} runs past end of file")
        payload = data[offset:offset + length]
        width = width or 256
        height = height or 256
        png = _png_size(payload)
        if png is not None:
            width, height = png
        if width != height:
            raise ContainerFormatError(f"entry {i} is not square ({width}x{height})")
        entries.append(IcoEntry(width, offset, length, payload))
    return entries
