from pathlib import Path

import pytest
from PIL import Image

COLORS = {'pain': (200, 40, 40, 255), 'lsp': (40, 90, 200, 255)}


def write_png(path: Path, size, color=(0, 128, 0, 255)):
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(size, int):
        size = (size, size)
    Image.new('RGBA', size, color).save(path, 'PNG')
    return path


@pytest.fixture
def make_sources(tmp_path):
    """Write <identity>_<N>x<N>.png files under tmp_path/resources/icons/png."""
    source_dir = tmp_path / 'resources' / 'icons' / 'png'

    def _make(identity, sizes):
        color = COLORS.get(identity, (0, 0, 0, 255))
        return [write_png(source_dir / f'{identity}_{s}x{s}.png', s, color) for s in sizes]

    _make.source_dir = source_dir
    return _make
