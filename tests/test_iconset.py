import subprocess
from pathlib import Path

import pytest

from painicons.errors import ExternalToolError
from painicons.iconset import pack_icns, stage_iconset
from painicons.scanner import Identity, scan_identity
from painicons.targets import ConversionTarget, Platform, SkippedPlatformStep, TargetState

LSP = Identity('lsp', 'auxiliary tool')

FULL_LAYOUT = {
    'icon_16x16.png': 16,
    'icon_16x16@2x.png': 32,
    'icon_32x32.png': 32,
    'icon_32x32@2x.png': 64,
    'icon_128x128.png': 128,
    'icon_128x128@2x.png': 256,
    'icon_256x256.png': 256,
    'icon_256x256@2x.png': 512,
    'icon_512x512.png': 512,
}


def no_tool(name):
    return None


def test_stage_uses_iconutil_names(make_sources, tmp_path):
    paths = make_sources('lsp', [16, 32, 48, 64, 128, 256, 512])
    by_size = {int(p.stem.split('_')[1].split('x')[0]): p for p in paths}
    staging = stage_iconset(scan_identity(make_sources.source_dir, LSP), tmp_path / 'lsp.iconset')
    assert sorted(p.name for p in staging.iterdir()) == sorted(FULL_LAYOUT)
    for name, size in FULL_LAYOUT.items():
        assert (staging / name).read_bytes() == by_size[size].read_bytes()


def test_stage_replaces_stale_files(make_sources, tmp_path):
    make_sources('lsp', [16])
    staging = tmp_path / 'lsp.iconset'
    staging.mkdir()
    (staging / 'icon_512x512.png').write_bytes(b'old')
    stage_iconset(scan_identity(make_sources.source_dir, LSP), staging)
    assert [p.name for p in staging.iterdir()] == ['icon_16x16.png']


def test_stage_needs_a_usable_size(make_sources, tmp_path):
    make_sources('lsp', [48])
    with pytest.raises(ValueError):
        stage_iconset(scan_identity(make_sources.source_dir, LSP), tmp_path / 'lsp.iconset')


def test_set_without_iconset_sizes_skips_icns(make_sources, tmp_path):
    make_sources('lsp', [48])
    staging = tmp_path / 'macos' / 'lsp.iconset'
    staging.mkdir(parents=True)
    (staging / 'icon_16x16.png').write_bytes(b'old')
    out = tmp_path / 'macos' / 'lsp.icns'
    target = ConversionTarget(Platform.ICNS, out, lambda name: '/usr/bin/iconutil')
    result = pack_icns(scan_identity(make_sources.source_dir, LSP), staging, target)

    assert result.state is TargetState.NOTHING_TO_STAGE
    assert result.state.terminal
    assert not result.complete
    assert not staging.exists()
    assert not out.exists()


def test_missing_iconutil_is_deferred_not_failed(make_sources, tmp_path):
    make_sources('lsp', [16, 32, 128])
    out = tmp_path / 'macos' / 'lsp.icns'
    target = ConversionTarget(Platform.ICNS, out, no_tool)
    result = pack_icns(scan_identity(make_sources.source_dir, LSP), tmp_path / 'macos' / 'lsp.iconset', target)

    assert isinstance(result, SkippedPlatformStep)
    assert result.state is TargetState.AWAITING_EXTERNAL_TOOL
    assert result.state.terminal
    assert not result.complete
    assert not out.exists()
    assert sorted(p.name for p in result.staging_dir.iterdir()) == [
        'icon_128x128.png', 'icon_16x16.png', 'icon_16x16@2x.png', 'icon_32x32.png']
    assert result.command[:3] == ('iconutil', '-c', 'icns')
    assert 'iconutil' in result.describe()


def test_iconutil_is_invoked_when_present(make_sources, tmp_path, monkeypatch):
    make_sources('lsp', [16, 32])
    calls = []

    def fake_run(cmd, capture_output, text):
        calls.append(cmd)
        Path(cmd[-1]).write_bytes(b'icns')
        return subprocess.CompletedProcess(cmd, 0, '', '')

    monkeypatch.setattr(subprocess, 'run', fake_run)
    out = tmp_path / 'macos' / 'lsp.icns'
    target = ConversionTarget(Platform.ICNS, out, lambda name: '/usr/bin/iconutil')
    staging = tmp_path / 'macos' / 'lsp.iconset'
    result = pack_icns(scan_identity(make_sources.source_dir, LSP), staging, target)

    assert result.state is TargetState.PACKED
    assert result.complete
    assert calls == [('/usr/bin/iconutil', '-c', 'icns', str(staging), '-o', str(out))]
    assert out.read_bytes() == b'icns'


def test_iconutil_failure_raises(make_sources, tmp_path, monkeypatch):
    make_sources('lsp', [16])

    def fake_run(cmd, capture_output, text):
        return subprocess.CompletedProcess(cmd, 1, '', 'Invalid Iconset.')

    monkeypatch.setattr(subprocess, 'run', fake_run)
    target = ConversionTarget(Platform.ICNS, tmp_path / 'lsp.icns', lambda name: 'iconutil')
    with pytest.raises(ExternalToolError) as exc:
        pack_icns(scan_identity(make_sources.source_dir, LSP), tmp_path / 'lsp.iconset', target)
    assert exc.value.returncode == 1
    assert 'Invalid Iconset.' in str(exc.value)


def test_ico_target_is_always_available():
    target = ConversionTarget(Platform.ICO, Path('x.ico'), no_tool)
    assert target.is_available()
    assert not ConversionTarget(Platform.ICNS, Path('x.icns'), no_tool).is_available()
