import logging

from painicons.embed import embed_icon_status, resolve_embed_icon


def test_prefers_local_icon(tmp_path):
    project = tmp_path / 'pain-lsp'
    local = project / 'resources' / 'icons' / 'windows' / 'lsp.ico'
    shared = tmp_path / 'pain-compiler' / 'resources' / 'icons' / 'windows' / 'lsp.ico'
    for p in (local, shared):
        p.parent.mkdir(parents=True)
        p.write_bytes(b'ico')
    assert resolve_embed_icon(project, 'lsp') == local


def test_falls_back_to_shared_compiler_icons(tmp_path):
    project = tmp_path / 'pain-lsp'
    shared = tmp_path / 'pain-compiler' / 'resources' / 'icons' / 'windows' / 'lsp.ico'
    shared.parent.mkdir(parents=True)
    shared.write_bytes(b'ico')
    assert resolve_embed_icon(project, 'lsp') == shared


def test_missing_icon_is_a_warning(tmp_path, caplog):
    project = tmp_path / 'pain-lsp'
    expected = project / 'resources' / 'icons' / 'windows' / 'lsp.ico'
    assert resolve_embed_icon(project, 'lsp') == expected
    with caplog.at_level(logging.WARNING):
        assert embed_icon_status(project, 'lsp') is None
    assert 'skipping embed' in caplog.text
