from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]


def test_readme_documents_generated_outputs():
    txt = (ROOT / 'resources' / 'icons' / 'README.md').read_text()
    assert 'python main.py' in txt
    assert 'iconutil -c icns' in txt


def test_generated_outputs_are_ignored():
    ignored = (ROOT / '.gitignore').read_text().splitlines()
    assert 'resources/icons/windows/' in ignored
    assert 'resources/icons/macos/' in ignored
