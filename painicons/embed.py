"""Locate the Windows icon a crate's build step should embed.

The language server crate may not carry its own copy of the icons, so the
lookup falls back to the compiler crate checked out next to it.
"""
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

SHARED_PROJECT = "pain-compiler"
WINDOWS_ICON_DIR = Path("resources/icons/windows")


def resolve_embed_icon(project_dir, identity, shared_project=SHARED_PROJECT):
    """Return the local icon, else the shared sibling's, else the (missing) local path."""
    project_dir = Path(project_dir)
    local_icon = project_dir / WINDOWS_ICON_DIR / f"{identity}.ico"
    if local_icon.exists():
        return local_icon
    shared_icon = project_dir.parent / shared_project / WINDOWS_ICON_DIR / f"{identity}.ico"
    if shared_icon.exists():
        return shared_icon
    return local_icon


def embed_icon_status(project_dir, identity, shared_project=SHARED_PROJECT):
    """Resolve the icon and warn when the build will have to go without one."""
    icon_path = resolve_embed_icon(project_dir, identity, shared_project)
    if icon_path.exists():
        logger.info("Embedding icon %s", icon_path)
        return icon_path
    logger.warning("Windows icon not found (%s), skipping embed", icon_path)
    return None
