"""Stub file operations."""

import shutil
from pathlib import Path

from routemount.models import Stub


def clear_output_root(output_root: Path) -> bool:
    """Remove the generated output tree entirely.

    Args:
        output_root: Directory holding previously generated stubs

    Returns:
        True if something was removed, False if nothing existed

    Raises:
        NotADirectoryError: If output_root exists but is not a directory
        OSError: If removal fails (permissions, busy files)
    """
    if not output_root.exists() and not output_root.is_symlink():
        return False

    if output_root.is_symlink() or not output_root.is_dir():
        raise NotADirectoryError(
            f"Refusing to remove output root: {output_root} is not a directory"
        )

    shutil.rmtree(output_root)
    return True


def write_stub(stub: Stub) -> None:
    """Write a stub file, creating parent directories as needed.

    Raises:
        OSError: If the file cannot be written
    """
    stub.path.parent.mkdir(parents=True, exist_ok=True)
    stub.path.write_text(stub.content, encoding="utf-8")
