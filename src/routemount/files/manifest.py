"""Routes manifest and package.json reading."""

import json
from pathlib import Path

from routemount.exceptions import ManifestError
from routemount.models import Manifest

MANIFEST_FILE = "routes.config.json"


def load_manifest(package_dir: Path) -> Manifest | None:
    """Load a package's routes manifest.

    The file is read and parsed on every call so edits between runs in the
    same process are always seen.

    Args:
        package_dir: Package directory that may hold routes.config.json

    Returns:
        Parsed Manifest, or None if the package has no manifest

    Raises:
        ManifestError: If the manifest exists but is unreadable or malformed
    """
    path = package_dir / MANIFEST_FILE
    if not path.is_file():
        return None

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return Manifest.from_dict(data)
    except json.JSONDecodeError as e:
        raise ManifestError(package_dir, f"invalid JSON: {e}") from e
    except KeyError as e:
        raise ManifestError(package_dir, f"missing required field {e}") from e
    except TypeError as e:
        raise ManifestError(package_dir, str(e)) from e
    except (OSError, UnicodeDecodeError) as e:
        raise ManifestError(package_dir, f"cannot read manifest: {e}") from e
    except ValueError as e:
        raise ManifestError(package_dir, str(e)) from e


def read_package_name(package_dir: Path) -> str | None:
    """Read the declared name from a package's package.json.

    Returns:
        The ``name`` field, or None if the file is missing, unreadable or
        has no string name
    """
    try:
        data = json.loads((package_dir / "package.json").read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError):
        return None

    name = data.get("name") if isinstance(data, dict) else None
    return name if isinstance(name, str) and name else None
