"""Registry of exposed route groups for one generation run."""

import json
import os
from dataclasses import dataclass
from dataclasses import field
from pathlib import Path

from platformdirs import user_state_path

from routemount.models import RegistryItem

SNAPSHOT_ENV_VAR = "ROUTEMOUNT_DEBUG_SNAPSHOT"
_TRUTHY = {"1", "true", "yes", "on"}


@dataclass
class Registry:
    """Registry keys and the route files they own.

    Rebuilt from a full workspace scan on every run; never loaded back.
    """

    items: dict[str, RegistryItem] = field(default_factory=dict)  # key -> item

    def __contains__(self, key: str) -> bool:
        return key in self.items

    def __len__(self) -> int:
        return len(self.items)

    def get(self, key: str) -> RegistryItem | None:
        return self.items.get(key)

    @property
    def provider_ids(self) -> list[str]:
        """Distinct providers in first-seen order."""
        return list(dict.fromkeys(item.provider_id for item in self.items.values()))

    @classmethod
    def snapshot_path(cls) -> Path:
        """Get default debug snapshot location using platformdirs."""
        return user_state_path("routemount") / "registry-snapshot.json"

    @staticmethod
    def snapshot_enabled() -> bool:
        """Check whether the debug snapshot environment toggle is set."""
        return os.environ.get(SNAPSHOT_ENV_VAR, "").strip().lower() in _TRUTHY

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict."""
        return {key: item.to_dict() for key, item in self.items.items()}

    def save(self, path: Path | None = None) -> Path:
        """Save registry snapshot to JSON file atomically.

        Args:
            path: Path to save snapshot. If None, uses default location.

        Returns:
            Path the snapshot was written to
        """
        if path is None:
            path = self.snapshot_path()

        path.parent.mkdir(parents=True, exist_ok=True)

        # Write atomically (write to temp file, then rename)
        temp_path = path.with_suffix(".tmp")
        temp_path.write_text(json.dumps(self.to_dict(), indent=2))
        temp_path.replace(path)
        return path
