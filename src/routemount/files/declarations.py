"""Type-declaration file for the host application."""

import json
from pathlib import Path

from routemount.registry import Registry

HEADER = "// Generated by routemount. Do not edit.\n"


def _ts_string(value: str) -> str:
    # JSON string literals are valid TypeScript string literals
    return json.dumps(value)


def render_declarations(registry: Registry) -> str:
    """Render the declaration file for a registry.

    The output has a ``RouteRegistry`` interface keyed by registry key, a
    ``RegistryKey`` union, and a wildcard module per provider so stub
    import specifiers type-check.
    """
    lines = [HEADER, "export interface RouteRegistry {"]
    for key, item in registry.items.items():
        lines.append(f"  {_ts_string(key)}: {{")
        lines.append(f"    providerId: {_ts_string(item.provider_id)};")
        if item.description is not None:
            lines.append(f"    description?: {_ts_string(item.description)};")
        lines.append("  };")
    lines.append("}")
    lines.append("")

    if registry.items:
        union = " | ".join(_ts_string(key) for key in registry.items)
    else:
        union = "never"
    lines.append(f"export type RegistryKey = {union};")

    for provider_id in registry.provider_ids:
        lines.append("")
        lines.append(f"declare module {_ts_string(provider_id + '/app/*')} {{")
        lines.append("  const Component: any;")
        lines.append("  export default Component;")
        lines.append("}")

    return "\n".join(lines) + "\n"


def write_declarations(registry: Registry, declaration_path: Path) -> None:
    """Write the declaration file, creating parent directories as needed."""
    declaration_path.parent.mkdir(parents=True, exist_ok=True)
    declaration_path.write_text(render_declarations(registry), encoding="utf-8")
