"""High-level operations for routemount."""

from routemount.operations.generate import compute_generation_plan
from routemount.operations.generate import execute_generation_plan
from routemount.operations.resolve import order_packages
from routemount.operations.resolve import resolve_mounts
from routemount.operations.scan import build_registry
from routemount.operations.scan import find_packages
from routemount.operations.scan import load_manifests

__all__ = [
    "build_registry",
    "compute_generation_plan",
    "execute_generation_plan",
    "find_packages",
    "load_manifests",
    "order_packages",
    "resolve_mounts",
]
