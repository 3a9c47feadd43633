"""Filesystem operations for routemount."""

from routemount.files.declarations import render_declarations
from routemount.files.declarations import write_declarations
from routemount.files.discover import discover_packages
from routemount.files.discover import discover_route_files
from routemount.files.manifest import load_manifest
from routemount.files.manifest import read_package_name
from routemount.files.stubs import clear_output_root
from routemount.files.stubs import write_stub

__all__ = [
    "clear_output_root",
    "discover_packages",
    "discover_route_files",
    "load_manifest",
    "read_package_name",
    "render_declarations",
    "write_declarations",
    "write_stub",
]
