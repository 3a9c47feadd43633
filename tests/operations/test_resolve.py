"""Tests for mount resolution."""

import pytest

from routemount.exceptions import ManifestError
from routemount.models import DiagnosticKind
from routemount.models import Package
from routemount.operations import build_registry
from routemount.operations import find_packages
from routemount.operations import load_manifests
from routemount.operations import order_packages
from routemount.operations import resolve_mounts


def make_host(
    workspace, make_package, mount_routes=None, expose_routes=None, routes=()
):
    manifest = {}
    if mount_routes is not None:
        manifest["mountRoutes"] = mount_routes
    if expose_routes is not None:
        manifest["exposeRoutes"] = expose_routes
    host_dir = make_package("apps/web", name="web", manifest=manifest, routes=routes)
    return Package(name="web", package_dir=host_dir.resolve())


def resolve(workspace, host):
    manifests = load_manifests(find_packages(workspace, host))
    registry, _ = build_registry(manifests)
    return resolve_mounts(manifests, registry, host)


def prefixes_for(mounts, key):
    return [m.mount_prefix for m in mounts if m.registry_key == key]


@pytest.fixture
def docs(make_package):
    return make_package(
        "features/docs",
        manifest={"exposeRoutes": [{"name": "docs-root", "internalPath": "."}]},
        routes=["page.tsx", "[...slug]/page.tsx"],
    )


class TestOrderPackages:
    """Tests for order_packages()."""

    def test_host_first_then_lexical(self, tmp_path):
        host = Package(name="web", package_dir=tmp_path / "apps" / "web")
        teams = Package(name="teams", package_dir=tmp_path / "features" / "teams")
        docs = Package(name="docs", package_dir=tmp_path / "features" / "docs")
        admin = Package(name="admin", package_dir=tmp_path / "apps" / "admin")

        ordered = order_packages([teams, host, docs, admin], host)

        assert ordered == [host, admin, docs, teams]


class TestResolveMounts:
    """Tests for resolve_mounts()."""

    def test_host_mounts_under_base_route_and_slug(self, workspace, make_package, docs):
        host = make_host(
            workspace,
            make_package,
            mount_routes=[
                {"name": "Docs", "baseRoute": "help", "features": {"docs-root": "docs"}}
            ],
        )

        mounts, diagnostics = resolve(workspace, host)

        assert len(mounts) == 1
        mount = mounts[0]
        assert mount.provider_id == "docs"
        assert mount.mount_prefix == ("help", "docs")
        assert sorted(mount.route_files) == ["[...slug]/page.tsx", "page.tsx"]
        assert diagnostics == []

    @pytest.mark.parametrize(
        "base_route, slug, expected",
        [
            (".", "docs", ("docs",)),
            ("", "docs", ("docs",)),
            ("team/[teamId]/", "docs", ("team", "[teamId]", "docs")),
            ("base", ".", ("base",)),
            (".", "", ()),
            ("a/./b", "c/d", ("a", "b", "c", "d")),
        ],
    )
    def test_empty_and_dot_segments_are_elided(
        self, workspace, make_package, docs, base_route, slug, expected
    ):
        host = make_host(
            workspace,
            make_package,
            mount_routes=[
                {
                    "name": "Docs",
                    "baseRoute": base_route,
                    "features": {"docs-root": slug},
                }
            ],
        )

        mounts, _ = resolve(workspace, host)

        assert prefixes_for(mounts, "docs-root") == [expected]

    def test_nested_mount_rebased_under_consumer(self, workspace, make_package, docs):
        """Test that a consumer's mounts land under where the host mounted it."""
        make_package(
            "features/teams",
            manifest={
                "exposeRoutes": [{"name": "teams-root"}],
                "mountRoutes": [
                    {
                        "name": "Docs",
                        "baseRoute": "team/[teamId]/",
                        "features": {"docs-root": "docs"},
                    }
                ],
            },
            routes=["page.tsx"],
        )
        host = make_host(
            workspace,
            make_package,
            mount_routes=[
                {"name": "Teams", "baseRoute": ".", "features": {"teams-root": "teams"}}
            ],
        )

        mounts, _ = resolve(workspace, host)

        assert prefixes_for(mounts, "teams-root") == [("teams",)]
        assert prefixes_for(mounts, "docs-root") == [
            ("teams", "team", "[teamId]", "docs")
        ]

    def test_fan_out_across_consumer_prefixes(self, workspace, make_package, docs):
        """Test that a consumer mounted twice mounts its providers twice."""
        make_package(
            "features/teams",
            manifest={
                "exposeRoutes": [{"name": "teams-root"}],
                "mountRoutes": [{"name": "Docs", "features": {"docs-root": "docs"}}],
            },
            routes=["page.tsx"],
        )
        host = make_host(
            workspace,
            make_package,
            mount_routes=[
                {"name": "Teams", "features": {"teams-root": "teams"}},
                {
                    "name": "Orgs",
                    "baseRoute": "org",
                    "features": {"teams-root": "teams"},
                },
            ],
        )

        mounts, _ = resolve(workspace, host)

        assert prefixes_for(mounts, "teams-root") == [("teams",), ("org", "teams")]
        assert prefixes_for(mounts, "docs-root") == [
            ("teams", "docs"),
            ("org", "teams", "docs"),
        ]

    def test_same_key_in_two_groups_kept(self, workspace, make_package, docs):
        host = make_host(
            workspace,
            make_package,
            mount_routes=[
                {"name": "Docs", "features": {"docs-root": "docs"}},
                {"name": "Help", "features": {"docs-root": "help"}},
            ],
        )

        mounts, _ = resolve(workspace, host)

        assert prefixes_for(mounts, "docs-root") == [("docs",), ("help",)]

    def test_unknown_key_is_diagnostic_not_fatal(self, workspace, make_package, docs):
        """Test that an unknown key is skipped while other mounts resolve."""
        host = make_host(
            workspace,
            make_package,
            mount_routes=[
                {
                    "name": "Mixed",
                    "features": {"missing-root": "missing", "docs-root": "docs"},
                }
            ],
        )

        mounts, diagnostics = resolve(workspace, host)

        assert prefixes_for(mounts, "docs-root") == [("docs",)]
        assert len(diagnostics) == 1
        assert diagnostics[0].kind == DiagnosticKind.UNKNOWN_REGISTRY_KEY
        assert diagnostics[0].package == "web"
        assert "missing-root" in diagnostics[0].message

    def test_self_mount(self, workspace, make_package):
        """Test that a package mounting its own key needs no special case."""
        make_package(
            "features/teams",
            manifest={
                "exposeRoutes": [
                    {"name": "teams-root"},
                    {"name": "teams-admin", "internalPath": "admin"},
                ],
                "mountRoutes": [
                    {"name": "Admin", "features": {"teams-admin": "manage"}}
                ],
            },
            routes=["page.tsx", "admin/page.tsx"],
        )
        host = make_host(
            workspace,
            make_package,
            mount_routes=[{"name": "Teams", "features": {"teams-root": "teams"}}],
        )

        mounts, diagnostics = resolve(workspace, host)

        assert prefixes_for(mounts, "teams-admin") == [("teams", "manage")]
        assert diagnostics == []

    def test_host_self_mount(self, workspace, make_package):
        host = make_host(
            workspace,
            make_package,
            expose_routes=[{"name": "web-home", "internalPath": "home"}],
            mount_routes=[{"name": "Home", "features": {"web-home": "welcome"}}],
            routes=["home/page.tsx"],
        )

        mounts, _ = resolve(workspace, host)

        assert prefixes_for(mounts, "web-home") == [("welcome",)]

    def test_unmounted_consumer_mounts_at_root(self, workspace, make_package, docs):
        """Test that a consumer nobody mounts places its mounts at the root."""
        make_package(
            "features/temp-consumer",
            manifest={
                "mountRoutes": [
                    {
                        "name": "Temp",
                        "baseRoute": "team-temp/[teamId]/metrics",
                        "features": {"docs-root": "dashboard"},
                    }
                ]
            },
        )
        host = make_host(workspace, make_package)

        mounts, _ = resolve(workspace, host)

        assert prefixes_for(mounts, "docs-root") == [
            ("team-temp", "[teamId]", "metrics", "dashboard")
        ]

    def test_consumer_visited_before_its_mounter_stays_at_root(
        self, workspace, make_package, docs
    ):
        """Test single-pass order: prefixes recorded later are not revisited."""
        make_package(
            "features/a-consumer",
            manifest={
                "exposeRoutes": [{"name": "a-root"}],
                "mountRoutes": [{"name": "Docs", "features": {"docs-root": "docs"}}],
            },
            routes=["page.tsx"],
        )
        make_package(
            "features/b-consumer",
            manifest={"mountRoutes": [{"name": "A", "features": {"a-root": "a"}}]},
        )
        host = make_host(workspace, make_package)

        mounts, _ = resolve(workspace, host)

        assert prefixes_for(mounts, "a-root") == [("a",)]
        assert prefixes_for(mounts, "docs-root") == [("docs",)]

    def test_empty_features_is_not_an_error(self, workspace, make_package, docs):
        host = make_host(
            workspace, make_package, mount_routes=[{"name": "Nothing", "features": {}}]
        )

        mounts, diagnostics = resolve(workspace, host)

        assert mounts == []
        assert diagnostics == []

    def test_host_without_manifest_still_roots_consumers(
        self, workspace, make_package, docs
    ):
        """Test that the host needs no manifest to anchor the root prefix."""
        make_package(
            "features/teams",
            manifest={
                "mountRoutes": [{"name": "Docs", "features": {"docs-root": "d"}}]
            },
        )
        host_dir = workspace / "apps" / "web"
        host_dir.mkdir(parents=True)
        host = Package(name="web", package_dir=host_dir.resolve())

        mounts, _ = resolve(workspace, host)

        assert prefixes_for(mounts, "docs-root") == [("d",)]

    @pytest.mark.parametrize(
        "base_route, slug",
        [
            ("..", "docs"),
            ("team/../..", "docs"),
            (".", ".."),
            ("help", "../../page"),
        ],
    )
    def test_parent_segments_are_rejected(
        self, workspace, make_package, docs, base_route, slug
    ):
        """Test that a mount cannot climb out of the output root."""
        host = make_host(
            workspace,
            make_package,
            mount_routes=[
                {
                    "name": "Escape",
                    "baseRoute": base_route,
                    "features": {"docs-root": slug},
                }
            ],
        )

        with pytest.raises(ManifestError) as exc_info:
            resolve(workspace, host)

        assert exc_info.value.package_dir == host.package_dir
        assert "'..'" in exc_info.value.detail
