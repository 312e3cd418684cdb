"""Tests for the Plugin base class and its registration helpers."""

from pathlib import Path
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from plugwire.host.container import Application
from plugwire.host.migrations import Migrator
from plugwire.plugins.base import Plugin, PluginDescriptor, camel_case
from plugwire.plugins.errors import InvalidConfiguration, ResourceNotFound


def make_plugin_class(root: Path, plugin_name: str = "demo") -> type[Plugin]:
    """Build a plugin class whose files live under ``root``."""

    class DemoPlugin(Plugin):
        name = plugin_name
        version = "1.0.0"
        root_path = root
        booted = 0

        def boot(self) -> None:
            type(self).booted += 1

    return DemoPlugin


class NamelessPlugin(Plugin):
    def boot(self) -> None:
        raise AssertionError("boot must not be reachable")


class BlankNamePlugin(Plugin):
    name = "   "

    def boot(self) -> None:
        pass


class TestPluginConstruction:
    """Tests for plugin identity validation."""

    def test_named_plugin_constructs(self, app: Application, tmp_path: Path) -> None:
        """A plugin with a name constructs and keeps the app handle."""
        plugin = make_plugin_class(tmp_path)(app)

        assert plugin.name == "demo"
        assert plugin.app is app

    def test_missing_name_fails(self, app: Application) -> None:
        """A plugin without a name fails before boot is reachable."""
        with pytest.raises(InvalidConfiguration, match="Missing plugin name"):
            NamelessPlugin(app)

    def test_blank_name_fails(self, app: Application) -> None:
        """Whitespace is not a name."""
        with pytest.raises(InvalidConfiguration):
            BlankNamePlugin(app)

    def test_name_is_immutable(self, app: Application, tmp_path: Path) -> None:
        """The name cannot change after construction."""
        plugin = make_plugin_class(tmp_path)(app)

        with pytest.raises(AttributeError, match="immutable"):
            plugin.name = "other"

        assert plugin.name == "demo"

    def test_optional_metadata_defaults(self, app: Application, tmp_path: Path) -> None:
        """Description defaults to empty."""
        plugin = make_plugin_class(tmp_path)(app)

        assert plugin.description == ""
        assert "demo" in repr(plugin)


class TestPluginPath:
    """Tests for plugin location."""

    def test_path_is_stable(self, app: Application, fixture_plugins: Path) -> None:
        """get_plugin_path returns the same value on every call."""
        from acme.articles import ArticlesPlugin

        plugin = ArticlesPlugin(app)

        first = plugin.get_plugin_path()
        second = plugin.get_plugin_path()

        assert first == second
        assert first == fixture_plugins.resolve() / "articles"

    def test_descriptor_is_memoized(self, app: Application, fixture_plugins: Path) -> None:
        """The descriptor is computed once per instance."""
        from acme.articles import ArticlesPlugin

        plugin = ArticlesPlugin(app)

        assert plugin.descriptor is plugin.descriptor

    def test_explicit_root_path(self, app: Application, tmp_path: Path) -> None:
        """root_path on the class wins over the module location."""
        plugin = make_plugin_class(tmp_path)(app)

        assert plugin.get_plugin_path() == tmp_path


class TestDescriptor:
    """Tests for derived names."""

    def test_fixture_descriptor(self, app: Application, fixture_plugins: Path) -> None:
        """Descriptor fields come from the plugin class."""
        from acme.articles import ArticlesPlugin

        descriptor = ArticlesPlugin(app).descriptor

        assert descriptor.name == "articles"
        assert descriptor.version == "1.2.0"
        assert descriptor.type_id == "acme.articles.ArticlesPlugin"
        assert descriptor.short_name == "ArticlesPlugin"
        assert descriptor.package == "acme.articles"

    def test_controller_namespace(self, app: Application, fixture_plugins: Path) -> None:
        """Controllers live in <package>.http.controllers."""
        from acme.articles import ArticlesPlugin

        plugin = ArticlesPlugin(app)

        assert plugin.controller_namespace == "acme.articles.http.controllers"

    def test_controller_namespace_without_package(self, tmp_path: Path) -> None:
        """Top-level plugin modules use a bare http.controllers namespace."""
        descriptor = PluginDescriptor(
            name="demo",
            version="",
            description="",
            type_id="demo_plugin.DemoPlugin",
            short_name="DemoPlugin",
            package="",
            root_path=tmp_path,
        )

        assert descriptor.controller_namespace == "http.controllers"


class TestViewNamespace:
    """Tests for view namespace derivation."""

    @staticmethod
    def descriptor(short_name: str) -> PluginDescriptor:
        return PluginDescriptor(
            name="demo",
            version="",
            description="",
            type_id=f"acme.{short_name}",
            short_name=short_name,
            package="acme",
            root_path=Path("."),
        )

    def test_articles_plugin(self) -> None:
        """ArticlesPlugin maps to plugin:articles."""
        assert self.descriptor("ArticlesPlugin").view_namespace == "plugin:articles"

    def test_multi_word_name(self) -> None:
        """The remainder is lower camel cased."""
        assert self.descriptor("BlogPostsPlugin").view_namespace == "plugin:blogPosts"

    def test_name_shorter_than_suffix(self) -> None:
        """A name shorter than the suffix is rejected instead of truncated."""
        with pytest.raises(InvalidConfiguration, match="Blog"):
            self.descriptor("Blog").view_namespace

    def test_bare_suffix(self) -> None:
        """A class named exactly 'Plugin' leaves nothing to name the namespace."""
        with pytest.raises(InvalidConfiguration):
            self.descriptor("Plugin").view_namespace

    def test_other_suffix(self) -> None:
        """Six trailing characters are not stripped blindly."""
        with pytest.raises(InvalidConfiguration):
            self.descriptor("ArticlesModule").view_namespace

    def test_plugin_without_views_needs_no_suffix(self, app: Application) -> None:
        """The suffix is only checked when a view namespace is needed."""

        class Blog(Plugin):
            name = "blog"

            def boot(self) -> None:
                pass

        plugin = Blog(app)

        assert plugin.name == "blog"
        with pytest.raises(InvalidConfiguration):
            plugin.view_namespace

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("Articles", "articles"),
            ("BlogPosts", "blogPosts"),
            ("blog_posts", "blogPosts"),
            ("blog-posts", "blogPosts"),
            ("SEO", "sEO"),
            ("", ""),
        ],
    )
    def test_camel_case(self, value: str, expected: str) -> None:
        assert camel_case(value) == expected


class TestEnableConfig:
    """Tests for enable_config."""

    def test_host_values_win(self, app: Application, tmp_path: Path) -> None:
        """Existing host values win; plugin defaults fill the gaps."""
        (tmp_path / "config.yaml").write_text("x: 2\ny: 3\n")
        app.config.set("plugin_demo", {"x": 1})

        make_plugin_class(tmp_path)(app).enable_config()

        assert app.config.get("plugin_demo") == {"x": 1, "y": 3}

    def test_defaults_when_host_has_none(self, app: Application, tmp_path: Path) -> None:
        """Without host values the fragment is stored as-is."""
        (tmp_path / "config.yaml").write_text("x: 2\nnested:\n  a: 1\n")

        make_plugin_class(tmp_path)(app).enable_config()

        assert app.config.get("plugin_demo") == {"x": 2, "nested": {"a": 1}}
        assert app.config.get("plugin_demo.nested.a") == 1

    def test_merge_is_shallow(self, app: Application, tmp_path: Path) -> None:
        """A host mapping replaces the plugin's mapping for the same key."""
        (tmp_path / "config.yaml").write_text("nested:\n  a: 1\n  b: 2\n")
        app.config.set("plugin_demo", {"nested": {"a": 10}})

        make_plugin_class(tmp_path)(app).enable_config()

        assert app.config.get("plugin_demo") == {"nested": {"a": 10}}

    def test_custom_path_and_keys(self, app: Application, tmp_path: Path) -> None:
        """Repeated calls with different keys merge independently."""
        (tmp_path / "config.yaml").write_text("a: 1\n")
        (tmp_path / "extra.json").write_text('{"b": 2}')
        plugin = make_plugin_class(tmp_path)(app)

        plugin.enable_config()
        plugin.enable_config("extra.json", key="demo_extra")

        assert app.config.get("plugin_demo") == {"a": 1}
        assert app.config.get("demo_extra") == {"b": 2}

    def test_missing_file(self, app: Application, tmp_path: Path) -> None:
        """A missing fragment is fatal and names the path."""
        plugin = make_plugin_class(tmp_path)(app)

        with pytest.raises(ResourceNotFound) as exc_info:
            plugin.enable_config()

        assert exc_info.value.path == tmp_path / "config.yaml"

    def test_existing_scalar_rejected(self, app: Application, tmp_path: Path) -> None:
        """A non-mapping host value cannot take plugin defaults."""
        (tmp_path / "config.yaml").write_text("x: 2\n")
        app.config.set("plugin_demo", "disabled")

        with pytest.raises(InvalidConfiguration):
            make_plugin_class(tmp_path)(app).enable_config()


class TestEnableRoutes:
    """Tests for enable_routes."""

    def test_routes_mounted(self, app: Application, tmp_path: Path) -> None:
        """The route file runs inside a group and its routes are served."""
        (tmp_path / "routes.py").write_text(
            "def ping():\n"
            "    return {'pong': plugin.name}\n"
            "\n"
            "router.get('/ping', ping)\n"
        )

        make_plugin_class(tmp_path)(app).enable_routes(prefix="/demo")

        client = TestClient(app.make("http"))
        response = client.get("/demo/ping")

        assert response.status_code == 200
        assert response.json() == {"pong": "demo"}

    def test_group_uses_controller_namespace(self, app: Application, tmp_path: Path) -> None:
        """The group namespace is the plugin's controller namespace."""
        (tmp_path / "routes.py").write_text("")
        plugin = make_plugin_class(tmp_path)(app)

        plugin.enable_routes()

        [group] = app.router.groups
        assert group.namespace == plugin.controller_namespace
        assert group.router.tags == ["demo"]

    def test_missing_route_file(self, app: Application, tmp_path: Path) -> None:
        """A missing route file is fatal and opens no group."""
        plugin = make_plugin_class(tmp_path)(app)

        with pytest.raises(ResourceNotFound, match="routes.py"):
            plugin.enable_routes()

        assert app.router.groups == []


class TestEnableViews:
    """Tests for enable_views and view()."""

    def test_namespace_registered(self, app: Application, tmp_path: Path) -> None:
        """The view namespace points at <root>/resources/views."""
        views_dir = tmp_path / "resources" / "views"
        views_dir.mkdir(parents=True)

        make_plugin_class(tmp_path)(app).enable_views()

        assert app["view"].namespaces == {"plugin:demo": [views_dir]}

    def test_custom_directory(self, app: Application, tmp_path: Path) -> None:
        views_dir = tmp_path / "resources" / "templates"
        views_dir.mkdir(parents=True)

        make_plugin_class(tmp_path)(app).enable_views("templates")

        assert app["view"].namespaces["plugin:demo"] == [views_dir]

    def test_missing_directory(self, app: Application, tmp_path: Path) -> None:
        with pytest.raises(ResourceNotFound):
            make_plugin_class(tmp_path)(app).enable_views()

    def test_view_reference(self, app: Application, tmp_path: Path) -> None:
        """view() returns a view qualified with the plugin namespace."""
        views_dir = tmp_path / "resources" / "views"
        views_dir.mkdir(parents=True)
        (views_dir / "index.html").write_text("<p>$greeting</p>")
        plugin = make_plugin_class(tmp_path)(app)
        plugin.enable_views()

        view = plugin.view("index")

        assert plugin.view_name("index") == "plugin:demo::index"
        assert view.name == "plugin:demo::index"
        assert view.render(greeting="hi") == "<p>hi</p>"


class TestEnableMigrations:
    """Tests for enable_migrations."""

    @staticmethod
    def make_dirs(root: Path, *names: str) -> None:
        for name in names:
            (root / "database" / name).mkdir(parents=True)

    def test_paths_registered_when_resolved(self, app: Application, tmp_path: Path) -> None:
        """Each path is registered once the migrator is resolved."""
        self.make_dirs(tmp_path, "m1", "m2")
        plugin = make_plugin_class(tmp_path)(app)

        plugin.enable_migrations(["m1", "m2"])
        migrator = app.make("migrator")

        assert migrator.paths == [
            tmp_path / "database" / "m1",
            tmp_path / "database" / "m2",
        ]

    def test_not_registered_without_migrator(self, tmp_path: Path) -> None:
        """Nothing fires if the migrator is never resolved."""
        self.make_dirs(tmp_path, "migrations")
        app = Application()
        migrator = MagicMock(spec=Migrator)
        factory = MagicMock(return_value=migrator)
        app.singleton("migrator", factory)

        make_plugin_class(tmp_path)(app).enable_migrations()

        factory.assert_not_called()
        migrator.add_path.assert_not_called()

    def test_single_default_path(self, app: Application, tmp_path: Path) -> None:
        self.make_dirs(tmp_path, "migrations")

        make_plugin_class(tmp_path)(app).enable_migrations()

        assert app.make("migrator").paths == [tmp_path / "database" / "migrations"]

    def test_already_resolved_migrator(self, app: Application, tmp_path: Path) -> None:
        """A migrator resolved before boot receives paths immediately."""
        self.make_dirs(tmp_path, "migrations")
        migrator = app.make("migrator")

        make_plugin_class(tmp_path)(app).enable_migrations()

        assert migrator.paths == [tmp_path / "database" / "migrations"]

    def test_missing_directory_fails_on_resolve(self, app: Application, tmp_path: Path) -> None:
        """Missing directories fail when the registration runs."""
        plugin = make_plugin_class(tmp_path)(app)

        plugin.enable_migrations("nowhere")

        with pytest.raises(ResourceNotFound, match="nowhere"):
            app.make("migrator")

    def test_missing_directory_keeps_other_plugins_paths(
        self, app: Application, tmp_path: Path
    ) -> None:
        """A failing plugin does not drop the paths of plugins booted after it."""
        broken_root = tmp_path / "broken"
        broken_root.mkdir()
        good_root = tmp_path / "good"
        self.make_dirs(good_root, "migrations")
        make_plugin_class(broken_root, "broken")(app).enable_migrations()
        make_plugin_class(good_root, "good")(app).enable_migrations()

        with pytest.raises(ResourceNotFound):
            app.make("migrator")

        assert app.make("migrator").paths == [good_root / "database" / "migrations"]
