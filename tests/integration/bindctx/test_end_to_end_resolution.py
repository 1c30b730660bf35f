"""End-to-end tests resolving real packages through the import system."""

import sys
import textwrap
import uuid

import pytest

from bindctx import ContextFinder, DiscoveryChainResolver, ImportlibLoadingScope, UnitRegistry
from bindctx.domain import FACTORY_KEY, AccessibilityError, ConfigurationError
from bindctx.infrastructure.default_provider import DefaultBindingContext

FACTORIES_SOURCE = """
from bindctx.domain import BindingContext, ContextFactory


class RecordedContext(BindingContext):
    def __init__(self, source, classes=(), package_path=None, properties=None):
        self.source = source
        self.classes = tuple(classes)
        self.package_path = package_path
        self.properties = dict(properties or {})


class FileFactory(ContextFactory):
    def create_context(self, classes, properties):
        return RecordedContext("file", classes=classes, properties=properties)

    def create_context_for_path(self, package_path, scope, properties):
        return RecordedContext("file", package_path=package_path, properties=properties)


class EnvironmentFactory(FileFactory):
    def create_context(self, classes, properties):
        return RecordedContext("environment", classes=classes, properties=properties)

    def create_context_for_path(self, package_path, scope, properties):
        return RecordedContext("environment", package_path=package_path, properties=properties)
"""


def write_module(path, source):
    path.write_text(textwrap.dedent(source), encoding="utf-8")


@pytest.fixture
def app(tmp_path, monkeypatch):
    """Create a throwaway application package and return its name.

    Layout:
        <app>/factories.py         context factories
        <app>/model/__init__.py    ObjectFactory + binding.properties
        <app>/extra/__init__.py    Widget, Gadget + binding.index
        <app>/empty/__init__.py    nothing
    """
    name = f"bindctx_app_{uuid.uuid4().hex[:8]}"
    root = tmp_path / name
    for sub in ("model", "extra", "empty"):
        (root / sub).mkdir(parents=True)
        (root / sub / "__init__.py").write_text("")
    (root / "__init__.py").write_text("")
    write_module(root / "factories.py", FACTORIES_SOURCE)
    write_module(root / "model" / "__init__.py", "class ObjectFactory:\n    pass\n")
    (root / "model" / "binding.properties").write_text(f"# legacy configuration\n{FACTORY_KEY}={name}.factories.FileFactory\n")
    write_module(root / "extra" / "__init__.py", "class Widget:\n    pass\n\n\nclass Gadget:\n    pass\n")
    (root / "extra" / "binding.index").write_text("# comment\n\nWidget\nGadget\n")
    monkeypatch.syspath_prepend(str(tmp_path))
    yield name
    for module in [m for m in sys.modules if m == name or m.startswith(name + ".")]:
        del sys.modules[module]


def make_finder(environ=None, registry=None):
    return ContextFinder(
        ImportlibLoadingScope(),
        registry or UnitRegistry(),
        DiscoveryChainResolver(environ=environ or {}),
    )


class TestPackagePathResolution:
    """Test resolution of package paths against real packages."""

    def test_properties_file_beside_object_factory(self, app):
        """Test that binding.properties next to ObjectFactory selects the factory."""
        context = make_finder().new_instance_from_path(f"{app}.model")

        assert context.source == "file"
        assert context.package_path == f"{app}.model"

    def test_index_selects_first_listed_class(self, app):
        """Test that comments and blank lines are skipped and the first entry wins."""
        context = make_finder().new_instance_from_path(f"{app}.extra")

        assert isinstance(context, DefaultBindingContext)
        assert [cls.__name__ for cls in context.classes] == ["Widget"]

    def test_package_without_content_classes(self, app):
        """Test that packages with nothing to offer still get a default context."""
        context = make_finder().new_instance_from_path(f"{app}.empty")

        assert isinstance(context, DefaultBindingContext)
        assert context.classes == ()

    def test_multi_package_path(self, app):
        """Test that each package contributes its representative class in order."""
        path = f"{app}.extra:{app}.empty"

        context = make_finder().new_instance_from_path(path)

        assert context.package_path == path
        assert [cls.__name__ for cls in context.classes] == ["Widget"]

    def test_first_content_class_decides_properties_file(self, app):
        """Test that only the first content class' package is consulted."""
        context = make_finder().new_instance_from_path(f"{app}.extra:{app}.model")

        assert isinstance(context, DefaultBindingContext)

    def test_environment_beats_properties_file(self, app):
        """Test that the process-wide override wins over binding.properties."""
        finder = make_finder(environ={FACTORY_KEY: f"{app}.factories.EnvironmentFactory"})

        context = finder.new_instance_from_path(f"{app}.model")

        assert context.source == "environment"

    def test_explicit_property_beats_environment(self, app):
        """Test that the properties map wins over the environment."""
        finder = make_finder(environ={FACTORY_KEY: f"{app}.factories.EnvironmentFactory"})

        context = finder.new_instance_from_path(
            f"{app}.model", properties={FACTORY_KEY: f"{app}.factories:FileFactory", "x": "1"}
        )

        assert context.source == "file"
        assert context.properties == {"x": "1"}

    def test_broken_index_entry(self, app, tmp_path):
        """Test that an index entry that does not load fails the resolution."""
        (tmp_path / app / "extra" / "binding.index").write_text("Missing\n")

        with pytest.raises(ConfigurationError, match="binding.index"):
            make_finder().new_instance_from_path(f"{app}.extra")


class TestIsolationUnits:
    """Test openness checks against declared units."""

    @pytest.fixture
    def registry(self, app):
        registry = UnitRegistry()
        registry.declare("bindctx", packages=["bindctx"])
        return registry

    def test_closed_package_is_rejected(self, app, registry):
        """Test that classes in packages not open to bindctx are refused."""
        registry.declare("app", packages=[f"{app}.extra"])
        widget = ImportlibLoadingScope().load_type(f"{app}.extra.Widget")

        with pytest.raises(AccessibilityError, match=f"{app}.extra"):
            make_finder(registry=registry).new_instance(widget)

    def test_open_package_is_accepted(self, app, registry):
        """Test that an open package resolves with the default factory."""
        registry.declare("app", packages=[f"{app}.extra"], opens={f"{app}.extra": ["bindctx"]})
        widget = ImportlibLoadingScope().load_type(f"{app}.extra.Widget")

        context = make_finder(registry=registry).new_instance(widget)

        assert context.classes == (widget,)

    def test_openness_is_propagated_to_factory_unit(self, app, registry):
        """Test that the factory's unit gains access to the bound package."""
        app_unit = registry.declare("app", packages=[f"{app}.extra"], opens={f"{app}.extra": ["bindctx"]})
        plugin_unit = registry.declare("plugins", packages=[f"{app}.factories"])
        widget = ImportlibLoadingScope().load_type(f"{app}.extra.Widget")
        assert not app_unit.is_open(f"{app}.extra", plugin_unit)

        make_finder(registry=registry).new_instance(
            widget, properties={FACTORY_KEY: f"{app}.factories.FileFactory"}
        )

        assert app_unit.is_open(f"{app}.extra", plugin_unit)
