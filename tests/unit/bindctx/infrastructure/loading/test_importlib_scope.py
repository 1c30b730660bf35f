"""Unit tests for ImportlibLoadingScope."""

import sys
import textwrap
import uuid
from collections import OrderedDict
from importlib.metadata import EntryPoint

import pytest

from bindctx.domain import ILoadingScope, TypeLoadError
from bindctx.infrastructure.loading import ImportlibLoadingScope, importlib_scope


@pytest.fixture
def package(tmp_path, monkeypatch):
    """Create an importable throwaway package and return its name."""
    name = f"bindctx_pkg_{uuid.uuid4().hex[:8]}"
    root = tmp_path / name
    root.mkdir()
    (root / "__init__.py").write_text("")
    (root / "model.py").write_text(
        textwrap.dedent(
            """
            class Widget:
                pass


            class Outer:
                class Inner:
                    pass
            """
        )
    )
    (root / "broken.py").write_text("import bindctx_missing_dependency_xyz\n")
    (root / "binding.index").write_text("# classes\nWidget\n", encoding="utf-8")
    monkeypatch.syspath_prepend(str(tmp_path))
    yield name
    for module in [m for m in sys.modules if m == name or m.startswith(name + ".")]:
        del sys.modules[module]


@pytest.fixture
def scope():
    return ImportlibLoadingScope()


class TestLoadType:
    """Test cases for load_type."""

    def test_scope_implements_interface(self, scope):
        """Test that ImportlibLoadingScope implements ILoadingScope."""
        assert isinstance(scope, ILoadingScope)

    def test_dotted_name(self, scope):
        """Test loading a standard library class by dotted name."""
        assert scope.load_type("collections.OrderedDict") is OrderedDict

    def test_colon_name(self, scope):
        """Test loading a class by module:attribute name."""
        assert scope.load_type("collections:OrderedDict") is OrderedDict

    def test_nested_class(self, scope, package):
        """Test that nested classes load with both spellings."""
        dotted = scope.load_type(f"{package}.model.Outer.Inner")
        coloned = scope.load_type(f"{package}.model:Outer.Inner")

        assert dotted.__qualname__ == "Outer.Inner"
        assert dotted is coloned

    @pytest.mark.parametrize("name", ["", "   "])
    def test_empty_name(self, scope, name):
        """Test that blank names are rejected."""
        with pytest.raises(TypeLoadError):
            scope.load_type(name)

    def test_missing_module(self, scope):
        """Test that unknown modules are reported."""
        with pytest.raises(TypeLoadError, match="Cannot load type: non.existing.FactoryClass"):
            scope.load_type("non.existing.FactoryClass")

    def test_missing_attribute(self, scope, package):
        """Test that unknown attributes of an existing module are reported."""
        with pytest.raises(TypeLoadError, match="'Gizmo' not found"):
            scope.load_type(f"{package}.model.Gizmo")

    def test_missing_module_with_colon(self, scope):
        """Test that unknown modules are reported for module:attribute names."""
        with pytest.raises(TypeLoadError, match="not found"):
            scope.load_type("non_existing_module_xyz:Factory")

    def test_broken_module_import_is_reported(self, scope, package):
        """Test that import errors inside an existing module are not hidden."""
        with pytest.raises(TypeLoadError, match="bindctx_missing_dependency_xyz") as exc_info:
            scope.load_type(f"{package}.broken.Factory")

        assert isinstance(exc_info.value.__cause__, ImportError)


class TestReadResource:
    """Test cases for read_resource."""

    def test_reads_text_resource(self, scope, package):
        """Test reading a file shipped inside a package."""
        assert scope.read_resource(package, "binding.index") == "# classes\nWidget\n"

    def test_missing_resource(self, scope, package):
        """Test that an absent file reads as None."""
        assert scope.read_resource(package, "binding.properties") is None

    def test_missing_package(self, scope):
        """Test that an unknown package reads as None."""
        assert scope.read_resource("non_existing_package_xyz", "binding.index") is None


class TestDiscover:
    """Test cases for discover."""

    def test_yields_entry_point_values(self, scope, monkeypatch):
        """Test that entry point values are yielded in order."""
        registered = [
            EntryPoint(name="first", value="app.factories:First", group="bindctx.context_factories"),
            EntryPoint(name="second", value="app.factories:Second", group="bindctx.context_factories"),
        ]
        requested = []

        def fake_entry_points(group):
            requested.append(group)
            return registered

        monkeypatch.setattr(importlib_scope, "entry_points", fake_entry_points)

        assert list(scope.discover("bindctx.context_factories")) == [
            "app.factories:First",
            "app.factories:Second",
        ]
        assert requested == ["bindctx.context_factories"]

    def test_empty_group(self, scope, monkeypatch):
        """Test that a group with no registrations yields nothing."""
        monkeypatch.setattr(importlib_scope, "entry_points", lambda group: [])

        assert list(scope.discover("bindctx.context_factories")) == []
