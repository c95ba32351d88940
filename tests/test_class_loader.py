"""
Tests for loading source units by qualified class name.
"""

import sys
from dataclasses import is_dataclass
from unittest.mock import Mock

import pytest

from trex_loader.class_loader.executor import ModuleExecutor, module_name_for
from trex_loader.class_loader.loader import load
from trex_loader.core.config import settings
from trex_loader.errors import ClassLoaderError, SourceUnitNotFoundError, UnitExecutionError
from tests.helpers import base_path, sep_path


@pytest.fixture(autouse=True)
def clean_modules(registry):
    yield
    for name in [k for k in sys.modules if k.startswith(('TRexTests.', 'TRex.', 'Vendor.'))]:
        sys.modules.pop(name, None)


class TestLoad:
    def test_load_ok(self):
        foo = load('TRexTests\\Loader\\resources\\Foo')
        assert isinstance(foo, type)
        assert foo.__name__ == 'Foo'
        assert foo.label == 'Foo_test'

    def test_load_legacy_name(self):
        foo = load('TRexTests_Loader_resources_Foo')
        assert foo.label == 'Foo_test'

    def test_load_publishes_module(self):
        foo = load('TRexTests.Loader.resources.Foo')
        module = sys.modules['TRexTests.Loader.resources.Foo']
        assert module.Foo is foo
        assert module.__file__ == base_path('trex', 'tests', 'TRexTests', 'Loader', 'resources', 'Foo.py')

    def test_load_without_produced_value(self):
        assert load('TRexTests\\Loader\\resources\\Empty') is None
        assert sys.modules['TRexTests.Loader.resources.Empty'].LOADED is True

    def test_load_dataclass_unit(self):
        obj = load('\\TRex\\Object')
        assert is_dataclass(obj)
        assert obj().name == 'object'

    def test_load_registered_vendor(self, registry):
        registry.add_vendor('Vendor', sep_path('vendor', 'src', trailing=True))
        cls = load('Vendor_ClassName')
        assert cls.__name__ == 'ClassName'

    def test_load_is_not_cached(self):
        first = load('TRexTests\\Loader\\resources\\Foo')
        second = load('TRexTests\\Loader\\resources\\Foo')
        assert first is not second

    def test_load_ko(self):
        with pytest.raises(SourceUnitNotFoundError) as excinfo:
            load('TRexTests\\Loader\\resources\\Bar')
        err = excinfo.value
        expected_path = base_path('trex', 'tests', 'TRexTests', 'Loader', 'resources', 'Bar.py')
        assert err.qualified_name == 'TRexTests\\Loader\\resources\\Bar'
        assert err.path == expected_path
        assert str(err) == (
            f"No source unit found for class TRexTests\\Loader\\resources\\Bar with the path {expected_path}"
        )
        assert isinstance(err, ClassLoaderError)
        assert isinstance(err, LookupError)

    def test_load_unregistered_vendor_fails_with_path(self, diagnostics_log):
        with pytest.raises(SourceUnitNotFoundError) as excinfo:
            load('Vendor2\\ClassName')
        assert excinfo.value.path == base_path('Vendor2', 'ClassName.py')
        assert diagnostics_log.codes() == ['vendor_not_recorded']

    def test_directory_is_not_a_source_unit(self, monkeypatch):
        monkeypatch.setattr(settings, 'source_suffix', '')
        with pytest.raises(SourceUnitNotFoundError):
            load('vendor')

    def test_unit_failure_propagates(self):
        with pytest.raises(RuntimeError, match='broken source unit'):
            load('TRexTests\\Loader\\resources\\Broken')
        assert 'TRexTests.Loader.resources.Broken' not in sys.modules

    def test_unit_failure_logged(self, caplog):
        with caplog.at_level('ERROR', logger='trex_loader.class_loader.loader'):
            with pytest.raises(RuntimeError):
                load('TRexTests\\Loader\\resources\\Broken')
        assert 'Source unit execution failed' in caplog.text


class TestExecutorInjection:
    def test_custom_executor(self):
        executor = Mock()
        executor.execute.return_value = 'Foo_test'
        assert load('TRexTests\\Loader\\resources\\Foo', executor=executor) == 'Foo_test'
        executor.execute.assert_called_once_with(
            base_path('trex', 'tests', 'TRexTests', 'Loader', 'resources', 'Foo.py'),
            'TRexTests\\Loader\\resources\\Foo',
        )

    def test_executor_not_called_for_missing_unit(self):
        executor = Mock()
        with pytest.raises(SourceUnitNotFoundError):
            load('TRexTests\\Loader\\resources\\Bar', executor=executor)
        executor.execute.assert_not_called()


class TestModuleExecutor:
    def test_module_name_for(self):
        assert module_name_for('\\Vendor\\Package_ClassName') == 'Vendor.Package.ClassName'

    def test_failed_unit_restores_previous_module(self):
        sentinel = object()
        sys.modules['TRexTests.Loader.resources.Broken'] = sentinel
        try:
            with pytest.raises(RuntimeError):
                ModuleExecutor().execute(
                    base_path('trex', 'tests', 'TRexTests', 'Loader', 'resources', 'Broken.py'),
                    'TRexTests.Loader.resources.Broken',
                )
            assert sys.modules['TRexTests.Loader.resources.Broken'] is sentinel
        finally:
            sys.modules.pop('TRexTests.Loader.resources.Broken', None)

    def test_non_python_path_rejected(self, tmp_path):
        unit = tmp_path / 'Unit.txt'
        unit.write_text('x = 1\n')
        with pytest.raises(UnitExecutionError) as excinfo:
            ModuleExecutor().execute(str(unit), 'Unit')
        assert excinfo.value.path == str(unit)
        assert isinstance(excinfo.value, ImportError)
