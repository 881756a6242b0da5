"""Tests for resolving MODULE:ATTR suite targets."""

import pathlib as _pathlib

import pytest as _pytest

import bramble.core as core
import bramble.errors as errors
import bramble.loader as loader
import tests.conftest as conftest


@_pytest.fixture
def suite_file(tmp_path: _pathlib.Path) -> _pathlib.Path:
    return conftest.write_suite_file(tmp_path, conftest.SUITE_FILE_TEMPLATE.format(extra=""))


class TestParseTarget:
    def test_splits_on_last_colon(self) -> None:
        assert loader.parse_target("pkg.mod:suite") == ("pkg.mod", "suite")
        assert loader.parse_target("C:/specs/x.py:suite") == ("C:/specs/x.py", "suite")

    @_pytest.mark.parametrize("target", ["pkg.mod", ":suite", "pkg.mod:"])
    def test_rejects_incomplete_targets(self, target: str) -> None:
        with _pytest.raises(errors.SuiteLoadError, match="MODULE:ATTR"):
            loader.parse_target(target)


class TestLoadSuite:
    """Targets resolve to Suite objects."""

    def test_suite_from_file(self, suite_file: _pathlib.Path) -> None:
        s = loader.load_suite(f"{suite_file}:suite")
        assert isinstance(s, core.Suite)
        assert s.name == "file suite"

    def test_factory_is_called(self, suite_file: _pathlib.Path) -> None:
        s = loader.load_suite(f"{suite_file}:make_suite")
        assert s.name == "file suite"

    def test_dotted_module(self, tmp_path: _pathlib.Path, monkeypatch: _pytest.MonkeyPatch) -> None:
        conftest.write_suite_file(
            tmp_path,
            conftest.SUITE_FILE_TEMPLATE.format(extra=""),
            name="dotted_spec_module.py",
        )
        monkeypatch.syspath_prepend(str(tmp_path))
        s = loader.load_suite("dotted_spec_module:suite")
        assert s.num_examples() == 1

    def test_missing_file(self, tmp_path: _pathlib.Path) -> None:
        with _pytest.raises(errors.SuiteLoadError, match="not found"):
            loader.load_suite(f"{tmp_path / 'absent.py'}:suite")

    def test_missing_module(self) -> None:
        with _pytest.raises(errors.SuiteLoadError, match="Cannot import"):
            loader.load_suite("no_such_module_for_bramble_tests:suite")

    def test_missing_attribute(self, suite_file: _pathlib.Path) -> None:
        with _pytest.raises(errors.SuiteLoadError, match="no attribute"):
            loader.load_suite(f"{suite_file}:absent")

    def test_not_a_suite(self, suite_file: _pathlib.Path) -> None:
        with _pytest.raises(errors.SuiteLoadError, match="not a Suite"):
            loader.load_suite(f"{suite_file}:not_a_suite")

    def test_broken_file(self, tmp_path: _pathlib.Path) -> None:
        path = conftest.write_suite_file(tmp_path, "raise RuntimeError('import time')\n", name="broken_spec.py")
        with _pytest.raises(errors.SuiteLoadError, match="import time"):
            loader.load_suite(f"{path}:suite")

    def test_load_error_is_a_bramble_error(self) -> None:
        assert issubclass(errors.SuiteLoadError, errors.BrambleError)
