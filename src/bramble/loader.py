"""
Suite loading for the command line.

A target names one suite explicitly as ``MODULE:ATTR``. MODULE is either a
dotted module name importable from the current path or a path to a .py
file; ATTR is a (possibly dotted) attribute holding a Suite or a
zero-argument callable returning one.
"""

from __future__ import annotations

import importlib as _importlib
import importlib.util as _importlib_util
import logging as _logging
import pathlib as _pathlib
import sys as _sys
import types as _types

import bramble.core.nodes as nodes
import bramble.errors as errors

_logger = _logging.getLogger(__name__)


def parse_target(target: str) -> tuple[str, str]:
    """
    Split a ``MODULE:ATTR`` target.

    Raises:
        SuiteLoadError: If either half is missing.
    """
    module_name, sep, attr = target.rpartition(":")
    if not sep or not module_name or not attr:
        raise errors.SuiteLoadError(
            f"Invalid suite target {target!r}: expected MODULE:ATTR"
        )
    return module_name, attr


def load_module(module_ref: str) -> _types.ModuleType:
    """
    Import a module by dotted name or from a .py file path.

    Raises:
        SuiteLoadError: If the module is missing or fails to import.
    """
    if module_ref.endswith(".py"):
        return _load_module_from_path(_pathlib.Path(module_ref))

    try:
        return _importlib.import_module(module_ref)
    except ImportError as e:
        raise errors.SuiteLoadError(f"Cannot import module {module_ref!r}: {e}") from e
    except Exception as e:
        raise errors.SuiteLoadError(f"Module {module_ref!r} failed to import: {e}") from e


def _load_module_from_path(path: _pathlib.Path) -> _types.ModuleType:
    if not path.exists():
        raise errors.SuiteLoadError(f"Suite file not found: {path}")

    module_name = f"bramble_suites.{path.stem}"
    spec = _importlib_util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise errors.SuiteLoadError(f"Cannot load module spec for: {path}")

    module = _importlib_util.module_from_spec(spec)
    _sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except Exception as e:
        _sys.modules.pop(module_name, None)
        raise errors.SuiteLoadError(f"Failed to load suite file {path}: {e}") from e
    return module


def load_suite(target: str) -> nodes.Suite:
    """
    Resolve a ``MODULE:ATTR`` target to a Suite.

    Raises:
        SuiteLoadError: If the target cannot be imported, the attribute is
            missing, or it does not produce a Suite.
    """
    module_ref, attr_path = parse_target(target)
    obj: object = load_module(module_ref)

    for part in attr_path.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError:
            raise errors.SuiteLoadError(
                f"{module_ref!r} has no attribute {attr_path!r}"
            ) from None

    if not isinstance(obj, nodes.Suite) and callable(obj):
        _logger.debug("Calling suite factory %s", target)
        try:
            obj = obj()
        except Exception as e:
            raise errors.SuiteLoadError(f"Suite factory {target!r} failed: {e}") from e

    if not isinstance(obj, nodes.Suite):
        raise errors.SuiteLoadError(
            f"{target!r} is not a Suite (got {type(obj).__name__})"
        )
    return obj
