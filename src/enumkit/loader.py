"""In-process loading of generated modules.

Generated source is normally written to disk and imported like any other
module. For tests, notebooks and build steps that only need the classes,
``load_module`` generates and executes the source directly.

The module is built from a ModuleSpec and registered in ``sys.modules``
before execution, as the import system does, so that ``dataclasses`` and
``typing`` can resolve the classes by module name.

Python 3.13+. Zero external dependencies.
"""

import importlib.abc
import importlib.util
import logging
import sys
from importlib.machinery import ModuleSpec
from types import ModuleType

from enumkit.config import GeneratorConfig
from enumkit.pipeline import generate

__all__ = ["GeneratedSourceLoader", "exec_module", "load_module"]

logger = logging.getLogger(__name__)


class GeneratedSourceLoader(importlib.abc.Loader):
    """Loader executing one generated source string."""

    def __init__(self, code: str, filename: str) -> None:
        self._code = code
        self._filename = filename

    def create_module(self, spec: ModuleSpec) -> None:
        return None

    def exec_module(self, module: ModuleType) -> None:
        compiled = compile(self._code, self._filename, "exec")
        exec(compiled, module.__dict__)  # noqa: S102 - executing generated code is the purpose


def exec_module(code: str, module_name: str, *, filename: str | None = None) -> ModuleType:
    """Execute generated source as module ``module_name``.

    Args:
        code: Python source produced by the generator
        module_name: Name registered in ``sys.modules`` (replaces any previous entry)
        filename: Name shown in tracebacks

    Returns:
        The executed module

    Raises:
        Exception: Whatever executing the module raises (for example an
            ImportError from a schema import); the module is unregistered
    """
    filename = filename or f"<enumkit:{module_name}>"
    loader = GeneratedSourceLoader(code, filename)
    spec = importlib.util.spec_from_loader(module_name, loader, origin=filename)
    if spec is None:
        msg = f"Cannot create a module spec for {module_name}"
        raise ImportError(msg)
    module = importlib.util.module_from_spec(spec)
    module.__file__ = filename
    sys.modules[module_name] = module
    try:
        loader.exec_module(module)
    except BaseException:
        del sys.modules[module_name]
        raise
    logger.debug("Loaded generated module %s", module_name)
    return module


def load_module(
    source: str,
    module_name: str,
    *,
    origin: str | None = None,
    config: GeneratorConfig | None = None,
) -> ModuleType:
    """Generate a module from schema source and execute it.

    Args:
        source: Schema text
        module_name: Name registered in ``sys.modules``
        origin: Label used in diagnostics and tracebacks
        config: Generation settings

    Returns:
        The executed module

    Example:
        >>> colors = load_module(schema_text, "colors")
        >>> colors.Color.from_str("red")
        Color.Red()
    """
    code = generate(source, origin=origin, config=config)
    return exec_module(code, module_name, filename=origin)
