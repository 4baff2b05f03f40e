"""Load schemas as live modules under unique names."""

import itertools
import sys
from types import ModuleType

from enumkit import GeneratorConfig, load_module

_counter = itertools.count()


def load(source: str, *, config: GeneratorConfig | None = None) -> ModuleType:
    """Generate and execute ``source`` as a fresh module.

    Every call registers a new ``sys.modules`` entry, so tests never see
    classes left behind by another test.
    """
    name = f"enumkit_generated_{next(_counter)}"
    module = load_module(source, name, origin=f"{name}.enums", config=config)
    assert sys.modules[name] is module
    return module
