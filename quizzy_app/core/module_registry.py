"""Utilities for declaratively registering application modules.

Each module is described with metadata and exposes a ``setup_module(app)``
hook; registration imports the module and runs the hook in order.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import ModuleType
from typing import Iterable, Sequence

from flask import Flask
from werkzeug.utils import import_string


@dataclass(frozen=True)
class ModuleDefinition:
    """Describe how a module is set up on the app."""

    import_path: str
    version: str = "1.0"

    def load_module(self) -> ModuleType:
        """Import and return the module described by this definition."""

        module = import_string(self.import_path)
        if not callable(getattr(module, "setup_module", None)):
            raise TypeError(
                "Expected '%s' to define a callable setup_module(app)" % self.import_path
            )
        return module


def register_modules(app: Flask, modules: Sequence[ModuleDefinition]) -> None:
    """Run the setup hook of every module, in the given order."""

    for definition in modules:
        module = definition.load_module()
        metadata = getattr(module, "module_metadata", {})
        if not metadata.get("enabled", True):
            app.logger.debug("Skipped disabled module %s", definition.import_path)
            continue
        module.setup_module(app)
        app.logger.debug(
            "Registered module %s (version %s)",
            definition.import_path,
            definition.version,
        )


def register_default_modules(app: Flask) -> None:
    """Convenience helper that registers the built-in Quizzy modules."""

    register_modules(app, DEFAULT_MODULES)


# The session module reads config the others install, so it goes last.
DEFAULT_MODULES: Iterable[ModuleDefinition] = (
    ModuleDefinition("quizzy_app.modules.quiz", version="1.0"),
    ModuleDefinition("quizzy_app.modules.srs", version="1.0"),
    ModuleDefinition("quizzy_app.modules.flashcard", version="1.0"),
    ModuleDefinition("quizzy_app.modules.session", version="1.0"),
)
