"""Utilities for declaratively registering application modules.

Each blueprint-backed module is described with metadata so that registration
is a loop over a table instead of hand-written calls.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from flask import Blueprint, Flask
from werkzeug.utils import import_string


@dataclass(frozen=True)
class ModuleDefinition:
    """Describe how a blueprint-backed module is registered with the app."""

    import_path: str
    attribute: str
    url_prefix: Optional[str] = None
    version: str = "1.0"

    def load_blueprint(self) -> Blueprint:
        """Import and return the blueprint described by this definition."""

        module = import_string(self.import_path)
        blueprint = getattr(module, self.attribute, None)
        if not isinstance(blueprint, Blueprint):
            raise TypeError(
                "Expected attribute '%s' in '%s' to be a Flask Blueprint, got %r instead"
                % (self.attribute, self.import_path, type(blueprint))
            )
        return blueprint

    def load_metadata(self) -> dict:
        """Return the ``module_metadata`` declared by the module package, if any."""

        package = import_string(self.import_path.rsplit(".", 1)[0])
        return dict(getattr(package, "module_metadata", None) or {})


def register_modules(app: Flask, modules: Sequence[ModuleDefinition]) -> None:
    """Register all enabled modules in the provided iterable with the Flask app."""

    for module in modules:
        metadata = module.load_metadata()
        if not metadata.get("enabled", True):
            app.logger.info("Module %s is disabled, skipping", metadata.get("name", module.import_path))
            continue

        blueprint = module.load_blueprint()
        url_prefix = module.url_prefix or metadata.get("url_prefix")
        app.register_blueprint(blueprint, url_prefix=url_prefix)
        app.logger.debug(
            "Registered module %s (version %s) at prefix %s",
            metadata.get("name", module.import_path),
            module.version,
            url_prefix or "<root>",
        )


def register_default_modules(app: Flask) -> None:
    """Register the built-in WordStack modules."""

    register_modules(app, DEFAULT_MODULES)


# Importing a module's ``routes`` attaches its endpoints to the blueprint; the URL
# prefix comes from the package's ``module_metadata``.
DEFAULT_MODULES: Iterable[ModuleDefinition] = (
    ModuleDefinition("wordstack_app.modules.auth.routes", "blueprint"),
    ModuleDefinition("wordstack_app.modules.dictionary.routes", "blueprint"),
    ModuleDefinition("wordstack_app.modules.flashcard.routes", "blueprint"),
    ModuleDefinition("wordstack_app.modules.notebook.routes", "blueprint"),
    ModuleDefinition("wordstack_app.modules.articles.routes", "blueprint"),
    ModuleDefinition("wordstack_app.modules.images.routes", "blueprint"),
)
