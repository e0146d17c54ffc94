"""Tag generator manager -- discovery and instantiation by name.

This module contains :class:`TagGeneratorManager`, which knows the built-in
tag generators (:mod:`yang2swagger.plugins.tags`) and discovers third-party
ones registered as Python entry points.

The entry-point group used for discovery is ``yang2swagger.tag_generators``.
Third-party packages register generators by declaring an entry point under
this group in their ``pyproject.toml``::

    [project.entry-points."yang2swagger.tag_generators"]
    owner = "my_package.tags:OwnerTags"
"""

from __future__ import annotations

import importlib.metadata
import logging
from typing import Iterable

from yang2swagger.exceptions import PluginError
from yang2swagger.plugins.base import TagGenerator
from yang2swagger.plugins.tags import BUILTIN_TAG_GENERATORS

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "yang2swagger.tag_generators"
"""The entry-point group name used for tag generator discovery."""


class TagGeneratorManager:
    """Resolves tag generator names into :class:`TagGenerator` instances.

    Built-in generators are always available. Entry points are scanned
    lazily on the first lookup of a name that is not built in, so the common
    case never touches package metadata.

    Example:
        Typical usage::

            manager = TagGeneratorManager()
            generators = manager.create_all(["segment", "config"])
    """

    def __init__(self) -> None:
        self._registry: dict[str, type[TagGenerator]] = dict(BUILTIN_TAG_GENERATORS)
        self._discovered = False

    # ------------------------------------------------------------------
    # Discovery
    # ------------------------------------------------------------------

    def discover(self) -> list[str]:
        """Register tag generators exposed through entry points.

        Entry points that fail to load, or that do not produce a
        :class:`TagGenerator` subclass, are logged as warnings and skipped.
        Entry points named like a built-in are ignored.

        Returns:
            Names of the generators that were registered.
        """
        loaded_names: list[str] = []
        self._discovered = True

        for ep in importlib.metadata.entry_points().select(group=ENTRY_POINT_GROUP):
            name = ep.name
            if name in BUILTIN_TAG_GENERATORS:
                logger.debug("Tag generator '%s' shadows a built-in, skipping", name)
                continue

            try:
                generator_cls = ep.load()
            except Exception as exc:
                logger.warning("Failed to load tag generator '%s': %s", name, exc)
                continue

            if not (isinstance(generator_cls, type) and issubclass(generator_cls, TagGenerator)):
                logger.warning(
                    "Entry point '%s' does not refer to a TagGenerator subclass", name
                )
                continue

            self._registry[name] = generator_cls
            loaded_names.append(name)

        return loaded_names

    # ------------------------------------------------------------------
    # Querying
    # ------------------------------------------------------------------

    def create(self, name: str) -> TagGenerator:
        """Instantiate the tag generator registered under *name*.

        Raises:
            PluginError: If no generator has that name or it cannot be
                instantiated.
        """
        if name not in self._registry and not self._discovered:
            self.discover()
        try:
            generator_cls = self._registry[name]
        except KeyError:
            available = ", ".join(sorted(self._registry))
            raise PluginError(
                f"Unknown tag generator '{name}' (available: {available})"
            ) from None

        try:
            return generator_cls()
        except Exception as exc:
            raise PluginError(f"Failed to create tag generator '{name}': {exc}") from exc

    def create_all(self, names: Iterable[str]) -> list[TagGenerator]:
        return [self.create(name) for name in names]

    def list_generators(self) -> list[dict[str, str]]:
        """List every known generator with its description.

        Returns:
            A list of dicts with ``"name"``, ``"description"`` and
            ``"source"`` (``"builtin"`` or ``"entry-point"``) keys.
        """
        if not self._discovered:
            self.discover()
        rows: list[dict[str, str]] = []
        for name, generator_cls in self._registry.items():
            try:
                description = generator_cls().description
            except Exception as exc:
                logger.warning("Cannot describe tag generator '%s': %s", name, exc)
                description = ""
            rows.append(
                {
                    "name": name,
                    "description": description,
                    "source": "builtin" if name in BUILTIN_TAG_GENERATORS else "entry-point",
                }
            )
        return rows
