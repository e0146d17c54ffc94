"""Generation orchestrator.

:class:`SwaggerGenerator` runs the whole pipeline for a set of modules:
build an empty document from the configuration, let the model strategy
prepare every module, walk each module with
:class:`~yang2swagger.generator.module_generator.ModuleGenerator`, then
post-process the result.

Example::

    generator = SwaggerGenerator(context, ["interfaces"], GeneratorConfig(host="router:8443"))
    document = generator.generate()
    generator.write(sys.stdout)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional, TextIO, Union

from yang2swagger.exceptions import ConfigError
from yang2swagger.generator.data_objects import build_data_objects
from yang2swagger.generator.module_generator import ModuleGenerator
from yang2swagger.generator.postprocess import postprocess
from yang2swagger.generator.restconf import PathHandlerBuilder, RestconfPathHandlerBuilder
from yang2swagger.generator import writer
from yang2swagger.models import GeneratorConfig, Module, SchemaContext
from yang2swagger.plugins.base import TagGenerator
from yang2swagger.plugins.manager import TagGeneratorManager
from yang2swagger.swagger import Info, Swagger

logger = logging.getLogger(__name__)


class SwaggerGenerator:
    """Turns selected modules of a schema context into a Swagger document.

    Args:
        context: The resolved schema context.
        modules: Modules to generate for, as names or :class:`Module`
            objects.
        config: Generation settings; defaults to :class:`GeneratorConfig`.
        path_handler_builder: Path strategy; defaults to
            :class:`~yang2swagger.generator.restconf.RestconfPathHandlerBuilder`.
        tag_generators: Tag generator instances applied after the ones
            named in ``config.tag_generators``.

    Raises:
        ConfigError: If *context* or *modules* is ``None`` or no module is
            selected.
        PluginError: If a tag generator named in the configuration cannot
            be created.
    """

    def __init__(
        self,
        context: Optional[SchemaContext],
        modules: Optional[Iterable[Union[str, Module]]],
        config: Optional[GeneratorConfig] = None,
        *,
        path_handler_builder: Optional[PathHandlerBuilder] = None,
        tag_generators: Iterable[TagGenerator] = (),
    ) -> None:
        if context is None:
            raise ConfigError("Schema context must not be None")
        if modules is None:
            raise ConfigError("Module set must not be None")
        names = [m.name if isinstance(m, Module) else m for m in modules]
        if not names:
            raise ConfigError("No modules selected for generation")

        self.context = context
        self.module_names = list(dict.fromkeys(names))
        self.config = config or GeneratorConfig()
        self.path_handler_builder = path_handler_builder or RestconfPathHandlerBuilder()

        for generator in TagGeneratorManager().create_all(self.config.tag_generators):
            self.path_handler_builder.add_tag_generator(generator)
        for generator in tag_generators:
            self.path_handler_builder.add_tag_generator(generator)

    def _selected_modules(self) -> list[Module]:
        modules: list[Module] = []
        for name in self.module_names:
            module = self.context.find_module(name)
            if module is None:
                available = ", ".join(self.context.module_names) or "none"
                raise ConfigError(f"Unknown module '{name}' (available: {available})")
            if all(m.name != module.name for m in modules):
                modules.append(module)
        return modules

    def generate(self) -> Swagger:
        """Run the pipeline and return a fresh, post-processed document.

        Raises:
            ConfigError: If no element kinds are configured or a selected
                module is not in the context.
        """
        config = self.config
        if not config.elements:
            raise ConfigError("At least one element kind (data, rpc) must be configured")
        modules = self._selected_modules()
        names = [m.name for m in modules]

        document = Swagger(
            info=Info(version=config.version),
            host=config.host,
            base_path=config.base_path,
            consumes=list(config.consumes),
            produces=list(config.produces),
        )

        data_objects = build_data_objects(config.strategy, self.context, document, names)
        for module in modules:
            data_objects.process_module(module)
        self.path_handler_builder.configure(self.context, document, data_objects)

        for module in modules:
            logger.info("Generating paths for module %s", module.name)
            handler = self.path_handler_builder.for_module(module)
            ModuleGenerator(module, names, config.elements, handler, data_objects).generate()

        title = ",".join(names)
        document.info.title = f"{title} API"
        document.info.description = f"{title} API generated from yang definitions"

        postprocess(document, resolve_chains=config.collapse_alias_chains)
        logger.info(
            "Generated %d path(s) and %d definition(s)",
            len(document.paths),
            len(document.definitions or ()),
        )
        return document

    def write(self, target: Union[TextIO, str, Path, None]) -> Swagger:
        """Generate and write the document in the configured format.

        Raises:
            ConfigError: If *target* is ``None``.
            OutputError: If the target cannot be written.
        """
        if target is None:
            raise ConfigError("Output target must not be None")
        document = self.generate()
        writer.write(document, target, self.config.format)
        return document
