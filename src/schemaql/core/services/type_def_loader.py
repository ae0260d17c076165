"""Type definition loader service."""

import logging

from schemaql.core.interfaces.resource_reader import IResourceReader

logger = logging.getLogger(__name__)


class TypeDefLoader:
    """Resolves a configured type definition source into SDL text.

    Strings with a scheme the resource reader supports are read from the
    referenced resource; anything else is returned as literal SDL.
    """

    def __init__(self, reader: IResourceReader) -> None:
        """Initialize the loader.

        Args:
            reader: Reader used for resource locators.
        """
        self._reader = reader

    def load(self, type_defs: str) -> str:
        """Return the SDL text for a type definition source.

        Args:
            type_defs: Literal SDL or a resource locator.

        Returns:
            The SDL text.

        Raises:
            ResourceNotFoundError: If a locator cannot be read.
        """
        if self._reader.supports(type_defs):
            logger.debug("Reading type definitions from %s", type_defs)
            return self._reader.read(type_defs)
        return type_defs
