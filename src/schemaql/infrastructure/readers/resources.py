"""Resource reader for file and package type definitions."""

import logging
from importlib import resources
from pathlib import Path

from ariadne import load_schema_from_path
from ariadne.exceptions import GraphQLFileSyntaxError

from schemaql.exceptions import ResourceNotFoundError, SchemaBuildError

logger = logging.getLogger(__name__)

FILE_SCHEME = "file://"
RESOURCE_SCHEME = "resource://"


class ResourceReader:
    """Reads SDL from ``file://`` and ``resource://`` locators.

    ``file://<path>`` points at a ``.graphql`` file or at a directory whose
    GraphQL files are loaded recursively. ``resource://<package>/<path>``
    points at package data shipped inside an importable package.
    """

    schemes = (FILE_SCHEME, RESOURCE_SCHEME)

    def __init__(self, base_path: str | Path | None = None) -> None:
        """Initialize the resource reader.

        Args:
            base_path: Directory relative ``file://`` paths are resolved
                against. Defaults to the working directory.
        """
        self._base_path = Path(base_path) if base_path is not None else None

    def supports(self, locator: str) -> bool:
        return locator.startswith(self.schemes)

    def read(self, locator: str) -> str:
        """Read the SDL text behind a locator.

        Args:
            locator: A ``file://`` or ``resource://`` locator.

        Returns:
            The SDL text.

        Raises:
            ResourceNotFoundError: If the resource cannot be read.
            SchemaBuildError: If a GraphQL file contains invalid syntax.
        """
        if locator.startswith(FILE_SCHEME):
            return self._read_file(locator, locator[len(FILE_SCHEME):])
        if locator.startswith(RESOURCE_SCHEME):
            return self._read_package_resource(locator, locator[len(RESOURCE_SCHEME):])
        raise ResourceNotFoundError(locator, "unsupported scheme")

    def _read_file(self, locator: str, raw_path: str) -> str:
        path = Path(raw_path)
        if not path.is_absolute() and self._base_path is not None:
            path = self._base_path / path
        if not path.exists():
            raise ResourceNotFoundError(locator, f"{path} does not exist")

        logger.debug("Loading type definitions from %s", path)
        try:
            return load_schema_from_path(path)
        except GraphQLFileSyntaxError as e:
            raise SchemaBuildError(str(e)) from e
        except OSError as e:
            raise ResourceNotFoundError(locator, str(e)) from e

    def _read_package_resource(self, locator: str, spec: str) -> str:
        package, _, resource_path = spec.partition("/")
        if not package or not resource_path:
            raise ResourceNotFoundError(locator, "expected resource://<package>/<path>")

        logger.debug("Loading type definitions from package %s: %s", package, resource_path)
        try:
            return resources.files(package).joinpath(resource_path).read_text(encoding="utf-8")
        except (ModuleNotFoundError, OSError, TypeError, UnicodeDecodeError) as e:
            raise ResourceNotFoundError(locator, str(e)) from e
