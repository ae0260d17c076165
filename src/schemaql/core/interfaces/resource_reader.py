"""Resource reader interface."""

from typing import Protocol


class IResourceReader(Protocol):
    """Contract for reading type definitions from resource locators."""

    def supports(self, locator: str) -> bool:
        """Check if the string is a locator this reader understands.

        Args:
            locator: A type definition string from configuration.

        Returns:
            True if the string should be read as a resource.
        """
        ...

    def read(self, locator: str) -> str:
        """Read the full SDL text behind a locator.

        Args:
            locator: The resource locator.

        Returns:
            The resource contents.

        Raises:
            ResourceNotFoundError: If the resource cannot be read.
        """
        ...
