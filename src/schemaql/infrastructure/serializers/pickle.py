"""Pickle serializer implementation."""

import hashlib
import hmac
import pickle

from graphql import DocumentNode

from schemaql.exceptions import SerializationError

SIGNATURE_SIZE = hashlib.sha256().digest_size


class PickleSerializer:
    """Pickle serializer for parsed GraphQL documents.

    graphql-core AST nodes are plain Python objects, so pickling keeps the
    whole node tree intact without re-parsing on load.

    Unpickling runs code chosen by whoever wrote the entry. With a durable
    or shared backend (file system, Redis) anyone able to write to the
    store can execute code in every process reading from it. Pass a
    ``secret_key`` in that case: entries are then signed with HMAC-SHA256
    and entries with a missing or wrong signature are rejected before they
    are unpickled.
    """

    def __init__(
        self,
        secret_key: bytes | str | None = None,
        protocol: int = pickle.HIGHEST_PROTOCOL,
    ) -> None:
        """Initialize the pickle serializer.

        Args:
            secret_key: Key used to sign entries. None stores them unsigned,
                which is only safe for in-process backends.
            protocol: Pickle protocol version to write.
        """
        if isinstance(secret_key, str):
            secret_key = secret_key.encode("utf-8")
        self._secret_key = secret_key
        self._protocol = protocol

    @property
    def signed(self) -> bool:
        """Check if entries are signed."""
        return self._secret_key is not None

    def serialize(self, document: DocumentNode) -> bytes:
        """Serialize a document to bytes.

        Args:
            document: The parsed document.

        Returns:
            The pickled document, prefixed with its signature when signed.

        Raises:
            SerializationError: If the document cannot be pickled.
        """
        try:
            payload = pickle.dumps(document, protocol=self._protocol)
        except (pickle.PicklingError, TypeError, AttributeError, RecursionError) as e:
            raise SerializationError(f"Failed to serialize document: {e}") from e

        if self._secret_key is None:
            return payload
        return _sign(self._secret_key, payload) + payload

    def deserialize(self, data: bytes) -> DocumentNode:
        """Deserialize bytes to a document.

        Args:
            data: The stored entry.

        Returns:
            The restored document.

        Raises:
            SerializationError: If the signature does not match, or the data
                does not hold a pickled DocumentNode.
        """
        if self._secret_key is not None:
            signature, data = data[:SIGNATURE_SIZE], data[SIGNATURE_SIZE:]
            if not hmac.compare_digest(signature, _sign(self._secret_key, data)):
                raise SerializationError("Entry signature does not match")

        try:
            document = pickle.loads(data)
        except (pickle.UnpicklingError, EOFError, AttributeError, ImportError, IndexError, TypeError, ValueError) as e:
            raise SerializationError(f"Failed to deserialize data: {e}") from e

        if not isinstance(document, DocumentNode):
            raise SerializationError(f"Entry holds {type(document).__name__}, expected DocumentNode")
        return document


def _sign(key: bytes, payload: bytes) -> bytes:
    return hmac.new(key, payload, hashlib.sha256).digest()
