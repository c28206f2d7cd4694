"""
Operation Dispatcher Module

Routes decoded operations to the store and turns what the store reports
into an Outcome. The dispatcher knows nothing about HTTP and the store
knows nothing about the wire format.
"""

import logging
from typing import Any, Dict, Optional, Tuple, Union

from ..cache.store import KVStore
from ..config.settings import settings
from .commands import Operation, OperationType, Outcome
from .parser import MalformedRequestError, ProtocolParser

logger = logging.getLogger(__name__)


class Dispatcher:
    """
    Translates one Operation into exactly one store call.

    Attributes:
        store: The KVStore every operation is applied to
        parser: The ProtocolParser used to decode bodies and encode payloads
        missing_key_status: Status reported for a GET on an absent key
    """

    def __init__(
            self,
            store: KVStore,
            parser: Optional[ProtocolParser] = None,
            missing_key_status: Optional[int] = None,
    ):
        self.store = store
        self.parser = parser if parser is not None else ProtocolParser()
        status = (
            missing_key_status if missing_key_status is not None
            else settings.MISSING_KEY_STATUS
        )
        # An error payload must never travel with a success status
        if not 400 <= status <= 599:
            raise ValueError(f"missing_key_status must be a 4xx or 5xx code, got {status}")
        self.missing_key_status = status

    def dispatch(self, operation: Operation) -> Outcome:
        """
        Apply an operation to the store.

        Args:
            operation: The decoded Operation

        Returns:
            FOUND or NOT_FOUND for GET, STORED for SET, FAULT for anything else
        """
        if operation.type == OperationType.GET:
            value, found = self.store.get(operation.key)
            if not found:
                logger.debug(f"GET {operation.key!r}: not found")
                return Outcome.not_found(status=self.missing_key_status)
            logger.debug(f"GET {operation.key!r}: found")
            return Outcome.found(value)

        if operation.type == OperationType.SET:
            self.store.set(operation.key, operation.value)
            logger.debug(f"SET {operation.key!r}")
            return Outcome.stored()

        logger.info(f"Unrecognised op: {operation.op!r}")
        return Outcome.unrecognized(operation.op)

    def handle_request(self, body: Union[bytes, str]) -> Tuple[int, Dict[str, Any]]:
        """
        Decode a raw body, dispatch it and encode the result.

        Args:
            body: The raw request body

        Returns:
            (status, payload) ready to be written as a JSON response
        """
        try:
            operation = self.parser.parse_request(body)
        except MalformedRequestError as exc:
            logger.info(f"Rejected malformed request: {exc}")
            outcome = Outcome.malformed(str(exc))
        else:
            outcome = self.dispatch(operation)

        return outcome.status, self.parser.format_response(outcome)
