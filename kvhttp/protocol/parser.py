"""
Protocol Parser Module

This module handles decoding of raw request bodies and formatting of
response payloads.
"""

import json
from typing import Any, Dict, Union

from pydantic import BaseModel, ConfigDict, ValidationError

from .commands import Operation, Outcome


class MalformedRequestError(ValueError):
    """Raised when a request body cannot be decoded into an Operation."""


class OperationRequest(BaseModel):
    """Shape of a request body. Missing fields decode as empty strings."""

    model_config = ConfigDict(extra="ignore", strict=True, frozen=True)

    op: str = ""
    key: str = ""
    value: str = ""


class ProtocolParser:
    """
    Parser for the kvhttp JSON protocol.

    Protocol Format:
        Request:  {"op": "GET" | "SET", "key": <str>, "value": <str>}
        Response: {"status": <int>, "value": <str>?, "error": <str>?}

    Operations:
        SET -> {"status": 200}
        GET -> {"status": 200, "value": ...} | {"status": 500, "error": ...}

    Field names are matched case-insensitively; op names are not.
    """

    def parse_request(self, data: Union[bytes, str]) -> Operation:
        """
        Parse a raw request body into an Operation.

        Args:
            data: Raw request body

        Returns:
            Operation for the request. Unknown op names yield an
            Operation of type UNKNOWN rather than an error.

        Raises:
            MalformedRequestError: if the body is not a JSON object whose
                op/key/value fields are strings

        Examples:
            >>> parser = ProtocolParser()
            >>> op = parser.parse_request('{"op": "SET", "key": "foo", "value": "bar"}')
            >>> op.type.name
            'SET'
        """
        try:
            payload = json.loads(data)
        except (ValueError, RecursionError) as exc:
            # RecursionError: nesting deeper than the decoder can follow
            raise MalformedRequestError(str(exc)) from exc

        if isinstance(payload, dict):
            # null fields decode as if absent
            payload = {
                str(name).lower(): field
                for name, field in payload.items()
                if field is not None
            }

        try:
            request = OperationRequest.model_validate(payload)
        except ValidationError as exc:
            raise MalformedRequestError(self._describe(exc)) from exc

        return Operation.from_op(request.op, key=request.key, value=request.value)

    @staticmethod
    def _describe(exc: ValidationError) -> str:
        first = exc.errors()[0]
        location = ".".join(str(part) for part in first.get("loc", ()))
        if location:
            return f"{location}: {first['msg']}"
        return first["msg"]

    def format_response(self, outcome: Outcome) -> Dict[str, Any]:
        """
        Format an Outcome into a response payload.

        Examples:
            >>> parser = ProtocolParser()
            >>> parser.format_response(Outcome.stored())
            {'status': 200}
            >>> parser.format_response(Outcome.found("bar"))
            {'status': 200, 'value': 'bar'}
        """
        payload: Dict[str, Any] = {"status": outcome.status}
        if outcome.value is not None:
            payload["value"] = outcome.value
        if outcome.error is not None:
            payload["error"] = outcome.error
        return payload
