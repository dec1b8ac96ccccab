"""
Function selector lookup against a public signature database.

Example:
    $ curl 'https://api.openchain.xyz/signature-database/v1/lookup?function=0x8c905368&filter=true'
    {"ok":true,"result":{"event":{},"function":{"0x8c905368":[{"name":"NotEnoughFunds(uint256,uint256)","filtered":false}]}}}

Results are advisory: different signatures can share a selector.
"""

from __future__ import annotations

import re
from typing import Dict, List, Optional

import httpx
from pydantic import BaseModel, Field, ValidationError as PydanticValidationError

from .constants import HTTP_TIMEOUT_SECONDS, SIGNATURE_DATABASE_URL
from .errors import SelectorLookupError, ValidationError
from .models import SelectorEntry

SELECTOR_PATTERN = re.compile(r"^0x[0-9a-fA-F]{8}$")


class SignatureMatch(BaseModel):
    name: str
    filtered: bool = False


class SignatureLookupResult(BaseModel):
    function: Dict[str, Optional[List[SignatureMatch]]] = Field(default_factory=dict)
    event: Dict[str, Optional[List[SignatureMatch]]] = Field(default_factory=dict)


class SignatureLookupResponse(BaseModel):
    """Body returned by the signature database lookup endpoint."""

    ok: bool
    result: SignatureLookupResult = Field(default_factory=SignatureLookupResult)


class SelectorLookup:
    """
    Resolve 4-byte function selectors to candidate signatures.

    Each lookup opens its own ``httpx.Client`` so the connection is released
    on every exit path.

    Example:
        ```python
        entry = SelectorLookup().lookup("0x8c905368")
        print(entry.candidates)  # ["NotEnoughFunds(uint256,uint256)"]
        ```
    """

    def __init__(
        self,
        base_url: str = SIGNATURE_DATABASE_URL,
        timeout: float = HTTP_TIMEOUT_SECONDS,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._base_url = base_url
        self._timeout = timeout
        self._transport = transport

    def lookup(self, selector: str) -> SelectorEntry:
        """
        Look up candidate signatures for a selector.

        Args:
            selector: "0x" followed by 8 hex digits

        Returns:
            SelectorEntry with zero or more candidate names

        Raises:
            ValidationError: If selector is malformed
            SelectorLookupError: If the service cannot be reached or answers badly
        """
        if not SELECTOR_PATTERN.match(selector):
            raise ValidationError("selector must be 0x followed by 8 hex characters")
        selector = selector.lower()

        try:
            with httpx.Client(timeout=self._timeout, transport=self._transport) as client:
                response = client.get(self._base_url, params={"function": selector, "filter": "true"})
                response.raise_for_status()
                body = SignatureLookupResponse.model_validate(response.json())
        except httpx.HTTPError as e:
            raise SelectorLookupError(f"selector lookup for {selector} failed: {e}") from e
        except (ValueError, PydanticValidationError) as e:
            raise SelectorLookupError(f"selector lookup for {selector} returned an unreadable body: {e}") from e

        if not body.ok:
            raise SelectorLookupError(f"selector lookup for {selector} was rejected by the service")

        matches = body.result.function.get(selector) or []
        return SelectorEntry(selector=selector, candidates=[m.name for m in matches])
