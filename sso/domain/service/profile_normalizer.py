"""Profile normalization domain service.

Converts the raw profile responses of one provider into a CanonicalIdentity.
This is the only place that knows the shape of provider responses.
"""

import json
from collections.abc import Mapping
from typing import Any

import logfire

from sso.config import FieldSource, NormalizationSettings
from sso.domain.error import MalformedResponseError
from sso.domain.value import CanonicalIdentity, RoleTag

from .base import Service

RawResponse = str | bytes | Mapping[str, Any]


class ProfileNormalizer(Service):
    """Domain service that builds canonical identities from provider responses.

    Every fetched body is parsed, including supplementary ones such as the
    character list when no membership target is configured. An unparsable
    body aborts the login even if none of its fields are read.
    """

    def __init__(self, provider: str, settings: NormalizationSettings) -> None:
        """Initialize profile normalizer.

        Args:
            provider: Provider name, used for the fallback display name
            settings: Provider-specific field names
        """
        self.provider = provider
        self.settings = settings

    def normalize(self, raw_responses: Mapping[str, RawResponse]) -> CanonicalIdentity:
        """Normalize raw provider responses.

        Args:
            raw_responses: Response body per endpoint name, either raw JSON
                text or an already decoded object

        Returns:
            Canonical identity

        Raises:
            MalformedResponseError: If a body is unparsable or the external
                id is missing
        """
        with logfire.span(
            "profile_normalizer.normalize",
            provider=self.provider,
            endpoints=sorted(raw_responses),
        ):
            payloads = {
                name: self._parse(name, body) for name, body in raw_responses.items()
            }

            external_id = self._external_id(payloads)

            display_name = self._optional_str(payloads, self.settings.display_name)
            if not display_name:
                display_name = f"{self.provider}-{external_id}"

            email = ""
            if self.settings.email:
                email = self._optional_str(payloads, self.settings.email) or ""

            grants = self._grants(payloads, external_id)

            logfire.info(
                "Profile normalized",
                provider=self.provider,
                external_id=external_id,
                display_name=display_name,
                grants=sorted(grants),
            )

            return CanonicalIdentity(
                external_id=external_id,
                display_name=display_name,
                email=email,
                grants=grants,
            )

    def _parse(self, endpoint: str, body: RawResponse) -> Mapping[str, Any]:
        if isinstance(body, Mapping):
            return body
        try:
            decoded = json.loads(body)
        except (ValueError, TypeError) as e:
            raise MalformedResponseError(endpoint, f"invalid JSON: {e}") from e
        if not isinstance(decoded, dict):
            raise MalformedResponseError(endpoint, "expected a JSON object")
        return decoded

    def _lookup(self, payloads: Mapping[str, Mapping[str, Any]], source: FieldSource):
        payload = payloads.get(source.endpoint)
        if payload is None:
            raise MalformedResponseError(source.endpoint, "response missing")
        return payload.get(source.field)

    def _external_id(self, payloads: Mapping[str, Mapping[str, Any]]) -> str:
        source = self.settings.external_id
        value = self._lookup(payloads, source)

        # bool is an int subclass and never a valid id
        if isinstance(value, bool) or not isinstance(value, (str, int)):
            raise MalformedResponseError(
                source.endpoint, f"required field '{source.field}' missing"
            )

        external_id = str(value).strip()
        if not external_id:
            raise MalformedResponseError(
                source.endpoint, f"required field '{source.field}' is empty"
            )
        return external_id

    def _optional_str(
        self, payloads: Mapping[str, Mapping[str, Any]], source: FieldSource
    ) -> str | None:
        payload = payloads.get(source.endpoint)
        if payload is None:
            return None
        value = payload.get(source.field)
        if value is None:
            return None
        return str(value).strip()

    def _grants(
        self, payloads: Mapping[str, Mapping[str, Any]], external_id: str
    ) -> frozenset[RoleTag]:
        """Derive role grants. Admin takes precedence over membership."""
        if (
            self.settings.admin_external_id is not None
            and external_id == self.settings.admin_external_id.strip()
        ):
            return frozenset({RoleTag(self.settings.admin_role)})

        if self._is_member(payloads):
            return frozenset({RoleTag(self.settings.member_role)})

        return frozenset()

    def _is_member(self, payloads: Mapping[str, Mapping[str, Any]]) -> bool:
        target = self.settings.membership_target
        if not target:
            return False

        source = self.settings.membership
        payload = payloads.get(source.endpoint)
        if payload is None:
            return False

        entries = payload.get(source.field)
        if entries is None:
            return False
        if not isinstance(entries, list):
            raise MalformedResponseError(
                source.endpoint, f"field '{source.field}' is not a list"
            )

        for entry in entries:
            if not isinstance(entry, Mapping):
                continue
            key = ":".join(
                str(entry.get(name, "")) for name in self.settings.membership_key_fields
            )
            if key == target:
                return True
        return False
