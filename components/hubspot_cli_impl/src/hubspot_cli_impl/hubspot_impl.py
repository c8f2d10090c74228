"""
Authentication
--------------
Bearer authentication with a HubSpot private app access token.

Environment variables:
    HUBSPOT_ACCESS_TOKEN  private app token (prompted for with masked input when missing)
    HUBSPOT_BASE_URL      optional, defaults to https://api.hubapi.com
"""
from __future__ import annotations

import logging
from typing import Any

from rest_cli_interface.client import ActionLibrary
from rest_cli_interface.config import DEFAULT_TIMEOUT, load_config
from rest_cli_interface.credentials import resolve_token
from rest_cli_interface.params import ActionParams
from rest_cli_interface.transport import Transport, path_segment

from hubspot_cli_impl.hubspot_params import (
    CreateParams,
    DeleteParams,
    GetParams,
    ListParams,
    SearchParams,
    UpdateParams,
)
from hubspot_cli_impl.synthetic import DISPLAY_NAME_PROPERTY, filter_synthetic

logger = logging.getLogger(__name__)

SERVICE = "HubSpot"
URL_VAR = "HUBSPOT_BASE_URL"
TOKEN_VAR = "HUBSPOT_ACCESS_TOKEN"
DEFAULT_URL = "https://api.hubapi.com"


def _eq_filter(name: str, value: Any) -> dict[str, Any]:
    return {"propertyName": name, "operator": "EQ", "value": value}


def _with_name_property(object_type: str, fields: list | None) -> list | None:
    #the display name must come back for the synthetic filter to see it
    if not fields:
        return fields
    name_property = DISPLAY_NAME_PROPERTY.get(object_type)
    if name_property and name_property not in fields:
        return [*fields, name_property]
    return fields


class HubSpotActions(ActionLibrary):
    """HubSpot CRM v3 object actions.

    Args:
        transport: Authenticated transport rooted at the HubSpot API URL
    """

    _OBJECTS = "/crm/v3/objects"

    def _objects(self, object_type: str, object_id: str | None = None) -> str:
        path = f"{self._OBJECTS}/{object_type}"
        if object_id is not None:
            path += f"/{path_segment(object_id)}"
        return path

    def health(self, params: ActionParams) -> Any:
        """Return the portal's account details, proving the token works."""
        return self._transport.get("/account-info/v3/details")

    def get_object(self, params: GetParams) -> Any:
        """
        Notes on usage:
            Id wins when given. Otherwise contacts can be fetched by Email and
            companies by Domain. Exactly one request is made either way.

        Raises:
            MissingParameterError: If neither Id nor the type's alternate key was given.
        """
        params.validate("get")
        fields = ",".join(params.fields) if params.fields else None

        if params.object_id:
            return self._transport.get(
                self._objects(params.object_type, params.object_id), {"properties": fields}
            )

        if params.object_type == "contacts":
            return self._transport.get(
                self._objects("contacts", params.email),
                {"idProperty": "email", "properties": fields},
            )

        #companies by Domain, the only other combination validate() lets through
        body: dict[str, Any] = {
            "filterGroups": [{"filters": [_eq_filter("domain", params.domain)]}],
            "limit": 1,
        }
        if params.fields:
            body["properties"] = params.fields
        data = self._transport.post(f"{self._objects('companies')}/search", body)
        results = (data.get("results") or []) if isinstance(data, dict) else []
        if not results:
            logger.warning("No company found with domain %s", params.domain)
            return None
        return results[0]

    def list_objects(self, params: ListParams) -> dict[str, Any]:
        """One page of objects; Limit defaults to 100. Synthetic records are filtered out."""
        fields = _with_name_property(params.object_type, params.fields)
        data = self._transport.get(
            self._objects(params.object_type),
            {
                "limit": params.limit,
                "after": params.after,
                "properties": ",".join(fields) if fields else None,
            },
        )
        return filter_synthetic(data, params.object_type, enabled=not params.include_synthetic)

    def search(self, params: SearchParams) -> dict[str, Any]:
        """CRM search; Limit defaults to 100 and After to 0. Synthetic records are filtered out."""
        body: dict[str, Any] = {"limit": params.limit, "after": params.after}
        if params.query:
            body["query"] = params.query
        if params.filters:
            body["filterGroups"] = [
                {"filters": [_eq_filter(name, value) for name, value in params.filters.items()]}
            ]
        fields = _with_name_property(params.object_type, params.fields)
        if fields:
            body["properties"] = fields

        data = self._transport.post(f"{self._objects(params.object_type)}/search", body)
        return filter_synthetic(data, params.object_type, enabled=not params.include_synthetic)

    def create_object(self, params: CreateParams) -> Any:
        return self._transport.post(self._objects(params.object_type), {"properties": params.properties})

    def update_object(self, params: UpdateParams) -> Any:
        """PATCH is a partial update: properties left out keep their value."""
        return self._transport.patch(
            self._objects(params.object_type, params.object_id), {"properties": params.properties}
        )

    def delete_object(self, params: DeleteParams) -> Any:
        """Archive the object (HubSpot moves it to the recycle bin)."""
        return self._transport.delete(self._objects(params.object_type, params.object_id))


def get_client(*, interactive: bool = False, timeout: float | None = DEFAULT_TIMEOUT) -> HubSpotActions:
    """Return a configured HubSpotActions, prompting for a missing token when interactive."""
    config = load_config(SERVICE, URL_VAR, DEFAULT_URL, interactive=interactive, timeout=timeout)
    credentials = resolve_token(TOKEN_VAR, service=SERVICE, interactive=interactive)
    return HubSpotActions(Transport(config, credentials))
