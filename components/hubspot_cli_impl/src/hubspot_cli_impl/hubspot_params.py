"""Typed parameter structs for the HubSpot CRM actions.

Bag keys are PascalCase (Id, Email, Properties, ...).
"""

from __future__ import annotations

from dataclasses import dataclass

from rest_cli_interface.errors import MissingParameterError
from rest_cli_interface.params import ActionParams, param, to_bool, to_int, to_list, to_mapping, to_str

OBJECT_TYPE = "object type"

#alias -> canonical CRM object type as used in /crm/v3/objects/{type}
OBJECT_TYPES: dict[str, str] = {
    "contact": "contacts",
    "contacts": "contacts",
    "company": "companies",
    "companies": "companies",
    "deal": "deals",
    "deals": "deals",
    "ticket": "tickets",
    "tickets": "tickets",
}

DEFAULT_LIMIT = 100

#object type -> alternate lookup key accepted by get
ALTERNATE_KEYS: dict[str, str] = {
    "contacts": "Email",
    "companies": "Domain",
}


@dataclass(frozen=True)
class ObjectParams(ActionParams):
    object_type: str = param(OBJECT_TYPE, primary=True, required=True, convert=to_str)


@dataclass(frozen=True)
class GetParams(ObjectParams):
    object_id: str | None = param("Id", convert=to_str)
    email: str | None = param("Email", convert=to_str)
    domain: str | None = param("Domain", convert=to_str)
    fields: list | None = param("Fields", convert=to_list)

    def validate(self, action: str) -> None:
        if self.object_id:
            return
        if self.object_type == "contacts" and self.email:
            return
        if self.object_type == "companies" and self.domain:
            return
        alternate = ALTERNATE_KEYS.get(self.object_type)
        raise MissingParameterError(f"Id or {alternate}" if alternate else "Id", action)


@dataclass(frozen=True)
class ListParams(ObjectParams):
    limit: int = param("Limit", default=DEFAULT_LIMIT, convert=to_int)
    after: str | None = param("After", convert=to_str)
    fields: list | None = param("Fields", convert=to_list)
    include_synthetic: bool = param("IncludeSynthetic", default=False, convert=to_bool)


@dataclass(frozen=True)
class SearchParams(ObjectParams):
    query: str | None = param("Query", convert=to_str)
    filters: dict | None = param("Filters", convert=to_mapping)
    limit: int = param("Limit", default=DEFAULT_LIMIT, convert=to_int)
    after: int = param("After", default=0, convert=to_int)
    fields: list | None = param("Fields", convert=to_list)
    include_synthetic: bool = param("IncludeSynthetic", default=False, convert=to_bool)


@dataclass(frozen=True)
class CreateParams(ObjectParams):
    properties: dict = param("Properties", required=True, convert=to_mapping)


@dataclass(frozen=True)
class UpdateParams(ObjectParams):
    object_id: str = param("Id", required=True, convert=to_str)
    properties: dict = param("Properties", required=True, convert=to_mapping)


@dataclass(frozen=True)
class DeleteParams(ObjectParams):
    object_id: str = param("Id", required=True, convert=to_str)
