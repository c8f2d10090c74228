"""hubspot-cli entry point.

Dispatch is two-level: the action name first, then the CRM object type.
"""

from __future__ import annotations

import sys
from collections.abc import Sequence

from rest_cli_interface.dispatch import Action, Dispatcher
from rest_cli_interface.params import NoParams

from hubspot_cli_impl.hubspot_impl import TOKEN_VAR, URL_VAR, HubSpotActions, get_client
from hubspot_cli_impl.hubspot_params import (
    OBJECT_TYPE,
    OBJECT_TYPES,
    CreateParams,
    DeleteParams,
    GetParams,
    ListParams,
    SearchParams,
    UpdateParams,
)

ACTIONS = [
    Action("health", NoParams, HubSpotActions.health, "Show portal account details", object_types=()),
    Action("get", GetParams, HubSpotActions.get_object, "Get one object by Id (contacts: Email, companies: Domain)"),
    Action("list", ListParams, HubSpotActions.list_objects, "List objects (Limit 100), tenant records hidden"),
    Action("search", SearchParams, HubSpotActions.search, "Search objects (Limit 100, After 0), tenant records hidden"),
    Action("create", CreateParams, HubSpotActions.create_object, "Create an object from Properties"),
    Action("update", UpdateParams, HubSpotActions.update_object, "Update Properties of an object"),
    Action("delete", DeleteParams, HubSpotActions.delete_object, "Archive an object"),
]

DISPATCHER = Dispatcher(
    tool="hubspot-cli",
    description="HubSpot CRM actions over the v3 objects API.",
    actions=ACTIONS,
    key_label=OBJECT_TYPE,
    object_types=OBJECT_TYPES,
    env_vars=[
        (TOKEN_VAR, "private app access token"),
        (URL_VAR, "optional, default https://api.hubapi.com"),
    ],
    examples=[
        "hubspot-cli get contact -p Email=jane@example.com",
        "hubspot-cli search deals -p Query=renewal -p Limit=20",
        "hubspot-cli create company -j '{\"Properties\": {\"name\": \"Acme\", \"domain\": \"acme.com\"}}'",
        "hubspot-cli update deal -p Id=123456 -j '{\"Properties\": {\"dealstage\": \"decisionmakerboughtin\"}}'",
    ],
)


def main(argv: Sequence[str] | None = None) -> int:
    return DISPATCHER.run(argv, lambda timeout: get_client(interactive=True, timeout=timeout))


if __name__ == "__main__":
    sys.exit(main())
