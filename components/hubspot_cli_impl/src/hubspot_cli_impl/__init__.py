from hubspot_cli_impl.hubspot_impl import HubSpotActions, get_client

__all__ = ["HubSpotActions", "get_client"]
