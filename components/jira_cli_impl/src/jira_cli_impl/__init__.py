from jira_cli_impl.jira_impl import JiraActions, get_client

__all__ = ["JiraActions", "get_client"]
