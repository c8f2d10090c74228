#This file is for development purposes only
#usage: python main.py <es|jira|hubspot> <action> [key] [--param k=v ...] [--json '{...}']

import sys

from elastic_cli_impl.cli import main as es_main
from hubspot_cli_impl.cli import main as hubspot_main
from jira_cli_impl.cli import main as jira_main

TOOLS = {"es": es_main, "jira": jira_main, "hubspot": hubspot_main}


def main() -> int:
    if len(sys.argv) < 2 or sys.argv[1] not in TOOLS:
        print(f"usage: python main.py <{'|'.join(TOOLS)}> <action> ...", file=sys.stderr)
        return 2
    return TOOLS[sys.argv[1]](sys.argv[2:])


if __name__ == "__main__":
    sys.exit(main())
