"""Command dispatcher and the argparse front end shared by every wrapper."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from rest_cli_interface.config import DEFAULT_TIMEOUT
from rest_cli_interface.errors import (
    ApiError,
    MissingPrimaryKeyError,
    RestCliError,
    UnsupportedActionError,
    UnsupportedObjectTypeError,
)
from rest_cli_interface.params import ActionParams, merge_bags, parse_pairs

__all__ = ["Action", "Dispatcher", "EXIT_OK", "EXIT_ERROR", "EXIT_USAGE"]

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_USAGE = 2


@dataclass(frozen=True)
class Action:
    """One named operation.

    Args:
        name:         Action name as typed on the command line (matched case-insensitively)
        params:       ActionParams subclass the bag is decoded into
        run:          Callable taking (library, params) and returning the printable result
        summary:      One line shown in the usage text
        object_types: Two-level dispatch only. None accepts every object type,
                      an empty tuple means the action takes no object type.
    """

    name: str
    params: type[ActionParams]
    run: Callable[[Any, Any], Any]
    summary: str
    object_types: tuple[str, ...] | None = None


class Dispatcher:
    """
    Args:
        tool:         Program name used in usage text
        description:  One paragraph shown at the top of the usage text
        actions:      Every supported Action
        env_vars:     (name, description) pairs listed in the usage text
        examples:     Example invocations listed in the usage text
        key_label:    Name of the positional key (e.g. 'index', 'issue key')
        object_types: alias -> canonical object type, enables two-level dispatch
    """

    def __init__(
        self,
        *,
        tool: str,
        description: str,
        actions: Iterable[Action],
        env_vars: Sequence[tuple[str, str]],
        examples: Sequence[str],
        key_label: str = "key",
        object_types: Mapping[str, str] | None = None,
    ) -> None:
        self.tool = tool
        self.description = description
        self._actions = {action.name.lower(): action for action in actions}
        self.env_vars = list(env_vars)
        self.examples = list(examples)
        self.key_label = key_label
        self._object_types = {k.lower(): v for k, v in (object_types or {}).items()}

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    @property
    def action_names(self) -> list[str]:
        return [action.name for action in self._actions.values()]

    @property
    def object_type_names(self) -> list[str]:
        return sorted(set(self._object_types.values()))

    def resolve(self, name: str | None) -> Action:
        action = self._actions.get((name or "").strip().lower())
        if action is None:
            raise UnsupportedActionError(name or "", self.action_names)
        return action

    def resolve_object_type(self, action: Action, name: str | None) -> str | None:
        """Validate the second dispatch level. Returns the canonical type name."""
        if not self._object_types or action.object_types == ():
            return name
        if not name:
            raise MissingPrimaryKeyError(self.key_label, action.name)
        canonical = self._object_types.get(name.strip().lower())
        supported = list(action.object_types) if action.object_types else self.object_type_names
        if canonical is None or canonical not in supported:
            raise UnsupportedObjectTypeError(name, supported)
        return canonical

    def decode(
        self,
        action: Action,
        primary_key: str | None,
        params: Mapping[str, Any] | None = None,
        params_json: str | None = None,
    ) -> ActionParams:
        """Decode the merged bag into the action's typed parameter struct."""
        key = self.resolve_object_type(action, primary_key)
        bag = merge_bags(params, params_json)
        return action.params.from_bag(action.name, bag, key)

    def dispatch(
        self,
        library: Any,
        action_name: str,
        primary_key: str | None = None,
        params: Mapping[str, Any] | None = None,
        params_json: str | None = None,
    ) -> Any:
        """Resolve, validate and run one action against an action library."""
        action = self.resolve(action_name)
        decoded = self.decode(action, primary_key, params, params_json)
        logger.debug("Dispatching %s with %r", action.name, decoded)
        return action.run(library, decoded)

    # ------------------------------------------------------------------
    # Usage text
    # ------------------------------------------------------------------

    def usage(self) -> str:
        """Build the action reference from the registered actions."""
        lines = ["Actions:"]
        for action in self._actions.values():
            head = action.name
            primary = action.params.primary_label()
            if self._object_types and action.object_types != ():
                head += " <object type>"
            elif primary is not None:
                label = self.key_label
                head += f" <{label}>" if primary[1] else f" [{label}]"
            lines.append(f"  {head:<28} {action.summary}")
            required, optional = action.params.describe()
            if required:
                lines.append(f"  {'':<28}   required: {', '.join(required)}")
            if optional:
                lines.append(f"  {'':<28}   optional: {', '.join(optional)}")
            if self._object_types and action.object_types:
                lines.append(f"  {'':<28}   object types: {', '.join(action.object_types)}")

        if self._object_types:
            lines += ["", f"Object types: {', '.join(self.object_type_names)}"]

        lines += ["", "Environment variables:"]
        lines += [f"  {name:<28} {desc}" for name, desc in self.env_vars]

        lines += ["", "Examples:"]
        lines += [f"  {example}" for example in self.examples]
        return "\n".join(lines)

    # ------------------------------------------------------------------
    # Command line
    # ------------------------------------------------------------------

    def build_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(
            prog=self.tool,
            description=self.description,
            epilog=self.usage(),
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )
        parser.add_argument("action", nargs="?", help="action to run (case-insensitive)")
        parser.add_argument("key", nargs="?", metavar=self.key_label.replace(" ", "_"), help=self.key_label)
        parser.add_argument(
            "-p", "--param", action="append", default=[], metavar="KEY=VALUE",
            help="action parameter key=value; JSON objects, arrays and quoted strings are decoded (repeatable)",
        )
        parser.add_argument(
            "-j", "--json", dest="params_json", metavar="JSON",
            help="action parameters as a JSON object, merged over --param",
        )
        parser.add_argument(
            "--timeout", type=float, default=DEFAULT_TIMEOUT,
            help=f"request timeout in seconds, 0 to disable (default {DEFAULT_TIMEOUT:g})",
        )
        parser.add_argument("-v", "--verbose", action="store_true", help="log requests to stderr")
        return parser

    def run(self, argv: Sequence[str] | None, make_library: Callable[[float | None], Any]) -> int:
        """Parse argv, run one action and print its JSON result.

        Notes on usage:
            make_library receives the timeout and returns the action library.
            It is only called after the parameters validated, so a bad
            invocation never prompts for credentials or touches the network.

        Returns:
            EXIT_OK, EXIT_ERROR or EXIT_USAGE.
        """
        parser = self.build_parser()
        args = parser.parse_args(argv)
        logging.basicConfig(
            level=logging.DEBUG if args.verbose else logging.WARNING,
            format="%(levelname)s %(name)s: %(message)s",
            stream=sys.stderr,
        )

        if not args.action or args.action.strip().lower() == "help":
            print(parser.format_help())
            return EXIT_OK

        try:
            action = self.resolve(args.action)
            params = self.decode(action, args.key, parse_pairs(args.param), args.params_json)
        except (UnsupportedActionError, UnsupportedObjectTypeError, MissingPrimaryKeyError) as exc:
            print(f"Error: {exc}", file=sys.stderr)
            print(parser.format_help(), file=sys.stderr)
            return EXIT_USAGE
        except RestCliError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return EXIT_ERROR

        timeout = args.timeout if args.timeout and args.timeout > 0 else None
        try:
            library = make_library(timeout)
            result = action.run(library, params)
        except ApiError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            for line in exc.details():
                print(f"  {line}", file=sys.stderr)
            return EXIT_ERROR
        except RestCliError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return EXIT_ERROR

        print(json.dumps(result, indent=2, ensure_ascii=False))
        return EXIT_OK
