"""Climate FieldView command-line interface.

Every resource command makes a single API call and prints either a table,
a detail view or the raw JSON body.
"""

import argparse
import asyncio
import json
import logging
import sys
from functools import partial
from pathlib import Path

from climatecom import __version__
from climatecom.cli import output
from climatecom.cli.output import print_error, print_json, print_success
from climatecom.cli.resources import FIELDS, RESOURCES, Resource
from climatecom.core import client
from climatecom.core.config import ConfigStore
from climatecom.core.errors import ConfigurationError
from climatecom.core.records import extract_records
from climatecom.core.result import ApiResult, capture

EXIT_OK = 0
EXIT_ERROR = 1

NOT_CONFIGURED_MESSAGE = "Climate FieldView credentials not configured."
CONFIGURE_HINT = "  climatecom config set --api-key <key>"

# config set options, by settings key, with their display names
CONFIG_OPTIONS = {
    "api_key": "API key",
    "client_id": "Client ID",
    "client_secret": "Client secret",
    "base_url": "Base URL",
}


def positive_int(value: str) -> int:
    """argparse type for --limit."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}") from None
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1: {value}")
    return number


def mask_secret(value: str) -> str:
    """Show only the last four characters of a secret."""
    return "*" * 8 + value[-4:] if value else "not set"


def require_auth(store: ConfigStore) -> bool:
    """Check that an API key is configured, printing setup help if not."""
    if store.is_configured():
        return True
    print_error(NOT_CONFIGURED_MESSAGE)
    print("\nRun the following to configure:")
    print(CONFIGURE_HINT)
    return False


def report(result: ApiResult) -> int | None:
    """Print a failed result's error and return the exit code, or None on success."""
    if result.ok:
        return None
    print_error(str(result.error))
    return EXIT_ERROR


# =============================================================================
# Config commands
# =============================================================================


async def cmd_config_set(args: argparse.Namespace, store: ConfigStore) -> int:
    """Persist any configuration values passed on the command line."""
    # Empty strings count as not provided
    provided = {key: getattr(args, key) for key in CONFIG_OPTIONS if getattr(args, key)}
    if not provided:
        print_error("No options provided. Use --api-key")
        return EXIT_ERROR

    for key, value in provided.items():
        try:
            store.set(key, value)
        except ConfigurationError as e:
            print_error(str(e))
            return EXIT_ERROR
        print_success(f"{CONFIG_OPTIONS[key]} set")
    return EXIT_OK


async def cmd_config_show(args: argparse.Namespace, store: ConfigStore) -> int:
    """Show the current configuration with secrets masked."""
    settings = store.settings

    if not settings.access_token:
        token_status = "not set"
    elif store.has_valid_token():
        token_status = f"valid until {output.timestamp(settings.token_expiry)}"
    else:
        token_status = "expired"

    print("\nClimate FieldView CLI Configuration\n")
    print(f"API Key:        {mask_secret(settings.api_key)}")
    print(f"Client ID:      {settings.client_id or 'not set'}")
    print(f"Client secret:  {mask_secret(settings.client_secret)}")
    print(f"Access token:   {token_status}")
    print(f"Base URL:       {settings.base_url}")
    print(f"Config file:    {store.path}")
    print()
    return EXIT_OK


async def cmd_config_clear(args: argparse.Namespace, store: ConfigStore) -> int:
    try:
        store.clear()
    except ConfigurationError as e:
        print_error(str(e))
        return EXIT_ERROR
    print_success("Configuration cleared")
    return EXIT_OK


# =============================================================================
# Resource commands
# =============================================================================


async def cmd_list(resource: Resource, args: argparse.Namespace, store: ConfigStore) -> int:
    """List records of a resource as a table or JSON."""
    if not require_auth(store):
        return EXIT_ERROR

    result = await capture(resource.list_operation(store.settings, args.limit))
    if (code := report(result)) is not None:
        return code

    records = extract_records(result.value)
    if args.json:
        print_json(records)
    else:
        output.print_table(records, resource.columns)
    return EXIT_OK


async def cmd_get(resource: Resource, args: argparse.Namespace, store: ConfigStore) -> int:
    """Show a single record."""
    if not require_auth(store):
        return EXIT_ERROR

    result = await capture(resource.get_operation(store.settings, args.id))
    if (code := report(result)) is not None:
        return code

    if args.json:
        print_json(result.value)
        return EXIT_OK

    record = dict(result.value) if isinstance(result.value, dict) else {}
    record["id"] = record.get("id") or args.id
    print()
    print(output.render_details(resource.title, record, resource.details))
    print()
    return EXIT_OK


def load_boundary(path: Path) -> dict:
    """Read a GeoJSON boundary from a file."""
    try:
        with open(path, encoding="utf-8") as f:
            boundary = json.load(f)
    except OSError as e:
        raise ConfigurationError(f"Could not read boundary file {path}: {e.strerror}") from e
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Boundary file {path} is not valid JSON: {e}") from e
    if not isinstance(boundary, dict):
        raise ConfigurationError(f"Boundary file {path} must contain a GeoJSON object")
    return boundary


async def cmd_create_field(args: argparse.Namespace, store: ConfigStore) -> int:
    """Create a field."""
    if not require_auth(store):
        return EXIT_ERROR

    boundary = None
    if args.boundary:
        try:
            boundary = load_boundary(args.boundary)
        except ConfigurationError as e:
            print_error(str(e))
            return EXIT_ERROR

    result = await capture(
        client.create_field(store.settings, name=args.name, acres=args.acres, boundary=boundary)
    )
    if (code := report(result)) is not None:
        return code

    field = result.value
    if args.json:
        print_json(field)
        return EXIT_OK

    field_id = field.get("id") if isinstance(field, dict) else None
    print_success(f"Field created: {args.name}")
    print(f"Field ID:  {output.text(field_id)}")
    return EXIT_OK


# =============================================================================
# Parser
# =============================================================================


def add_resource_commands(
    subparsers: argparse._SubParsersAction, resource: Resource
) -> argparse._SubParsersAction:
    """Add a resource group with its list and get commands."""
    group = subparsers.add_parser(resource.command, help=resource.help, description=resource.help)
    group.set_defaults(group_parser=group)
    commands = group.add_subparsers(dest="action")

    list_parser = commands.add_parser("list", help=f"List {resource.plural}")
    list_parser.add_argument(
        "--limit", type=positive_int, default=client.DEFAULT_LIMIT, help="Maximum results (default: 50)"
    )
    list_parser.add_argument("--json", action="store_true", help="Output as JSON")
    list_parser.set_defaults(handler=partial(cmd_list, resource))

    get_parser = commands.add_parser("get", help=f"Get a specific {resource.noun}")
    get_parser.add_argument("id", metavar=resource.id_metavar, help=f"{resource.noun.capitalize()} ID")
    get_parser.add_argument("--json", action="store_true", help="Output as JSON")
    get_parser.set_defaults(handler=partial(cmd_get, resource))

    return commands


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="climatecom",
        description="Climate FieldView CLI - Agricultural data from your terminal",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  climatecom config set --api-key <key>     Store your API key
  climatecom fields list --limit 10         List the first 10 fields
  climatecom farms get <farm-id> --json     Show a farm as JSON
  climatecom fields create --name "North Field" --acres 120.5
""",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log HTTP requests")
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # config - Manage CLI configuration
    config_parser = subparsers.add_parser("config", help="Manage CLI configuration")
    config_parser.set_defaults(group_parser=config_parser)
    config_commands = config_parser.add_subparsers(dest="action")

    set_parser = config_commands.add_parser("set", help="Set configuration values")
    set_parser.add_argument("--api-key", help="Climate FieldView API key / access token")
    set_parser.add_argument("--client-id", help="OAuth client ID")
    set_parser.add_argument("--client-secret", help="OAuth client secret")
    set_parser.add_argument("--base-url", help="API base URL")
    set_parser.set_defaults(handler=cmd_config_set)

    config_commands.add_parser("show", help="Show current configuration").set_defaults(handler=cmd_config_show)
    config_commands.add_parser("clear", help="Reset configuration to defaults").set_defaults(
        handler=cmd_config_clear
    )

    # Resource groups - list/get for each, plus fields create
    for resource in RESOURCES.values():
        commands = add_resource_commands(subparsers, resource)
        if resource is FIELDS:
            create_parser = commands.add_parser("create", help="Create a new field")
            create_parser.add_argument("--name", required=True, help="Field name")
            create_parser.add_argument("--acres", type=float, help="Field size in acres")
            create_parser.add_argument("--boundary", type=Path, help="GeoJSON file with the field boundary")
            create_parser.add_argument("--json", action="store_true", help="Output as JSON")
            create_parser.set_defaults(handler=cmd_create_field)

    return parser


# =============================================================================
# Entry points
# =============================================================================


async def cli_main(argv: list[str] | None = None, store: ConfigStore | None = None) -> int:
    """Parse arguments, run one command and return its exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    handler = getattr(args, "handler", None)
    if handler is None:
        group_parser = getattr(args, "group_parser", parser)
        group_parser.print_help()
        return EXIT_OK

    if store is None:
        try:
            store = ConfigStore()
        except ConfigurationError as e:
            print_error(str(e))
            return EXIT_ERROR

    return await handler(args, store)


def cli() -> None:
    """CLI entry point."""
    sys.exit(asyncio.run(cli_main()))


if __name__ == "__main__":
    cli()
