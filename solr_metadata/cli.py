# ==============================================
# CLI — Command Line Entry Point
# ==============================================
#
# PURPOSE:
#   Inspect and maintain display configurations from a shell.
#
# COMMANDS:
# ---------
# 1. List configuration names:
#    python -m solr_metadata.cli list
#
# 2. Show one configuration (cmodels, fields, description):
#    python -m solr_metadata.cli show my_config
#
# 3. Delete a configuration from the config store:
#    python -m solr_metadata.cli delete my_config --confirm
#
# 4. Find the configurations for an object's cmodels:
#    python -m solr_metadata.cli lookup islandora:sp_basic_image fedora-system:FedoraObject-3.0
#
# 5. Create the association table in MySQL:
#    python -m solr_metadata.cli init-db
#
# Only `lookup` and `init-db` connect to MySQL. `list`, `show` and
# `delete` connect only the field backend (MongoDB when FIELD_BACKEND
# is "mongo"). An invalid configuration name prints an error and
# exits with status 1.
#
# ==============================================

import argparse
import sys
from typing import Optional, Sequence

from solr_metadata.metadata_config import SolrMetadataConfig


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="solr-metadata",
        description="Manage Solr metadata display configurations.",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("list", help="List configuration names")

    show = commands.add_parser("show", help="Show a configuration")
    show.add_argument("name")

    delete = commands.add_parser("delete", help="Delete a configuration")
    delete.add_argument("name")
    delete.add_argument("--confirm", action="store_true", help="Required to delete")

    lookup = commands.add_parser("lookup", help="Find configurations for cmodels")
    lookup.add_argument("cmodels", nargs="+")

    commands.add_parser("init-db", help="Create the cmodel association table")

    return parser


def _show(metadata: SolrMetadataConfig, name: str) -> int:
    configuration = metadata.get_configuration(name)
    if configuration is None:
        print(f"No configuration named '{name}'.")
        return 1

    print(f"Configuration: {configuration.name}")
    if configuration.label:
        print(f"Label: {configuration.label}")
    print(f"Cmodels: {', '.join(configuration.cmodels) or '(none)'}")

    print("Fields:")
    if not configuration.fields:
        print("  (none)")
    for details in configuration.fields.values():
        print(f"  [{details.weight:>3}] {details.solr_field} → {details.display_label}")

    description = configuration.description
    if description.description_field:
        print(f"Description: {description.description_field} ({description.description_label or 'no label'})")
        if not description.truncation.is_empty():
            settings = {
                key: value
                for key, value in description.truncation.to_dict().items()
                if value is not None
            }
            print(f"  Truncation: {settings}")
    return 0


STORE_COMMANDS = ("list", "show", "delete")


def _run_store_command(metadata: SolrMetadataConfig, args) -> int:
    if args.command == "list":
        for name in metadata.get_configuration_names():
            print(name)
        return 0

    if args.command == "show":
        return _show(metadata, args.name)

    if not args.confirm:
        print("Refusing to delete without --confirm.")
        return 2
    if not metadata.configuration_exists(args.name):
        print(f"No configuration named '{args.name}'.")
        return 0
    metadata.delete_configuration(args.name)
    return 0


def main(argv: Optional[Sequence[str]] = None, metadata: Optional[SolrMetadataConfig] = None) -> int:
    args = build_parser().parse_args(argv)
    metadata = metadata or SolrMetadataConfig()

    if args.command in STORE_COMMANDS:
        # The field backend may be MongoDB; MySQL isn't needed here
        try:
            with metadata.connected(include_associations=False):
                return _run_store_command(metadata, args)
        except ValueError as e:
            print(f"✗ {e}")
            return 1

    with metadata:
        if args.command == "lookup":
            matches = metadata.get_associations_by_cmodels(args.cmodels)
            if not matches:
                print("No matching configurations.")
            for name in sorted(matches):
                print(f"{name} (via {matches[name]['cmodel']})")
            return 0

        if args.command == "init-db":
            created = metadata.associations.ensure_table()
            if not created:
                print(f"Table '{metadata.associations.table_name}' already exists.")
            return 0

    return 1


if __name__ == "__main__":
    sys.exit(main())
