"""A very tiny CLI.

Invoke using e.g. ``python -m glint effects``.
"""

import sys
import argparse

import glint
from glint.utils.enums import CATEGORY_RANK


COMMANDS = ["help", "version", "effects", "presets", "templates", "compose", "template"]


def print_effects(registry):
    for category in sorted(CATEGORY_RANK, key=CATEGORY_RANK.get):
        print(f"{category}:")
        for definition in registry.by_category(category):
            print(f"  {definition.id:<22} {definition.description}")


def print_presets():
    for preset in glint.presets.values():
        effects = ", ".join(preset.effects) or "-"
        print(f"  {preset.id:<10} {preset.description} ({effects})")


def print_templates():
    for template in glint.templates.values():
        print(f"  {template.id:<10} {template.description}")


def main(argv=None):
    if argv is None:
        argv = sys.argv[1:]

    # Defaults and aliases
    if not argv:
        argv = ["help"]
    if argv == ["--version"]:
        argv = ["version"]

    parser = argparse.ArgumentParser(
        prog="glint",
        description="The (very basic) Glint CLI",
    )
    parser.add_argument(
        "command", action="store", help="The command to run: " + ", ".join(COMMANDS)
    )
    parser.add_argument(
        "name", nargs="?", help="The preset (for compose) or template (for template)"
    )
    parser.add_argument(
        "--bake", action="store_true", help="Bake parameter values into the source"
    )

    args = parser.parse_args(argv)
    command = args.command.lower()

    if command == "help":
        parser.print_help()
    elif command == "version":
        print("glint v" + glint.__version__)
    elif command == "effects":
        print_effects(glint.default_registry)
    elif command == "presets":
        print_presets()
    elif command == "templates":
        print_templates()
    elif command == "compose":
        if args.name not in glint.presets:
            print(f"Unknown preset '{args.name}', choose from: {', '.join(glint.presets)}")
            return 1
        project = glint.Project.from_preset(args.name)
        print(project.bake() if args.bake else project.compose().source)
    elif command == "template":
        if args.name not in glint.templates:
            print(f"Unknown template '{args.name}', choose from: {', '.join(glint.templates)}")
            return 1
        source, params = glint.templates[args.name].preprocess()
        if args.bake:
            source = glint.bake_shader(source, params, {})
        print(source)
    else:
        print(f"Invalid command '{command}'")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
