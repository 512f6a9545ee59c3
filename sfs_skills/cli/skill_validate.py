#!/usr/bin/env python3
"""
SFS skill pack command line tool.

Validates skill documents and browses the skill catalog.

Usage:
    sfs-skills validate [--strict] [--json] [PATH ...]
    sfs-skills list [--json]
    sfs-skills show NAME [--raw]
    sfs-skills search QUERY
    sfs-skills serve [--host HOST] [--port PORT]

Examples:
    # Lint the builtin pack plus project skills in .sfs/skills/
    sfs-skills validate

    # Lint a directory of skills, strict mode
    sfs-skills validate --strict ./skills

    # Lint one skill against the builtin pack (so references resolve)
    sfs-skills validate --with-builtin ./skills/sfs-custom-auth
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Sequence

from sfs_skills.application.services.skill_catalog import SkillCatalog
from sfs_skills.configuration.config import Settings, get_settings
from sfs_skills.configuration.logging_config import configure_logging
from sfs_skills.domain.exceptions import SkillNotFoundError

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_USAGE = 2


def positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: '{value}'") from None
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sfs-skills",
        description="Validate and browse SFS skill documents",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s validate
  %(prog)s validate --strict ./skills
  %(prog)s show sfs-stripe-billing
        """,
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Verbose logging (debug level)"
    )
    parser.add_argument(
        "--project",
        type=Path,
        default=None,
        help="Project directory holding .sfs/skills/ (default: settings, then cwd)",
    )
    parser.add_argument(
        "--skills-dir",
        action="append",
        default=None,
        help="Extra skills directory to include (repeatable)",
    )
    parser.add_argument(
        "--no-builtin", action="store_true", help="Do not include the builtin skill pack"
    )
    parser.add_argument("--prefix", default=None, help="Required skill name prefix")

    subparsers = parser.add_subparsers(dest="command", required=True)

    validate = subparsers.add_parser("validate", help="Lint skill documents")
    validate.add_argument(
        "paths",
        nargs="*",
        type=Path,
        help="Skill directories, Markdown files or directories of skills "
        "(default: the configured catalog)",
    )
    validate.add_argument(
        "--strict", action="store_true", help="Strict mode (treat warnings as errors)"
    )
    validate.add_argument(
        "--with-builtin",
        action="store_true",
        help="Load the builtin pack underneath PATHs so references to it resolve",
    )
    validate.add_argument("--json", action="store_true", help="Print the report as JSON")
    validate.add_argument(
        "-q", "--quiet", action="store_true", help="Quiet mode (only failures and summary)"
    )

    list_cmd = subparsers.add_parser("list", help="List skills in the catalog")
    list_cmd.add_argument("--json", action="store_true", help="Print as JSON")

    show = subparsers.add_parser("show", help="Show one skill")
    show.add_argument("name", help="Skill name, e.g. sfs-readme")
    show.add_argument("--raw", action="store_true", help="Print the document as stored")
    show.add_argument("--json", action="store_true", help="Print as JSON")

    search = subparsers.add_parser("search", help="Keyword search over the catalog")
    search.add_argument("query", nargs="+", help="Keywords")
    search.add_argument("--limit", type=positive_int, default=None, help="Maximum results")

    serve = subparsers.add_parser("serve", help="Serve the catalog over HTTP")
    serve.add_argument("--host", default=None, help="Bind host (default: settings)")
    serve.add_argument("--port", type=int, default=None, help="Bind port (default: settings)")

    return parser


def resolve_settings(args: argparse.Namespace, base: Settings | None = None) -> Settings:
    """Apply command line overrides on top of environment settings."""
    settings = base or get_settings()
    update: dict = {}
    if args.project is not None:
        update["project_dir"] = str(args.project)
    if args.skills_dir:
        update["skills_dirs"] = list(settings.skills_dirs) + list(args.skills_dir)
    if args.no_builtin:
        update["include_builtin"] = False
    if args.prefix is not None:
        update["name_prefix"] = args.prefix
    if getattr(args, "strict", False):
        update["strict"] = True
    if args.verbose:
        update["log_level"] = "DEBUG"
    return settings.model_copy(update=update) if update else settings


def load_catalog(settings: Settings) -> SkillCatalog:
    catalog = SkillCatalog.from_settings(settings)
    catalog.load(Path(settings.project_dir))
    return catalog


def cmd_validate(args: argparse.Namespace, settings: Settings) -> int:
    catalog = SkillCatalog.from_settings(settings)

    if args.paths:
        missing = [p for p in args.paths if not p.exists()]
        if missing:
            for path in missing:
                print(f"Error: Path not found: {path}", file=sys.stderr)
            return EXIT_USAGE
        report = catalog.load_paths(args.paths, include_builtin=args.with_builtin)
    else:
        report = catalog.load(Path(settings.project_dir))

    if args.json:
        print(json.dumps(report.to_dict(), indent=2))
    else:
        print("SFS Skill Validator")
        print(f"Mode: {'Strict' if settings.strict else 'Normal'}")
        print(f"\n{'=' * 60}")
        print(report.format(quiet=args.quiet))
        print(f"{'=' * 60}")

    return EXIT_OK if report.is_valid else EXIT_INVALID


def cmd_list(args: argparse.Namespace, settings: Settings) -> int:
    catalog = load_catalog(settings)
    skills = catalog.list_skills()

    if args.json:
        print(json.dumps([s.to_summary_dict() for s in skills], indent=2))
        return EXIT_OK

    if not skills:
        print("No skills found")
        return EXIT_OK

    width = max(len(s.name) for s in skills)
    for skill in skills:
        print(f"{skill.name:<{width}}  [{skill.source}]  {skill.description}")
    return EXIT_OK


def cmd_show(args: argparse.Namespace, settings: Settings) -> int:
    catalog = load_catalog(settings)

    try:
        skill = catalog.get(args.name)
        if args.raw:
            print(catalog.get_raw(args.name), end="")
            return EXIT_OK
    except SkillNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_INVALID

    related = catalog.related(skill.name)
    if args.json:
        data = skill.to_dict()
        data.update(related)
        print(json.dumps(data, indent=2))
        return EXIT_OK

    print(f"Name:        {skill.name}")
    print(f"Description: {skill.description}")
    if skill.title:
        print(f"Title:       {skill.title}")
    print(f"Source:      {skill.source}")
    if skill.file_path:
        print(f"Path:        {skill.file_path}")
    if skill.sections:
        print(f"Sections:    {', '.join(skill.sections)}")
    if related["references"]:
        print(f"See also:    {', '.join(related['references'])}")
    if related["referenced_by"]:
        print(f"Used by:     {', '.join(related['referenced_by'])}")
    print(f"\n{skill.content}")
    return EXIT_OK


def cmd_search(args: argparse.Namespace, settings: Settings) -> int:
    catalog = load_catalog(settings)
    matches = catalog.search(" ".join(args.query), limit=args.limit)

    if not matches:
        print("No matching skills")
        return EXIT_INVALID

    for skill in matches:
        print(f"{skill.name}  {skill.description}")
    return EXIT_OK


def cmd_serve(args: argparse.Namespace, settings: Settings) -> int:
    import uvicorn

    from sfs_skills.infrastructure.adapters.primary.web.main import create_app

    uvicorn.run(
        create_app(settings),
        host=args.host or settings.api_host,
        port=args.port or settings.api_port,
        log_level=settings.log_level.lower(),
    )
    return EXIT_OK


COMMANDS = {
    "validate": cmd_validate,
    "list": cmd_list,
    "show": cmd_show,
    "search": cmd_search,
    "serve": cmd_serve,
}


def main(argv: Sequence[str] | None = None, settings: Settings | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = resolve_settings(args, settings)
    configure_logging(settings.log_level)

    if args.command != "validate" and not Path(settings.project_dir).exists():
        print(f"Error: Project directory not found: {settings.project_dir}", file=sys.stderr)
        return EXIT_USAGE

    return COMMANDS[args.command](args, settings)


if __name__ == "__main__":
    sys.exit(main())
