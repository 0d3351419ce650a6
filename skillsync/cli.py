"""Command line interface: argument parsing and presentation around the engine."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .catalog import Catalog, load_catalog
from .config import default_config_path, default_source_dir, expand_source_path, load_config, write_config
from .diagnostics import Diagnostics
from .diff import diff_skills
from .edit import edit_skill
from .errors import PathMissingError, SkillsError
from .promote import promote_skill
from .prompts import TerminalPullResolver, terminal_confirm
from .pull import collect_pull_plans, pull_skills
from .push import push_skills
from .rename import rename_ops, rename_skill
from .scaffold import create_skill, render_skill
from .show import find_skill
from .status import classify
from .sync import run_sync
from .tools import SystemPaths, Tool, display_path, parse_tool_filter
from .types import ConflictStrategy, SyncPlan
from .unload import unload_skill
from .validate import validate_skills

TOOL_CHOICES = [tool.id for tool in Tool] + ["all"]
UNLOAD_LABELS = {"removed": "- (removed)", "skipped": "! (skipped)", "not_installed": "- (not installed)"}


def _load(paths: SystemPaths) -> tuple[Diagnostics, list[Path], Catalog]:
    diagnostics = Diagnostics()
    config = load_config(paths=paths)
    catalog = load_catalog(config.sources, diagnostics, paths)
    return diagnostics, config.sources, catalog


def cmd_list(args: argparse.Namespace, paths: SystemPaths) -> int:
    diagnostics, _, catalog = _load(paths)

    for entry in classify(catalog, diagnostics):
        source = catalog.sources.get(entry.name)
        print(entry.name)
        print(f"  source: {display_path(source.source_root, paths) if source else '-'}")
        states = []
        for tool in Tool:
            state = entry.state_for(tool)
            states.append(f"{tool.id}: {state.value if state else 'missing':<9}")
        print("  " + " ".join(states).rstrip())
        print()

    diagnostics.print_skipped_summary()
    return 0


def cmd_push(args: argparse.Namespace, paths: SystemPaths) -> int:
    diagnostics, _, catalog = _load(paths)
    names = [] if args.all else args.skills

    outcomes = push_skills(
        catalog,
        terminal_confirm,
        diagnostics,
        names=names,
        dry_run=args.dry_run,
        force=args.force,
        paths=paths,
    )
    current: Tool | None = None
    for outcome in outcomes:
        if outcome.tool != current:
            current = outcome.tool
            print(f"Pushing {current.display_name}...")
        print(f"  {outcome.marker} {outcome.skill} ({outcome.result})")

    diagnostics.print_skipped_summary()
    diagnostics.print_warning_summary()
    return 0


def cmd_pull(args: argparse.Namespace, paths: SystemPaths) -> int:
    diagnostics, sources, catalog = _load(paths)

    target = None
    if args.to:
        target = expand_source_path(args.to, paths.cwd())
        if not target.is_dir():
            raise PathMissingError(target)

    plans = collect_pull_plans(catalog, diagnostics, args.skill)
    if not plans:
        print("No modified skills found.")
        return 0

    print(f"Found {len(plans)} modified skills:\n")
    for plan in plans:
        print(plan.name)
        print(f"  source: {display_path(plan.source.skill_path, paths) if plan.source else '-'}")
        for variant in plan.variants:
            print(f"  tool:   {display_path(variant.skill.skill_path, paths)} ({variant.label()})")
        print()

    outcomes = pull_skills(
        plans,
        sources,
        TerminalPullResolver(),
        diagnostics,
        target=target,
        dry_run=args.dry_run,
        paths=paths,
    )
    for outcome in outcomes:
        if outcome.result == "skipped" or outcome.variant is None:
            print(f"Skipped {outcome.name}")
            continue
        verb = "Would pull" if args.dry_run else "Pulled"
        print(f"{verb} {outcome.name} from {outcome.variant.label()} -> {display_path(outcome.target, paths)}")

    diagnostics.print_skipped_summary()
    diagnostics.print_warning_summary()
    return 0


def cmd_diff(args: argparse.Namespace, paths: SystemPaths) -> int:
    diagnostics, _, catalog = _load(paths)
    output = diff_skills(catalog, diagnostics, args.skill, paths)
    diagnostics.print_skipped_summary()
    if output:
        sys.stdout.write(output)
    return 0


def _describe(plan: SyncPlan) -> str:
    action = plan.action
    to_tools = ", ".join(f"[{tool.id}]" for tool in action.to_tools)
    if action.kind == "push":
        return f"source -> {to_tools}"
    if action.kind == "pull":
        return f"[{action.from_tool.id}] -> source"
    return f"[{action.from_tool.id}] -> source -> {to_tools}"


def cmd_sync(args: argparse.Namespace, paths: SystemPaths) -> int:
    diagnostics, _, catalog = _load(paths)

    if args.prefer_source:
        strategy = ConflictStrategy.PREFER_SOURCE
    elif args.prefer_tool:
        strategy = ConflictStrategy.PREFER_TOOL
    else:
        strategy = ConflictStrategy.ERROR

    report = run_sync(catalog, diagnostics, args.skills, strategy, args.dry_run, paths)
    if not report.applied and not report.conflicts:
        print("All skills are in sync.")
        return 0

    for plan in report.applied:
        print(plan.name)
        print(f"    sync: {_describe(plan)}")

    print()
    if report.dry_run:
        print(f"Dry run: {report.push_count} push, {report.pull_count} pull operations would be performed.")
    else:
        print(f"Synced: {report.push_count} pushed, {report.pull_count} pulled.")

    diagnostics.print_skipped_summary()
    for conflict in report.conflicts:
        print(conflict, file=sys.stderr)
    return 1 if report.conflicts else 0


def cmd_validate(args: argparse.Namespace, paths: SystemPaths) -> int:
    _, _, catalog = _load(paths)

    reports = validate_skills(catalog, args.skill)
    if not reports:
        print("No skills to validate.")
        return 0

    for report in reports:
        print(f"{'✓' if report.valid else '✗'} {report.name}")
        for error in report.errors:
            print(f"    - {error}")

    valid = sum(1 for report in reports if report.valid)
    print()
    print(f"{valid} valid, {len(reports) - valid} invalid")
    return 0


def cmd_render(args: argparse.Namespace, paths: SystemPaths) -> int:
    _, _, catalog = _load(paths)
    rendered = render_skill(catalog, args.skill, parse_tool_filter(args.tool))
    multi = len(rendered) > 1

    for tool, text in rendered:
        if multi:
            print(f"=== {tool.display_name} ===")
        print(text, end="" if text.endswith("\n") else "\n")
        if multi:
            print()
    return 0


def cmd_promote(args: argparse.Namespace, paths: SystemPaths) -> int:
    _, _, catalog = _load(paths)
    tool = None if args.tool in (None, "all") else Tool(args.tool)

    moved = promote_skill(catalog, args.skill, tool, args.dry_run, args.force, paths)
    action = "Would promote" if args.dry_run else "Promoted"
    for skill, destination in moved:
        print(f"{action} '{skill.name}' from {display_path(skill.skill_dir, paths)} to {display_path(destination, paths)}")
    if not args.dry_run:
        print(f"\nTo manage this skill from your source directory, run:\n  skills pull {args.skill} --to <source-dir>")
    return 0


def cmd_show(args: argparse.Namespace, paths: SystemPaths) -> int:
    _, _, catalog = _load(paths)
    contents = find_skill(catalog, args.skill).contents
    sys.stdout.write(contents if contents.endswith("\n") else contents + "\n")
    return 0


def cmd_edit(args: argparse.Namespace, paths: SystemPaths) -> int:
    _, _, catalog = _load(paths)
    edit_skill(catalog, args.skill)
    return 0


def cmd_unload(args: argparse.Namespace, paths: SystemPaths) -> int:
    _, _, catalog = _load(paths)

    print(f"Unloading {args.skill}...")
    outcomes = unload_skill(
        catalog,
        args.skill,
        terminal_confirm,
        tools=parse_tool_filter(args.tool),
        dry_run=args.dry_run,
        force=args.force,
    )
    for outcome in outcomes:
        label = UNLOAD_LABELS[outcome.result]
        if outcome.result == "removed" and args.dry_run:
            label = "- (would remove)"
        print(f"  {outcome.tool.id:<6}: {label}")

    if all(outcome.result == "not_installed" for outcome in outcomes):
        print(f"Skill '{args.skill}' is not installed in any tool.")
    return 0


def cmd_mv(args: argparse.Namespace, paths: SystemPaths) -> int:
    _, _, catalog = _load(paths)

    print(f"{'Would rename' if args.dry_run else 'Renaming'} '{args.old}' -> '{args.new}'\n")
    for op in rename_ops(catalog, args.old, args.new):
        print(f"  {op.label}: {display_path(op.src, paths)} -> {display_path(op.dest, paths)}")
    print()

    result = rename_skill(catalog, args.old, args.new, terminal_confirm, args.dry_run, args.force)
    if args.dry_run:
        print("Dry run - no changes made.")
    elif result.applied:
        print(f"Done. Renamed {len(result.ops)} location(s).")
    else:
        print("Aborted.")
    return 0


def cmd_new(args: argparse.Namespace, paths: SystemPaths) -> int:
    skill_path = create_skill(Path(args.path))
    print(f"Created skill at {skill_path}")
    print("\nEdit the SKILL.md file, then run `skills push` to sync.")
    return 0


def cmd_init(args: argparse.Namespace, paths: SystemPaths) -> int:
    config_path = default_config_path(paths)
    if config_path.is_file():
        print(f"Config already exists at {display_path(config_path, paths)}")
        return 0

    source = expand_source_path(args.source, paths.cwd()) if args.source else default_source_dir(paths)
    source.mkdir(parents=True, exist_ok=True)
    write_config(config_path, [source])
    print(f"Created config at {display_path(config_path, paths)}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="skills", description="Manage agent skills")
    sub = parser.add_subparsers(dest="command")

    # Commands are ordered alphabetically.
    p = sub.add_parser("diff", help="Show diffs between sources and tool copies")
    p.add_argument("skill", nargs="?")
    p.set_defaults(func=cmd_diff)

    p = sub.add_parser("edit", help="Open a skill file in $EDITOR")
    p.add_argument("skill")
    p.set_defaults(func=cmd_edit)

    p = sub.add_parser("init", help="Create a skills config file")
    p.add_argument("--source", help="Source directory (default: ~/skills)")
    p.set_defaults(func=cmd_init)

    p = sub.add_parser("list", aliases=["ls", "status"], help="List skills and their sync status")
    p.set_defaults(func=cmd_list)

    p = sub.add_parser("mv", help="Rename a skill in its source and tool installs")
    p.add_argument("old")
    p.add_argument("new")
    p.add_argument("--force", "-f", action="store_true")
    p.add_argument("--dry-run", "-n", action="store_true")
    p.set_defaults(func=cmd_mv)

    p = sub.add_parser("new", help="Create a new skill template at a path")
    p.add_argument("path")
    p.set_defaults(func=cmd_new)

    p = sub.add_parser("promote", help="Move a project-local skill to the tool's global directory")
    p.add_argument("skill")
    p.add_argument("--tool", choices=TOOL_CHOICES)
    p.add_argument("--force", "-f", action="store_true")
    p.add_argument("--dry-run", "-n", action="store_true")
    p.set_defaults(func=cmd_promote)

    p = sub.add_parser("pull", help="Pull tool-side edits back into sources")
    p.add_argument("skill", nargs="?")
    p.add_argument("--to", help="Source directory for skills that have no source yet")
    p.add_argument("--dry-run", "-n", action="store_true")
    p.set_defaults(func=cmd_pull)

    p = sub.add_parser("push", help="Push source skills to tool directories")
    p.add_argument("skills", nargs="*")
    p.add_argument("--all", action="store_true")
    p.add_argument("--force", "-f", action="store_true", help="Overwrite modified copies without asking")
    p.add_argument("--dry-run", "-n", action="store_true")
    p.set_defaults(func=cmd_push)

    p = sub.add_parser("render", help="Render a skill template for a tool")
    p.add_argument("skill")
    p.add_argument("--tool", choices=TOOL_CHOICES, default="all")
    p.set_defaults(func=cmd_render)

    p = sub.add_parser("show", help="Print a skill file")
    p.add_argument("skill")
    p.set_defaults(func=cmd_show)

    p = sub.add_parser("sync", help="Push or pull each skill based on modification time")
    p.add_argument("skills", nargs="*")
    prefer = p.add_mutually_exclusive_group()
    prefer.add_argument("--prefer-source", action="store_true")
    prefer.add_argument("--prefer-tool", action="store_true")
    p.add_argument("--dry-run", "-n", action="store_true")
    p.set_defaults(func=cmd_sync)

    p = sub.add_parser("unload", help="Remove a skill from tool install directories")
    p.add_argument("skill")
    p.add_argument("--tool", choices=TOOL_CHOICES, default="all")
    p.add_argument("--force", "-f", action="store_true")
    p.add_argument("--dry-run", "-n", action="store_true")
    p.set_defaults(func=cmd_unload)

    p = sub.add_parser("validate", help="Check frontmatter and templates")
    p.add_argument("skill", nargs="?")
    p.set_defaults(func=cmd_validate)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command is None:
        args = parser.parse_args(["list"])

    try:
        return args.func(args, SystemPaths())
    except SkillsError as err:
        print(err, file=sys.stderr)
        return 1


def run() -> None:
    sys.exit(main())
