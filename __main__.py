"""CLI entry point for capsule-forge.

This module acts as the central entry point for the project's CLI tools.
It delegates commands to the appropriate submodules or runs specific tasks.
"""

import argparse
import json
import subprocess
import sys
from pathlib import Path

from dotenv import load_dotenv
from pydantic import ValidationError as PydanticValidationError

from forge.config import EnvVar, get_environment, get_output_dir, list_environment_variables
from forge.core import get_logger, setup_logging

# Load environment variables from .env file
load_dotenv()

logger = get_logger("cli")


# =============================================================================
# Helpers
# =============================================================================


def _load_project(path: Path):
    """Load and parse a project JSON file, or return None after logging why."""
    from forge.ir import Project

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        logger.error(f"Cannot read {path}: {e}")
        return None
    except json.JSONDecodeError as e:
        logger.error(f"{path} is not valid JSON: {e}")
        return None

    try:
        return Project.model_validate(data)
    except PydanticValidationError as e:
        logger.error(f"{path} is not a valid project:")
        for err in e.errors():
            loc = ".".join(str(x) for x in err["loc"]) or "project"
            logger.error(f"  {loc}: {err['msg']}")
        return None


def _load_options(path: Path | None) -> dict | None:
    if path is None:
        return None
    return json.loads(path.read_text(encoding="utf-8"))


def _compiler():
    from forge.compiler import ProjectCompiler
    from forge.registry import build_default_registry

    return ProjectCompiler(build_default_registry())


# =============================================================================
# Generate Command
# =============================================================================


def cmd_generate(args: argparse.Namespace) -> int:
    """Handle the generate command."""
    from forge.compiler import FileConflictError
    from forge.output import format_manifest_tree, format_warnings, write_manifest
    from forge.validation import ProjectValidationError

    project = _load_project(args.project)
    if project is None:
        return 1

    target = args.target or get_environment(EnvVar.FORGE_DEFAULT_TARGET)
    try:
        manifest = _compiler().generate(project, target, _load_options(args.options))
    except ProjectValidationError as e:
        logger.error(f"Validation failed for {project.id}:")
        for err in e.errors:
            logger.error(f"  [{err.code.value}] {err.path or err.instance_id}: {err.message}")
        return 1
    except (FileConflictError, OSError, ValueError) as e:
        logger.error(str(e))
        return 1

    if args.format == "json":
        print(
            json.dumps(
                {
                    "target": manifest.target.value,
                    "entry": manifest.entry,
                    "dependencies": manifest.dependencies,
                    "warnings": [w.to_dict() for w in manifest.warnings],
                    "files": [f.to_dict() for f in manifest.files],
                },
                indent=2,
            )
        )
    elif args.format == "tree":
        print(format_manifest_tree(manifest))
        if manifest.warnings:
            print()
            print(format_warnings(manifest))

    if args.format == "files" or args.out is not None:
        out_dir = get_output_dir(args.out) / manifest.target.value
        written = write_manifest(manifest, out_dir)
        print(f"Wrote {len(written)} files to {out_dir}")

    return 0


def cmd_multi(args: argparse.Namespace) -> int:
    """Handle the multi command."""
    from forge.output import write_manifest

    project = _load_project(args.project)
    if project is None:
        return 1

    targets = args.targets or project.targets
    if not targets:
        logger.error("No targets given and the project lists none")
        return 1

    try:
        result = _compiler().generate_multi(project, targets)
    except ValueError as e:
        logger.error(str(e))
        return 1

    for target, summary in result.per_target.items():
        mark = "ok" if summary.success else "FAILED"
        print(f"{target.value:18} {mark:7} {summary.file_count:4} files {summary.total_size:>10,} bytes")
        for error in summary.errors:
            print(f"    error: {error}")
        for warning in summary.warnings:
            print(f"    warning: {warning}")

        generated = result.results[target]
        if args.out is not None and generated.success:
            write_manifest(generated.manifest, get_output_dir(args.out) / target.value)

    summary = result.summary
    print(
        f"\n{summary.successful_platforms}/{summary.total_platforms} targets, "
        f"{summary.total_files} files, {summary.total_size:,} bytes"
    )
    return 0 if result.success else 1


# =============================================================================
# Validate / Schema / Targets Commands
# =============================================================================


def cmd_validate(args: argparse.Namespace) -> int:
    """Handle the validate command."""
    from forge.output import format_project_tree
    from forge.registry import build_default_registry
    from forge.validation import check_project

    project = _load_project(args.project)
    if project is None:
        return 1

    print(format_project_tree(project))
    print()

    report = check_project(project, build_default_registry())
    for err in report.errors:
        where = err.path or err.instance_id
        print(f"{err.severity.value:7} [{err.code.value}] {where}: {err.message}")

    if report.ok:
        print(f"Valid ({len(report.warnings)} warnings)")
        return 0
    print(f"Invalid ({len(report.fatal)} errors, {len(report.warnings)} warnings)")
    return 1


def cmd_schema(args: argparse.Namespace) -> int:
    """Handle the schema command."""
    from forge.registry import build_default_registry

    registry = build_default_registry()
    if args.json:
        print(json.dumps(registry.export_schema(), indent=2))
        return 0

    for definition in registry:
        children = ", container" if definition.accepts_children else ""
        print(f"{definition.type_id} ({definition.category.value}{children})")
        for prop in definition.schema:
            required = " required" if prop.required else ""
            options = f" {list(prop.options)}" if prop.options else ""
            print(f"  {prop.name}: {prop.kind.value}{required}{options}")
    return 0


def cmd_targets(_args: argparse.Namespace) -> int:
    """Handle the targets command."""
    from forge.schema import Target
    from forge.targets import get_assembler, list_assemblers

    default = Target.parse(get_environment(EnvVar.FORGE_DEFAULT_TARGET))
    for target in list_assemblers():
        assembler = get_assembler(target)
        marker = " (default)" if target == default else ""
        print(f"{target.value:18} {target.platform.value:8} {type(assembler).__name__}{marker}")
    return 0


def cmd_env(_args: argparse.Namespace) -> int:
    """Show configuration variables and their effective values."""
    for env_var in list_environment_variables():
        config = env_var.value
        print(f"{config.name:22} = {get_environment(env_var)!s:24} {config.description}")
    return 0


def _add_project_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "project",
        type=Path,
        help="Path to a project JSON file",
    )


def handle_engine_command(command: str, argv: list[str]) -> int:
    """Handle engine commands (generate, multi, validate, schema, targets, env)."""
    parser = argparse.ArgumentParser(
        prog=f"python . {command}",
        description="Generate platform projects from capsule projects",
    )

    if command == "generate":
        _add_project_argument(parser)
        parser.add_argument(
            "--target",
            "-t",
            type=str,
            default=None,
            help="Target id or platform alias (default: FORGE_DEFAULT_TARGET)",
        )
        parser.add_argument(
            "--options",
            type=Path,
            default=None,
            help="JSON file with target options",
        )
        parser.add_argument(
            "--out",
            "-o",
            type=Path,
            default=None,
            help="Write files below this directory (default: FORGE_OUTPUT_DIR)",
        )
        parser.add_argument(
            "--format",
            "-f",
            type=str,
            default="tree",
            choices=["tree", "json", "files"],
            help="Output format (default: tree)",
        )
        parser.set_defaults(func=cmd_generate)
    elif command == "multi":
        _add_project_argument(parser)
        parser.add_argument(
            "--targets",
            nargs="+",
            default=None,
            help="Targets to generate (default: the project's targets)",
        )
        parser.add_argument(
            "--out",
            "-o",
            type=Path,
            default=None,
            help="Write each target below this directory",
        )
        parser.set_defaults(func=cmd_multi)
    elif command == "validate":
        _add_project_argument(parser)
        parser.set_defaults(func=cmd_validate)
    elif command == "schema":
        parser.add_argument("--json", action="store_true", help="Print the JSON export")
        parser.set_defaults(func=cmd_schema)
    elif command == "targets":
        parser.set_defaults(func=cmd_targets)
    else:
        parser.set_defaults(func=cmd_env)

    args = parser.parse_args(argv)
    return args.func(args)


# =============================================================================
# Dev Commands
# =============================================================================


def cmd_test(extra_args: list[str]) -> int:
    """Run pytest with provided arguments and test tier options.

    Usage:
        python . dev test                # Run all tests
        python . dev test --unit         # Run only unit tests
        python . dev test --integration  # Run integration tests
        python . dev test --mcp          # Run MCP protocol tests
        python . dev test -k "compiler"  # Run tests matching pattern
    """
    tier_markers = {
        "--unit": ["-m", "unit"],
        "--integration": ["-m", "integration"],
        "--mcp": ["-m", "mcp"],
        "--all": [],
    }

    pytest_args: list[str] = []
    remaining_args: list[str] = []

    for arg in extra_args:
        if arg in tier_markers:
            pytest_args.extend(tier_markers[arg])
        else:
            remaining_args.append(arg)

    cmd = [sys.executable, "-m", "pytest", *pytest_args, *remaining_args]
    logger.info(f"Running: {' '.join(cmd)}")

    try:
        return subprocess.call(cmd)
    except KeyboardInterrupt:
        return 130


def handle_dev_command(argv: list[str]) -> int:
    """Handle development workflow commands.

    Usage:
        python . dev test [args]       # Run pytest
    """
    if not argv:
        print("Development workflow commands")
        print("\nUsage: python . dev {command} [args]")
        print("\nCommands:")
        print("  test       Run pytest with tier options")
        print("\nExamples:")
        print("  python . dev test --unit           # Fast unit tests")
        print("  python . dev test --mcp            # MCP protocol tests")
        return 1

    subcommand = argv[0]
    subargs = argv[1:]

    dev_commands = {
        "test": lambda: cmd_test(subargs),
    }

    if subcommand in dev_commands:
        return dev_commands[subcommand]()

    logger.error(f"Unknown dev command: {subcommand}")
    return handle_dev_command([])


# =============================================================================
# MCP Server Command
# =============================================================================


def handle_mcp_command(argv: list[str]) -> int:
    """Handle MCP server commands.

    Usage:
        python . mcp run              # Start in STDIO mode
        python . mcp serve            # Start in HTTP mode
        python . mcp serve --port 8080
        python . mcp info             # Show server info
    """
    if not argv:
        print("MCP Server Commands")
        print("\nUsage: python . mcp {command} [options]")
        print("\nCommands:")
        print("  run                 Start server in STDIO mode")
        print("  serve               Start server in HTTP mode")
        print("  info                Show server information")
        print("\nOptions for 'serve':")
        print("  --host HOST         Bind address (default: MCP_HOST)")
        print("  --port PORT         Port number (default: MCP_PORT)")
        print("  --transport TYPE    Transport: http or sse (default: http)")
        return 1

    subcommand = argv[0]
    subargs = argv[1:]

    if subcommand == "run":
        from forge.mcp.server import TransportType, run_server

        logger.info("Starting MCP server in STDIO mode...")
        run_server(transport=TransportType.STDIO)
        return 0

    elif subcommand == "serve":
        from forge.mcp.server import TransportType, run_server

        host = get_environment(EnvVar.MCP_HOST)
        port = get_environment(EnvVar.MCP_PORT)
        transport = TransportType.HTTP

        i = 0
        while i < len(subargs):
            arg = subargs[i]
            if arg == "--host" and i + 1 < len(subargs):
                host = subargs[i + 1]
                i += 2
            elif arg == "--port" and i + 1 < len(subargs):
                port = int(subargs[i + 1])
                i += 2
            elif arg == "--transport" and i + 1 < len(subargs):
                transport = TransportType(subargs[i + 1])
                i += 2
            else:
                i += 1

        logger.info(f"Starting MCP server in {transport.value} mode on {host}:{port}")
        run_server(transport=transport, host=host, port=port)
        return 0

    elif subcommand == "info":
        from forge.mcp import get_server_capabilities, get_server_version, mcp
        from forge.mcp.tools import list_targets

        print("Capsule Forge MCP Server")
        print("=" * 40)
        print(f"Name: {mcp.name}")
        print(f"Version: {get_server_version()}")
        print("\nCapabilities:")
        for cap, enabled in get_server_capabilities().items():
            status = "enabled" if enabled else "disabled"
            print(f"  {cap}: {status}")
        print("\nTools:")
        for tool in ("generate", "generate_multi", "validate_project", "schema", "list_targets", "status"):
            print(f"  - {tool}")
        print("\nTargets:")
        for target in list_targets()["targets"]:
            print(f"  - {target['id']}")
        return 0

    else:
        logger.error(f"Unknown mcp command: {subcommand}")
        return handle_mcp_command([])


def show_help() -> None:
    """Display CLI help message."""
    print("Usage: python . {command} [args]")
    print("\n=== Generation ===")
    print("  generate   Generate one target from a project JSON file")
    print("  multi      Generate several targets concurrently")
    print("  validate   Validate a project without generating")
    print("\n=== Catalog ===")
    print("  schema     List capsule types and properties")
    print("  targets    List generation targets")
    print("  env        Show configuration variables")
    print("\n=== MCP Server ===")
    print("  mcp        Run MCP server (STDIO or HTTP mode)")
    print("\n=== Development ===")
    print("  dev        Development workflows (test)")
    print("\nExamples:")
    print("  python . generate project.json -t ios-swiftui")
    print("  python . generate project.json -t web --out build")
    print("  python . multi project.json --targets web ios android")
    print("  python . validate project.json")
    print("  python . mcp serve --port 18080")
    print("  python . dev test --unit")


def main() -> int:
    """Main entry point for the CLI."""
    if len(sys.argv) < 2:
        show_help()
        return 1

    command = sys.argv[1]
    rest_args = sys.argv[2:]

    if command in ("-h", "--help"):
        show_help()
        return 0

    if command == "dev":
        return handle_dev_command(rest_args)

    engine_commands = ("generate", "multi", "validate", "schema", "targets", "env")

    if command in engine_commands:
        setup_logging(get_environment(EnvVar.FORGE_LOG_LEVEL))
        return handle_engine_command(command, rest_args)

    if command == "mcp":
        setup_logging(get_environment(EnvVar.FORGE_LOG_LEVEL))
        return handle_mcp_command(rest_args)

    logger.error(f"Unknown command: {command}")
    show_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
