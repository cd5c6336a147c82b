"""DepMeta - NuGet version range and nuspec metadata tool

    Returns:
        int: Exit code
"""
import json
import logging
import sys

from constants import ExitCodes, OutputFormats, Constants
from common.errors import ManifestError, VersionParseError, VersionRangeParseError
from common.logging_utils import add_file_handler, configure_logging, extra_context, is_debug_enabled
from cli_config import ConfigError, apply_cli_overrides, apply_config, load_config, resolve_log_settings
from args import parse_args
from manifest.nuspec import load_nuspec
from versioning.nuget_range import format_requirement, parse
from versioning.semver import SemVer


def _render(data, text_lines):
    """Render ``data`` in the configured output format."""
    if Constants.OUTPUT_FORMAT == OutputFormats.TEXT.value:
        return "\n".join(text_lines) + "\n"
    return json.dumps(data, indent=Constants.OUTPUT_INDENT) + "\n"


def emit(args, data, text_lines):
    """Write the result to --output or standard output (unless quiet).

    Args:
        args: Parsed CLI arguments.
        data: JSON-serializable result.
        text_lines: Lines for the text format.
    """
    rendered = _render(data, text_lines)
    path = getattr(args, "OUTPUT", None)
    if path:
        try:
            with open(path, "w", encoding="utf-8") as file:
                file.write(rendered)
            logging.info("Output written to: %s", path)
        except OSError as e:
            logging.error("Output file couldn't be written to disk: %s", e)
            sys.exit(ExitCodes.FILE_ERROR.value)
    elif not getattr(args, "QUIET", False):
        sys.stdout.write(rendered)


def run_range(args):
    """Parse a version range and optionally check versions against it.

    Returns:
        int: Exit code
    """
    try:
        requirement = parse(args.RANGE)
        checks = [(text, SemVer.parse(text)) for text in args.CHECK]
    except (VersionRangeParseError, VersionParseError) as e:
        logging.error("%s", e)
        return ExitCodes.PARSE_ERROR.value

    results = [(text, requirement.is_in_range(version)) for text, version in checks]
    canonical = format_requirement(requirement)
    data = {
        "input": args.RANGE,
        "range": canonical,
        "kind": requirement.range.kind.value,
        "prerelease": str(requirement.prerelease),
        "requirement": requirement.to_dict(),
        "checks": [{"version": text, "satisfied": ok} for text, ok in results],
    }
    lines = [
        f"range: {canonical or '(any version)'}",
        f"kind: {requirement.range.kind.value}",
        f"prerelease: {requirement.prerelease}",
    ]
    lines += [f"{text}: {'yes' if ok else 'no'}" for text, ok in results]
    emit(args, data, lines)

    mismatches = [text for text, ok in results if not ok]
    if mismatches:
        logging.warning("Versions outside %s: %s", canonical or "(any version)", ", ".join(mismatches))
        if args.ERROR_ON_MISMATCH:
            return ExitCodes.EXIT_WARNINGS.value
    return ExitCodes.SUCCESS.value


def _nuspec_lines(nuspec):
    lines = [f"id: {nuspec.official_name or '(none)'}"]
    if nuspec.references.is_all:
        lines.append("references: all")
    else:
        lines.append(f"references: {', '.join(nuspec.references.files)}")
    lines.append("dependencies:")
    for name, requirement, restrictions in nuspec.dependencies:
        line = f"  {name} {format_requirement(requirement) or '(any version)'}"
        if restrictions:
            line += f" ({', '.join(str(r) for r in restrictions)})"
        lines.append(line)
    lines.append("framework assemblies:")
    for reference in nuspec.framework_assembly_references:
        line = f"  {reference.assembly_name}"
        if reference.framework_restrictions:
            line += f" ({', '.join(str(r) for r in reference.framework_restrictions)})"
        lines.append(line)
    return lines


def run_nuspec(args):
    """Load a nuspec manifest and print it.

    Returns:
        int: Exit code
    """
    try:
        nuspec = load_nuspec(args.PATH)
    except ManifestError as e:
        logging.error("%s", e)
        return ExitCodes.FILE_ERROR.value
    except VersionRangeParseError as e:
        logging.error("%s in %s", e, args.PATH)
        return ExitCodes.PARSE_ERROR.value
    except OSError as e:
        logging.error("Couldn't read %s: %s", args.PATH, e)
        return ExitCodes.FILE_ERROR.value

    if not nuspec.official_name:
        logging.warning("No manifest at %s; treating all package files as references.", args.PATH)
    emit(args, nuspec.to_dict(), _nuspec_lines(nuspec))
    return ExitCodes.SUCCESS.value


COMMANDS = {
    "range": run_range,
    "nuspec": run_nuspec,
}


def main(argv=None):
    """Main function of the program."""
    logger = logging.getLogger(__name__)

    args = parse_args(argv)
    try:
        config = load_config(args.CONFIG)
    except ConfigError as e:
        configure_logging()
        logging.error("%s", e)
        sys.exit(ExitCodes.FILE_ERROR.value)

    level, log_file = resolve_log_settings(args, config)
    configure_logging(level)
    if log_file:
        try:
            add_file_handler(log_file)
        except OSError as e:
            logging.error("Log file couldn't be opened: %s", e)
            sys.exit(ExitCodes.FILE_ERROR.value)

    apply_config(config)
    apply_cli_overrides(args)

    if is_debug_enabled(logger):
        logger.debug(
            "CLI start",
            extra=extra_context(event="function_entry", component="cli", action=args.COMMAND)
        )

    code = COMMANDS[args.COMMAND](args)

    if is_debug_enabled(logger):
        logger.debug(
            "CLI finished",
            extra=extra_context(event="function_exit", component="cli", action=args.COMMAND,
                                outcome=code)
        )
    sys.exit(code)


if __name__ == "__main__":
    main()
