"""Argument parsing functionality for DepMeta."""

import argparse
from constants import Constants


def build_parser():
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="depmeta",
        description=(
            "DepMeta - NuGet version range and nuspec metadata tool"
        ),
        add_help=True,
    )

    parser.add_argument("-o", "--output",
                        dest="OUTPUT",
                        help="Path to output file; defaults to standard output",
                        action="store",
                        type=str)
    parser.add_argument("-f", "--format",
                        dest="OUTPUT_FORMAT",
                        help="Output format (json or text). Defaults to the config file value or json.",
                        action="store",
                        type=str.lower,
                        choices=Constants.SUPPORTED_FORMATS)
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str.upper,
                        choices=Constants.LOG_LEVELS)
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)
    parser.add_argument("-q", "--quiet",
                        dest="QUIET",
                        help="Do not output to console.",
                        action="store_true")
    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to configuration file (YAML, YML, or JSON)",
                        action="store",
                        type=str)

    commands = parser.add_subparsers(dest="COMMAND", metavar="COMMAND")
    commands.required = True

    range_cmd = commands.add_parser("range", help="Parse a NuGet version range")
    range_cmd.add_argument("RANGE",
                           help="Version range text, e.g. \"[1.0,2.0)\"",
                           type=str)
    range_cmd.add_argument("--check",
                           dest="CHECK",
                           help="Version to test against the range (can be used multiple times)",
                           action="append",
                           type=str,
                           default=[])
    range_cmd.add_argument("--error-on-mismatch",
                           dest="ERROR_ON_MISMATCH",
                           help="Exit with a non-zero status code if a checked version is outside the range.",
                           action="store_true")

    nuspec_cmd = commands.add_parser("nuspec", help="Load a nuspec manifest")
    nuspec_cmd.add_argument("PATH",
                            help="Path to the .nuspec file",
                            type=str)

    return parser


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    return build_parser().parse_args(argv)
