"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    EXIT_WARNINGS = 3
    PARSE_ERROR = 4


class OutputFormats(Enum):
    """Output formats supported by the CLI.

    Args:
        Enum (string): Output formats supported by the CLI.
    """

    JSON = "json"
    TEXT = "text"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    LOG_FORMAT = "[%(levelname)s] %(message)s"
    LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    ENV_LOG_LEVEL = "DEPMETA_LOG_LEVEL"
    ENV_CONFIG = "DEPMETA_CONFIG"
    SUPPORTED_FORMATS = [OutputFormats.JSON.value, OutputFormats.TEXT.value]
    OUTPUT_FORMAT = OutputFormats.JSON.value
    OUTPUT_INDENT = 2

    # NuGet version range syntax
    UNCONSTRAINED_VERSION_TOKENS = ("", "null")
    ANY_VERSION = "0"

    # Nuspec element and attribute names
    NUSPEC_PACKAGE = "package"
    NUSPEC_METADATA = "metadata"
    NUSPEC_ID = "id"
    NUSPEC_DEPENDENCIES = "dependencies"
    NUSPEC_DEPENDENCY = "dependency"
    NUSPEC_GROUP = "group"
    NUSPEC_REFERENCE = "reference"
    NUSPEC_FRAMEWORK_ASSEMBLY = "frameworkAssembly"
    ATTR_ID = "id"
    ATTR_VERSION = "version"
    ATTR_TARGET_FRAMEWORK = "targetFramework"
    ATTR_FILE = "file"
    ATTR_ASSEMBLY_NAME = "assemblyName"

    # Framework moniker aliases (lower-case moniker -> canonical moniker),
    # extended from the "frameworks.aliases" config section.
    FRAMEWORK_ALIASES = {}
