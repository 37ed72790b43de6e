"""Python client for the summarize command-line tool."""

import importlib.metadata
import logging

from summarize_client.client import SummarizeClient, classify_exit
from summarize_client.config import (
    Configuration,
    SummarizeSettings,
    config_scope,
    configure,
    get_configuration,
    reset_configuration,
    resolve_configuration,
    set_configuration,
)
from summarize_client.constants import MINIMUM_CLI_VERSION
from summarize_client.exceptions import (
    BinaryNotFoundError,
    CommandError,
    CommandInterruptedError,
    CommandTerminatedError,
    ConfigurationError,
    ProcessSignalError,
    SummarizationError,
    SummarizeError,
    VersionMismatchError,
)
from summarize_client.frontdoor import call, extract, from_text, stream
from summarize_client.options import (
    Length,
    MarkdownMode,
    MetricsMode,
    OutputFormat,
    SummarizeOptions,
    VideoMode,
    encode_options,
)
from summarize_client.result import SummarizeResult
from summarize_client.runner import CommandRunner, ProcessOutput, SubprocessRunner
from summarize_client.telemetry import TelemetryContext, TelemetryReporter

# Version handling
try:
    __version__ = importlib.metadata.version("summarize-client")
except importlib.metadata.PackageNotFoundError:
    __version__ = "development"

# Set up a null handler for the library's root logger.
# This prevents 'No handler found' errors if the consuming app has no logging configured.
logging.getLogger(__name__).addHandler(logging.NullHandler())

# Public API
__all__ = [  # noqa: RUF022
    # Convenience functions
    "call",
    "from_text",
    "extract",
    "stream",
    # Client
    "SummarizeClient",
    "classify_exit",
    # Configuration
    "Configuration",
    "SummarizeSettings",
    "resolve_configuration",
    "get_configuration",
    "set_configuration",
    "configure",
    "reset_configuration",
    "config_scope",
    "MINIMUM_CLI_VERSION",
    # Options
    "SummarizeOptions",
    "encode_options",
    "Length",
    "VideoMode",
    "OutputFormat",
    "MarkdownMode",
    "MetricsMode",
    # Results
    "SummarizeResult",
    # Process execution (extension points)
    "CommandRunner",
    "SubprocessRunner",
    "ProcessOutput",
    # Telemetry (extension points)
    "TelemetryContext",
    "TelemetryReporter",
    # Exceptions
    "SummarizeError",
    "ConfigurationError",
    "BinaryNotFoundError",
    "VersionMismatchError",
    "CommandError",
    "ProcessSignalError",
    "CommandInterruptedError",
    "CommandTerminatedError",
    "SummarizationError",
]
