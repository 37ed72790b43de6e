"""
Exceptions raised by the summarize CLI client
"""

from .constants import INSTALL_HINT


class SummarizeError(Exception):
    """Base exception for summarize client errors"""

    pass


class ConfigurationError(SummarizeError):
    """Raised when configuration values fail validation"""

    pass


class BinaryNotFoundError(SummarizeError):
    """Raised when the configured binary path is not an executable file"""

    def __init__(self, path: str):
        self.path = path
        super().__init__(
            f"summarize binary not found at '{path}'. Install via: {INSTALL_HINT}"
        )


class VersionMismatchError(SummarizeError):
    """Raised when the installed CLI is older than the supported minimum"""

    def __init__(self, installed_version: str, required_version: str):
        self.installed_version = installed_version
        self.required_version = required_version
        super().__init__(
            f"summarize CLI {installed_version} is too old "
            f"(requires >= {required_version}). Update via: {INSTALL_HINT}"
        )


class CommandError(SummarizeError):
    """Raised when the CLI exits with a non-zero status"""

    def __init__(self, exit_code: int, stderr: str):
        self.exit_code = exit_code
        self.stderr = stderr
        super().__init__(f"summarize exited with code {exit_code}: {stderr}")


class ProcessSignalError(SummarizeError):
    """Raised when the CLI was stopped by a signal rather than failing on its own"""

    signal_name = "signal"
    description = "Stopped by signal"

    def __init__(self, exit_code: int, stderr: str = ""):
        self.exit_code = exit_code
        self.stderr = stderr
        super().__init__(f"{self.description} ({self.signal_name})")


class CommandInterruptedError(ProcessSignalError):
    """Raised when the CLI received SIGINT (exit code 130)"""

    signal_name = "SIGINT"
    description = "Interrupted"


class CommandTerminatedError(ProcessSignalError):
    """Raised when the CLI received SIGTERM (exit code 143)"""

    signal_name = "SIGTERM"
    description = "Terminated"


class SummarizationError(SummarizeError):
    """Raised when the CLI succeeded but its output could not be parsed"""

    def __init__(self, message: str, output_preview: str = ""):
        self.output_preview = output_preview
        super().__init__(message)
