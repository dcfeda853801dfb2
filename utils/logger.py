"""
Logger utility for the Resource Usage & Deadlock Analyzer.

Provides console (and optional file) logging with verbosity levels.
"""

from typing import Mapping, Optional, Sequence
from datetime import datetime


class AnalysisLogger:
    """
    Logger for analysis runs and their verdicts.

    Format: "[LEVEL] message" for warnings, errors and debug output,
    bare message for info.
    """

    def __init__(self, verbose: bool = False, log_file: Optional[str] = None):
        """
        Initialize logger.

        Args:
            verbose: Enable debug output
            log_file: Optional file path for logging
        """
        self.verbose = verbose
        self.log_file = log_file
        self.file_handle = None

        if self.log_file:
            self.file_handle = open(self.log_file, 'w', encoding='utf-8')
            self._write_header()

    def _write_header(self) -> None:
        """Write log file header."""
        if self.file_handle:
            timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
            self.file_handle.write(f"Analysis Log - {timestamp}\n")
            self.file_handle.write("="*60 + "\n\n")

    def log(self, message: str, level: str = "info") -> None:
        """
        Log a message.

        Args:
            message: Message to log
            level: Log level (info, debug, warning, error)
        """
        if level == "debug" and not self.verbose:
            return

        formatted = self._format_message(message, level)

        print(formatted)

        if self.file_handle:
            self.file_handle.write(formatted + "\n")
            self.file_handle.flush()

    def _format_message(self, message: str, level: str) -> str:
        """Format message with level prefix."""
        if level == "error":
            return f"[ERROR] {message}"
        elif level == "warning":
            return f"[WARNING] {message}"
        elif level == "debug":
            return f"[DEBUG] {message}"
        else:
            return message

    def log_ledger(self, available: Mapping[str, int], on_hold: Mapping[str, int]) -> None:
        """Log the ledger vectors at debug level."""
        self.log(f"Ledger: available={dict(available)}, on_hold={dict(on_hold)}", "debug")

    def log_deadlock(self, deadlock_resources: Sequence[str]) -> None:
        """
        Log a deadlock verdict.

        Args:
            deadlock_resources: Formatted offending kinds
        """
        if deadlock_resources:
            self.log(f"DEADLOCK DETECTED - Resources: [{'; '.join(deadlock_resources)}]", "warning")
        else:
            self.log("Deadlock check: No deadlock detected", "debug")

    def log_safe_sequence(self, sequence: Optional[Sequence[int]], names: Sequence[str]) -> None:
        """
        Log the safety analysis outcome.

        Args:
            sequence: Consumer indices in finishing order, or None if unsafe
            names: Consumer display names by index
        """
        if sequence is None:
            self.log("Safety check: no safe sequence exists", "debug")
        else:
            order = " -> ".join(names[i] if i < len(names) else f"C{i}" for i in sequence)
            self.log(f"Safety check: safe sequence {order}", "debug")

    def log_recovery(self, suggestions: Sequence[str]) -> None:
        """Log each recovery suggestion at debug level."""
        for suggestion in suggestions:
            self.log(f"  RECOVERY: {suggestion}", "debug")

    def close(self) -> None:
        """Close log file if open."""
        if self.file_handle:
            self.file_handle.close()
            self.file_handle = None

    def __del__(self):
        """Cleanup on destruction."""
        self.close()
