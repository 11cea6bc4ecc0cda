"""
Structured logging for shortlist.

Wraps stdlib logging with console and optional file outputs, and keeps
counters that let operators tell "no input" apart from "input matched
nothing" even though both score 0.
"""

import logging
import sys
import threading
from collections import Counter
from pathlib import Path
from typing import Optional, TextIO
from datetime import datetime
import json

# Distinct unknown skills kept in metrics; the rarest are dropped beyond this
MAX_UNKNOWN_SKILLS = 100


class StructuredLogger:
    """
    Logger with console/file outputs and scoring metrics.
    """

    def __init__(
        self,
        name: str = "shortlist",
        level: str = "INFO",
        log_dir: Optional[Path] = None,
        enable_file: bool = True,
        enable_console: bool = True,
        stream: Optional[TextIO] = None,
        max_unknown_skills: int = MAX_UNKNOWN_SKILLS,
    ):
        """
        Initialize the structured logger.

        Args:
            name: Logger name
            level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_dir: Directory for log files (default: logs/)
            enable_file: Write logs to file
            enable_console: Output logs to console
            stream: Console stream (default: stdout)
            max_unknown_skills: Cap on distinct unknown skills tracked
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(logging.DEBUG if enable_file else getattr(logging, level.upper()))
        self.logger.handlers.clear()  # Remove existing handlers
        self.logger.propagate = False

        self.max_unknown_skills = max_unknown_skills
        self._metrics_lock = threading.Lock()
        self.metrics = self._empty_metrics()

        # Console handler
        if enable_console:
            console_handler = logging.StreamHandler(stream or sys.stdout)
            console_handler.setLevel(getattr(logging, level.upper()))
            console_formatter = logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            console_handler.setFormatter(console_formatter)
            self.logger.addHandler(console_handler)

        # File handler
        if enable_file:
            if log_dir is None:
                log_dir = Path("logs")
            log_dir.mkdir(parents=True, exist_ok=True)

            log_file = log_dir / f"shortlist_{datetime.now().strftime('%Y%m%d')}.log"
            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setLevel(logging.DEBUG)  # Always log everything to file
            file_formatter = logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            file_handler.setFormatter(file_formatter)
            self.logger.addHandler(file_handler)

    @staticmethod
    def _empty_metrics() -> dict:
        return {
            "scores_computed": 0,
            "no_input": 0,
            "no_match": 0,
            "matched": 0,
            "lookups": 0,
            "tokens_matched": 0,
            "tokens_unknown": 0,
            "inputs_truncated": 0,
            "unknown_skills": Counter(),
        }

    def debug(self, message: str, **kwargs):
        """Log debug message with optional context."""
        self._log(logging.DEBUG, message, kwargs)

    def info(self, message: str, **kwargs):
        """Log info message with optional context."""
        self._log(logging.INFO, message, kwargs)

    def warning(self, message: str, **kwargs):
        """Log warning message with optional context."""
        self._log(logging.WARNING, message, kwargs)

    def error(self, message: str, **kwargs):
        """Log error message with optional context."""
        self._log(logging.ERROR, message, kwargs)

    def critical(self, message: str, **kwargs):
        """Log critical message with optional context."""
        self._log(logging.CRITICAL, message, kwargs)

    def _log(self, level: int, message: str, context: dict):
        if context:
            message = f"{message} | Context: {json.dumps(context)}"
        self.logger.log(level, message)

    # Metric tracking methods

    def record_no_input(self):
        """Record a call that supplied no skills string at all."""
        with self._metrics_lock:
            self.metrics["no_input"] += 1

    def record_score(self, status: str, lookups: int, matched: int, unknown_tokens=()):
        """Record one completed scoring call."""
        with self._metrics_lock:
            self.metrics["scores_computed"] += 1
            if status in ("no_match", "matched"):
                self.metrics[status] += 1
            self.metrics["lookups"] += lookups
            self.metrics["tokens_matched"] += matched
            self.metrics["tokens_unknown"] += len(unknown_tokens)

            # Track which skills applicants mention that the dictionary lacks
            unknown_skills = self.metrics["unknown_skills"]
            unknown_skills.update(unknown_tokens)
            if len(unknown_skills) > self.max_unknown_skills:
                kept = unknown_skills.most_common(self.max_unknown_skills)
                unknown_skills.clear()
                unknown_skills.update(dict(kept))

    def record_truncation(self):
        """Record an input cut down to the configured limit."""
        with self._metrics_lock:
            self.metrics["inputs_truncated"] += 1

    def get_metrics(self) -> dict:
        """Return current metrics."""
        with self._metrics_lock:
            metrics_copy = self.metrics.copy()
            metrics_copy["unknown_skills"] = dict(self.metrics["unknown_skills"])
        if metrics_copy["lookups"] > 0:
            metrics_copy["hit_rate"] = round(
                metrics_copy["tokens_matched"] / metrics_copy["lookups"], 3
            )
        return metrics_copy

    def log_metrics_summary(self):
        """Log a summary of current metrics."""
        metrics = self.get_metrics()

        self.info("=== Scoring Session Metrics ===")
        self.info(
            f"Scores: {metrics['scores_computed']} "
            f"(matched={metrics['matched']}, no-match={metrics['no_match']}, "
            f"no-input={metrics['no_input']})"
        )
        self.info(f"Lookups: {metrics['lookups']} (hit rate {metrics.get('hit_rate', 0) * 100:.1f}%)")

        if metrics["inputs_truncated"]:
            self.info(f"Truncated inputs: {metrics['inputs_truncated']}")

        if metrics["unknown_skills"]:
            self.info("Unknown skills:")
            top = Counter(metrics["unknown_skills"]).most_common(10)
            for token, count in top:
                self.info(f"  {token}: {count}")


# Global logger instance
_global_logger: Optional[StructuredLogger] = None


def get_logger(
    name: str = "shortlist",
    level: str = "INFO",
    **kwargs
) -> StructuredLogger:
    """
    Get or create the global logger instance.

    Args:
        name: Logger name
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        **kwargs: Additional arguments passed to StructuredLogger

    Returns:
        StructuredLogger instance
    """
    global _global_logger

    if _global_logger is None:
        _global_logger = StructuredLogger(name=name, level=level, **kwargs)

    return _global_logger


def reset_logger():
    """Reset the global logger (useful for testing)."""
    global _global_logger
    _global_logger = None
