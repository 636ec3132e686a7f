"""Unit tests for logger implementations.

Tests verify that:
1. Both loggers implement the LoggerPort protocol
2. ConsoleLogger honours its verbosity level and keeps statistics
3. NullLogger stays silent
"""

from io import StringIO
import unittest

from rich.console import Console

from contact_importer.application.models import ChunkResult, TransferSummary
from contact_importer.application.ports.services import LoggerPort
from contact_importer.domain.entities import FieldMapping, MappingResult
from contact_importer.infrastructure.logging import (
    ConsoleLogger,
    LogContext,
    LogLevel,
    NullLogger,
)


class TestLoggerPort(unittest.TestCase):
    """Test that logger implementations comply with LoggerPort protocol."""

    def test_console_logger_implements_loggerport(self):
        self.assertIsInstance(ConsoleLogger(), LoggerPort)

    def test_null_logger_implements_loggerport(self):
        self.assertIsInstance(NullLogger(), LoggerPort)

    def test_loggerport_has_required_methods(self):
        required_methods = {
            "info",
            "success",
            "warning",
            "error",
            "debug",
            "verbose",
            "log_chunk_result",
            "log_transfer_summary",
        }
        protocol_methods = {
            name for name in dir(LoggerPort) if not name.startswith("_")
        }
        self.assertTrue(required_methods.issubset(protocol_methods))


class TestConsoleLogger(unittest.TestCase):
    """Test ConsoleLogger output and statistics."""

    def setUp(self):
        self.buffer = StringIO()
        self.console = Console(file=self.buffer, force_terminal=False, width=80)
        self.logger = ConsoleLogger(console=self.console, verbosity=LogLevel.DEBUG)

    def _make_logger(self, verbosity: int) -> ConsoleLogger:
        return ConsoleLogger(console=self.console, verbosity=verbosity)

    def test_initialization(self):
        logger = ConsoleLogger()
        self.assertEqual(logger.verbosity, 0)
        self.assertIsNone(logger._context)
        self.assertEqual(logger.get_stats()["chunks_processed"], 0)

    def test_info_always_shown(self):
        self._make_logger(LogLevel.NORMAL).info("Loading file")
        self.assertIn("Loading file", self.buffer.getvalue())

    def test_verbose_hidden_at_normal_level(self):
        self._make_logger(LogLevel.NORMAL).verbose("detail")
        self.assertNotIn("detail", self.buffer.getvalue())

    def test_verbose_shown_at_verbose_level(self):
        self._make_logger(LogLevel.VERBOSE).verbose("detail")
        self.assertIn("detail", self.buffer.getvalue())

    def test_debug_needs_debug_level(self):
        self._make_logger(LogLevel.VERBOSE).debug("internals")
        self.assertNotIn("internals", self.buffer.getvalue())
        self.logger.debug("internals")
        self.assertIn("internals", self.buffer.getvalue())

    def test_warning_and_error_counted(self):
        self.logger.warning("careful")
        self.logger.error("broken")
        stats = self.logger.get_stats()
        self.assertEqual(stats["warnings"], 1)
        self.assertEqual(stats["errors"], 1)
        output = self.buffer.getvalue()
        self.assertIn("careful", output)
        self.assertIn("broken", output)

    def test_context_prefix_at_debug_level(self):
        self.logger.set_context(file_name="contacts.csv", table="контакты")
        self.logger.info("reading")
        self.assertIn("[contacts.csv:контакты] reading", self.buffer.getvalue())
        self.logger.clear_context()
        self.assertIsNone(self.logger._context)

    def test_analysis_start(self):
        self.logger.log_analysis_start("contacts.csv", 1200, 7)
        output = self.buffer.getvalue()
        self.assertIn("Analyzing contacts.csv", output)
        self.assertIn("1,200 rows, 7 columns", output)
        self.assertEqual(self.logger.get_stats()["files_analyzed"], 1)

    def test_mapping_result_reports_unmapped_columns(self):
        result = MappingResult(
            mappings=[
                FieldMapping(
                    source_field="email",
                    target_field="электронная_почта",
                    confidence=0.9,
                )
            ],
            confidence=0.9,
            unmapped_columns=["misc"],
        )
        self.logger.log_mapping_result(result)
        output = self.buffer.getvalue()
        self.assertIn("Mapped 1 fields", output)
        self.assertIn("Columns not imported: misc", output)

    def test_chunk_result(self):
        self.logger.log_chunk_result(
            ChunkResult(batch_start=100, batch_size=50, inserted_count=50)
        )
        self.assertIn("Rows 101-150: 50 rows inserted", self.buffer.getvalue())
        stats = self.logger.get_stats()
        self.assertEqual(stats["chunks_processed"], 1)
        self.assertEqual(stats["rows_processed"], 50)

    def test_failed_chunk_is_an_error(self):
        self.logger.log_chunk_result(
            ChunkResult(batch_start=0, batch_size=10, success=False, error="disk full")
        )
        self.assertIn("Rows 1-10: disk full", self.buffer.getvalue())
        self.assertEqual(self.logger.get_stats()["errors"], 1)

    def test_transfer_summary(self):
        summary = TransferSummary(
            total_processed=250, success_count=240, error_count=10, dry_run=True
        )
        self.logger.log_transfer_summary(summary)
        output = self.buffer.getvalue()
        self.assertIn("Dry run", output)
        self.assertIn("Processed 250 rows", output)
        self.assertIn("240 rows would be inserted", output)
        self.assertIn("10 rows failed", output)

    def test_final_stats_only_when_verbose(self):
        self._make_logger(LogLevel.NORMAL).log_final_stats()
        self.assertEqual(self.buffer.getvalue(), "")
        self.logger.log_final_stats()
        self.assertIn("Processing Statistics", self.buffer.getvalue())

    def test_reset_stats(self):
        self.logger.warning("careful")
        self.logger.reset_stats()
        self.assertEqual(self.logger.get_stats()["warnings"], 0)


class TestLogContext(unittest.TestCase):
    def test_elapsed_ms_non_negative(self):
        self.assertGreaterEqual(LogContext(file_name="a.csv").elapsed_ms(), 0)


class TestNullLogger(unittest.TestCase):
    def test_all_methods_silent(self):
        logger = NullLogger()
        self.assertIsNone(logger.info("x"))
        self.assertIsNone(logger.warning("x"))
        self.assertIsNone(logger.log_chunk_result(ChunkResult(batch_start=0, batch_size=1)))
        self.assertIsNone(logger.log_transfer_summary(TransferSummary()))
        self.assertIsNone(logger.log_final_stats())
