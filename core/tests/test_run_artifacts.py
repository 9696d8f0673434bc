"""Tests for run summary writer."""

import json
import tempfile
import unittest
from pathlib import Path

from core.run_artifacts import write_run_report


class TestRunArtifacts(unittest.TestCase):
    def test_write_success_report(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = write_run_report(
                run_id="run-123",
                status="success",
                report_file="target/shop-security.csv",
                stats={"rows_emitted": 4},
                output_dir=tmpdir,
            )
            self.assertTrue(Path(path).is_file())
            payload = json.loads(Path(path).read_text(encoding="utf-8"))
            self.assertEqual(payload["run_id"], "run-123")
            self.assertEqual(payload["status"], "success")
            self.assertEqual(payload["stats"], {"rows_emitted": 4})
            self.assertTrue(payload["report_file"].endswith("shop-security.csv"))
            self.assertIn("timestamp_utc", payload)
            self.assertNotIn("error", payload)

    def test_write_failure_report(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = write_run_report(
                run_id="run-456",
                status="failed",
                report_file="out.csv",
                error="Source path not found: src",
                output_dir=tmpdir,
            )
            payload = json.loads(Path(path).read_text(encoding="utf-8"))
            self.assertEqual(payload["error"], "Source path not found: src")
            self.assertEqual(payload["stats"], {})


if __name__ == "__main__":
    unittest.main()
