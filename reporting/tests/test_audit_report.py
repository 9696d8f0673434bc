"""End-to-end audit contract tests (source tree in, CSV report out)."""

import tempfile
import unittest
from pathlib import Path

from core.errors import SinkUnavailable, SyntaxFailure, TraversalIOFailure
from reporting.audit_report import generate_report
from reporting.csv_report import REPORT_HEADER


FOO_SERVICE = """
package com.example;

import javax.ejb.Stateless;
import javax.annotation.security.RolesAllowed;

@Stateless
public class FooService {
    @Description("does bar")
    @RolesAllowed("admin")
    public void bar() {}

    @Description("internal sync")
    @RolesAllowed({"system-web", "system"})
    public void sync() {}

    @PostConstruct
    @Description("init")
    public void init() {}

    public void undocumented() {}
}
"""

BAR_BEAN = """
package com.example;

@Description("audit me")
@PermitAll
@Stateful
public class BarBean {
    @Description("first")
    @RolesAllowed("admin")
    public void first() {}

    @Description("second")
    public void second() {}
}
"""


class TestGenerateReport(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        base = Path(self._tmp.name)
        self.source_root = base / "src" / "main" / "java"
        package_dir = self.source_root / "com" / "example"
        package_dir.mkdir(parents=True)
        (package_dir / "FooService.java").write_text(FOO_SERVICE, encoding="utf-8")
        (package_dir / "BarBean.java").write_text(BAR_BEAN, encoding="utf-8")
        self.report = base / "target" / "shop-security.csv"

    def _run(self, **kwargs):
        kwargs.setdefault("markers", ())
        return generate_report(str(self.report), [str(self.source_root)], **kwargs)

    def test_examples(self) -> None:
        stats = self._run()
        self.assertEqual(
            self.report.read_text(encoding="utf-8"),
            REPORT_HEADER
            + "BarBean,*,[audit me],[all],\n"
            + "FooService,bar,[does bar],[admin],\n",
        )
        self.assertEqual(stats.files_scanned, 2)
        self.assertEqual(stats.rows_emitted, 2)

    def test_default_markers_filter_files(self) -> None:
        generate_report(str(self.report), [str(self.source_root)])
        self.assertEqual(
            self.report.read_text(encoding="utf-8"),
            REPORT_HEADER + "BarBean,*,[audit me],[all],\n",
        )

    def test_idempotent(self) -> None:
        self._run()
        first = self.report.read_bytes()
        self._run()
        self.assertEqual(self.report.read_bytes(), first)

    def test_missing_source_root(self) -> None:
        with self.assertRaises(TraversalIOFailure):
            generate_report(str(self.report), [str(self.source_root / "nope")])
        self.assertEqual(self.report.read_text(encoding="utf-8"), REPORT_HEADER)

    def test_syntax_failure_closes_report(self) -> None:
        (self.source_root / "com" / "example" / "ZzzBean.java").write_text("public class ZzzBean { void x( }")
        with self.assertRaises(SyntaxFailure):
            self._run()
        # Rows written before the failure are flushed; the file is incomplete.
        content = self.report.read_text(encoding="utf-8")
        self.assertTrue(content.startswith(REPORT_HEADER))
        self.assertIn("FooService,bar,[does bar],[admin],\n", content)

    def test_sink_unavailable_before_traversal(self) -> None:
        blocker = Path(self._tmp.name) / "blocker"
        blocker.write_text("x")
        with self.assertRaises(SinkUnavailable):
            generate_report(str(blocker / "report.csv"), [str(self.source_root / "nope")])


if __name__ == "__main__":
    unittest.main()
