"""Tests for the per-file analysis engine and report assembly."""

from datetime import datetime, timezone

from moduly.analysis import AnalysisEngine, assemble_report, utc_timestamp
from moduly.config import AnalysisConfig
from moduly.models import PerformanceMetrics
from moduly.packages.models import PackageManifest
from moduly.scanning.source import SourceFile
from moduly.security.models import FindingSource, SecurityFinding, Severity


def _engine(**kwargs):
    return AnalysisEngine(AnalysisConfig(enable_audit=False, enable_git=False, **kwargs))


class TestAnalyzeFile:
    def test_splits_local_and_external_imports(self):
        source = SourceFile(
            "src/a.ts", 10, 'import x from "./b";\nimport y from "lodash/fp";\nimport z from "./gone";\n'
        )
        result = _engine().analyze_file(source, frozenset({"src/a.ts", "src/b.ts"}))
        assert result.local_imports == ["src/b.ts"]
        assert result.external_imports == ["lodash/fp"]

    def test_unreadable_file(self):
        result = _engine().analyze_file(SourceFile("src/a.ts"), frozenset({"src/a.ts"}))
        assert result.loc is None
        assert result.findings == []

    def test_non_script_file_gets_loc_and_secret_scan(self):
        source = SourceFile("config.yml", 10, 'password: "hunter2hunter2"\n')
        result = _engine().analyze_file(source, frozenset({"config.yml"}))
        assert result.loc.code_lines == 1
        assert [f.name for f in result.findings] == ["Hardcoded Secret/Password"]
        assert result.local_imports == []

    def test_css_imports_are_not_extracted(self):
        source = SourceFile("styles/main.css", 10, '@import "./base.css";\n')
        result = _engine().analyze_file(source, frozenset({"styles/main.css", "styles/base.css"}))
        assert result.local_imports == []
        assert result.external_imports == []

    def test_structural_findings_before_secrets(self):
        source = SourceFile("src/app.js", 10, 'const password = "hunter2hunter2";\neval(password);\n')
        result = _engine().analyze_file(source, frozenset({"src/app.js"}))
        assert [f.name for f in result.findings] == [
            "eval() Usage",
            "Hardcoded Secret/Password",
        ]

    def test_malformed_file_keeps_well_formed_imports(self):
        """A syntax error elsewhere doesn't hide the imports that did parse."""
        source = SourceFile("src/broken.js", 10, 'import a from "./a";\nconst = ;\n')
        result = _engine().analyze_file(source, frozenset({"src/broken.js", "src/a.js"}))
        assert result.local_imports == ["src/a.js"]


class TestAnalyzeSources:
    def test_unreadable_files_still_counted(self):
        sources = [
            SourceFile("src/a.ts", 20, 'import "./b";\nexport {};\n'),
            SourceFile("src/b.ts"),
        ]
        analysis = _engine().analyze_sources(sources, None)
        assert analysis.stats.total_files == 2
        assert analysis.stats.languages == {".ts": 2}
        assert [f.path for f in analysis.stats.file_list] == ["src/a.ts"]
        assert analysis.graph.nodes == ["src/a.ts", "src/b.ts"]
        assert len(analysis.graph.edges) == 1

    def test_file_list_largest_first(self):
        sources = [
            SourceFile("small.js", 5, "a();\n"),
            SourceFile("big.js", 50, "a();\nb();\nc();\n"),
        ]
        analysis = _engine().analyze_sources(sources, None)
        assert [f.path for f in analysis.stats.file_list] == ["big.js", "small.js"]

    def test_packages_classified(self):
        sources = [SourceFile("index.js", 10, 'const r = require("react");\n')]
        manifest = PackageManifest(dependencies={"react": "^18", "vue": "^3"})
        analysis = _engine().analyze_sources(sources, manifest)
        assert analysis.packages.used == ["react"]
        assert analysis.packages.unused == ["vue"]

    def test_order_independent_of_worker_count(self):
        sources = [
            SourceFile(f"m{i}.js", 10, f'import "./m{i + 1}.js";\neval(x{i});\n') for i in range(40)
        ]
        one = _engine(workers=1).analyze_sources(sources, None)
        many = _engine(workers=8).analyze_sources(sources, None)
        assert one.graph == many.graph
        assert one.findings == many.findings
        assert [f.line for f in one.findings[:2]] == [2, 2]
        assert [f.file for f in one.findings[:2]] == ["m0.js", "m1.js"]


class TestAssembleReport:
    def test_audit_findings_lead_within_severity(self):
        analysis = _engine().analyze_sources(
            [SourceFile("a.js", 10, "// legacy\neval(x);\ndocument.write(y);\n")], None
        )
        audit = SecurityFinding(
            name="pkg (<1.0.0)",
            severity=Severity.CRITICAL,
            description="",
            source=FindingSource.DEPENDENCY_AUDIT,
            category="Dependency Vulnerability",
        )
        report = assemble_report(
            "demo", "2024-01-01T00:00:00.000Z", analysis, [], [audit], PerformanceMetrics()
        )
        assert [f.name for f in report.security] == ["pkg (<1.0.0)", "eval() Usage", "document.write()"]
        assert report.score == 100 - 10 - 10 - 2


class TestUtcTimestamp:
    def test_format(self):
        moment = datetime(2024, 5, 1, 12, 30, 45, 123456, tzinfo=timezone.utc)
        assert utc_timestamp(moment) == "2024-05-01T12:30:45.123Z"
