#!/usr/bin/env python3
'''
log2dashboard.py
----------------
Convert a keyword execution log into a single, self-contained HTML dashboard.

Every keyword (business component) invoked by the run becomes one section of
the log. A section fails when one of its lines carries an error signal; the
dashboard shows pass/fail totals and the log of every failed keyword.

Requires:
    pip install junitparser pydantic pyyaml

Usage:
    python log2dashboard.py -o dashboard.html log.txt
    python log2dashboard.py --dialect asterisk --junit keywords.xml run.log
'''
import argparse
import datetime as dt
import html
import logging
import math
import re
import sys
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Callable, Dict, Iterable, Iterator, List, Literal, Optional, Tuple

try:
    import yaml
    from junitparser import JUnitXml, TestSuite, TestCase, Failure  # type: ignore
    from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
except Exception as e:
    MSG = ("This script requires 'junitparser', 'pydantic' and 'PyYAML'. "
           "Install them with: pip install junitparser pydantic pyyaml")
    raise SystemExit(MSG) from e

logger = logging.getLogger(__name__)


# ------------------------------- Configuration -------------------------------

class BoundaryStyle(Enum):
    MARKER_PREFIXED = "marker"
    ASTERISK_FRAMED = "asterisk"


@dataclass(frozen=True)
class ErrorRule:
    """A substring that marks a line as an error signal."""
    substring: str
    strip_marker: bool = False

    def matches(self, line: str) -> bool:
        return self.substring in line

    def message(self, line: str) -> str:
        if self.strip_marker:
            line = line.replace(self.substring, "")
        return line.strip()


DEFAULT_ERROR_RULES: Tuple[ErrorRule, ...] = (
    ErrorRule("verification failed"),
    ErrorRule("Error Type:", strip_marker=True),
    ErrorRule("Exception"),
    ErrorRule("Error:"),
    ErrorRule("AssertionError:"),
)


@dataclass(frozen=True)
class ScanConfig:
    boundary_style: BoundaryStyle = BoundaryStyle.MARKER_PREFIXED
    keyword_marker: str = "Invoking Business Component : "
    # None turns test case tracking off
    testcase_marker: Optional[str] = "Current Test Case : "
    error_rules: Tuple[ErrorRule, ...] = DEFAULT_ERROR_RULES
    unknown_test_case: str = "Unknown Test Case"
    unknown_error: str = "Unknown Error"


DIALECTS: Dict[str, ScanConfig] = {
    "marker": ScanConfig(),
    "asterisk": ScanConfig(
        boundary_style=BoundaryStyle.ASTERISK_FRAMED,
        testcase_marker=None,
        error_rules=DEFAULT_ERROR_RULES[:3],
    ),
}


class ConfigError(ValueError):
    """Raised when a scan configuration file or value is invalid."""


class _StrictModel(BaseModel):
    """Base model rejecting unknown keys, so typos fail fast."""
    model_config = ConfigDict(extra="forbid")


class ErrorRuleSchema(_StrictModel):
    substring: str = Field(min_length=1, description="Text whose presence marks an error line")
    strip_marker: bool = Field(default=False, description="Drop the substring from the message")


class ScanConfigFile(_StrictModel):
    """
    Schema of a scan configuration file.

    Only keys present in the file override the chosen dialect; a null
    testcase_marker turns test case tracking off.
    """
    dialect: Optional[Literal["marker", "asterisk"]] = None
    boundary_style: BoundaryStyle = ScanConfig.boundary_style
    keyword_marker: str = Field(default=ScanConfig.keyword_marker, min_length=1)
    testcase_marker: Optional[str] = Field(default=ScanConfig.testcase_marker, min_length=1)
    error_rules: List[ErrorRuleSchema] = Field(default_factory=list)
    unknown_test_case: str = Field(default=ScanConfig.unknown_test_case, min_length=1)
    unknown_error: str = Field(default=ScanConfig.unknown_error, min_length=1)

    @field_validator("error_rules", mode="before")
    @classmethod
    def _bare_substrings(cls, v: Any) -> Any:
        if isinstance(v, list):
            return [{"substring": item} if isinstance(item, str) else item for item in v]
        return v

    def to_scan_config(self, default_dialect: str = "marker") -> ScanConfig:
        changes: Dict[str, Any] = {
            name: getattr(self, name)
            for name in self.model_fields_set - {"dialect", "error_rules"}
        }
        if "error_rules" in self.model_fields_set:
            changes["error_rules"] = tuple(ErrorRule(r.substring, r.strip_marker) for r in self.error_rules)
        return replace(DIALECTS[self.dialect or default_dialect], **changes)


def config_from_dict(data: Any, default_dialect: str = "marker") -> ScanConfig:
    """Validate a config mapping and build the ScanConfig it describes."""
    try:
        return ScanConfigFile.model_validate(data).to_scan_config(default_dialect)
    except ValidationError as e:
        raise ConfigError(str(e)) from e


def load_config(path: str, default_dialect: str = "marker") -> ScanConfig:
    """Load a ScanConfig from a YAML (or JSON) file."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"cannot read config {path}: {e.strerror or e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid config {path}: {e}") from e
    return config_from_dict(data if data is not None else {}, default_dialect)


# ------------------------------- Data Structures -------------------------------

@dataclass(frozen=True)
class Section:
    keyword_name: str
    test_case_name: str
    lines: Tuple[str, ...]
    has_error: bool = False
    error_message: Optional[str] = None

    @property
    def log_text(self) -> str:
        return "\n".join(self.lines)


@dataclass(frozen=True)
class DashboardStats:
    total_sections: int = 0
    passed_sections: int = 0
    failed_sections: int = 0
    failures: Tuple[Section, ...] = ()
    primary_test_case_name: str = "Unknown Test Case"
    diagnostics: Tuple[str, ...] = ()


class InputUnavailable(OSError):
    """The log cannot be opened or failed while being read."""


# ---------------------------------- Classifying ----------------------------------

def classify_line(line: str, rules: Iterable[ErrorRule]) -> Optional[str]:
    """Return the error message of the first rule matching the line, if any."""
    for rule in rules:
        if rule.matches(line):
            return rule.message(line)
    return None


def classify_section(lines: Iterable[str], rules: Iterable[ErrorRule]) -> Tuple[bool, Optional[str]]:
    """
    Decide pass/fail for an already accumulated section.

    The first line carrying any error signal decides; on that line the rules
    are tried in order. A section with no such line passed.
    """
    rules = tuple(rules)
    for line in lines:
        msg = classify_line(line, rules)
        if msg is not None:
            return True, msg
    return False, None


# ---------------------------------- Scanning ------------------------------------

def _strip_name(text: str) -> str:
    return text.strip().rstrip("*").strip()


def _text_after(line: str, marker: str) -> str:
    return line[line.index(marker) + len(marker):]


_ASTERISK_FRAME_RE = re.compile(r"^\*+.*\*+$")


@dataclass
class ScanState:
    """Mutable state of one scan; Idle until the first boundary line."""
    test_case_name: str
    keyword_name: Optional[str] = None
    # test case name current when the open section started
    section_test_case: str = ""
    lines: List[str] = field(default_factory=list)
    in_section: bool = False
    has_error: bool = False
    error_message: Optional[str] = None


class LogScanner:
    """Single-pass scanner splitting log lines into keyword sections."""

    def __init__(self, config: Optional[ScanConfig] = None):
        self.config = config or ScanConfig()
        self.state = ScanState(test_case_name=self.config.unknown_test_case)

    @property
    def test_case_name(self) -> str:
        return self.state.test_case_name

    def reset(self) -> None:
        self.state = ScanState(test_case_name=self.config.unknown_test_case)

    def boundary_name(self, line: str) -> Optional[str]:
        """Return the keyword name if the line opens a section, else None."""
        cfg = self.config
        if cfg.boundary_style is BoundaryStyle.MARKER_PREFIXED:
            if cfg.keyword_marker in line:
                return _strip_name(_text_after(line, cfg.keyword_marker))
            return None
        stripped = line.strip()
        if not _ASTERISK_FRAME_RE.match(stripped):
            return None
        name = stripped.replace("*", "").strip()
        # a bare row of asterisks frames nothing
        return name or None

    def feed(self, line: str) -> Optional[Section]:
        """Consume one line; return the section it closed, if any."""
        st = self.state
        cfg = self.config
        closed = None

        if cfg.testcase_marker and cfg.testcase_marker in line:
            st.test_case_name = _strip_name(_text_after(line, cfg.testcase_marker))

        name = self.boundary_name(line)
        if name is not None:
            closed = self._close()
            st.keyword_name = name
            st.section_test_case = st.test_case_name
            st.lines = []
            st.in_section = True
            st.has_error = False
            st.error_message = None

        if st.in_section:
            st.lines.append(line)
            if not st.has_error:
                msg = classify_line(line, cfg.error_rules)
                if msg is not None:
                    st.has_error = True
                    st.error_message = msg
        return closed

    def finish(self) -> Optional[Section]:
        """Flush the section still open at end of input."""
        closed = self._close()
        self.state.in_section = False
        return closed

    def _close(self) -> Optional[Section]:
        st = self.state
        if not st.in_section or st.keyword_name is None:
            return None
        error_message = None
        if st.has_error:
            error_message = st.error_message if st.error_message is not None else self.config.unknown_error
        section = Section(
            keyword_name=st.keyword_name,
            test_case_name=st.section_test_case,
            lines=tuple(st.lines),
            has_error=st.has_error,
            error_message=error_message,
        )
        logger.debug("Closed keyword %r: %s", section.keyword_name,
                     "FAIL" if section.has_error else "PASS")
        return section

    def scan(self, lines: Iterable[str]) -> Iterator[Section]:
        """Yield closed sections lazily; each call starts a fresh scan."""
        self.reset()
        for line in lines:
            section = self.feed(line)
            if section is not None:
                yield section
        section = self.finish()
        if section is not None:
            yield section


# --------------------------------- Aggregating ----------------------------------

class StatsAggregator:
    """Fold closed sections into DashboardStats."""

    def __init__(self):
        self.total = 0
        self.passed = 0
        self.failures: List[Section] = []

    def add(self, section: Section) -> None:
        self.total += 1
        if section.has_error:
            self.failures.append(section)
        else:
            self.passed += 1

    def build(self, primary_test_case_name: str, diagnostics: Iterable[str] = ()) -> DashboardStats:
        return DashboardStats(
            total_sections=self.total,
            passed_sections=self.passed,
            failed_sections=len(self.failures),
            failures=tuple(self.failures),
            primary_test_case_name=primary_test_case_name,
            diagnostics=tuple(diagnostics),
        )


def aggregate(sections: Iterable[Section], primary_test_case_name: str) -> DashboardStats:
    agg = StatsAggregator()
    for s in sections:
        agg.add(s)
    return agg.build(primary_test_case_name)


# ---------------------------------- Parsing ------------------------------------

def read_log_lines(path: str) -> Iterator[str]:
    """Yield the lines of a UTF-8 log file without their line endings."""
    try:
        with open(path, "r", encoding="utf-8", errors="replace", newline=None) as f:
            for line in f:
                yield line.rstrip("\n")
    except OSError as e:
        raise InputUnavailable(f"Error reading log file {path}: {e.strerror or e}") from e


def parse_lines(lines: Iterable[str], config: Optional[ScanConfig] = None,
                on_section: Optional[Callable[[Section], None]] = None) -> DashboardStats:
    """
    Scan log lines and fold the resulting sections into DashboardStats.

    If reading the lines fails (an OSError, InputUnavailable included, or a
    UnicodeDecodeError from a strictly decoding stream), the sections closed
    so far are kept, the open one is dropped and the failure becomes a
    diagnostic.
    """
    scanner = LogScanner(config)
    agg = StatsAggregator()
    diagnostics = []
    try:
        for section in scanner.scan(lines):
            agg.add(section)
            if on_section is not None:
                on_section(section)
    except (OSError, UnicodeDecodeError) as e:
        logger.error("%s", e)
        diagnostics.append(str(e))
    return agg.build(scanner.test_case_name, diagnostics)


def parse_log(path: str, config: Optional[ScanConfig] = None,
              on_section: Optional[Callable[[Section], None]] = None) -> DashboardStats:
    """Parse a log file into DashboardStats."""
    return parse_lines(read_log_lines(path), config, on_section)


# --------------------------------- Rendering -----------------------------------

def _escape_html(x: Optional[str]) -> str:
    """Escape HTML characters."""
    return html.escape(x or "", quote=True)


def _escape_js(x: Optional[str]) -> str:
    """Escape text for a single-quoted JavaScript string literal."""
    if not x:
        return ""
    return (x.replace("\\", "\\\\")
             .replace("'", "\\'")
             .replace("`", "\\`")
             .replace("\r", "\\r")
             .replace("\n", "\\n"))


def _js_call(func: str, *args: str) -> str:
    """Build an inline event handler, escaped for a double-quoted attribute."""
    joined = ", ".join(f"'{_escape_js(a)}'" for a in args)
    return _escape_html(f"{func}({joined})")


def _build_failure_row(sn: int, s: Section) -> str:
    """Build HTML for a single failed keyword row."""
    return f'''
        <tr class="failure-row" data-keyword="{_escape_html(s.keyword_name)}">
          <td>{sn}</td>
          <td class="kw">{_escape_html(s.keyword_name)}</td>
          <td class="err">{_escape_html(s.error_message)}</td>
          <td><button class="view pop" onclick="{_js_call('showModal', s.keyword_name, s.log_text)}">View</button></td>
        </tr>'''


def _build_chart(passed: int, failed: int) -> str:
    """Build an inline SVG doughnut of passed vs failed keywords."""
    r = 60
    circ = 2 * math.pi * r
    total = passed + failed
    pass_len = circ * passed / total if total else 0.0
    fail_len = circ - pass_len if total else 0.0
    return f'''
      <svg id="failureChart" width="150" height="150" viewBox="0 0 150 150" role="img"
           aria-label="Passed {passed}, Failed {failed}">
        <circle cx="75" cy="75" r="{r}" fill="none" stroke="var(--ring)" stroke-width="18" />
        <circle cx="75" cy="75" r="{r}" fill="none" stroke="var(--ok)" stroke-width="18"
                stroke-dasharray="{pass_len:.2f} {circ:.2f}" transform="rotate(-90 75 75)" />
        <circle cx="75" cy="75" r="{r}" fill="none" stroke="var(--fail)" stroke-width="18"
                stroke-dasharray="{fail_len:.2f} {circ:.2f}" stroke-dashoffset="{-pass_len:.2f}"
                transform="rotate(-90 75 75)" />
      </svg>
      <div class="legend">
        <span class="pill ok">Passed : {passed}</span>
        <span class="pill fail">Failed : {failed}</span>
      </div>'''


def render_html(stats: DashboardStats, title: str = "Test Automation Report") -> str:
    """Render DashboardStats as a self-contained HTML dashboard."""
    now = dt.datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    rows_html = "".join(_build_failure_row(i, s) for i, s in enumerate(stats.failures, 1))
    if not rows_html:
        rows_html = '''
        <tr><td colspan="4" class="muted">No failed keywords.</td></tr>'''
    diag_html = "".join(f'\n    <div class="diag">{_escape_html(d)}</div>' for d in stats.diagnostics)

    html_out = f'''<!doctype html>
<html lang="en">
<head>
<meta charset="utf-8" />
<meta name="viewport" content="width=device-width,initial-scale=1" />
<title>{_escape_html(title)}</title>
<style>
  :root {{ --ok:#22c55e; --fail:#ef4444; --fg:#1f2937; --muted:#6b7280; --bg:#f3f4f6; --card:#ffffff; --ring:#e5e7eb; --accent:#7e22ce; }}
  html.dark {{ --fg:#e5e7eb; --muted:#9ca3af; --bg:#111827; --card:#1f2937; --ring:#374151; --accent:#c084fc; }}
  body {{ font-family: ui-sans-serif, system-ui, -apple-system, Arial, "Segoe UI"; color: var(--fg); background: var(--bg); margin: 0; }}
  .wrap {{ max-width: 1100px; margin: 0 auto; padding: 24px 16px; }}
  .topbar {{ display:flex; justify-content:flex-end; }}
  h1 {{ text-align:center; color: var(--accent); margin: 8px 0 4px; font-size: 34px; }}
  h2.tc {{ text-align:center; color: var(--muted); margin: 0 0 6px; font-size: 18px; }}
  .muted {{ color: var(--muted); }}
  .small {{ font-size: 12px; text-align:center; }}
  .cards {{ display:grid; grid-template-columns: repeat(3, 1fr); gap: 20px; margin: 24px 0; }}
  .card {{ border-radius: 10px; padding: 18px; color:#fff; text-align:center; box-shadow: 0 8px 20px rgba(0,0,0,.12); transition: transform .2s; }}
  .card:hover {{ transform: scale(1.04); }}
  .card .num {{ font-size: 28px; font-weight: 700; }}
  .card.total {{ background: linear-gradient(45deg, #a5f3fc, #3b82f6); }}
  .card.passed {{ background: linear-gradient(45deg, #bbf7d0, #10b981); }}
  .card.failed {{ background: linear-gradient(45deg, #fbcfe8, #ef4444); }}
  .panel {{ background: var(--card); border-radius: 10px; box-shadow: 0 2px 8px rgba(0,0,0,.08); padding: 20px; margin-bottom: 24px; }}
  .chart {{ display:flex; flex-direction:column; align-items:center; gap: 10px; }}
  .legend {{ display:flex; gap: 8px; }}
  .pill {{ display:inline-block; padding: 2px 10px; border-radius: 999px; font-size: 12px; font-weight: 600; background: var(--ring); }}
  .pill.ok {{ background: var(--ok); color:#fff; }}
  .pill.fail {{ background: var(--fail); color:#fff; }}
  .panel-head {{ display:flex; justify-content:space-between; align-items:center; gap: 12px; background: var(--accent); color:#fff; margin: -20px -20px 12px; padding: 12px 20px; border-radius: 10px 10px 0 0; }}
  .panel-head h2 {{ margin: 0; font-size: 18px; }}
  table {{ width: 100%; border-collapse: collapse; }}
  th {{ text-align:left; font-size: 12px; padding: 8px; color: var(--accent); border-bottom: 2px solid var(--ring); }}
  td {{ padding: 8px; border-bottom: 1px solid var(--ring); vertical-align: top; word-break: break-word; }}
  td.kw {{ font-weight: 600; color: #1d4ed8; }}
  td.err {{ color: var(--fail); }}
  button {{ font-family: inherit; cursor: pointer; border: 0; border-radius: 6px; padding: 4px 12px; }}
  button.view {{ background: #2563eb; color:#fff; }}
  button.view:hover {{ background: #1d4ed8; }}
  #themeToggleBtn {{ background: var(--ring); color: var(--fg); }}
  input[type="search"] {{ padding: 6px 10px; border: 1px solid #d1d5db; border-radius: 6px; font-family: inherit; font-size: 14px; }}
  .diag {{ background:#fef3c7; color:#92400e; border-left: 3px solid #f59e0b; padding: 8px 12px; margin: 12px 0; border-radius: 4px; }}
  .modal {{ position: fixed; inset: 0; background: rgba(0,0,0,.4); display:flex; align-items:center; justify-content:center; padding: 16px; z-index: 50; }}
  .modal.hidden {{ display:none; }}
  .modal-box {{ background: var(--card); border-radius: 10px; width: 100%; max-width: 760px; max-height: 100vh; display:flex; flex-direction:column; }}
  .modal-box .panel-head {{ margin: 0; }}
  .modal-box pre {{ background: var(--bg); margin: 16px; padding: 12px; border-radius: 6px; white-space: pre-wrap; word-break: break-word; max-height: 60vh; overflow-y: auto; font-size: 13px; }}
  .close {{ background: transparent; color:#fff; font-size: 22px; font-weight: 700; }}
  .fade-in {{ animation: fadeIn 1s; }}
  @keyframes fadeIn {{ from {{ opacity: 0; }} to {{ opacity: 1; }} }}
  .pop {{ animation: popAnim .4s; }}
  @keyframes popAnim {{ 0% {{ transform: scale(.8); opacity: 0; }} 100% {{ transform: scale(1); opacity: 1; }} }}

  /* Responsive */
  @media (max-width: 768px) {{
    .cards {{ grid-template-columns: 1fr; }}
  }}
</style>
</head>
<body>
  <div class="wrap">
    <div class="topbar">
      <button id="themeToggleBtn" aria-label="Toggle dark mode">Dark Mode</button>
    </div>
    <h1>{_escape_html(title)}</h1>
    <h2 class="tc">Test Case: {_escape_html(stats.primary_test_case_name)}</h2>
    <div class="muted small">Generate Time : {_escape_html(now)}</div>{diag_html}

    <div class="cards">
      <div class="card total fade-in"><div class="num" id="totalTests">{stats.total_sections}</div><div>Total Keywords</div></div>
      <div class="card passed fade-in"><div class="num" id="passedTests">{stats.passed_sections}</div><div>Passed</div></div>
      <div class="card failed fade-in"><div class="num" id="failedTests">{stats.failed_sections}</div><div>Failed</div></div>
    </div>

    <div class="panel chart">{_build_chart(stats.passed_sections, stats.failed_sections)}
    </div>

    <div class="panel fade-in">
      <div class="panel-head">
        <h2>Failure Analysis</h2>
        <input id="search" type="search" placeholder="Search : Keyword/Error..." />
      </div>
      <table>
        <thead>
          <tr><th>Sn</th><th>Keyword Name</th><th>Error Summary</th><th>Details</th></tr>
        </thead>
        <tbody id="failures">{rows_html}
        </tbody>
      </table>
    </div>
  </div>

  <div id="logModal" class="modal hidden fade-in">
    <div class="modal-box pop">
      <div class="panel-head">
        <h2 id="modalKeywordName">Keyword Name</h2>
        <button class="close" onclick="closeModal()" aria-label="Close modal">&times;</button>
      </div>
      <pre id="modalLogContent"></pre>
    </div>
  </div>

<script>
  function showModal(keyword, log) {{
    document.getElementById('modalKeywordName').innerText = keyword;
    document.getElementById('modalLogContent').innerText = log;
    document.getElementById('logModal').classList.remove('hidden');
  }}
  function closeModal() {{
    document.getElementById('logModal').classList.add('hidden');
  }}
(function(){{
  const modal = document.getElementById('logModal');
  modal.addEventListener('click', e => {{ if (e.target === modal) closeModal(); }});
  document.addEventListener('keydown', e => {{ if (e.key === 'Escape') closeModal(); }});

  const searchEl = document.getElementById('search');
  const rows = [...document.querySelectorAll('.failure-row')];
  searchEl.addEventListener('input', () => {{
    const q = (searchEl.value || '').trim().toLowerCase();
    rows.forEach(r => {{
      r.style.display = (!q || (r.textContent || '').toLowerCase().includes(q)) ? '' : 'none';
    }});
  }});

  const themeToggleBtn = document.getElementById('themeToggleBtn');
  const root = document.documentElement;
  function setTheme(dark) {{
    root.classList.toggle('dark', dark);
    themeToggleBtn.textContent = dark ? 'Light Mode' : 'Dark Mode';
  }}
  setTheme(localStorage.getItem('theme') === 'dark');
  themeToggleBtn.addEventListener('click', () => {{
    const dark = !root.classList.contains('dark');
    localStorage.setItem('theme', dark ? 'dark' : 'light');
    setTheme(dark);
  }});
}})();
</script>
</body>
</html>
'''
    return html_out


# --------------------------------- JUnit XML -----------------------------------

_XML_INVALID_RE = re.compile(r"[^\x09\x0A\x0D\x20-\uD7FF\uE000-\uFFFD\U00010000-\U0010FFFF]")


def _xml_safe(x: Optional[str]) -> str:
    """Drop characters XML 1.0 cannot carry, such as ANSI escapes."""
    return _XML_INVALID_RE.sub("", x or "")


def build_junit_xml(sections: Iterable[Section], stats: DashboardStats) -> JUnitXml:
    """Build a JUnit document with one test case per keyword section."""
    suite = TestSuite(_xml_safe(stats.primary_test_case_name))
    for s in sections:
        log_text = _xml_safe(s.log_text)
        case = TestCase(_xml_safe(s.keyword_name), classname=_xml_safe(s.test_case_name))
        if s.has_error:
            failure = Failure(_xml_safe(s.error_message))
            failure.text = log_text
            case.result = [failure]
        case.system_out = log_text
        suite.add_testcase(case)
    suite.update_statistics()
    xml = JUnitXml()
    xml.add_testsuite(suite)
    return xml


def write_junit_xml(sections: Iterable[Section], stats: DashboardStats, path: str) -> None:
    build_junit_xml(sections, stats).write(path, pretty=True)


# ------------------------------------ CLI --------------------------------------

def _build_config(args: argparse.Namespace) -> ScanConfig:
    """Dialect, then config file, then individual flags."""
    config = load_config(args.config, args.dialect) if args.config else DIALECTS[args.dialect]
    changes: Dict[str, Any] = {}
    if args.keyword_marker:
        changes["keyword_marker"] = args.keyword_marker
    if args.testcase_marker is not None:
        changes["testcase_marker"] = args.testcase_marker or None
    return replace(config, **changes)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the script."""
    ap = argparse.ArgumentParser(description="Convert a keyword execution log to a single HTML dashboard")
    ap.add_argument("log", nargs="?", default="log.txt", help="Execution log (default: log.txt)")
    ap.add_argument("-o", "--output", default="dashboard.html", help="Output HTML path")
    ap.add_argument("--title", default="Test Automation Report", help="Report title")
    ap.add_argument("--dialect", choices=sorted(DIALECTS), default="marker",
                    help="Section boundary convention of the log")
    ap.add_argument("--config", default=None, help="YAML or JSON file with markers and error rules")
    ap.add_argument("--keyword-marker", default=None, help="Text preceding each keyword name")
    ap.add_argument("--testcase-marker", default=None,
                    help="Text preceding the test case name ('' disables test case tracking)")
    ap.add_argument("--junit", default=None, help="Optional JUnit XML output path")
    ap.add_argument("-v", "--verbose", action="store_true", help="Log every closed keyword")
    args = ap.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="[%(levelname)s] %(message)s")
    try:
        config = _build_config(args)
    except ConfigError as e:
        ap.error(str(e))

    sections: List[Section] = []
    stats = parse_log(args.log, config, on_section=sections.append if args.junit else None)

    html_str = render_html(stats, title=args.title)
    with open(args.output, "w", encoding="utf-8") as f:
        f.write(html_str)
    print(f"[V] Wrote {args.output}")
    if args.junit:
        write_junit_xml(sections, stats, args.junit)
        print(f"[V] Wrote {args.junit}")
    print(f"Test Case: {stats.primary_test_case_name}, Keywords: {stats.total_sections}, "
          f"Passed: {stats.passed_sections}, Failed: {stats.failed_sections}")
    return 1 if stats.diagnostics else 0


if __name__ == "__main__":
    sys.exit(main())
