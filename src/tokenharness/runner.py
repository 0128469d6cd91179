"""Run html5lib tokenizer conformance files against a tokenizer.

The tokenizer is plugged in as ``module:callable``. The callable is invoked as
``tokenize(input, text_type, last_start_tag)`` and returns an iterable of
``tokenharness.tokens`` records; those are fed through a TokenList and compared
with the expected tokens of the test.
"""

import argparse
import importlib
import re
import signal
from contextlib import redirect_stdout
from dataclasses import dataclass
from io import StringIO
from pathlib import Path
from typing import List, Optional

from .accumulator import TokenList
from .suite import TokenizerTest, load_test_file
from .tokens import TextType

DEFAULT_TEST_DIR = "../html5lib-tests/tokenizer"


@dataclass
class TestResult:
    passed: bool
    description: str
    input_html: str
    initial_state: TextType
    expected_tokens: list
    actual_tokens: list
    debug_output: str = ""
    skipped: bool = False


def compare_tokens(expected: list, actual: list) -> bool:
    return expected == actual


def load_tokenizer(spec: str):
    """Resolve a ``package.module:callable`` string to the callable."""
    module_name, sep, attr = spec.partition(":")
    if not sep or not module_name or not attr:
        raise ValueError(f"tokenizer must be given as module:callable, got {spec!r}")
    module = importlib.import_module(module_name)
    tokenize = getattr(module, attr)
    if not callable(tokenize):
        raise TypeError(f"{spec} is not callable")
    return tokenize


def _natural_sort_key(text: str):
    """"z23a" -> ["z", 23, "a"]"""
    return [int(chunk) if chunk.isdigit() else chunk.lower() for chunk in re.split("([0-9]+)", text)]


def run_tokenizer(tokenize, test: TokenizerTest, state: TextType, debug=False) -> list:
    token_list = TokenList(debug=debug)
    token_list.extend(tokenize(test.input, state, test.last_start_tag))
    return token_list.finish()


class TestRunner:
    def __init__(self, test_dir: Path, config: dict, tokenize):
        self.test_dir = test_dir
        self.config = config
        self.tokenize = tokenize
        self.results = []
        self.file_results = {}

    def _collect_test_files(self) -> List[Path]:
        files = list(self.test_dir.rglob("*.test"))

        if self.config["exclude_files"]:
            files = [f for f in files if not any(exclude in f.name for exclude in self.config["exclude_files"])]

        if self.config["filter_files"]:
            files = [f for f in files if any(include in f.name for include in self.config["filter_files"])]

        return sorted(files, key=lambda path: _natural_sort_key(str(path)))

    def load_tests(self) -> List[tuple]:
        return [(path, load_test_file(path)) for path in self._collect_test_files()]

    def _should_run_test(self, filename: str, index: int, test: TokenizerTest) -> bool:
        if self.config["test_specs"]:
            selected = False
            for spec in self.config["test_specs"]:
                if ":" not in spec:
                    continue
                spec_file, indices = spec.split(":", 1)
                if filename == spec_file and str(index) in indices.split(","):
                    selected = True
                    break
            if not selected:
                return False

        if self.config["exclude_html"]:
            if any(exclude in test.input for exclude in self.config["exclude_html"]):
                return False

        if self.config["filter_html"]:
            if not any(include in test.input for include in self.config["filter_html"]):
                return False

        return True

    def run(self) -> tuple:
        """Run all tests and return (passed, failed, skipped) counts.

        A test passes only if every one of its initial states passes.
        """
        passed = failed = skipped = 0

        for file_path, tests in self.load_tests():
            file_passed = file_failed = file_skipped = 0
            test_indices = []

            for index, test in enumerate(tests):
                if not self._should_run_test(file_path.name, index, test):
                    continue

                try:
                    results = [self._run_single_test(test, state) for state in test.initial_states]
                except Exception:
                    print(f"\nError in test {file_path.name}:{index}")
                    print(f"Input HTML:\n{test.input!r}\n")
                    raise
                self.results.extend(results)
                failures = [result for result in results if not result.passed and not result.skipped]

                if failures:
                    failed += 1
                    file_failed += 1
                    test_indices.append(("fail", index))
                    for result in failures:
                        self._handle_failure(file_path, index, result)
                elif all(result.skipped for result in results):
                    skipped += 1
                    file_skipped += 1
                    test_indices.append(("skip", index))
                else:
                    passed += 1
                    file_passed += 1
                    test_indices.append(("pass", index))

                if failed and self.config["fail_fast"]:
                    return passed, failed, skipped

            if test_indices:
                relative_path = file_path.relative_to(self.test_dir)
                self.file_results[str(relative_path)] = {
                    "passed": file_passed,
                    "failed": file_failed,
                    "skipped": file_skipped,
                    "total": file_passed + file_failed + file_skipped,
                    "test_indices": test_indices,
                }

        return passed, failed, skipped

    def _run_single_test(self, test: TokenizerTest, state: TextType) -> TestResult:
        """Run one test in one initial state.

        Verbosity levels:
          0: summaries only
          1: print failing token lists
          2: also capture and print the accumulator trace for failing tests
        A tokenizer raising NotImplementedError marks the state as skipped.
        """
        capture_debug = self.config["verbosity"] >= 2
        debug_output = ""
        try:
            if capture_debug:
                buffer = StringIO()
                with redirect_stdout(buffer):
                    actual = run_tokenizer(self.tokenize, test, state, debug=True)
                debug_output = buffer.getvalue()
            else:
                actual = run_tokenizer(self.tokenize, test, state)
        except NotImplementedError:
            return TestResult(
                passed=False,
                description=test.description,
                input_html=test.input,
                initial_state=state,
                expected_tokens=test.expected,
                actual_tokens=[],
                skipped=True,
            )

        return TestResult(
            passed=compare_tokens(test.expected, actual),
            description=test.description,
            input_html=test.input,
            initial_state=state,
            expected_tokens=test.expected,
            actual_tokens=actual,
            debug_output=debug_output,
        )

    def _handle_failure(self, file_path: Path, test_index: int, result: TestResult):
        if self.config["verbosity"] >= 1 and not self.config["quiet"]:
            print(f"\nTest failed in {file_path.name}:{test_index}")
            TestReporter(self.config).print_test_result(result)


class TestReporter:
    def __init__(self, config: dict):
        self.config = config

    def _is_full_run(self) -> bool:
        # Only a run without narrowing flags may overwrite test-summary.txt
        return not (
            self.config.get("test_specs")
            or self.config.get("filter_files")
            or self.config.get("exclude_files")
            or self.config.get("exclude_html")
            or self.config.get("filter_html")
        )

    def print_test_result(self, result: TestResult):
        if result.passed or result.skipped:
            return
        lines = [
            "FAILED:",
            f"=== DESCRIPTION ===\n{result.description}\n",
            f"=== INPUT ({result.initial_state.value}) ===\n{result.input_html!r}\n",
            "=== EXPECTED TOKENS ===\n" + "\n".join(repr(token.to_list()) for token in result.expected_tokens) + "\n",
            "=== ACTUAL TOKENS ===\n" + "\n".join(repr(token.to_list()) for token in result.actual_tokens),
        ]
        if self.config["verbosity"] >= 2 and result.debug_output:
            lines.insert(3, f"=== ACCUMULATOR TRACE ===\n{result.debug_output.rstrip()}\n")
        print("\n".join(lines))

    def print_summary(self, passed: int, failed: int, skipped: int = 0, file_results: Optional[dict] = None):
        """Print the summary; a full run also writes it to test-summary.txt."""
        total = passed + failed
        percentage = round(passed * 100 / total) if total else 0
        header = f"Tests passed: {passed}/{total} ({percentage}%) ({skipped} skipped)"
        full_run = self._is_full_run()

        if not file_results:
            if full_run:
                Path("test-summary.txt").write_text(header)
            print(header)
            return

        detailed = self._generate_detailed_summary(header, file_results)
        if full_run:
            Path("test-summary.txt").write_text(detailed)
        print(header if self.config.get("quiet") else detailed)

    def _generate_detailed_summary(self, overall_summary: str, file_results: dict) -> str:
        lines = [overall_summary, ""]

        for filename in sorted(file_results, key=_natural_sort_key):
            result = file_results[filename]
            runnable = result["passed"] + result["failed"]

            # "filename: 15/16 (94%) [.....x] (2 skipped)"
            if runnable > 0:
                percentage = round(result["passed"] * 100 / runnable)
                status_line = f"{filename}: {result['passed']}/{runnable} ({percentage}%)"
            else:
                status_line = f"{filename}: 0/0 (N/A)"

            pattern = self._generate_test_pattern(result["test_indices"])
            if pattern:
                status_line += f" [{pattern}]"
            if result.get("skipped"):
                status_line += f" ({result['skipped']} skipped)"

            lines.append(status_line)

        return "\n".join(lines)

    def _generate_test_pattern(self, test_indices: list) -> str:
        symbols = {"pass": ".", "fail": "x", "skip": "s"}
        return "".join(symbols[status] for status, _ in sorted(test_indices, key=lambda item: item[1]))


def parse_args(argv=None) -> dict:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument(
        "--tokenizer",
        required=True,
        help="Tokenizer under test as module:callable, called as tokenize(input, text_type, last_start_tag)",
    )
    parser.add_argument(
        "--test-dir",
        type=Path,
        default=Path(DEFAULT_TEST_DIR),
        help=f"Directory searched recursively for *.test files (default: {DEFAULT_TEST_DIR})",
    )
    parser.add_argument("-x", "--fail-fast", action="store_true", help="Break on first test failure")
    parser.add_argument(
        "--test-specs",
        type=str,
        nargs="+",
        default=None,
        help="Space-separated list of test specs in format: file:indices (e.g., test1.test:0,1,2 test2.test:5,6)",
    )
    parser.add_argument(
        "--filter-files",
        type=str,
        nargs="+",
        help="Only run tests from files containing any of these strings (space-separated)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity: -v show failing token lists; -vv add the accumulator trace for failures",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Quiet mode: only print the header line. A full run still writes the detailed summary to test-summary.txt",
    )
    parser.add_argument(
        "--exclude-files",
        type=str,
        help="Skip files containing any of these strings in their names (comma-separated)",
    )
    parser.add_argument(
        "--exclude-html",
        type=str,
        help="Skip tests containing any of these strings in their input (comma-separated)",
    )
    parser.add_argument(
        "--filter-html",
        type=str,
        help="Only run tests containing any of these strings in their input (comma-separated)",
    )
    args = parser.parse_args(argv)

    return {
        "tokenizer": args.tokenizer,
        "test_dir": args.test_dir,
        "fail_fast": args.fail_fast,
        "test_specs": list(args.test_specs or []),
        "filter_files": args.filter_files,
        "quiet": args.quiet,
        "exclude_files": args.exclude_files.split(",") if args.exclude_files else None,
        "exclude_html": args.exclude_html.split(",") if args.exclude_html else None,
        "filter_html": args.filter_html.split(",") if args.filter_html else None,
        "verbosity": args.verbose,
    }


def _reset_sigpipe():
    # Piping into `head` should exit quietly. Not available on every platform.
    try:  # pragma: no cover - platform dependent
        signal.signal(signal.SIGPIPE, signal.SIG_DFL)
    except (AttributeError, OSError, ValueError):
        pass


def main(argv=None):
    _reset_sigpipe()
    config = parse_args(argv)
    tokenize = load_tokenizer(config["tokenizer"])

    runner = TestRunner(config["test_dir"], config, tokenize)
    reporter = TestReporter(config)

    passed, failed, skipped = runner.run()
    reporter.print_summary(passed, failed, skipped, runner.file_results)
    return 1 if failed else 0
