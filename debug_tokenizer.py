#!/usr/bin/env python3
"""Debug script to inspect a single tokenizer conformance test."""

import json
import sys
from pathlib import Path

from tokenharness.runner import DEFAULT_TEST_DIR, load_tokenizer, run_tokenizer
from tokenharness.suite import parse_test


def debug_test(tokenizer_spec, filename, test_index):
    path = Path(DEFAULT_TEST_DIR) / filename
    if not path.exists():
        print(f"File not found: {path}")
        return

    data = json.loads(path.read_text(encoding="utf-8"))
    key = "tests" if "tests" in data else "xmlViolationTests"
    tests = data.get(key, [])

    if test_index >= len(tests):
        print(f"Test index {test_index} out of range (max: {len(tests) - 1})")
        return

    test = parse_test(tests[test_index])
    print(f"=== Test {test_index} from {filename} ===")
    print(f"Input: {test.input!r}")
    print(f"Description: {test.description or 'N/A'}")
    print(f"Initial states: {[state.value for state in test.initial_states]}")
    print(f"Last start tag: {test.last_start_tag}")
    print("\nExpected tokens:")
    for token in test.expected:
        print(f"  {token.to_list()}")

    tokenize = load_tokenizer(tokenizer_spec)
    for state in test.initial_states:
        print(f"\nAccumulator trace (state: {state.value}):")
        actual = run_tokenizer(tokenize, test, state, debug=True)

        print(f"\nActual tokens (state: {state.value}):")
        for token in actual:
            print(f"  {token.to_list()}")

        if actual != test.expected:
            print("\n!!! MISMATCH !!!")
            print("\nDifferences:")
            for i, (exp, act) in enumerate(zip(test.expected, actual)):
                if exp != act:
                    print(f"  Token {i}: expected {exp.to_list()}, got {act.to_list()}")
            if len(test.expected) != len(actual):
                print(f"  Length: expected {len(test.expected)}, got {len(actual)}")
        else:
            print("\nPASSED")


if __name__ == "__main__":
    if len(sys.argv) < 4:
        print("Usage: python debug_tokenizer.py <module:callable> <filename> <test_index>")
        print("Example: python debug_tokenizer.py mytokenizer.adapter:tokenize contentModelFlags.test 4")
        sys.exit(1)

    debug_test(sys.argv[1], sys.argv[2], int(sys.argv[3]))
