"""
Build script for tokenharness with optional mypyc compilation.

Usage:
    # Pure Python build (default)
    python -m build

    # Compiled with mypyc
    TOKENHARNESS_USE_MYPYC=1 pip install .
"""

import os
import sys
from pathlib import Path

from setuptools import setup

USE_MYPYC = os.environ.get("TOKENHARNESS_USE_MYPYC", "0") == "1"

# Modules on the per-token path. runner.py and suite.py only do I/O and are left interpreted.
MYPYC_MODULES = [
    "src/tokenharness/accumulator.py",
    "src/tokenharness/decoder.py",
    "src/tokenharness/entities.py",
    "src/tokenharness/fixture.py",
]


def build_with_mypyc() -> list:
    """Build extension modules using mypyc."""
    try:
        from mypyc.build import mypycify
    except ImportError:
        print("ERROR: mypyc is not installed. Install with: pip install mypy", file=sys.stderr)
        print("Or install with mypyc support: pip install tokenharness[mypyc]", file=sys.stderr)
        sys.exit(1)

    for module_path in MYPYC_MODULES:
        if not Path(module_path).exists():
            print(f"ERROR: Module not found: {module_path}", file=sys.stderr)
            sys.exit(1)

    print("=" * 70)
    print("Building tokenharness with mypyc compilation")
    print("=" * 70)
    print(f"Compiling {len(MYPYC_MODULES)} modules:")
    for module in MYPYC_MODULES:
        print(f"  - {module}")
    print("=" * 70)

    opt_level = os.environ.get("MYPYC_OPT_LEVEL", "3")
    debug_level = os.environ.get("MYPYC_DEBUG_LEVEL", "0")

    return mypycify(
        MYPYC_MODULES,
        opt_level=opt_level,
        debug_level=debug_level,
        verbose=True,
        separate=False,
        multi_file=False,
    )


if __name__ == "__main__":
    ext_modules = []

    if USE_MYPYC:
        ext_modules = build_with_mypyc()
    else:
        print("Building tokenharness in pure Python mode (no mypyc compilation)")
        print("To enable mypyc: TOKENHARNESS_USE_MYPYC=1 pip install .")

    setup(
        ext_modules=ext_modules,
    )
