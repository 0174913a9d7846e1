#!/usr/bin/env python3
"""
Setup script for the Radix palette generator.
Installs the project and the Chromium browser Playwright drives.
"""

import subprocess
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent


def run_command(cmd, description):
    """Run a command and report status."""
    print(f"\n📦 {description}...")
    try:
        result = subprocess.run(cmd, check=True, capture_output=True, text=True, cwd=ROOT)
        print(f"✅ {description} completed")
        if result.stdout:
            print(result.stdout)
        return True
    except subprocess.CalledProcessError as e:
        print(f"❌ {description} failed")
        if e.stderr:
            print(e.stderr)
        return False


def main():
    print("🚀 Setting up Radix palette generator...")

    if sys.version_info < (3, 10):
        print("❌ Python 3.10+ required")
        sys.exit(1)

    extras = ".[test]" if "--with-tests" in sys.argv[1:] else "."
    if not run_command(
        [sys.executable, "-m", "pip", "install", "-e", extras],
        "Installing radix-palette",
    ):
        sys.exit(1)

    if not run_command(
        [sys.executable, "-m", "playwright", "install", "chromium"],
        "Installing Chromium browser",
    ):
        sys.exit(1)

    print("\n✅ Setup complete! You can now run:")
    print("   radix-palette generate '#3B82F6' --scheme analogous")
    print("   radix-palette serve --port 3000")


if __name__ == "__main__":
    main()
