#!/usr/bin/env python3
"""
Setup script for Webpage Element Extractor.
Installs the extractor with its parsing stack, then the Chromium build
Playwright drives for live pages.
"""

import subprocess
import sys
from pathlib import Path


PROJECT_ROOT = Path(__file__).resolve().parent.parent


def install_steps():
    return [
        (
            [sys.executable, "-m", "pip", "install", "-e", str(PROJECT_ROOT)],
            "Installing extractor (playwright, beautifulsoup4, lxml)",
        ),
        (
            [sys.executable, "-m", "playwright", "install", "chromium"],
            "Installing Chromium for live page snapshots",
        ),
    ]


def run_step(cmd, description):
    print(f"\n📦 {description}...")
    try:
        subprocess.run(cmd, check=True, capture_output=True, text=True)
    except subprocess.CalledProcessError as e:
        print(f"❌ {description} failed (exit {e.returncode})")
        if e.stderr:
            print(e.stderr)
        return False
    print(f"✅ {description} completed")
    return True


def main():
    print("🚀 Setting up Webpage Element Extractor...")

    if sys.version_info < (3, 8):
        print("❌ Python 3.8+ required")
        sys.exit(1)

    for cmd, description in install_steps():
        if not run_step(cmd, description):
            sys.exit(1)

    print("\n✅ Setup complete! Export a page with:")
    print("   collect-elements https://example.com --output ./exports")
    print("   collect-elements saved_page.html --stdout")


if __name__ == "__main__":
    main()
