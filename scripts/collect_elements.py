#!/usr/bin/env python3
"""
Webpage Element Extractor - Collection Script
Collects buttons, form controls, links, headings and static text from a webpage
and writes them to a CSV of selector hints for UI test automation.
"""

import argparse
import asyncio
import sys
from pathlib import Path
from typing import List, Optional
from urllib.parse import urlparse

try:
    from playwright.async_api import Error as PlaywrightError
    from playwright.async_api import Page
    from playwright.async_api import TimeoutError as PlaywrightTimeoutError
    from playwright.async_api import async_playwright
except ImportError:
    print("ERROR: playwright not installed. Run: pip install playwright && playwright install chromium")
    raise SystemExit(1)

from element_csv import build_filename, filter_records, serialize_records, write_csv
from element_extractor import ElementRecord, collect_elements
from element_nodes import DocumentTree, ElementExportError, parse_html


DEFAULT_VIEWPORT = {"width": 1440, "height": 900}
USER_AGENT = "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
DEFAULT_TIMEOUT_MS = 60000
NETWORKIDLE_TIMEOUT_MS = 15000
DEFAULT_SETTLE_MS = 2000
SUPPORTED_SCHEMES = {"http", "https", "file"}

SNAPSHOT_SCRIPT = """() => ({
    html: document.documentElement ? document.documentElement.outerHTML : '',
    title: document.title || '',
})"""


class SourceError(ElementExportError):
    pass


def read_text(path: Path) -> str:
    return path.read_text(encoding="utf-8", errors="replace")


class ElementExporter:
    def __init__(
        self,
        source: str,
        output_dir: str = ".",
        to_stdout: bool = False,
        settle_ms: int = DEFAULT_SETTLE_MS,
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
        headless: bool = True,
    ):
        self.source = source
        self.output_dir = Path(output_dir)
        self.to_stdout = to_stdout
        self.settle_ms = settle_ms
        self.timeout_ms = timeout_ms
        self.headless = headless

    async def run(self) -> List[ElementRecord]:
        document = await self.load_document()
        return self.export(document)

    async def load_document(self) -> DocumentTree:
        if self.source == "-":
            return parse_html(sys.stdin.read())

        path = Path(self.source)
        if path.is_file():
            return parse_html(read_text(path))

        if urlparse(self.source).scheme in SUPPORTED_SCHEMES:
            return await self.snapshot_url(self.source)

        raise SourceError(f"Not a file, '-' or a supported URL: {self.source}")

    async def snapshot_url(self, url: str) -> DocumentTree:
        async with async_playwright() as p:
            browser = await p.chromium.launch(headless=self.headless)
            try:
                context = await browser.new_context(
                    viewport=DEFAULT_VIEWPORT,
                    device_scale_factor=1,
                    user_agent=USER_AGENT,
                )
                try:
                    page = await context.new_page()
                    return await self.snapshot_page(page, url)
                finally:
                    await context.close()
            finally:
                await browser.close()

    async def snapshot_page(self, page: Page, url: str) -> DocumentTree:
        self.report(f"🌐 Loading {url}")
        await page.goto(url, wait_until="domcontentloaded", timeout=self.timeout_ms)
        await page.wait_for_selector("body", state="attached", timeout=self.timeout_ms)
        try:
            await page.wait_for_load_state("networkidle", timeout=NETWORKIDLE_TIMEOUT_MS)
        except PlaywrightTimeoutError:
            self.report("⚠️  Network did not go idle, extracting anyway")
        if self.settle_ms > 0:
            await page.wait_for_timeout(self.settle_ms)

        snapshot = await page.evaluate(SNAPSHOT_SCRIPT)
        return parse_html(snapshot.get("html", ""), title=snapshot.get("title", ""))

    def export(self, document: DocumentTree, date: Optional[str] = None) -> List[ElementRecord]:
        """Collect, filter and write one document; returns every collected record."""
        records = collect_elements(document)
        kept, skipped = filter_records(records)
        content = serialize_records(kept)
        filename = build_filename(document.title, date)

        if self.to_stdout:
            sys.stdout.write(content)
            destination = "stdout"
        else:
            destination = str(write_csv(self.output_dir, filename, content))

        self.report(f"✅ Extracted {len(kept)} elements with ID or class and saved as {destination}")
        self.report(f"(Skipped {skipped} elements that had no ID or class)")
        return records

    def report(self, message: str) -> None:
        # Keep stdout clean when it carries the CSV itself.
        print(message, file=sys.stderr if self.to_stdout else sys.stdout)


async def main_async(args: argparse.Namespace) -> None:
    exporter = ElementExporter(
        source=args.source,
        output_dir=args.output,
        to_stdout=args.stdout,
        settle_ms=args.wait,
        timeout_ms=args.timeout,
        headless=not args.headed,
    )
    await exporter.run()


def main() -> None:
    parser = argparse.ArgumentParser(description="Extract important webpage elements to a CSV of selector hints")
    parser.add_argument("source", help="Page URL, path to a saved HTML file, or '-' for stdin")
    parser.add_argument("--output", "-o", default=".", help="Output directory for the CSV file")
    parser.add_argument("--stdout", action="store_true", help="Print the CSV instead of writing a file")
    parser.add_argument("--wait", type=int, default=DEFAULT_SETTLE_MS, help="Extra settle time after load, in ms")
    parser.add_argument("--timeout", type=int, default=DEFAULT_TIMEOUT_MS, help="Navigation timeout, in ms")
    parser.add_argument("--headed", action="store_true", help="Show the browser window while loading")

    args = parser.parse_args()
    try:
        asyncio.run(main_async(args))
    except (ElementExportError, PlaywrightError) as exc:
        print(f"❌ {exc}", file=sys.stderr)
        raise SystemExit(1)


if __name__ == "__main__":
    main()
