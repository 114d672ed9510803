"""Extract participant names from a saved Google Meet page (HTML file)."""

import argparse
import json
import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.dom.soup_tree import SoupDocument
from src.extraction.session import ExtractionSession


def main() -> int:
    parser = argparse.ArgumentParser(description="Extract participant names from a Meet page")
    parser.add_argument("path", help="HTML file saved from a Meet tab (e.g. outerHTML dump)")
    parser.add_argument("--url", default="https://meet.google.com/", help="Page URL")
    parser.add_argument("--json", action="store_true", help="Print a JSON report")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log each strategy and rejection")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    html = Path(args.path).read_text(encoding="utf-8")
    report = ExtractionSession(SoupDocument(html, url=args.url)).run()

    if args.json:
        print(
            json.dumps(
                {
                    "participants": report.participants,
                    "root_strategy": report.root_strategy,
                    "passes": [
                        {"name": p.name, "added": p.added, "root_found": p.root_found}
                        for p in report.passes
                    ],
                },
                indent=2,
            )
        )
    else:
        for name in report.participants:
            print(name)

    return 0 if report.found_any else 1


if __name__ == "__main__":
    sys.exit(main())
