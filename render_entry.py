#!/usr/bin/env python3
"""
cabbages.info — Entry Renderer
Takes exported CMS entry records and writes the email HTML for each,
for previewing what subscribers will get before anything is sent.

Usage:
    python3 render_entry.py -i entry.json -o entry.html
    python3 render_entry.py -i entries.json --output-dir dist/email --email-only
    python3 render_entry.py -i entries.json --entry-id abc123

Environment variables:
    SITE_URL    — Canonical site URL used for entry permalinks
    SITE_NAME   — Site name shown in the footer link
    OUTPUT_DIR  — Default directory for --output-dir
"""

import argparse
import json
import os
import sys

from email_renderer import generate_email_html
from entries import load_entries
from site_config import OUTPUT_DIR, SITE_NAME, SITE_URL


def select_entries(entries, entry_id=None, email_only=False):
    """Filter loaded entries by id and by the publishToEmail flag."""
    selected = entries
    if entry_id:
        selected = [e for e in selected if e.id == entry_id]
    if email_only:
        selected = [e for e in selected if e.publish_to_email]
    return selected


def write_entries(entries, output_dir: str, site_url: str, site_name: str) -> list:
    """Write one {entry_id}.html per entry and return the paths written."""
    os.makedirs(output_dir, exist_ok=True)
    written = []
    for entry in entries:
        path = os.path.join(output_dir, f"{entry.id}.html")
        with open(path, "w", encoding="utf-8") as f:
            f.write(generate_email_html(entry, site_url=site_url, site_name=site_name))
        written.append(path)
    return written


# ---------------------------------------------------------------------------
# MAIN
# ---------------------------------------------------------------------------

def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Render cabbages.info entries as email HTML"
    )
    parser.add_argument(
        "-i", "--input", required=True,
        help="Path to a JSON file with one entry record or a list of them"
    )
    parser.add_argument(
        "-o", "--output",
        help="Output HTML file path for a single entry (default: stdout)"
    )
    parser.add_argument(
        "--output-dir", nargs="?", const=OUTPUT_DIR,
        help=f"Write one file per entry into this directory (default: {OUTPUT_DIR})"
    )
    parser.add_argument(
        "--entry-id",
        help="Only render the entry with this _id"
    )
    parser.add_argument(
        "--email-only", action="store_true",
        help="Only render entries flagged publishToEmail"
    )
    parser.add_argument(
        "--site-url", default=SITE_URL,
        help=f"Base URL for entry permalinks (default: {SITE_URL})"
    )
    args = parser.parse_args(argv)

    print("Loading entries...", file=sys.stderr)
    try:
        entries = load_entries(args.input)
    except (OSError, json.JSONDecodeError, ValueError) as e:
        print(f"Error: could not load {args.input}: {e}", file=sys.stderr)
        return 1
    print(f"  {len(entries)} entries loaded", file=sys.stderr)

    entries = select_entries(entries, args.entry_id, args.email_only)
    if not entries:
        print("Error: no matching entries", file=sys.stderr)
        return 1

    if args.output_dir:
        written = write_entries(entries, args.output_dir, args.site_url, SITE_NAME)
        print(f"  Wrote {len(written)} files to {args.output_dir}", file=sys.stderr)
        return 0

    if len(entries) > 1:
        print(f"  {len(entries)} entries matched; rendering the first "
              f"(use --entry-id or --output-dir)", file=sys.stderr)

    html = generate_email_html(entries[0], site_url=args.site_url, site_name=SITE_NAME)
    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(html)
        print(f"  Saved to {args.output}", file=sys.stderr)
    else:
        print(html)

    print("Done!", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
