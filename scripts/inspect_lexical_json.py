"""Inspect Lexical rich-text JSON to see which node types and formats it uses."""

from __future__ import annotations

import argparse
import json
from collections import Counter
from pathlib import Path
from typing import Any

import httpx

from lexical2pt import convert, dump_blocks, render_to_plain_html
from lexical2pt.transformer import format_to_marks


def main() -> None:
    parser = argparse.ArgumentParser(description="Inspect Lexical node types, text formats, and link targets.")
    parser.add_argument("--url", help="URL returning a JSON document (e.g. a CMS REST endpoint)")
    parser.add_argument("--file", help="Local JSON file path")
    parser.add_argument("--field", help="Dotted path to the rich-text field inside the JSON (e.g. doc.content)")
    parser.add_argument("--blocks", action="store_true", help="Print the converted Portable Text blocks")
    parser.add_argument("--html", action="store_true", help="Print the converted document as plain HTML")
    args = parser.parse_args()

    if not args.url and not args.file:
        parser.error("Provide --url or --file")

    document = select_field(load_json(url=args.url, file_path=args.file), args.field)
    types, formats, links = collect_stats(document)

    print("Node types:")
    for name, count in types.most_common():
        print(f"{name}: {count}")

    print("\nText formats:")
    for flags, count in formats.most_common():
        marks = ", ".join(format_to_marks(flags)) or "plain"
        print(f"{flags} ({marks}): {count}")

    print("\nLink targets:")
    for href, count in links.most_common():
        print(f"{href}: {count}")

    if args.blocks or args.html:
        blocks = convert(document)
        if args.blocks:
            print("\nBlocks:")
            print(json.dumps(dump_blocks(blocks), indent=2, ensure_ascii=False))
        if args.html:
            print("\nHTML:")
            print(render_to_plain_html(blocks))


def load_json(*, url: str | None, file_path: str | None) -> Any:
    if url:
        response = httpx.get(url, follow_redirects=True, timeout=15.0)
        response.raise_for_status()
        return response.json()

    path = Path(file_path or "")
    if not path.is_file():
        raise FileNotFoundError(f"JSON file not found: {path}")
    return json.loads(path.read_text(encoding="utf-8"))


def select_field(data: Any, dotted_path: str | None) -> Any:
    if not dotted_path:
        return data
    for part in dotted_path.split("."):
        if not isinstance(data, dict) or part not in data:
            raise KeyError(f"Field {dotted_path!r} not found (missing {part!r})")
        data = data[part]
    return data


def collect_stats(document: Any) -> tuple[Counter, Counter, Counter]:
    types = Counter()
    formats = Counter()
    links = Counter()

    stack = [document.get("root")] if isinstance(document, dict) else []
    while stack:
        node = stack.pop()
        if not isinstance(node, dict):
            continue
        node_type = node.get("type")
        types[str(node_type)] += 1
        if node_type == "text" and isinstance(node.get("format"), int):
            formats[node["format"]] += 1
        if node_type in ("link", "autolink"):
            fields = node.get("fields") if isinstance(node.get("fields"), dict) else {}
            links[str(fields.get("url") or node.get("url") or "#")] += 1
        children = node.get("children")
        if isinstance(children, list):
            stack.extend(reversed(children))
    return types, formats, links


if __name__ == "__main__":
    main()
