"""Inspect a persisted agreement structure: node kinds, page breaks and markup tags."""

from __future__ import annotations

import argparse
from collections import Counter
from pathlib import Path

from bs4 import BeautifulSoup

from legaldoc import estimate_height, hydrate, paginate, to_markup
from legaldoc.paginator import PageLayout
from legaldoc.schemas import DocumentStructure
from legaldoc.tree_ops import iter_nodes


def main() -> None:
    parser = argparse.ArgumentParser(description="Inspect an agreement structure and its pagination.")
    parser.add_argument("file", help="JSON file holding a persisted structure")
    parser.add_argument("--type", dest="agreement_type", help="Agreement type tag (rent, sale, agency, ...)")
    parser.add_argument("--first-page", type=float, help="Override the first page capacity")
    parser.add_argument("--page", type=float, help="Override the capacity of later pages")
    args = parser.parse_args()

    structure = load_structure_file(Path(args.file), agreement_type=args.agreement_type)
    layout = PageLayout(
        first_page_capacity=args.first_page or PageLayout().first_page_capacity,
        page_capacity=args.page or PageLayout().page_capacity,
    )

    print(f"Title: {structure.title}")
    print("\nNode kinds:")
    for name, count in count_kinds(structure).most_common():
        print(f"{name}: {count}")

    print("\nPages:")
    for page in paginate(structure.nodes, layout=layout):
        total = sum(estimate_height(node) for node in page.nodes)
        print(f"Page {page.page_number} ({total:g} / {layout.capacity_for(page.page_number):g}):")
        for node in page.nodes:
            label = f"{node.label} " if node.label else ""
            print(f"  {node.kind.value:<11} {estimate_height(node):>5g}  {label}{node.content[:60]}")

    print("\nMarkup tags:")
    for name, count in collect_tags(to_markup(structure)).most_common():
        print(f"{name}: {count}")


def load_structure_file(path: Path, *, agreement_type: str | None) -> DocumentStructure:
    if not path.is_file():
        raise FileNotFoundError(f"Structure file not found: {path}")
    return hydrate({"structure": path.read_text(encoding="utf-8"), "type": agreement_type})


def count_kinds(structure: DocumentStructure) -> Counter:
    return Counter(node.kind.value for node in iter_nodes(structure.nodes))


def collect_tags(markup: str) -> Counter:
    soup = BeautifulSoup(markup, "html.parser")
    return Counter(tag.name for tag in soup.find_all(True))


if __name__ == "__main__":
    main()
