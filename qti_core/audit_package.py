"""Cross-check a QTI package: test manifest itemRefs against the item files.

This is the I/O wrapper around the parsers; ``audit_package`` itself only
works on an in-memory ``{path: content}`` mapping.
"""
from __future__ import annotations

import argparse
import json
import logging
import zipfile
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Union

from . import config
from .errors import InvalidPathError, QtiParseError
from .export import to_json
from .item import extract_item_identifier
from .manifest import parse_assessment_item_refs_from_xml
from .paths import normalize_permissive, resolve_assessment_href
from .xml_utils import local_name, parse_xml

log = logging.getLogger(__name__)

Content = Union[str, bytes]


def load_package(path: Path) -> Dict[str, bytes]:
    """Read every ``.xml`` file of a package directory or zip, keyed by relative path."""

    files: Dict[str, bytes] = {}
    if path.is_dir():
        for p in sorted(path.rglob("*.xml")):
            files[p.relative_to(path).as_posix()] = p.read_bytes()
        return files
    with zipfile.ZipFile(path) as zf:
        for name in zf.namelist():
            if name.endswith("/") or not name.lower().endswith(".xml"):
                continue
            key = normalize_permissive(name)
            if key:
                files[key] = zf.read(name)
    return files


def find_test_manifest(files: Mapping[str, Content]) -> Optional[str]:
    for name in sorted(files):
        try:
            root = parse_xml(files[name])
        except QtiParseError:
            continue
        if local_name(root.tag) == config.ASSESSMENT_TEST_TAG:
            return name
    return None


def audit_package(files: Mapping[str, Content], test_path: str) -> dict[str, object]:
    warnings: List[str] = []
    entries: List[dict[str, object]] = []

    source = files.get(test_path)
    if source is None:
        warnings.append(f"{test_path}: test manifest not found")
        return {"test": test_path, "itemRefs": entries, "issues": [], "warnings": warnings,
                "totals": {"itemRefs": 0, "ok": 0, "warnings": len(warnings)}}

    parsed = parse_assessment_item_refs_from_xml(source)
    for issue in parsed.errors:
        label = f" ({issue.identifier})" if issue.identifier else ""
        warnings.append(f"{test_path}: {issue.code}{label}")

    ok = 0
    for ref in parsed.item_refs:
        entry: dict[str, object] = {"identifier": ref.identifier, "href": ref.href, "path": None}
        entries.append(entry)
        try:
            target = resolve_assessment_href(test_path, ref.href)
        except InvalidPathError as exc:
            entry["status"] = "invalid-href"
            warnings.append(f"{ref.identifier}: {exc}")
            continue
        entry["path"] = target
        item_source = files.get(target)
        if item_source is None:
            entry["status"] = "missing-file"
            warnings.append(f"{ref.identifier}: {target} not found in package")
            continue
        found = extract_item_identifier(item_source)
        entry["itemIdentifier"] = found
        if found != ref.identifier:
            entry["status"] = "identifier-mismatch"
            warnings.append(f"{ref.identifier}: {target} declares identifier {found!r}")
            continue
        entry["status"] = "ok"
        ok += 1

    log.info("audited %s: %d itemRefs, %d ok", test_path, len(entries), ok)
    return {
        "test": test_path,
        "itemRefs": entries,
        "issues": to_json(parsed.errors),
        "warnings": warnings,
        "totals": {"itemRefs": len(entries), "ok": ok, "warnings": len(warnings)},
    }


def print_report(summary: dict[str, object]) -> None:
    print(f"=== QTI package audit: {summary['test']} ===")
    for entry in summary["itemRefs"]:  # type: ignore[union-attr]
        print(f"  [{entry['status']:<19}] {entry['identifier']} -> {entry['path'] or entry['href']}")

    warnings: list[str] = summary["warnings"]  # type: ignore[assignment]
    if warnings:
        print("\nWarnings:")
        for msg in warnings:
            print(f" - {msg}")
    else:
        print("\nNo warnings.")
    print("\nTotals:", summary["totals"])


def write_summary(summary: dict[str, object], path: Path) -> str:
    text = json.dumps(summary, indent=2, sort_keys=True)
    path.write_text(text + "\n", encoding="utf-8")
    return text


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Check a QTI package's test manifest against its item files.")
    parser.add_argument("package", type=Path, help="package directory or .zip")
    parser.add_argument("--test", help="manifest path inside the package (auto-detected if omitted)")
    parser.add_argument("--json", type=Path, dest="json_path", help="write the summary as JSON to this file")
    parser.add_argument("--log-level", default=None)
    args = parser.parse_args(argv)

    config.configure_logging(args.log_level)
    files = load_package(args.package)
    test_path = args.test or find_test_manifest(files)
    if not test_path:
        print(f"No {config.ASSESSMENT_TEST_TAG} document found in {args.package}")
        return 1

    summary = audit_package(files, test_path)
    print_report(summary)
    if args.json_path:
        write_summary(summary, args.json_path)
    if summary["warnings"] and config.AUDIT_FAIL_ON_WARNINGS:
        return 2
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
