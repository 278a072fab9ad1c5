"""Comparison report generation and display."""

import json
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from package_comparer.comparison.models import (
    ComparisonResult,
    ComparisonStatus,
    DifferenceKind,
    TypeComparison,
)
from package_comparer.utils.logging import get_logger

logger = get_logger(__name__)

REPORT_FORMATS = ("text", "markdown", "json")

BREAKING_CONCLUSION = "Breaking changes detected! Package 2 has removed or modified types."
ADDITIVE_CONCLUSION = "No breaking changes. Package 2 adds new functionality."
IDENTICAL_CONCLUSION = "Packages are functionally identical."

DIFFERENCE_SYMBOLS = {
    DifferenceKind.ADDED: "+",
    DifferenceKind.REMOVED: "-",
    DifferenceKind.SIGNATURE_CHANGED: "~",
    DifferenceKind.ACCESSIBILITY_CHANGED: "◊",
    DifferenceKind.ATTRIBUTE_ADDED: "⊕",
    DifferenceKind.ATTRIBUTE_REMOVED: "⊖",
    DifferenceKind.ATTRIBUTE_CHANGED: "⊙",
}

DIFFERENCE_ICONS = {
    DifferenceKind.ADDED: "➕",
    DifferenceKind.REMOVED: "➖",
    DifferenceKind.SIGNATURE_CHANGED: "🔄",
    DifferenceKind.ACCESSIBILITY_CHANGED: "🔒",
    DifferenceKind.ATTRIBUTE_ADDED: "🏷️",
    DifferenceKind.ATTRIBUTE_REMOVED: "🚫",
    DifferenceKind.ATTRIBUTE_CHANGED: "📝",
}

STATUS_STYLES = {
    ComparisonStatus.IDENTICAL: "green",
    ComparisonStatus.MODIFIED: "red",
    ComparisonStatus.ONLY_IN_PACKAGE1: "bold red",
    ComparisonStatus.ONLY_IN_PACKAGE2: "green",
    ComparisonStatus.NAMESPACE_CHANGED: "yellow",
}

RULE = "━" * 70


def conclusion(result: ComparisonResult) -> str:
    """Get the one-line verdict for a comparison."""
    if result.has_breaking_changes:
        return BREAKING_CONCLUSION
    if result.by_status(ComparisonStatus.ONLY_IN_PACKAGE2):
        return ADDITIVE_CONCLUSION
    return IDENTICAL_CONCLUSION


def _section(lines: list[str], title: str) -> None:
    lines.extend([RULE, title, RULE])


def generate_report_text(result: ComparisonResult, verbose: bool = False) -> str:
    """Generate a plain text report.

    Args:
        result: Comparison to render
        verbose: Include member counts and per-difference details

    Returns:
        Multi-line text report
    """
    summary = result.summary()
    lines = [
        "=" * 70,
        "PACKAGE COMPARISON - GAP ANALYSIS REPORT",
        "=" * 70,
        "",
        f"Package 1: {result.package1_name}",
        f"Package 2: {result.package2_name}",
        "",
    ]

    _section(lines, "SUMMARY")
    lines.extend(
        [
            f"  Total Types Analyzed: {summary['totalTypes']}",
            f"  Identical Types:      {summary['identical']}",
            f"  Modified Types:       {summary['modified']}",
            f"  Namespace Changed:    {summary['namespaceChanged']}",
            f"  Only in Package 1:    {summary['onlyInPackage1']}",
            f"  Only in Package 2:    {summary['onlyInPackage2']}",
            "",
        ]
    )

    removed = result.by_status(ComparisonStatus.ONLY_IN_PACKAGE1)
    if removed:
        _section(lines, "⚠ TYPES REMOVED (Present in Package 1, Missing in Package 2)")
        for comparison in removed:
            lines.append(f"  • {comparison.kind}: {comparison.type_name}")
            if verbose and comparison.type1 and comparison.type1.members:
                lines.append(f"    Members: {len(comparison.type1.members)}")
        lines.append("")

    added = result.by_status(ComparisonStatus.ONLY_IN_PACKAGE2)
    if added:
        _section(lines, "✓ TYPES ADDED (New in Package 2)")
        for comparison in added:
            lines.append(f"  • {comparison.kind}: {comparison.type_name}")
            if verbose and comparison.type2 and comparison.type2.members:
                lines.append(f"    Members: {len(comparison.type2.members)}")
        lines.append("")

    relocated = result.namespace_changes()
    if relocated:
        _section(lines, "↔ NAMESPACE CHANGES")
        for comparison in relocated:
            simple_name = comparison.type1.simple_name if comparison.type1 else comparison.type_name
            lines.append(f"  {comparison.kind}: {simple_name}")
            lines.append(f"    From: {comparison.old_namespace}")
            lines.append(f"    To:   {comparison.new_namespace}")
            if comparison.differences:
                lines.append(f"    Additional Changes: {len(comparison.differences)}")
                if verbose:
                    lines.extend(_difference_lines(comparison, details=False))
            lines.append("")

    modified = result.by_status(ComparisonStatus.MODIFIED)
    if modified:
        _section(lines, "⚡ TYPES MODIFIED")
        for comparison in modified:
            lines.append(f"  {comparison.kind}: {comparison.type_name}")
            lines.append(f"    Changes: {len(comparison.differences)}")
            if verbose:
                lines.extend(_difference_lines(comparison, details=True))
            lines.append("")

    _section(lines, "CONCLUSION")
    marker = "⚠" if result.has_breaking_changes else "✓"
    lines.append(f"{marker} {conclusion(result)}")
    lines.append("")

    return "\n".join(lines)


def _difference_lines(comparison: TypeComparison, details: bool) -> list[str]:
    lines = []
    for diff in comparison.differences:
        symbol = DIFFERENCE_SYMBOLS.get(diff.kind, "?")
        lines.append(f"      {symbol} {diff.kind.value}: {diff.member_name}")
        if details and diff.detail:
            lines.extend(f"        {line}" for line in diff.detail.split("\n"))
    return lines


def generate_report_markdown(result: ComparisonResult, verbose: bool = False) -> str:
    """Generate a Markdown report.

    Args:
        result: Comparison to render
        verbose: Include difference details as code blocks

    Returns:
        Markdown document
    """
    summary = result.summary()
    lines = [
        "# Package Comparison - Gap Analysis Report",
        "",
        f"**Package 1:** {result.package1_name}  ",
        f"**Package 2:** {result.package2_name}",
        "",
        "## Summary",
        "",
        "| Metric | Count |",
        "|--------|-------|",
        f"| Total Types | {summary['totalTypes']} |",
        f"| Identical Types | {summary['identical']} |",
        f"| Modified Types | {summary['modified']} |",
        f"| Namespace Changed | {summary['namespaceChanged']} |",
        f"| Only in Package 1 | {summary['onlyInPackage1']} |",
        f"| Only in Package 2 | {summary['onlyInPackage2']} |",
        "",
    ]

    removed = result.by_status(ComparisonStatus.ONLY_IN_PACKAGE1)
    if removed:
        lines.extend(
            ["## ⚠️ Types Removed", "", "These types are present in Package 1 but missing in Package 2:", ""]
        )
        lines.extend(f"- `{c.type_name}` ({c.kind})" for c in removed)
        lines.append("")

    added = result.by_status(ComparisonStatus.ONLY_IN_PACKAGE2)
    if added:
        lines.extend(["## ✅ Types Added", "", "These types are new in Package 2:", ""])
        lines.extend(f"- `{c.type_name}` ({c.kind})" for c in added)
        lines.append("")

    relocated = result.namespace_changes()
    if relocated:
        lines.extend(
            ["## 🔄 Namespace Changes", "", "These types have been moved to different namespaces:", ""]
        )
        for comparison in relocated:
            simple_name = comparison.type1.simple_name if comparison.type1 else comparison.type_name
            lines.append(f"- **`{simple_name}`** ({comparison.kind})")
            lines.append(f"  - From: `{comparison.old_namespace}`")
            lines.append(f"  - To: `{comparison.new_namespace}`")
            if comparison.differences:
                lines.append(f"  - Additional changes: {len(comparison.differences)}")
        lines.append("")

    modified = result.by_status(ComparisonStatus.MODIFIED)
    if modified:
        lines.extend(["## ⚡ Types Modified", ""])
        for comparison in modified:
            lines.extend([f"### `{comparison.type_name}`", ""])
            for diff in comparison.differences:
                icon = DIFFERENCE_ICONS.get(diff.kind, "❓")
                lines.append(f"- {icon} **{diff.kind.value}**: `{diff.member_name}`")
                if verbose and diff.detail:
                    lines.append("  ```")
                    lines.extend(f"  {line}" for line in diff.detail.split("\n"))
                    lines.append("  ```")
            lines.append("")

    lines.extend(["## Conclusion", ""])
    marker = "⚠️" if result.has_breaking_changes else "✅"
    lines.append(f"{marker} **{conclusion(result)}**")
    lines.append("")

    return "\n".join(lines)


def generate_report_json(result: ComparisonResult, verbose: bool = False) -> str:
    """Generate a JSON report.

    The verbose form is the full serialized comparison. The default form is
    a condensed summary with one entry per relocated pair and per changed type.
    """
    if verbose:
        return json.dumps(result.to_dict(), indent=2)

    data: dict[str, Any] = {
        "package1": result.package1_name,
        "package2": result.package2_name,
        "summary": result.summary(),
        "hasBreakingChanges": result.has_breaking_changes,
        "namespaceChanges": [
            {
                "typeName": c.type1.simple_name if c.type1 else c.type_name,
                "oldNamespace": c.old_namespace,
                "newNamespace": c.new_namespace,
                "additionalChanges": len(c.differences),
            }
            for c in result.namespace_changes()
        ],
        "differences": [
            {
                "typeName": c.type_name,
                "status": c.status.value,
                "changeCount": len(c.differences),
            }
            for c in result.type_comparisons
            if c.status not in (ComparisonStatus.IDENTICAL, ComparisonStatus.NAMESPACE_CHANGED)
        ],
    }
    return json.dumps(data, indent=2)


_GENERATORS = {
    "text": generate_report_text,
    "markdown": generate_report_markdown,
    "json": generate_report_json,
}


def generate_report(result: ComparisonResult, fmt: str = "text", verbose: bool = False) -> str:
    """Render a comparison in the requested format.

    Args:
        result: Comparison to render
        fmt: One of ``text``, ``markdown`` or ``json``
        verbose: Include per-difference details

    Returns:
        Rendered report

    Raises:
        ValueError: If the format is not supported
    """
    generator = _GENERATORS.get(fmt.lower())
    if generator is None:
        raise ValueError(f"Unsupported report format '{fmt}'. Must be one of {REPORT_FORMATS}")
    return generator(result, verbose)


def save_report(
    result: ComparisonResult, output_path: Path | str, fmt: str = "text", verbose: bool = False
) -> Path:
    """Render a comparison and write it to a file."""
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(generate_report(result, fmt, verbose), encoding="utf-8")
    logger.info("report_saved", file=str(path), format=fmt)
    return path


def display_comparison_summary(result: ComparisonResult, console: Console | None = None) -> None:
    """Display summary and changed types as rich tables.

    Args:
        result: Comparison to display
        console: Rich console (created if None)
    """
    if console is None:
        console = Console()

    summary = result.summary()
    summary_table = Table(title=f"{result.package1_name} → {result.package2_name}")
    summary_table.add_column("Metric", style="cyan", no_wrap=True)
    summary_table.add_column("Count", justify="right", style="yellow")
    summary_table.add_row("Total Types", str(summary["totalTypes"]))
    summary_table.add_row("Identical", str(summary["identical"]))
    summary_table.add_row("Modified", str(summary["modified"]))
    summary_table.add_row("Namespace Changed", str(summary["namespaceChanged"]))
    summary_table.add_row("Only in Package 1", str(summary["onlyInPackage1"]))
    summary_table.add_row("Only in Package 2", str(summary["onlyInPackage2"]))
    console.print(summary_table)

    changed = [
        c
        for c in result.type_comparisons
        if c.status not in (ComparisonStatus.IDENTICAL, ComparisonStatus.NAMESPACE_CHANGED)
    ]
    changed.extend(result.namespace_changes())
    if changed:
        changes_table = Table(title="Changed Types")
        changes_table.add_column("Type", style="cyan")
        changes_table.add_column("Kind", style="white")
        changes_table.add_column("Status", justify="center")
        changes_table.add_column("Differences", justify="right", style="blue")
        for comparison in changed:
            style = STATUS_STYLES.get(comparison.status, "white")
            name = comparison.type_name
            if comparison.is_namespace_change:
                name = f"{comparison.old_namespace} → {comparison.new_namespace}: {name}"
            changes_table.add_row(
                name,
                comparison.kind,
                f"[{style}]{comparison.status.value}[/{style}]",
                str(len(comparison.differences)),
            )
        console.print(changes_table)

    border = "red" if result.has_breaking_changes else "green"
    console.print(Panel.fit(conclusion(result), border_style=border))
