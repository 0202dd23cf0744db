"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  Renderers
are dispatched by ``result.op`` in :func:`render_result`; unknown ops
fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.markup import escape
from rich.table import Table
from rich.text import Text

from instrctl.output.console import create_console, get_output, style_for_severity

if TYPE_CHECKING:
    from rich.console import Console

    from instrctl.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal, which is
    the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal, grep-friendly output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    data = result.data
    if result.op == "check":
        return "\n".join(_issue_line(issue) for issue in data.get("issues", []))
    if result.op == "fix":
        return "\n".join(sorted({str(f["path"]) for f in data.get("fixes", [])}))
    if result.op == "list_documents":
        return "\n".join(str(item["path"]) for item in data.get("items", []))
    if result.op == "match":
        paths = {d["path"] for item in data.get("items", []) for d in item.get("documents", [])}
        return "\n".join(sorted(paths))
    if result.op == "rules":
        return "\n".join(str(item["code"]) for item in data.get("items", []))
    if result.op == "create":
        return str(data.get("path", ""))
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _issue_line(issue: dict[str, Any]) -> str:
    """``path:line: CODE message`` — the flake8-style one-liner."""
    line = issue.get("line")
    location = f"{issue['path']}:{line}" if line else str(issue["path"])
    return f"{location}: {issue['code']} {issue['message']}"


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="instr.ok"), Text(f"  {result.op}", style="instr.op"))


def _field(console: Console, key: str, value: Any) -> None:
    k = Text(f"  {key}: ", style="instr.key")
    v = Text(str(value), style="instr.path" if key == "path" else "")
    console.print(Text.assemble(k, v))


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="instr.error")
    op = Text(f"  {result.op}", style="instr.op")
    console.print(label, op, Text("—"), Text(msg))
    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


# ── Check / fix ───────────────────────────────────────────────────────


def _render_check(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render check results with issues grouped by document."""
    data = result.data
    issues = data.get("issues", [])
    files = data.get("files_checked", 0)

    if not issues:
        console.print(f"[instr.ok]OK[/instr.ok]  No issues found in {files} documents.")
        return

    if data.get("healthy"):
        console.print(
            "[instr.ok]OK[/instr.ok]  No errors found; advisory warnings listed below."
        )

    by_path: dict[str, list[dict[str, Any]]] = {}
    for issue in issues:
        by_path.setdefault(str(issue.get("path", "?")), []).append(issue)

    for path, path_issues in by_path.items():
        console.print(f"\n[instr.path]{escape(path)}[/instr.path]")
        for issue in path_issues:
            sev = str(issue.get("severity", "warning"))
            style = style_for_severity(sev)
            line = issue.get("line")
            loc = f"[instr.line]{line:>4}[/instr.line]" if line else "    "
            sev_text = f"[{style}]{sev:<7}[/{style}]" if style else f"{sev:<7}"
            code = f"[instr.code]{issue.get('code', '')}[/instr.code]"
            console.print(f"  {loc}  {sev_text} {code}  {escape(str(issue.get('message', '')))}")
            if verbose and issue.get("fix_action"):
                console.print(f"          fix: {issue['fix_action']} (instrctl fix)")

    errors = data.get("error_count", 0)
    warnings = data.get("warning_count", 0)
    console.print(f"\n{errors} errors, {warnings} warnings in {files} documents")


def _render_fix(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    data = result.data
    _status_line(console, result)
    if data.get("dry_run"):
        _field(console, "dry_run", "no files written")
    _field(console, "fixes_applied", data.get("count", 0))
    _field(console, "files_changed", data.get("files_changed", 0))
    fixes = data.get("fixes", [])
    if fixes and (verbose or data.get("dry_run")):
        for fix in fixes:
            console.print(f"  - {escape(str(fix['path']))}:{fix['line']} quoted {fix['key']}")


# ── Query renderers ───────────────────────────────────────────────────


def _render_documents(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    items = result.data.get("items", [])
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Path", style="instr.path", no_wrap=True)
    table.add_column("applyTo", style="instr.glob")
    table.add_column("Description")
    for item in items:
        table.add_row(
            Text(str(item["path"])),
            Text(", ".join(item["apply_to"])),
            Text(str(item["description"])),
        )
    console.print(table)
    console.print(f"\n{result.data.get('count', len(items))} documents")


def _render_match(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    for item in result.data.get("items", []):
        console.print(f"[bold]{escape(str(item['target']))}[/bold]")
        documents = item.get("documents", [])
        if not documents:
            console.print("  [dim](no matching instructions)[/dim]")
            continue
        for doc in documents:
            globs = escape(", ".join(doc.get("patterns", [])))
            path = escape(str(doc["path"]))
            console.print(f"  [instr.path]{path}[/instr.path]  [instr.glob]{globs}[/instr.glob]")
            if verbose:
                console.print(Text(f"    {doc.get('description', '')}"))


def _render_rules(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Code", style="instr.code", no_wrap=True)
    table.add_column("Name")
    table.add_column("Severity")
    table.add_column("Category")
    table.add_column("Fix")
    if verbose:
        table.add_column("Summary")
    for item in result.data.get("items", []):
        sev = str(item["severity"])
        row: list[Any] = [
            str(item["code"]),
            str(item["name"]),
            Text(sev, style=style_for_severity(sev)),
            str(item["category"]),
            "yes" if item.get("fixable") else "",
        ]
        if verbose:
            row.append(str(item.get("summary", "")))
        table.add_row(*row)
    console.print(table)


def _render_create(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key in ("path", "description"):
        if key in result.data:
            _field(console, key, result.data[key])
    _field(console, "applyTo", ", ".join(result.data.get("apply_to", [])))


# ── Generic fallback ──────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, _json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "check": _render_check,
    "fix": _render_fix,
    "list_documents": _render_documents,
    "match": _render_match,
    "rules": _render_rules,
    "create": _render_create,
}
