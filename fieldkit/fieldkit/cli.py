from __future__ import annotations

import json
import random
from typing import Any, Dict, List, Optional

import typer

from .config import Settings, load_dotenv
from .csv_export import session_record, to_csv
from .engine import DiagnosticSession, get_node, walk
from .errors import FieldkitError
from .network import quality_from_downlink
from .protocols import MEDICAL_DECISION_TREE
from .router import respond
from .sandbox_fs import SESSION_LOG, SandboxPathError, append_session, export_json, read_sessions, resolve_in_sandbox
from .utils.logging import configure_logging
from .validator import check_tree, iter_leaf_paths
from .weather import weather_based_tip

app = typer.Typer(add_completion=False, no_args_is_help=True)


def _settings() -> Settings:
    load_dotenv()
    return Settings.from_env()


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Log at DEBUG level")):
    settings = _settings()
    configure_logging("DEBUG" if verbose else settings.log_level)


def _node_payload(node) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "id": node.id,
        "kind": node.kind,
        "question": node.question,
        "options": [o.model_dump() for o in node.options],
    }
    if node.is_leaf:
        payload["result"] = node.result.model_dump()
    return payload


def _dump(obj: Any) -> str:
    return json.dumps(obj, indent=2, ensure_ascii=False)


def _fail(e: Exception) -> None:
    typer.echo(f"Error: {e}", err=True)
    raise typer.Exit(code=1)


@app.command("validate")
def cli_validate():
    report = check_tree(MEDICAL_DECISION_TREE)
    typer.echo(_dump(report))
    if not report["summary_pass"]:
        raise typer.Exit(code=2)


@app.command("node")
def cli_node(node_id: str = typer.Argument(..., help="Node id, e.g. ROOT or BLEEDING_CHECK")):
    try:
        node = get_node(node_id)
    except FieldkitError as e:
        _fail(e)
    typer.echo(_dump(_node_payload(node)))


@app.command("walk")
def cli_walk(
    path: List[str] = typer.Argument(..., help="Sequence of next ids chosen from ROOT"),
    strict: Optional[bool] = typer.Option(None, "--strict/--lenient", help="Reject ids that are not options of the current node"),
    log: bool = typer.Option(False, "--log", help="Append the finished session to the sandbox log"),
    root: Optional[str] = typer.Option(None, "--root", help="Sandbox root for session logs"),
):
    settings = _settings()
    try:
        state = walk(path, strict=settings.strict if strict is None else strict)
    except FieldkitError as e:
        _fail(e)
    node = get_node(state.current_node_id)
    out = _node_payload(node)
    out["path"] = list(state.history) + [state.current_node_id]
    typer.echo(_dump(out))

    if log:
        if not node.is_leaf:
            typer.echo("Error: session not finished, nothing logged", err=True)
            raise typer.Exit(code=1)
        append_session(root or str(settings.root), session_record(state, node))


def _render(session: DiagnosticSession) -> None:
    node = session.node
    typer.echo("")
    typer.echo(node.question)
    for i, opt in enumerate(node.options, start=1):
        marker = "!" if opt.style == "danger" else " "
        typer.echo(f" {marker}{i}. {opt.label}")
    if node.is_leaf:
        r = node.result
        typer.echo(f"[{r.severity}] {r.title}")
        typer.echo(r.content)
        typer.echo(f">> {r.action_item}")


@app.command("manual")
def cli_manual():
    """Interactive triage walk: number to choose, b = back, r = restart, q = quit."""
    session = DiagnosticSession()
    while True:
        _render(session)
        answer = typer.prompt("choice [n/b/r/q]").strip().lower()
        if answer == "q":
            break
        if answer == "b":
            session.back()
            continue
        if answer == "r":
            session.restart()
            continue
        if answer.isdigit():
            try:
                session.choose(int(answer) - 1)
            except FieldkitError as e:
                typer.echo(f"Invalid choice: {e}", err=True)
            continue
        typer.echo("Invalid choice", err=True)
    typer.echo(" > ".join(session.path))


@app.command("ask")
def cli_ask(
    text: str = typer.Argument(..., help="Free-text message"),
    online: bool = typer.Option(False, "--online/--offline", help="Whether the host reports connectivity"),
    as_json: bool = typer.Option(False, "--json", help="Print the full reply as JSON"),
):
    """Answer a chat message with the app's reply policy. No remote model is wired into the CLI."""
    reply = respond(text, online=online)
    if as_json:
        typer.echo(_dump(reply.model_dump()))
    else:
        typer.echo(reply.text)


@app.command("paths")
def cli_paths():
    for p in iter_leaf_paths(MEDICAL_DECISION_TREE):
        leaf = get_node(p[-1])
        typer.echo(f"{' > '.join(p)}  [{leaf.result.severity}]")


@app.command("tip")
def cli_tip(
    temp: str = typer.Option("20", "--temp", help="Temperature as reported, e.g. '31°C'"),
    condition: str = typer.Option("", "--condition", help="Weather condition text"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Seed for a reproducible pick"),
):
    rng = random.Random(seed) if seed is not None else None
    typer.echo(weather_based_tip(temp, condition, rng))


@app.command("signal")
def cli_signal(
    downlink: Optional[float] = typer.Option(None, "--downlink", help="Downlink estimate in Mbit/s"),
    offline: bool = typer.Option(False, "--offline", help="Host reports no connectivity"),
):
    typer.echo(quality_from_downlink(downlink, online=not offline).value)


@app.command("export-csv")
def cli_export_csv(
    root: Optional[str] = typer.Option(None, "--root", help="Sandbox root"),
    log: str = typer.Option(SESSION_LOG, "--log", help="Session JSONL log, relative to root"),
    out: str = typer.Option("exports/sessions.csv", "--out", help="CSV output, relative to root"),
):
    sandbox = root or str(_settings().root)
    try:
        out_path = resolve_in_sandbox(sandbox, out)
        records = list(read_sessions(sandbox, log))
    except (ValueError, FileNotFoundError) as e:
        _fail(e)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    to_csv(records, str(out_path))
    typer.echo(str(out_path))


@app.command("export-tree")
def cli_export_tree(
    out: str = typer.Option("exports/tree.json", "--out", help="Output path, relative to root"),
    root: Optional[str] = typer.Option(None, "--root", help="Sandbox root"),
):
    sandbox = root or str(_settings().root)
    data = {nid: _node_payload(node) for nid, node in MEDICAL_DECISION_TREE.items()}
    try:
        p = export_json(sandbox, out, data)
    except SandboxPathError as e:
        _fail(e)
    typer.echo(str(p))


if __name__ == "__main__":
    app()
