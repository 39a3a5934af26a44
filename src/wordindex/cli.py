"""Command line interface for WordIndex."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from wordindex.config import AppConfig
from wordindex.errors import FatalIndexError, WordIndexError
from wordindex.index.indexer import Indexer, IndexStats
from wordindex.index.search import QueryResolver, parse_query_words
from wordindex.index.storage import SQLiteWordStore
from wordindex.storage.documents import LocalDocumentStorage
from wordindex.utils.files import iter_document_keys
from wordindex.web.app import app as web_app


console = Console()
app = typer.Typer(help="WordIndex - word-level document index")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _ensure_db_parent(db_path: Path) -> None:
    db_path.parent.mkdir(parents=True, exist_ok=True)


def _load_config(data_dir: Optional[Path], env: Optional[str]) -> AppConfig:
    try:
        return AppConfig.load(data_dir=data_dir, environment=env)
    except WordIndexError as exc:
        raise typer.BadParameter(str(exc)) from exc


@app.command()
def ingest(
    inputs: List[Path] = typer.Argument(
        ..., help="Documents or folders to upload and index.", resolve_path=True
    ),
    data_dir: Path = typer.Option(None, "--data-dir", help="Directory holding index and documents"),
    env: str = typer.Option(None, "--env", help="Deployment environment name"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Copy documents into the document store and index their words."""
    _setup_logging(verbose)
    config = _load_config(data_dir, env)

    documents = list(iter_document_keys(inputs))
    if not documents:
        console.print("[yellow]No documents found.[/yellow]")
        return

    db_path = config.resolve_db_path(Path.cwd())
    _ensure_db_parent(db_path)
    storage = LocalDocumentStorage(config.resolve_bucket_dir(Path.cwd()))

    console.print(f"Indexing into [bold]{db_path}[/bold]...")
    totals = IndexStats()
    failures = 0
    with SQLiteWordStore(db_path) as store:
        indexer = Indexer(store, storage, timeout=config.index_timeout)
        seen: set[str] = set()
        for path, key in documents:
            if key in seen:
                console.print(f"[red]Duplicate document key {key}, skipping {path}[/red]")
                failures += 1
                continue
            seen.add(key)
            storage.put(key, path.read_bytes())
            try:
                totals.merge(indexer.ingest(key))
            except FatalIndexError as exc:
                console.print(f"[red]Failed to index {key}: {exc}[/red]")
                failures += 1

    console.print(
        f"Appended: {totals.appended}, created: {totals.created}, "
        f"skipped: {totals.skipped}, failed words: {totals.failed}, "
        f"failed documents: {failures}"
    )


@app.command()
def search(
    words: str = typer.Argument(..., help="Comma-separated words"),
    data_dir: Path = typer.Option(None, "--data-dir", help="Directory holding index and documents"),
    env: str = typer.Option(None, "--env", help="Deployment environment name"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """List documents containing any of the given words."""
    _setup_logging(verbose)
    config = _load_config(data_dir, env)
    db_path = config.resolve_db_path(Path.cwd())

    if not db_path.exists():
        raise typer.BadParameter(f"Index not found: {db_path}")

    with SQLiteWordStore(db_path) as store:
        documents = QueryResolver(store).resolve(parse_query_words(words))

    if not documents:
        console.print("[yellow]No matches found.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Document")
    for document in sorted(documents):
        table.add_row(document)
    console.print(table)


@app.command()
def stats(
    data_dir: Path = typer.Option(None, "--data-dir", help="Directory holding index and documents"),
    env: str = typer.Option(None, "--env", help="Deployment environment name"),
) -> None:
    """Show index and document store size."""
    config = _load_config(data_dir, env)
    db_path = config.resolve_db_path(Path.cwd())

    if not db_path.exists():
        console.print("[yellow]Index not found, nothing indexed yet.[/yellow]")
        return

    with SQLiteWordStore(db_path) as store:
        summary = store.get_stats()
    stored = LocalDocumentStorage(config.resolve_bucket_dir(Path.cwd())).list_documents()
    console.print(
        f"Words: {summary['word_count']}, postings: {summary['posting_count']}, "
        f"documents: {len(stored)}"
    )


@app.command()
def web(
    host: str = typer.Option("127.0.0.1", help="Host interface"),
    port: int = typer.Option(8000, help="Server port"),
) -> None:
    """Start the HTTP API."""
    try:
        import uvicorn
    except ImportError as exc:  # pragma: no cover - defensive
        raise typer.BadParameter(
            "uvicorn is not installed. Install the web extras with \"python -m pip install '.[web]'\""
        ) from exc

    console.print(f"Starting API on http://{host}:{port}")
    uvicorn.run(
        web_app,
        host=host,
        port=port,
        reload=False,
        log_level="info",
    )
