"""FastAPI application exposing ingest, search and download endpoints."""

from __future__ import annotations

import asyncio
import logging
from contextlib import closing
from pathlib import Path
from typing import Any, Dict, Iterator, List

from fastapi import Depends, FastAPI, Header, HTTPException, Query, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse, StreamingResponse
from pydantic import BaseModel, Field

from wordindex.config import AppConfig
from wordindex.errors import FatalIndexError, NotFoundError
from wordindex.index.indexer import Indexer
from wordindex.index.search import QueryResolver, build_download_urls, parse_query_words
from wordindex.index.storage import SQLiteWordStore
from wordindex.storage.documents import LocalDocumentStorage
from wordindex.storage.retriever import DOCUMENT_CONTENT_TYPE, StreamingRetriever
from wordindex.utils.text import decode_object_key

LOGGER = logging.getLogger(__name__)

app = FastAPI(title="WordIndex", version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)


class StoredObject(BaseModel):
    key: str


class StorageEntity(BaseModel):
    object: StoredObject


class StorageEventRecord(BaseModel):
    s3: StorageEntity


class StorageEvent(BaseModel):
    records: List[StorageEventRecord] = Field(default_factory=list, alias="Records")


def get_config() -> AppConfig:
    return AppConfig.load()


def _resolve_db_path(config: AppConfig) -> Path:
    return config.resolve_db_path(Path.cwd())


def _ensure_db_parent(db_path: Path) -> None:
    db_path.parent.mkdir(parents=True, exist_ok=True)


def _open_store(config: AppConfig) -> SQLiteWordStore:
    db_path = _resolve_db_path(config)
    _ensure_db_parent(db_path)
    return SQLiteWordStore(db_path)


def _open_storage(config: AppConfig) -> LocalDocumentStorage:
    return LocalDocumentStorage(config.resolve_bucket_dir(Path.cwd()))


@app.on_event("startup")
async def startup_event() -> None:
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")


def _run_index_job(keys: List[str], config: AppConfig) -> Dict[str, int]:
    store = _open_store(config)
    try:
        indexer = Indexer(store, _open_storage(config), timeout=config.index_timeout)
        return {key: indexer.ingest(key).appended for key in keys}
    finally:
        store.close()


@app.post("/ingest")
async def ingest_documents(
    event: StorageEvent, config: AppConfig = Depends(get_config)
) -> dict[str, Any]:
    """Index documents announced by a storage event."""
    if not event.records:
        raise HTTPException(status_code=400, detail="No records in event")

    keys = [decode_object_key(record.s3.object.key) for record in event.records]
    try:
        indexed = await asyncio.to_thread(_run_index_job, keys, config)
    except FatalIndexError as exc:
        LOGGER.error("Indexing failed: %s", exc)
        raise HTTPException(status_code=500, detail=str(exc)) from exc

    return {"status": "ok", "indexed": indexed}


def _resolve_documents(words: List[str], config: AppConfig) -> set[str]:
    with _open_store(config) as store:
        return QueryResolver(store).resolve(words)


@app.get("/search")
async def search_words(
    words: str | None = None,
    x_api_key: str | None = Header(default=None),
    config: AppConfig = Depends(get_config),
) -> Response:
    """Return download URLs for documents containing any of ``words``."""
    if config.api_key is None or x_api_key != config.api_key:
        return PlainTextResponse("Unauthorized", status_code=402)

    if not words:
        return PlainTextResponse("Missing query parameter: words", status_code=400)

    LOGGER.info("Table in view %s", config.table_name)
    try:
        documents = await asyncio.to_thread(_resolve_documents, parse_query_words(words), config)
        urls = build_download_urls(documents, config.download_url)
    except Exception as exc:
        LOGGER.exception("API Error: %s", exc)
        return Response(status_code=500)

    return JSONResponse(urls)


def _stream_body(body: Iterator[bytes], document_id: str) -> Iterator[bytes]:
    with closing(body):
        try:
            yield from body
        except Exception:
            LOGGER.exception("Streaming %s failed (status 500)", document_id)
            raise


@app.get("/download")
async def download_document(
    file_name: str | None = Query(default=None, alias="fileName"),
    config: AppConfig = Depends(get_config),
) -> Response:
    """Stream a stored document.

    Query string decoding already turns ``+`` into spaces.
    """
    if not file_name:
        return PlainTextResponse("ERROR:File name is missing", status_code=404)

    retriever = StreamingRetriever(_open_storage(config))
    try:
        body = await asyncio.to_thread(retriever.retrieve, file_name)
    except NotFoundError:
        return PlainTextResponse("File not found!", status_code=404)
    except Exception as exc:
        LOGGER.exception("Download of %s failed: %s", file_name, exc)
        return Response(status_code=500)

    return StreamingResponse(_stream_body(body, file_name), media_type=DOCUMENT_CONTENT_TYPE)
