"""podembed CLI — validate configs, embed text, and index/search a local store."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from contracts.errors import EmbeddingError

_HANDLED = (EmbeddingError, FileNotFoundError, ValueError, ValidationError)


def _fail(message: str) -> None:
    print(f"Error: {message}", file=sys.stderr)
    sys.exit(1)


def _load(args: argparse.Namespace):
    from runtime.config_loader import load_config

    config = load_config(args.config)
    if args.log_level is None:
        logging.getLogger().setLevel(config.logging.level.value)
    return config


def cmd_validate(args: argparse.Namespace) -> None:
    """Validate a podembed.yaml config without resolving credentials."""
    from runtime.embedding_adapters.registry import create_default_registry

    try:
        config = _load(args)
        registry = create_default_registry()
        registry.validate(config.embedding.backend, config.embedding.config)
    except KeyError as exc:
        _fail(f"unknown embedding backend {exc}")
    except _HANDLED as exc:
        _fail(f"invalid config: {exc}")

    emb = config.embedding.config
    print(f"Config OK: {args.config}")
    print(f"  Embedding backend: {config.embedding.backend}")
    print(f"  Endpoint:          {emb.get('endpoint_id')}")
    print(f"  Model:             {emb.get('model_name')}")
    print(f"  API key variable:  {emb.get('api_key_env_var')}")
    print(f"  Vector backend:    {config.vector_db.backend} ({config.vector_db.path})")


def cmd_embed(args: argparse.Namespace) -> None:
    """Embed the given texts and print the vectors as JSON."""
    from contracts.embedding import EmbeddingResult
    from runtime.factory import create_embedding_adapter

    try:
        config = _load(args)
        adapter = create_embedding_adapter(config)
        vectors = asyncio.run(adapter.generate(args.texts))
    except _HANDLED as exc:
        _fail(str(exc))

    result = EmbeddingResult(
        embeddings=vectors,
        model=config.embedding.config.get("model_name", ""),
    )
    print(result.model_dump_json())


def cmd_spaces(args: argparse.Namespace) -> None:
    """Print the similarity spaces the configured adapter supports."""
    from runtime.factory import create_embedding_adapter

    try:
        adapter = create_embedding_adapter(_load(args))
    except _HANDLED as exc:
        _fail(str(exc))

    print(f"default:   {adapter.default_space()}")
    print(f"supported: {', '.join(adapter.supported_spaces())}")


def cmd_index(args: argparse.Namespace) -> None:
    """Embed text files and store them in a collection."""
    from contracts.vector_db import Document
    from runtime.factory import create_index

    documents = []
    for name in args.files:
        path = Path(name)
        if not path.is_file():
            _fail(f"file not found: {name}")
        documents.append(Document(
            id=path.name,
            text=path.read_text(encoding="utf-8"),
            metadata={"source": str(path)},
        ))

    try:
        index = create_index(_load(args))
        ids = asyncio.run(index.add(args.collection, documents))
    except _HANDLED as exc:
        _fail(str(exc))

    print(f"Indexed {len(ids)} documents into '{args.collection}' ({index.space})")


def cmd_search(args: argparse.Namespace) -> None:
    """Search a collection by semantic similarity."""
    from runtime.factory import create_index

    try:
        index = create_index(_load(args))
        results = asyncio.run(index.query(args.collection, args.query, top_k=args.top_k))
    except _HANDLED as exc:
        _fail(str(exc))

    if not results:
        print("No matching documents.")
        return

    for r in results:
        if args.json:
            print(r.model_dump_json())
        else:
            snippet = " ".join(r.text.split())[:60]
            print(f"{r.score:.4f}  {r.id}  {snippet}")


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="podembed",
        description="podembed — RunPod embeddings for local vector stores",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Override the config file's logging level",
    )
    sub = parser.add_subparsers(dest="command")

    def add_config(p: argparse.ArgumentParser) -> None:
        p.add_argument(
            "--config", "-c", default="podembed.yaml", help="Path to config"
        )

    # validate
    p_val = sub.add_parser("validate", help="Validate a podembed.yaml config")
    p_val.add_argument(
        "config", nargs="?", default="podembed.yaml", help="Path to config"
    )
    p_val.set_defaults(func=cmd_validate)

    # embed
    p_emb = sub.add_parser("embed", help="Embed texts and print vectors")
    add_config(p_emb)
    p_emb.add_argument("texts", nargs="+", help="Texts to embed")
    p_emb.set_defaults(func=cmd_embed)

    # spaces
    p_sp = sub.add_parser("spaces", help="Show supported similarity spaces")
    add_config(p_sp)
    p_sp.set_defaults(func=cmd_spaces)

    # index
    p_idx = sub.add_parser("index", help="Embed files into a collection")
    add_config(p_idx)
    p_idx.add_argument("--collection", required=True, help="Collection name")
    p_idx.add_argument("files", nargs="+", help="Text files to index")
    p_idx.set_defaults(func=cmd_index)

    # search
    p_srch = sub.add_parser("search", help="Search a collection")
    add_config(p_srch)
    p_srch.add_argument("--collection", required=True, help="Collection name")
    p_srch.add_argument("--top-k", "-k", type=int, default=None, help="Max results")
    p_srch.add_argument("--json", action="store_true", help="Output raw JSON")
    p_srch.add_argument("query", help="Query text")
    p_srch.set_defaults(func=cmd_search)

    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        sys.exit(1)

    logging.basicConfig(
        level=args.log_level or "INFO",
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    args.func(args)


if __name__ == "__main__":
    main()
