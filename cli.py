"""CLI entry point for the document checksummer.

Commands
--------
- compute       Print the checksum of a file (content or metadata fields).
- show-config   Print the effective checksummer configuration.
"""

from __future__ import annotations

import json
import logging
import sys

import click

import config

# Set up logging early.
logging.basicConfig(
    level=getattr(logging, config.LOG_LEVEL, logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("cli")


@click.group()
def cli():
    """Document Checksummer -- CLI."""
    pass


def _load_config(config_path: str | None):
    """Config from --config if given, otherwise from the environment."""
    from utils.validation import ChecksummerConfig, load_config_file

    if config_path:
        return load_config_file(config_path)
    return ChecksummerConfig.from_env()


# ── compute ───────────────────────────────────────────────────────────────

@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--field", "-f", "fields", multiple=True, help="Metadata field to checksum (repeatable).")
@click.option("--meta", "meta_path", type=click.Path(exists=True, dir_okay=False),
              help="JSON file with the document metadata.")
@click.option("--set", "meta_pairs", multiple=True, metavar="NAME=VALUE",
              help="Add a metadata value (repeatable).")
@click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False),
              help="JSON checksummer config file.")
@click.option("--disabled", is_flag=True, help="Disable checksum creation.")
@click.option("--keep", is_flag=True, help="Store the checksum in the document metadata.")
@click.option("--target-field", help="Metadata field receiving the checksum.")
@click.option("--algorithm", help="Digest algorithm (default md5).")
def compute(
    path: str,
    fields: tuple[str, ...],
    meta_path: str | None,
    meta_pairs: tuple[str, ...],
    config_path: str | None,
    disabled: bool,
    keep: bool,
    target_field: str | None,
    algorithm: str | None,
):
    """Compute the checksum of the document at PATH."""
    from pydantic import ValidationError

    from checksum.checksummer import ChecksumError, DocumentChecksummer
    from checksum.document import Document, Metadata

    try:
        cfg = _load_config(config_path)
        if fields:
            cfg.source_fields = list(fields)
        if disabled:
            cfg.disabled = True
        if keep:
            cfg.keep = True
        if target_field:
            cfg.target_field = target_field
        if algorithm:
            cfg.algorithm = algorithm
    except (ValidationError, ValueError) as exc:
        click.echo(f"ERROR: invalid configuration: {exc}", err=True)
        sys.exit(2)

    metadata = _read_metadata(meta_path) if meta_path else Metadata()
    for name, value in _parse_pairs(meta_pairs):
        metadata.add_value(name, value)

    document = Document.from_path(path, metadata=metadata)
    checksummer = DocumentChecksummer(cfg)
    try:
        checksum = checksummer.create_document_checksum(document)
    except ChecksumError as exc:
        logger.exception("Checksum failed for %s", path)
        click.echo(f"ERROR: {exc}", err=True)
        sys.exit(1)

    click.echo(checksum if checksum is not None else "(none)")
    if cfg.keep:
        click.echo(json.dumps(document.metadata.to_dict(), indent=2, sort_keys=True))


def _read_metadata(meta_path: str):
    """Load a metadata JSON object (name -> value or list of values)."""
    from checksum.document import Metadata

    with open(meta_path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as exc:
            raise click.BadParameter(f"invalid JSON: {exc}", param_hint="--meta")
    if not isinstance(data, dict):
        raise click.BadParameter("metadata file must contain a JSON object", param_hint="--meta")
    return Metadata.from_dict(data)


def _parse_pairs(pairs: tuple[str, ...]) -> list[tuple[str, str]]:
    """Parse ``NAME=VALUE`` strings; the value may itself contain ``=``."""
    parsed = []
    for pair in pairs:
        name, sep, value = pair.partition("=")
        if not sep or not name.strip():
            raise click.BadParameter(f"expected NAME=VALUE, got {pair!r}", param_hint="--set")
        parsed.append((name.strip(), value))
    return parsed


# ── show-config ───────────────────────────────────────────────────────────

@cli.command("show-config")
@click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False),
              help="JSON checksummer config file.")
def show_config(config_path: str | None):
    """Print the effective checksummer configuration."""
    from pydantic import ValidationError

    try:
        cfg = _load_config(config_path)
    except (ValidationError, ValueError) as exc:
        click.echo(f"ERROR: invalid configuration: {exc}", err=True)
        sys.exit(2)
    click.echo(json.dumps(cfg.to_dict(), indent=2))


if __name__ == "__main__":
    cli()
