# SPDX-License-Identifier: AGPL-3.0-or-later
"""Implementation of a command line for development purposes.  To inspect an
OpenSearch description downloaded from a site, run the package as a script::

   $ python -m osdd parse wikipedia.xml
   $ python -m osdd parse firefox_ebay.xml --exclude ebay
   $ python -m osdd expand wikipedia.xml "hello world"

"""

import pathlib
import typing as t

import msgspec
import typer

import osdd

app = typer.Typer()


class SubstringFilter:  # pylint: disable=too-few-public-methods
    """Drops parameters whose name or value contains one of the substrings."""

    def __init__(self, substrings: list[str]):
        self.substrings = [s for s in substrings if s]

    def __call__(self, name: str, value: str) -> bool:
        return not any(s in name or s in value for s in self.substrings)


def _load(file: pathlib.Path, exclude: list[str] | None) -> osdd.SearchEngine:
    try:
        return osdd.parse(file.read_bytes(), SubstringFilter(exclude) if exclude else None)
    except osdd.OsddParseException as exc:
        typer.echo(f"{file}: {type(exc).__name__}: {exc.message}", err=True)
        raise typer.Exit(code=1) from exc


@app.command()
def parse(
    file: pathlib.Path = typer.Argument(..., exists=True, dir_okay=False, help="OpenSearch description"),
    exclude: t.Optional[list[str]] = typer.Option(None, help="Drop parameters whose name or value contains this text."),
):
    """Print the search engine described in FILE as JSON."""
    engine = _load(file, exclude)
    typer.echo(msgspec.json.format(msgspec.json.encode(engine), indent=2).decode("utf-8"))


@app.command()
def expand(
    file: pathlib.Path = typer.Argument(..., exists=True, dir_okay=False, help="OpenSearch description"),
    terms: str = typer.Argument(..., help="Search terms"),
    exclude: t.Optional[list[str]] = typer.Option(None, help="Drop parameters whose name or value contains this text."),
    suggestions: bool = typer.Option(False, help="Expand the suggestion URL instead of the search URL."),
):
    """Print the URL of a search for TERMS."""
    engine = _load(file, exclude)
    url = engine.suggestions_url if suggestions else engine.search_url
    if url is None:
        typer.echo(f"{file}: no suggestion URL", err=True)
        raise typer.Exit(code=1)
    typer.echo(url.replace_search_terms(terms, input_encoding=engine.input_encoding))


if __name__ == "__main__":
    app()
