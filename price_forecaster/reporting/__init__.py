"""
CLI reporting helpers.

Modules
-------
formatters : ASCII tables and summaries for ``typer.echo()``.
export     : CSV / JSON file writers for engine outputs.
"""
