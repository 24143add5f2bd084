"""Terminal output for the skyfetch CLI.

Everything a command prints goes through one :class:`OutputManager`:

* image records, catalog tables and raw NASA feeds go to **stdout**, so
  ``skyfetch --json catalog comets | jq`` sees nothing else;
* fallback notices, retry diagnostics and errors go to **stderr**.

The format comes from ``--json`` / ``--plain``; without either it is rich
on an interactive terminal and plain when piped. ``NO_COLOR``,
``TERM=dumb`` and ``--no-color`` turn colour off.

:func:`~skyfetch.app.main_callback` installs the manager with
:func:`set_output`. Library code such as the request pipelines reaches it
through :func:`get_output` and only ever calls :meth:`OutputManager.debug`,
so a failed attempt and its backoff delay show up with ``--verbose`` and
stay silent otherwise.
"""

from __future__ import annotations

import json
import os
import sys
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel
from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table


class OutputFormat(str, Enum):
    """How stdout data is rendered. ``AUTO`` picks ``RICH`` or ``PLAIN``."""

    AUTO = "auto"
    JSON = "json"
    PLAIN = "plain"
    RICH = "rich"


class OutputManager:
    """Routes command data to stdout and diagnostics to stderr.

    Args:
        format: Output format for data. ``AUTO`` is resolved once, here.
        no_color: Disable colour and Rich markup on both streams.
        quiet: Drop ``info`` and ``success`` messages. Warnings and errors
            are always shown, so a fallback image is never silent.
        verbose: Show ``debug`` messages (cache hits, retry attempts).
        output_file: Write data to this path instead of stdout.
    """

    def __init__(
        self,
        format: OutputFormat = OutputFormat.AUTO,
        no_color: bool = False,
        quiet: bool = False,
        verbose: bool = False,
        output_file: Optional[str] = None,
    ) -> None:
        self._no_color = no_color or _should_disable_color()
        self._quiet = quiet
        self._verbose = verbose
        self._output_file = output_file

        if format == OutputFormat.AUTO:
            rich = _is_tty() and not self._no_color
            format = OutputFormat.RICH if rich else OutputFormat.PLAIN
        self._format = format

        self._stdout = Console(
            file=sys.stdout,
            no_color=self._no_color,
            force_terminal=(format == OutputFormat.RICH),
        )
        self._stderr = Console(file=sys.stderr, no_color=self._no_color, stderr=True)

    @property
    def format(self) -> OutputFormat:
        return self._format

    @property
    def is_quiet(self) -> bool:
        return self._quiet

    @property
    def is_verbose(self) -> bool:
        return self._verbose

    # ------------------------------------------------------------------ #
    # Data (stdout)
    # ------------------------------------------------------------------ #

    def format_response(self, data: Any) -> None:
        """Print one command result.

        *data* is a decoded feed, a formatted catalog list, or an
        :class:`~skyfetch.models.ImageResult` (alone, in a list or inside a
        dict). Models are dumped in JSON mode first, so enums and dates
        print as strings in every format.
        """
        data = _jsonable(data)
        if self._output_file:
            self._write_to_file(data)
        elif self._format == OutputFormat.JSON:
            self.print_data(_dumps(data))
        elif self._format == OutputFormat.PLAIN:
            self._print_plain(data)
        elif isinstance(data, (dict, list)):
            self._stdout.print(Syntax(_dumps(data), "json", theme="monokai", word_wrap=True))
        else:
            self._stdout.print(str(data))

    def print_records(
        self,
        records: list[dict[str, Any]],
        columns: list[str],
        title: Optional[str] = None,
    ) -> None:
        """Print catalog records as a table of *columns*.

        In JSON mode the whole records are printed instead, nested
        ``properties`` included; the table only holds headline fields.
        """
        if self._format == OutputFormat.JSON:
            self.format_response(records)
            return
        rows = [[str(record.get(column, "")) for column in columns] for record in records]
        self.print_table(columns, rows, title=title)

    def print_table(
        self,
        headers: list[str],
        rows: list[list[str]],
        title: Optional[str] = None,
    ) -> None:
        """Print rows as a Rich table, tab-separated lines, or JSON objects."""
        if self._format == OutputFormat.JSON:
            self.print_data(_dumps([dict(zip(headers, row)) for row in rows]))
        elif self._format == OutputFormat.PLAIN:
            for line in [headers, *rows]:
                self.print_data("\t".join(line))
        else:
            table = Table(title=title, show_header=True, header_style="bold cyan")
            for header in headers:
                table.add_column(header)
            for row in rows:
                table.add_row(*row)
            self._stdout.print(table)

    def print_data(self, text: str) -> None:
        """Print one line of data, appending to ``output_file`` when set."""
        if self._output_file:
            with open(self._output_file, "a", encoding="utf-8") as f:
                f.write(text if text.endswith("\n") else text + "\n")
        else:
            print(text, file=sys.stdout, flush=True)

    # ------------------------------------------------------------------ #
    # Diagnostics (stderr)
    # ------------------------------------------------------------------ #

    def info(self, message: str) -> None:
        if not self._quiet:
            self._emit(message, message)

    def success(self, message: str) -> None:
        if not self._quiet:
            self._emit(message, f"[green]{message}[/green]")

    def warning(self, message: str) -> None:
        self._emit(f"Warning: {message}", f"[yellow]Warning:[/yellow] {message}")

    def error(self, message: str) -> None:
        self._emit(f"Error: {message}", f"[bold red]Error:[/bold red] {message}")

    def debug(self, message: str) -> None:
        """Print a pipeline diagnostic. Shown only with ``--verbose``.

        Messages can carry URLs and cache keys with brackets, so they are
        escaped before Rich sees them.
        """
        if self._verbose:
            self._emit(f"[debug] {message}", f"[dim]\\[debug] {escape(message)}[/dim]")

    def _emit(self, text: str, markup: str) -> None:
        if self._no_color:
            print(text, file=sys.stderr, flush=True)
        else:
            self._stderr.print(markup)

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    def _print_plain(self, data: Any) -> None:
        # One line per key for a record, one line per record for a list.
        if isinstance(data, dict):
            for key, value in data.items():
                self.print_data(f"{key}\t{value}")
        elif isinstance(data, list):
            for item in data:
                if isinstance(item, dict):
                    self.print_data("\t".join(str(v) for v in item.values()))
                else:
                    self.print_data(str(item))
        else:
            self.print_data(str(data))

    def _write_to_file(self, data: Any) -> None:
        assert self._output_file is not None
        content = _dumps(data) if isinstance(data, (dict, list)) else str(data)
        with open(self._output_file, "w", encoding="utf-8") as f:
            f.write(content if content.endswith("\n") else content + "\n")


# ------------------------------------------------------------------ #
# Module-level helpers
# ------------------------------------------------------------------ #


def _jsonable(data: Any) -> Any:
    """Dump pydantic models found in *data*, at any depth."""
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json")
    if isinstance(data, dict):
        return {key: _jsonable(value) for key, value in data.items()}
    if isinstance(data, list):
        return [_jsonable(item) for item in data]
    return data


def _dumps(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False, default=str)


def _is_tty() -> bool:
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def _should_disable_color() -> bool:
    """True when ``NO_COLOR`` is set to anything or ``TERM`` is ``dumb``."""
    return os.environ.get("NO_COLOR") is not None or os.environ.get("TERM") == "dumb"


# ------------------------------------------------------------------ #
# Global instance
# ------------------------------------------------------------------ #

_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """Return the installed :class:`OutputManager`, creating a default one.

    The default matters outside the CLI: a :class:`~skyfetch.facade.SpaceDataClient`
    used as a library still logs its debug lines through it.
    """
    global _output
    if _output is None:
        _output = OutputManager()
    return _output


def set_output(output: OutputManager) -> None:
    global _output
    _output = output


def reset_output() -> None:
    """Forget the installed manager. Tests call this between cases."""
    global _output
    _output = None


# ------------------------------------------------------------------ #
# Shortcuts for command modules
# ------------------------------------------------------------------ #


def format_response(data: Any) -> None:
    get_output().format_response(data)


def print_records(
    records: list[dict[str, Any]],
    columns: list[str],
    title: Optional[str] = None,
) -> None:
    get_output().print_records(records, columns, title)


def print_table(
    headers: list[str],
    rows: list[list[str]],
    title: Optional[str] = None,
) -> None:
    get_output().print_table(headers, rows, title)


def info(message: str) -> None:
    get_output().info(message)


def error(message: str) -> None:
    get_output().error(message)


def success(message: str) -> None:
    get_output().success(message)


def warning(message: str) -> None:
    get_output().warning(message)


def debug(message: str) -> None:
    get_output().debug(message)
