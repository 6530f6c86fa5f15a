"""Core Typer application and logging bootstrap for the bfxconn CLI package."""

from __future__ import annotations

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Any

import typer

from bfxconn.config import settings

from .help_text import VERBOSE_COMMAND_HELP, VERBOSE_GLOBAL_OVERVIEW


class CLIApp(typer.Typer):
    """Custom Typer application that prints usage on bad invocation."""

    # ------------------------------------------------------------------
    def _unique_commands(self) -> dict[str, dict[str, Any]]:
        """Return mapping of canonical command names to command/aliases."""

        mapping: dict[str, dict[str, Any]] = {}
        for info in self.registered_commands:
            name = info.name or info.callback.__name__.replace("_", "-")
            canonical = name.replace("_", ":")
            entry = mapping.setdefault(
                canonical, {"callback": info.callback, "aliases": []}
            )
            entry["aliases"].append(name)
        return mapping

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        """Run the CLI, handling verbose help and bad input before Typer."""

        argv = list(kwargs.get("args") or sys.argv[1:])
        if "--help-verbose" in argv:
            idx = argv.index("--help-verbose")
            target = None
            if idx > 0:
                for cname, info in self._unique_commands().items():
                    if argv[0] == cname or argv[0] in info["aliases"]:
                        target = cname
                        break
            self._print_verbose_help(target)
            raise SystemExit(0)

        known = {a for info in self._unique_commands().values() for a in info["aliases"]}
        if not argv or (not argv[0].startswith("-") and argv[0] not in known):
            typer.echo("Usage: bfxconn [COMMAND]")
            typer.echo("Commands:")
            for cname in sorted(self._unique_commands()):
                typer.echo(f"  {cname}")
            raise SystemExit(0 if not argv else 1)
        return super().__call__(*args, **kwargs)

    # ------------------------------------------------------------------
    def _print_verbose_help(self, command: str | None = None) -> None:
        """Print detailed command reference with optional command filtering."""

        typer.echo(VERBOSE_GLOBAL_OVERVIEW.strip())
        typer.echo()

        if command:
            text = VERBOSE_COMMAND_HELP.get(command)
            if text:
                typer.echo(text.rstrip())
            else:
                typer.echo(f"No verbose help available for '{command}'.")
            return

        for cname, info in sorted(self._unique_commands().items()):
            text = VERBOSE_COMMAND_HELP.get(cname)
            if not text:
                continue
            typer.echo(text.rstrip())
            aliases = [
                alias.replace("_", ":")
                for alias in info["aliases"]
                if alias.replace("_", ":") != cname
            ]
            if aliases:
                typer.echo(f"  Aliases: {', '.join(sorted(set(aliases)))}")
            typer.echo()


app = CLIApp(add_completion=False)
log = logging.getLogger("bfxconn")


def _configure_logging() -> None:
    """Attach console and optional rotating file handlers once."""

    if getattr(log, "_configured", False):
        return
    level = getattr(logging, str(settings.log_level).upper(), logging.INFO)
    log.setLevel(level)
    log.propagate = False
    formatter = logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
    ch = logging.StreamHandler()
    ch.setLevel(level)
    ch.setFormatter(formatter)
    log.addHandler(ch)
    log_path = settings.log_file
    if log_path:
        try:
            directory = os.path.dirname(log_path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            fh = RotatingFileHandler(
                log_path,
                maxBytes=settings.log_max_bytes,
                backupCount=settings.log_backup_count,
            )
        except OSError as exc:
            log.warning("file logging disabled (%s): %s", log_path, exc)
        else:
            fh.setLevel(level)
            fh.setFormatter(formatter)
            log.addHandler(fh)
    setattr(log, "_configured", True)


@app.callback()
def _main() -> None:
    """Bitfinex connector command line."""

    _configure_logging()


__all__ = ["CLIApp", "app", "log"]
