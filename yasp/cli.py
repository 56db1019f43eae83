"""Command-line interface for yasp using Typer.

Decodes one audio clip and writes its time-aligned word/phoneme transcript:

    yasp -a goforward.raw -t goforward.txt -o goforward.json

Without ``--transcript`` the words are first recognized freely and written
to ``--genpath``; without ``--output`` the transcript is printed to stdout.
"""

from __future__ import annotations

import logging
import pathlib
from typing import Annotated

import typer

from yasp import __version__
from yasp.config import EngineConfig, OutputConfig, UIConfig
from yasp.exceptions import YaspError
from yasp.formatting import FORMATTERS, format_for_path, get_formatter
from yasp.interpret import interpret
from yasp.utils.constant import DEFAULT_HYPOTHESIS_PATH, DEFAULT_LOG_FILE
from yasp.utils.logging_config import configure_logging, setup_log_files

# Placeholder for the engine factory; enables monkeypatching in tests.
ENGINE_FACTORY = None  # type: ignore[assignment]

logger = logging.getLogger("yasp.cli")


def version_callback(value: bool) -> None:
    """Show the application's version and exit.

    Args:
        value: When True, print the version and exit.

    Raises:
        typer.Exit: Always raised after printing when value is True.

    """
    if value:
        print(f"yasp version: {__version__}")
        raise typer.Exit()


def _validate_format(value: str | None) -> str | None:
    if value is None:
        return None
    if value.lower() not in FORMATTERS:
        raise typer.BadParameter(f"choose one of: {', '.join(FORMATTERS)}")
    return value.lower()


app = typer.Typer(
    name="yasp",
    help="Time-align the words and phonemes of a speech clip with PocketSphinx.",
    add_completion=False,
)


@app.command()
def main(
    audio: Annotated[
        pathlib.Path,
        typer.Option(
            "--audio",
            "-a",
            help="Raw 16-bit PCM (or WAV) audio file to interpret.",
            dir_okay=False,
            show_default=False,
        ),
    ],
    transcript: Annotated[
        pathlib.Path | None,
        typer.Option(
            "--transcript",
            "-t",
            help="Plain-text transcript of the clip. Recognized automatically if omitted.",
            dir_okay=False,
        ),
    ] = None,
    output: Annotated[
        pathlib.Path | None,
        typer.Option(
            "--output",
            "-o",
            help="File to write the transcript to. Printed to stdout if omitted.",
            dir_okay=False,
        ),
    ] = None,
    genpath: Annotated[
        pathlib.Path,
        typer.Option(
            "--genpath",
            "-g",
            help="Where to write the transcript synthesized when --transcript is omitted.",
            dir_okay=False,
        ),
    ] = pathlib.Path(DEFAULT_HYPOTHESIS_PATH),
    logfile: Annotated[
        pathlib.Path,
        typer.Option(
            "--logfile",
            "-l",
            help="Base path of the info log; errors go to <logfile>_err.",
            dir_okay=False,
        ),
    ] = pathlib.Path(DEFAULT_LOG_FILE),
    modeldir: Annotated[
        pathlib.Path | None,
        typer.Option(
            "--modeldir",
            "-m",
            help="Directory containing the acoustic model, language model and dictionary.",
            file_okay=False,
        ),
    ] = None,
    output_format: Annotated[
        str | None,
        typer.Option(
            "--format",
            help="Output format (json or txt). Taken from the --output suffix if omitted.",
            callback=_validate_format,
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Enable verbose output."),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", help="Suppress console messages except errors."),
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            help="Show the application's version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
) -> None:
    """Interpret a speech clip into words and phonemes with frame timings.

    Raises:
        typer.Exit: With code 1 when interpretation fails.

    """
    ui = UIConfig(verbose=verbose, quiet=quiet, logfile=logfile)
    if output_format is None:
        output_format = (format_for_path(output) if output else None) or "json"
    out = OutputConfig(output=output, output_format=output_format, hypothesis_path=genpath)
    engine_config = EngineConfig(model_dir=modeldir) if modeldir else EngineConfig()

    configure_logging(verbose=ui.verbose, quiet=ui.quiet)

    with setup_log_files(ui.logfile):
        try:
            nested = interpret(
                audio,
                transcript,
                out.output,
                output_format=out.output_format,
                config=engine_config,
                hypothesis_path=out.hypothesis_path,
                engine_factory=ENGINE_FACTORY,
                logger=logger,
            )
        except YaspError as exc:
            logger.error("Failed to interpret audio file %s: %s", audio, exc)
            raise typer.Exit(code=1) from exc

    if out.output is None:
        typer.echo(get_formatter(out.output_format)(nested), nl=False)
    elif not ui.quiet:
        typer.secho(f"Wrote {out.output}", fg=typer.colors.GREEN, err=True)
