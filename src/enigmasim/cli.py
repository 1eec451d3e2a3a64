from __future__ import annotations

import sys
from contextlib import nullcontext
from pathlib import Path
from typing import NoReturn, Optional

import typer

from enigmasim.core.errors import EnigmaError
from enigmasim.core.machine import Machine
from enigmasim.core.specs import MachineSpec
from enigmasim.core.trace import Tracer, configure_logging
from enigmasim.core.utils import group_blocks
from enigmasim.settings import load_default_config, process_stream, read_config
from enigmasim.settings.setting_line import apply_setting_line

app = typer.Typer(help="enigmasim: rotor cipher machine simulator.")


def _fail(message: str) -> NoReturn:
    typer.echo(f"Error: {message}", err=True)
    raise typer.Exit(code=1)


def _load_spec(config: Optional[Path]) -> MachineSpec:
    return read_config(config) if config is not None else load_default_config()


def _build(spec: MachineSpec, verbose: bool) -> Machine:
    tracer = Tracer()
    if verbose:
        configure_logging(True)
        tracer.enable("encipher")
    return spec.build(tracer=tracer)


@app.command()
def run(
    config: Path = typer.Argument(..., help="Machine configuration file."),
    messages: Optional[Path] = typer.Argument(None, metavar="INPUT", help="Messages to process (default: stdin)."),
    results: Optional[Path] = typer.Argument(None, metavar="OUTPUT", help="Where to write results (default: stdout)."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Trace every character to stderr."),
):
    """Process setting lines and messages, printing results in groups of five."""
    try:
        machine = _build(read_config(config), verbose)
        src = messages.open(encoding="utf-8") if messages is not None else nullcontext(sys.stdin)
        with src as infile:
            dst = results.open("w", encoding="utf-8") if results is not None else nullcontext(sys.stdout)
            with dst as outfile:
                process_stream(machine, infile, outfile)
    except OSError as e:
        _fail(f"could not open {e.filename}")
    except UnicodeDecodeError as e:
        _fail(f"input is not valid UTF-8 ({e.reason})")
    except EnigmaError as e:
        _fail(str(e))


@app.command()
def encode(
    text: str = typer.Argument(..., help="Message to encode or decode."),
    rotors: str = typer.Option(..., "--rotors", "-r", help='Rotor names, reflector first (e.g. "B Beta I II III").'),
    position: str = typer.Option(..., "--position", "-p", help="Initial window letters (e.g. AAAA)."),
    ring: Optional[str] = typer.Option(None, "--ring", help="Ring settings, one letter per rotor."),
    plugboard: str = typer.Option("", "--plugboard", help='Plugboard swaps, e.g. "(AB) (CD)".'),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Configuration file (default: built-in)."),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
):
    """Encode TEXT once with the given setup (the same call decodes)."""
    line = " ".join(part for part in ("*", rotors, position, ring or "", plugboard) if part)
    try:
        machine = _build(_load_spec(config), verbose)
        apply_setting_line(machine, line)
        typer.echo(group_blocks(machine.convert(text)))
    except EnigmaError as e:
        _fail(str(e))


@app.command("rotors")
def list_rotors(
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Configuration file (default: built-in)."),
):
    """List the rotors available in a configuration."""
    try:
        spec = _load_spec(config)
    except EnigmaError as e:
        _fail(str(e))

    typer.echo(f"alphabet: {spec.alphabet}  slots={spec.num_rotors}  pawls={spec.num_pawls}")
    kinds = {"M": "moving", "N": "fixed", "R": "reflector"}
    for r in spec.rotors:
        notes = f" notches={r.notches}" if r.notches else ""
        typer.echo(f"  {r.name:<6} {kinds[r.kind[0]]:<9}{notes}  {r.cycles}")


def main():
    app()


if __name__ == "__main__":
    main()
