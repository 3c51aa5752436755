"""Command-line interface for pcmwave."""

from __future__ import annotations

import json
import logging
from typing import Optional, TextIO

import click

from pcmwave.config import get_format_defaults
from pcmwave.errors import PcmWaveError
from pcmwave.header import HEADER_SIZE, SUPPORTED_BIT_DEPTHS, WaveHeader, data_size
from pcmwave.logging_utils import configure_logging
from pcmwave.synth import WAVEFORMS, tone as make_tone
from pcmwave.wave_file import WaveEncoder


logger = logging.getLogger(__name__)


def _build_encoder(
    channels: Optional[int],
    sample_rate: Optional[int],
    bits: Optional[int],
    *,
    strict: bool = False,
) -> WaveEncoder:
    try:
        defaults = get_format_defaults()
        return WaveEncoder(
            channels if channels is not None else defaults.num_channels,
            sample_rate if sample_rate is not None else defaults.sample_rate,
            bits if bits is not None else defaults.bits_per_sample,
            strict=strict,
        )
    except (PcmWaveError, ValueError, TypeError) as e:
        raise click.ClickException(str(e)) from e


def _save(encoder: WaveEncoder, output: str) -> None:
    try:
        if output == "-":
            encoder.save(click.get_binary_stream("stdout"))
        else:
            encoder.save(output)
    except (PcmWaveError, ValueError) as e:
        raise click.ClickException(str(e)) from e
    if output != "-":
        click.echo(
            f"Wrote {output}: {encoder.sample_count} samples, "
            f"{HEADER_SIZE + encoder.data_size} bytes",
            err=True,
        )


def _format_options(func):
    func = click.option(
        "--bits",
        type=click.Choice([str(b) for b in SUPPORTED_BIT_DEPTHS]),
        callback=lambda _ctx, _param, value: int(value) if value is not None else None,
        help="Bits per sample (default: PCMWAVE_BITS_PER_SAMPLE or 16).",
    )(func)
    func = click.option(
        "--sample-rate",
        type=click.IntRange(min=1),
        help="Samples per second (default: PCMWAVE_SAMPLE_RATE or 44100).",
    )(func)
    func = click.option(
        "--channels",
        type=click.IntRange(min=1),
        help="Channel count (default: PCMWAVE_CHANNELS or 1).",
    )(func)
    return func


@click.group()
@click.option("-v", "--verbose", count=True, help="More log output (-vv for debug).")
@click.option("--debug", is_flag=True, help="Same as -vv.")
@click.option("-q", "--quiet", is_flag=True, help="Only log errors.")
def main(verbose: int, debug: bool, quiet: bool) -> None:
    """pcmwave - encode normalized samples as PCM WAVE files."""
    configure_logging(verbosity=2 if debug else verbose, quiet=quiet)


@main.command()
@click.argument("output")
@click.option("--frequency", type=float, default=440.0, show_default=True, help="Tone frequency in Hz.")
@click.option("--duration", type=click.FloatRange(min=0.0), default=1.0, show_default=True, help="Length in seconds.")
@click.option("--amplitude", type=float, default=1.0, show_default=True, help="Peak amplitude (normalized).")
@click.option("--waveform", type=click.Choice(list(WAVEFORMS)), default="sine", show_default=True)
@click.option("--strict", is_flag=True, help="Fail on samples outside [-1.0, 1.0] instead of wrapping.")
@_format_options
def tone(
    output: str,
    frequency: float,
    duration: float,
    amplitude: float,
    waveform: str,
    strict: bool,
    channels: Optional[int],
    sample_rate: Optional[int],
    bits: Optional[int],
) -> None:
    """Render a test tone to OUTPUT ("-" for stdout)."""
    encoder = _build_encoder(channels, sample_rate, bits, strict=strict)
    encoder.samples = make_tone(
        frequency,
        duration,
        sample_rate=encoder.sample_rate,
        amplitude=amplitude,
        waveform=waveform,
    )
    logger.debug("Rendered %s tone: %s", waveform, encoder)
    _save(encoder, output)


def _read_samples(stream: TextIO) -> list[float]:
    samples: list[float] = []
    for lineno, raw in enumerate(stream, start=1):
        line = raw.split("#", 1)[0].strip()
        if not line:
            continue
        try:
            samples.append(float(line))
        except ValueError:
            raise click.ClickException(f"line {lineno}: not a number: {line!r}") from None
    return samples


@main.command()
@click.argument("output")
@click.option(
    "--input",
    "input_file",
    type=click.File("r"),
    default="-",
    show_default=True,
    help="Text file with one normalized sample per line.",
)
@click.option("--strict", is_flag=True, help="Fail on samples outside [-1.0, 1.0] instead of wrapping.")
@_format_options
def encode(
    output: str,
    input_file: TextIO,
    strict: bool,
    channels: Optional[int],
    sample_rate: Optional[int],
    bits: Optional[int],
) -> None:
    """Encode samples read from text into OUTPUT ("-" for stdout)."""
    encoder = _build_encoder(channels, sample_rate, bits, strict=strict)
    encoder.samples = _read_samples(input_file)
    _save(encoder, output)


@main.command()
@click.option("--samples", "sample_count", type=click.IntRange(min=0), default=0, show_default=True)
@click.option("--json", "as_json", is_flag=True, help="Print JSON.")
@_format_options
def info(
    sample_count: int,
    as_json: bool,
    channels: Optional[int],
    sample_rate: Optional[int],
    bits: Optional[int],
) -> None:
    """Show the header fields for a format and sample count."""
    encoder = _build_encoder(channels, sample_rate, bits)
    head = WaveHeader(
        num_channels=encoder.num_channels,
        sample_rate=encoder.sample_rate,
        bits_per_sample=encoder.bits_per_sample,
        data_size=data_size(
            sample_count=sample_count,
            num_channels=encoder.num_channels,
            bits_per_sample=encoder.bits_per_sample,
        ),
    )
    try:
        head.validate()
    except PcmWaveError as e:
        raise click.ClickException(str(e)) from e
    fields = head.to_dict()
    fields["file_size"] = HEADER_SIZE + head.data_size
    if as_json:
        click.echo(json.dumps(fields, indent=2))
        return
    for key, value in fields.items():
        click.echo(f"{key}: {value}")


if __name__ == "__main__":
    main()
