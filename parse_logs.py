#!/usr/bin/env python3
"""
CLI tool for extracting fields from nginx access logs.

Usage:
    python parse_logs.py --preset combined --in access.log --out fields.csv
"""

import click
import csv
import logging
import sys
import os
from pathlib import Path
from typing import List, Optional

from tqdm import tqdm

# Add the package to Python path
sys.path.insert(0, os.path.dirname(__file__))

from logformat import Format, FormatParserError, PRESET_FORMATS
from logformat.io_utils import (
    JSONLWriter, ParseReport, count_lines, iter_log_lines, parsed_line
)

logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
    )


def _lines(input_file: str, sample_lines: Optional[int], progress: bool):
    lines = iter_log_lines(input_file, limit=sample_lines)
    if progress:
        total = count_lines(input_file)
        if sample_lines is not None:
            total = min(total, sample_lines)
        lines = tqdm(lines, total=total, desc="Parsing", unit="lines")
    return lines


@click.command()
@click.option('--format', '-f', 'template',
              envvar='LOGFORMAT_TEMPLATE',
              help='nginx log_format template, e.g. \'$remote_addr [$time_local] "$request"\'')
@click.option('--preset', '-p',
              type=click.Choice(sorted(PRESET_FORMATS)),
              default='combined',
              help='Predefined nginx format used when --format is not given (default: combined)')
@click.option('--input', '--in', 'input_file',
              required=True,
              type=click.Path(exists=True, dir_okay=False),
              help='Input access log file')
@click.option('--output', '--out', 'output_file',
              type=click.Path(dir_okay=False),
              help='Output file for parsed fields')
@click.option('--output-format',
              type=click.Choice(['csv', 'jsonl', 'summary']),
              default='csv',
              help='Output format (default: csv)')
@click.option('--fields',
              help='Comma separated fields to output (default: all fields of the format)')
@click.option('--sample-lines',
              type=click.IntRange(min=0),
              help='Process only first N lines (for testing)')
@click.option('--progress',
              is_flag=True,
              help='Show a progress bar')
@click.option('--verbose', '-v',
              is_flag=True,
              help='Enable verbose output')
def parse_logs(template: Optional[str],
               preset: str,
               input_file: str,
               output_file: Optional[str],
               output_format: str,
               fields: Optional[str],
               sample_lines: Optional[int],
               progress: bool,
               verbose: bool):
    """
    Extract named fields from access log lines.

    Every line of the input file is matched against a log format. Lines
    that fit are written with their field values; lines that do not fit
    are counted and reported, they never stop the run.

    Examples:

    \b
    # Parse an access log written with nginx's combined format
    python parse_logs.py --in access.log --out fields.csv

    \b
    # Custom format, JSONL output with selected fields
    python parse_logs.py -f '$remote_addr [$time_local] "$request" $status' \\
        --in access.log --out fields.jsonl --output-format jsonl \\
        --fields remote_addr,status
    """
    _configure_logging(verbose)

    try:
        log_format = Format(template) if template else Format.preset(preset)
    except FormatParserError as e:
        click.echo(f"Error: invalid log format: {e}", err=True)
        sys.exit(1)

    selected = _selected_fields(log_format, fields)

    if verbose:
        click.echo(f"Log format: {log_format}")
        click.echo(f"Pattern: {log_format.pattern}")
        click.echo(f"Fields: {', '.join(selected)}")

    report = ParseReport()
    lines = _lines(input_file, sample_lines, progress)

    output_path = None
    if output_file:
        output_path = Path(output_file)
        output_path.parent.mkdir(parents=True, exist_ok=True)

    if output_path is None:
        _process_lines_echo(lines, log_format, report)
    elif output_format == 'csv':
        _process_lines_csv(lines, log_format, report, output_path, selected)
    elif output_format == 'jsonl':
        _process_lines_jsonl(lines, log_format, report, output_path, selected)
    else:
        _process_lines_summary(lines, log_format, report, output_path, input_file)

    summary = report.get_summary()
    click.echo("Parsing completed")
    click.echo(f"   Total lines processed: {summary['total_lines']}")
    click.echo(f"   Matched lines: {summary['matched_lines']}")
    click.echo(f"   Match rate: {summary['match_rate']:.1f}%")
    if output_path is not None:
        click.echo(f"   Output file: {output_path.absolute()}")

    if verbose and summary['unmatched_lines'] > 0:
        click.echo("Sample unmatched lines:")
        for line_number, sample in summary['unmatched_samples'][:5]:
            click.echo(f"   {line_number}: {sample}")


def _selected_fields(log_format: Format, fields: Optional[str]) -> List[str]:
    if not fields:
        return log_format.field_names

    selected = [name.strip() for name in fields.split(',') if name.strip()]
    unknown = [name for name in selected if name not in log_format.field_names]
    if unknown:
        raise click.BadParameter(
            f"not fields of the format: {', '.join(unknown)}", param_hint='--fields'
        )
    return selected


def _process_lines_echo(lines, log_format: Format, report: ParseReport):
    """Print ``request from remote_addr`` for every matched line."""
    for line_number, line in lines:
        entry = log_format.parse(line)
        if entry is None:
            report.add_no_match(line_number, line)
            click.echo(f"error parsing line: {line}", err=True)
            continue

        report.add_match(entry)
        request = entry.get('request')
        remote_addr = entry.get('remote_addr')
        if request is not None and remote_addr is not None:
            click.echo(f"{request} from {remote_addr}")
        else:
            click.echo(" ".join(f"{k}={v}" for k, v in entry.as_dict().items()))


def _process_lines_csv(lines, log_format: Format, report: ParseReport,
                       output_path: Path, selected: List[str]):
    """Process lines and write CSV output."""

    with open(output_path, 'w', newline='', encoding='utf-8') as outfile:
        writer = csv.writer(outfile)
        writer.writerow(['line_number', 'matched'] + selected)

        for line_number, line in lines:
            entry = log_format.parse(line)
            if entry is None:
                report.add_no_match(line_number, line)
                writer.writerow([line_number, 'false'] + [''] * len(selected))
                continue

            report.add_match(entry)
            writer.writerow(
                [line_number, 'true'] + [entry.get(name) or '' for name in selected]
            )


def _process_lines_jsonl(lines, log_format: Format, report: ParseReport,
                         output_path: Path, selected: List[str]):
    """Process lines and write JSONL output."""

    with JSONLWriter(str(output_path)) as writer:
        for line_number, line in lines:
            entry = log_format.parse(line)
            if entry is None:
                report.add_no_match(line_number, line)
            else:
                report.add_match(entry)
            writer.write_record(parsed_line(line_number, line, entry, selected))


def _process_lines_summary(lines, log_format: Format, report: ParseReport,
                           output_path: Path, input_file: str):
    """Process lines and write a summary report."""

    for line_number, line in lines:
        entry = log_format.parse(line)
        if entry is None:
            report.add_no_match(line_number, line)
        else:
            report.add_match(entry)

    summary = report.get_summary()

    with open(output_path, 'w', encoding='utf-8') as outfile:
        outfile.write("ACCESS LOG PARSING SUMMARY REPORT\n")
        outfile.write("=" * 50 + "\n\n")

        outfile.write(f"Input file: {input_file}\n")
        outfile.write(f"Log format: {log_format}\n")
        outfile.write(f"Total lines processed: {summary['total_lines']}\n")
        outfile.write(f"Matched lines: {summary['matched_lines']}\n")
        outfile.write(f"Unmatched lines: {summary['unmatched_lines']}\n")
        outfile.write(f"Match rate: {summary['match_rate']:.1f}%\n\n")

        for name, counts in summary['field_distribution'].items():
            outfile.write(f"{name.upper()} DISTRIBUTION:\n")
            outfile.write("-" * 25 + "\n")
            for value, count in counts.items():
                percentage = (count / summary['matched_lines']) * 100 if summary['matched_lines'] > 0 else 0
                outfile.write(f"{value:8}: {count:8} ({percentage:5.1f}%)\n")
            outfile.write("\n")

        if summary['unmatched_samples']:
            outfile.write("SAMPLE UNMATCHED LINES:\n")
            outfile.write("-" * 25 + "\n")
            for line_number, sample in summary['unmatched_samples']:
                outfile.write(f"{line_number:6}. {sample}\n")


if __name__ == '__main__':
    parse_logs()
