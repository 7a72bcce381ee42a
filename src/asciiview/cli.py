import argparse
import os
import sys
from pathlib import Path

import yaml
from loguru import logger
from pydantic import ValidationError

from asciiview.charsets import RAMPS
from asciiview.config import ConverterConfig
from asciiview.converter import convert, convert_for_terminal

# Used when stdout is not a terminal
FALLBACK_TERMINAL_SIZE = (80, 24)


def _terminal_size() -> tuple[int, int]:
    if not sys.stdout.isatty():
        return FALLBACK_TERMINAL_SIZE
    try:
        size = os.get_terminal_size()
    except OSError:
        return FALLBACK_TERMINAL_SIZE
    return size.columns, size.lines


def _load_config(args: argparse.Namespace) -> ConverterConfig:
    config = ConverterConfig.from_yaml(args.config) if args.config else ConverterConfig()
    overrides = {}
    if args.ramp is not None:
        overrides["ramp"] = RAMPS[args.ramp]
    if args.steepness is not None:
        overrides["steepness"] = args.steepness
    if overrides:
        config = ConverterConfig.model_validate({**config.model_dump(), **overrides})
    return config


def main():
    parser = argparse.ArgumentParser(description="Render an image as text art sized to the terminal")
    parser.add_argument("image", help="Path to input image, or - to read from stdin")
    parser.add_argument("-W", "--width", type=int, default=None, help="Maximum width in columns (default: terminal)")
    parser.add_argument("-H", "--height", type=int, default=None, help="Maximum height in rows (default: terminal)")
    parser.add_argument(
        "-n", "--name", default=None, help="Filename hint used to recognise the image (default: the image path)"
    )
    parser.add_argument("-r", "--ramp", default=None, choices=sorted(RAMPS), help="Glyph ramp (default: default)")
    parser.add_argument(
        "-s",
        "--steepness",
        type=float,
        default=None,
        help="Contrast curve steepness (default: 6.0). Higher values push mid-tones to black or white.",
    )
    parser.add_argument("-c", "--config", default=None, help="YAML file with an 'asciiview' section")
    parser.add_argument("-v", "--verbose", action="store_true", default=False, help="Log planning details to stderr")
    args = parser.parse_args()

    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if args.verbose else "WARNING")

    try:
        config = _load_config(args)
    except (OSError, KeyError, ValueError, ValidationError, yaml.YAMLError) as ex:
        print(f"Invalid configuration: {ex}", file=sys.stderr)
        sys.exit(1)

    if args.image == "-":
        data = sys.stdin.buffer.read()
        name = args.name
    else:
        image_path = Path(args.image)
        if not image_path.exists():
            print(f"File not found: {image_path}", file=sys.stderr)
            sys.exit(1)
        data = image_path.read_bytes()
        name = args.name or image_path.name

    columns, rows = _terminal_size()
    if args.width is None and args.height is None:
        text, was_image = convert_for_terminal(data, name, columns, rows, config)
    else:
        width = args.width if args.width is not None else columns - config.margin_columns
        height = args.height if args.height is not None else rows - config.margin_rows
        text, was_image = convert(data, name, width, height, config=config)

    if not was_image:
        print(text or f"Not an image: {name or args.image}", file=sys.stderr)
        sys.exit(1)
    sys.stdout.write(text)
