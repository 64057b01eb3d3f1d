"""
Reading points from CSV text and writing fitted centers.

The expected input has a header line, an identifier in the first column and
one coordinate per remaining column:

    id,x,y
    0,0.5,0.5
    1,1.5,0.5
"""

import csv
import io
from pathlib import Path
from typing import IO, Union
import torch
from torch import Tensor


Source = Union[str, Path, IO[str]]


def read_points(source: Source, skip_header: bool = True,
                skip_columns: int = 1) -> Tensor:
    """Parse points from a CSV file or text stream.

    Args:
        source: Path or open text stream
        skip_header: Whether the first line is a header
        skip_columns: Number of leading non-coordinate columns per row

    Returns:
        (n, M) float64 tensor

    Raises:
        ValueError: On rows of differing length, non-numeric values or
            an input without points
    """
    if isinstance(source, (str, Path)):
        with open(source, newline='') as handle:
            return read_points(handle, skip_header, skip_columns)

    rows = []
    width = None
    for line_number, row in enumerate(csv.reader(source), start=1):
        if skip_header and line_number == 1:
            continue
        if not row or all(not cell.strip() for cell in row):
            continue

        values = row[skip_columns:]
        if width is None:
            width = len(values)
            if width == 0:
                raise ValueError(f"Line {line_number}: no coordinate columns")
        elif len(values) != width:
            raise ValueError(f"Line {line_number}: expected {width} coordinates, "
                             f"got {len(values)}")

        try:
            rows.append([float(value) for value in values])
        except ValueError as error:
            raise ValueError(f"Line {line_number}: {error}") from error

    if not rows:
        raise ValueError("No points found in input")

    return torch.tensor(rows, dtype=torch.float64)


def write_centers(centers: Tensor, sink: IO[str]) -> None:
    """Write one center per line, coordinates separated by commas."""
    for center in centers.tolist():
        sink.write(','.join(repr(float(x)) for x in center) + '\n')


def format_centers(centers: Tensor) -> str:
    """Centers as the text `write_centers` would produce."""
    buffer = io.StringIO()
    write_centers(centers, buffer)
    return buffer.getvalue()
