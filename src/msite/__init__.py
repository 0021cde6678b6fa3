"""msite: A single DNA methylation site record and its text line format.

msite models one methylation site: a position in a reference genome with
its strand, sequence context (CpG, CHH, CCG, CXG) and the read-level
methylation observed there. Sites are read from and written to
six-column, whitespace-delimited text lines.

Main Components:
    MSite: The site record, with derived counts (n_meth, n_umeth), context
        checks, CpG mate detection, read merging (add) and the mutation flag.
    parse_site: Parse a text line into an MSite.
    format_site: Render an MSite as a tab-separated text line.

Example:
    Python API usage::

        from msite import MSite, parse_site

        plus = parse_site("chr1\\t100\\t+\\tCpG\\t0.5\\t10")
        minus = MSite.from_line("chr1 101 - CpG 0.5 4")

        if plus.is_mate_of(minus):
            plus.add(minus)

        print(plus)  # chr1  100  +  CpG  0.5  14

Line Format:
    chrom  pos  strand  context  meth  n_reads
    - pos and n_reads are unsigned 64-bit integers (pos is 0-based)
    - meth is in [0, 1] and is written rounded to 6 decimal digits
    - a context ending in "x" marks a mutated site
"""

import logging

from msite.errors import (
    InvalidNumberError,
    InvalidStrandError,
    MissingFieldError,
    OutOfRangeError,
    ParseError,
)
from msite.site import MUTATION_SENTINEL, MSite, format_site, parse_site

__all__ = [
    "MSite",
    "parse_site",
    "format_site",
    "MUTATION_SENTINEL",
    "ParseError",
    "MissingFieldError",
    "InvalidNumberError",
    "InvalidStrandError",
    "OutOfRangeError",
    "__version__",
]

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())
