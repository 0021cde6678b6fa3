"""A single methylation site record and its text line format.

A site line holds six whitespace-separated fields:

    chrom  pos  strand  context  meth  n_reads

e.g. "chr1\t1000\t+\tCpG\t0.8\t10". Any run of spaces and tabs is accepted
as a separator on input; output always uses a single tab.
"""

import logging
import re
from dataclasses import dataclass, replace
from typing import Iterator

from msite.errors import (
    InvalidNumberError,
    InvalidStrandError,
    MissingFieldError,
    OutOfRangeError,
    ParseError,
)
from msite.rounding import UINT64_MAX, format_meth, scaled_count

logger = logging.getLogger(__name__)

# Appended to the context to flag a site whose cytosine carries a variant
MUTATION_SENTINEL = "x"
FIELD_SEPARATOR = "\t"

_UINT_PATTERN = re.compile(r"\+?[0-9]+", re.ASCII)
# Unicode White_Space; str.split() would also split on \x1c-\x1f
_SEPARATOR_PATTERN = re.compile(
    r"[\t\n\x0b\x0c\r \x85\xa0\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000]+"
)


@dataclass(order=True)
class MSite:
    """A methylation site: position, strand, context and read-level counts.

    Sites compare and sort by (chrom, pos, strand, context, meth, n_reads).
    Only add(), set_mutated() and set_unmutated() change a site after it is
    built. Fields set directly (or produced by add) are not re-validated.

    Attributes
    ----------
    chrom : str
        Chromosome or contig name, e.g. "chr1"
    pos : int
        0-based position on the chromosome.
    strand : str
        "+" or "-"
    context : str
        Sequence context, e.g. "CpG" or "CHH", with a trailing "x" if mutated.
    meth : float
        Fraction of reads that are methylated, in [0.0, 1.0].
    n_reads : int
        Number of reads covering the site.
    """

    chrom: str = ""
    pos: int = 0
    strand: str = "+"
    context: str = ""
    meth: float = 0.0
    n_reads: int = 0

    @classmethod
    def from_line(cls, line: str) -> "MSite":
        """Build a site from a text line. See parse_site()."""
        return parse_site(line)

    def to_line(self) -> str:
        """Render the site as a tab-separated text line. See format_site()."""
        return format_site(self)

    def __str__(self) -> str:
        return format_site(self)

    def copy(self) -> "MSite":
        """Return an independent copy of this site."""
        return replace(self)

    def n_meth(self) -> int:
        """Number of methylated reads, rounded half away from zero."""
        return scaled_count(self.n_reads, self.meth)

    def n_umeth(self) -> int:
        """Number of unmethylated reads."""
        return self.n_reads - self.n_meth()

    def is_cpg(self) -> bool:
        """Check if the context starts with "CpG"."""
        return self.context.startswith("CpG")

    def is_ccg(self) -> bool:
        """Check if the context starts with "CCG"."""
        return self.context.startswith("CCG")

    def is_cxg(self) -> bool:
        """Check if the context starts with "CXG"."""
        return self.context.startswith("CXG")

    def is_chh(self) -> bool:
        """Check if the context starts with "CHH"."""
        return self.context.startswith("CHH")

    def is_mate_of(self, other: "MSite") -> bool:
        """Check if other is the minus-strand half of this site's CpG.

        The plus-strand C at pos pairs with the minus-strand C at pos + 1.
        """
        return (
            self.pos + 1 == other.pos
            and self.is_cpg()
            and other.is_cpg()
            and self.strand == "+"
            and other.strand == "-"
        )

    def add(self, other: "MSite") -> None:
        """Merge the reads of another site at the same position into this one.

        The mutation flag is sticky: if other is mutated, so is this site
        afterwards. The other site is left unchanged.

        Args
        ----------
        other : MSite
            The site to merge in.
        """
        if not self.is_mutated() and other.is_mutated():
            self.set_mutated()

        # Both counts must be taken before n_reads changes
        total_meth_reads = self.n_meth() + other.n_meth()
        self.n_reads += other.n_reads
        self.meth = total_meth_reads / max(1, self.n_reads)

    def is_mutated(self) -> bool:
        """Check if the context ends with the mutation sentinel."""
        return self.context.endswith(MUTATION_SENTINEL)

    def set_mutated(self) -> None:
        """Flag the site as mutated (no-op if already flagged)."""
        if not self.is_mutated():
            self.context += MUTATION_SENTINEL

    def set_unmutated(self) -> None:
        """Remove the mutation flag (no-op if not flagged)."""
        if self.is_mutated():
            self.context = self.context[: -len(MUTATION_SENTINEL)]


def _next_field(fields: Iterator[str], name: str) -> str:
    try:
        return next(fields)
    except StopIteration:
        raise MissingFieldError(f"failed to extract {name}", field=name) from None


def _parse_uint(token: str, name: str) -> int:
    """Parse an unsigned 64-bit integer field (pos or n_reads)."""
    # int() would also take "-1", "1_000" and non-ASCII digits
    if not _UINT_PATTERN.fullmatch(token):
        raise InvalidNumberError(
            f"invalid {name}: {token!r} is not an unsigned integer",
            field=name,
            value=token,
        )
    value = int(token)
    if value > UINT64_MAX:
        raise InvalidNumberError(
            f"invalid {name}: {token} exceeds {UINT64_MAX}", field=name, value=token
        )
    return value


def _parse_meth(token: str) -> float:
    # float() would also take "0_5" and non-ASCII digits
    if "_" in token or not token.isascii():
        raise InvalidNumberError(
            f"invalid meth: {token!r} is not a number", field="meth", value=token
        )
    try:
        meth = float(token)
    except ValueError as exc:
        raise InvalidNumberError(
            f"invalid meth: {token!r} is not a number", field="meth", value=token
        ) from exc

    # NaN fails this check too
    if not 0.0 <= meth <= 1.0:
        raise OutOfRangeError(
            f"meth out of range [0, 1]: {token}", field="meth", value=token
        )
    return meth


def parse_site(line: str) -> MSite:
    """Parse a methylation site from a text line.

    Fields are read in order and the first bad field determines the error.
    Tokens past the sixth are ignored.

    Args
    ----------
    line : str
        A line such as "chr1 1000 - CHH 0.8 10" (any spaces/tabs between fields).

    Returns
    -------
    MSite
        The parsed site.

    Raises
    -------
    MissingFieldError
        If the line has fewer than six fields.
    InvalidNumberError
        If pos, meth or n_reads is not a valid number.
    InvalidStrandError
        If the strand is not a single character.
    OutOfRangeError
        If meth is outside [0.0, 1.0].
    """
    try:
        fields = (token for token in _SEPARATOR_PATTERN.split(line) if token)

        chrom = _next_field(fields, "chrom")
        pos = _parse_uint(_next_field(fields, "pos"), "pos")

        strand = _next_field(fields, "strand")
        if len(strand) != 1:
            raise InvalidStrandError(
                f"invalid strand: {strand!r} is not a single character",
                field="strand",
                value=strand,
            )

        context = _next_field(fields, "context")
        meth = _parse_meth(_next_field(fields, "meth"))
        n_reads = _parse_uint(_next_field(fields, "n_reads"), "n_reads")
    except ParseError as err:
        logger.debug("Rejected site line %r: %s", line, err)
        raise

    return MSite(
        chrom=chrom,
        pos=pos,
        strand=strand,
        context=context,
        meth=meth,
        n_reads=n_reads,
    )


def format_site(site: MSite) -> str:
    """Render a site as a single tab-separated line (no trailing newline).

    meth is quantized to 6 decimal digits before it is written, so
    parse_site(format_site(site)) may differ from site in its last digits.
    """
    return FIELD_SEPARATOR.join(
        [
            site.chrom,
            str(site.pos),
            site.strand,
            site.context,
            format_meth(site.meth),
            str(site.n_reads),
        ]
    )
