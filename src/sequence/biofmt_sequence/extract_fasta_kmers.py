from __future__ import annotations

import argparse
import sys
from collections.abc import Iterator

from biofmt_core.cli_utils import (
    ToolArgumentParser,
    add_input_argument,
    add_output_argument,
    non_negative_int,
    positive_int,
    run_tool,
)
from biofmt_core.compress import open_input, open_output
from biofmt_sequence.sequence_utils import Alphabet, Fasta, add_alphabet_argument, read_fasta


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = ToolArgumentParser(prog="extract-fasta-kmers", description=run.__doc__)
    add_input_argument(parser, "FASTA file")
    add_output_argument(parser, "kmer file")
    add_alphabet_argument(parser)
    parser.add_argument("-k", "--kmer-length", type=positive_int, required=True, help="kmer length")
    parser.add_argument(
        "-n", "--include-ns", action="store_true", help="for DNA sequences, include kmers containing Ns"
    )
    parser.add_argument("-u", "--upstream-length", type=non_negative_int, default=0, help="upstream length, default 0")
    parser.add_argument(
        "-d", "--downstream-length", type=non_negative_int, default=0, help="downstream length, default 0"
    )
    return parser.parse_args(argv[1:])


def kmers(
    fasta: Fasta,
    kmer_length: int,
    *,
    skip_ns: bool = True,
    upstream_length: int = 0,
    downstream_length: int = 0,
) -> Iterator[str]:
    """
    Tab-delimited kmer lines for one sequence.

    Each line holds the kmer, the sequence name and the 0-based start of the kmer, followed by
    up to upstream_length preceding and downstream_length following characters when those are > 0.
    Sequences not longer than kmer_length produce no kmers.
    """
    sequence = fasta.sequence
    if len(sequence) <= kmer_length:
        return
    name = fasta.name
    for start in range(len(sequence) - kmer_length + 1):
        end = start + kmer_length
        kmer = sequence[start:end]
        if skip_ns and "N" in kmer.upper():
            continue
        fields = [kmer, name, str(start)]
        if upstream_length > 0:
            fields.append(sequence[max(0, start - upstream_length) : start])
        if downstream_length > 0:
            fields.append(sequence[end : end + downstream_length])
        yield "\t".join(fields) + "\n"


def extract_fasta_kmers(
    input_file: str | None,
    output_file: str | None,
    kmer_length: int,
    alphabet: Alphabet = Alphabet.DNA,
    include_ns: bool = False,
    upstream_length: int = 0,
    downstream_length: int = 0,
) -> None:
    skip_ns = alphabet is Alphabet.DNA and not include_ns
    with open_input(input_file) as handle, open_output(output_file) as writer:
        for fasta in read_fasta(handle):
            writer.writelines(
                kmers(
                    fasta,
                    kmer_length,
                    skip_ns=skip_ns,
                    upstream_length=upstream_length,
                    downstream_length=downstream_length,
                )
            )


def run(argv):
    """Extract kmers from DNA or protein sequences in FASTA format."""
    args = parse_args(argv)
    extract_fasta_kmers(
        args.input_file,
        args.output_file,
        args.kmer_length,
        args.alphabet,
        args.include_ns,
        args.upstream_length,
        args.downstream_length,
    )


def main():
    run_tool(run, sys.argv)


if __name__ == "__main__":
    main()
