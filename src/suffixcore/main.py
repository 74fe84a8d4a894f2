import argparse
import os
import sys
import time
from typing import Iterator, List, Optional, Tuple

from .applications import longest_common_substrings
from .bwt import DEFAULT_SENTINEL, bwt_invert
from .index import SuffixIndex
from .models import InvalidInput

COMMANDS = ("sa", "lcp", "tree", "bwt", "invert", "find", "repeats", "common")


def parse_fasta(file_path: str) -> Iterator[Tuple[str, str]]:
    """Simple FASTA parser to avoid Biopython dependency."""
    name = None
    seq_parts = []
    with open(file_path, 'r') as f:
        for line in f:
            line = line.strip()
            if not line:
                continue
            if line.startswith('>'):
                if name:
                    yield name, "".join(seq_parts)
                name = line[1:].split()[0]  # Take first word as ID
                seq_parts = []
            else:
                seq_parts.append(line)
        if name:
            yield name, "".join(seq_parts)


def _join(values) -> str:
    return " ".join(str(v) for v in values)


def run_command(command: str, name: str, text: str, args: argparse.Namespace) -> List[str]:
    """Run one command on one record and return its output lines."""
    if command == "invert":
        return [f"{name}\t{bwt_invert(text, args.sentinel)}"]

    index = SuffixIndex(text, sentinel=args.sentinel, show_progress=args.verbose, label=name)
    if command == "sa":
        return [f"{name}\t{_join(index.suffix_array.tolist())}"]
    if command == "lcp":
        return [f"{name}\t{_join(index.lcp_array.tolist())}"]
    if command == "bwt":
        return [f"{name}\t{index.transform}"]
    if command == "tree":
        return [f">{name}"] + index.suffix_tree.render()
    if command == "find":
        positions = index.locate(args.pattern)
        return [f"{name}\t{args.pattern}\t{len(positions)}\t{_join(positions)}"]
    if command == "repeats":
        repeats = index.longest_repeats()
        return [f"{name}\t{repeats.length}\t{substring}\t{_join(sorted(starts))}"
                for substring, starts in zip(repeats.substrings, repeats.starts)]
    raise InvalidInput(f"Unknown command {command!r}")


def main(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(description="Suffix array, LCP, suffix tree and BWT toolkit")
    parser.add_argument("command", choices=COMMANDS, help="Operation to run on each input record")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--text", help="Literal input text")
    source.add_argument("--fasta", help="Input FASTA file; each record is processed separately")
    parser.add_argument("--pattern", help="Pattern to search for (find)")
    parser.add_argument("--min-strings", type=int, default=2,
                        help="Minimum number of records sharing a substring (common, default: 2)")
    parser.add_argument("--sentinel", default=DEFAULT_SENTINEL,
                        help=f"Terminator character used in transforms (default: {DEFAULT_SENTINEL!r})")
    parser.add_argument("--output", "-o", help="Output file (default: stdout)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Show progress")
    parser.add_argument("--profile", action="store_true", help="Profile execution with cProfile and print top hotspots")

    args = parser.parse_args(argv)

    if args.command == "find" and args.pattern is None:
        parser.error("find requires --pattern")

    if args.fasta is not None:
        if not os.path.exists(args.fasta):
            print(f"Error: File {args.fasta} not found")
            sys.exit(1)
        records = list(parse_fasta(args.fasta))
    else:
        records = [("text", args.text)]

    start_total = time.time()

    # Optional profiler
    profiler = None
    if args.profile:
        import cProfile
        profiler = cProfile.Profile()
        profiler.enable()

    lines: List[str] = []
    try:
        if args.command == "common":
            common = longest_common_substrings([seq for _, seq in records], args.min_strings)
            lines.extend(sorted(common))
        else:
            for name, seq in records:
                if args.verbose:
                    print(f"Processing record: {name} ({len(seq)} symbols)", flush=True)
                lines.extend(run_command(args.command, name, seq, args))
    except InvalidInput as e:
        print(f"Error: {e}")
        sys.exit(1)

    # Stop profiler and report
    if profiler is not None:
        profiler.disable()

    if args.verbose:
        print(f"Total time: {time.time() - start_total:.2f}s")

    if profiler is not None:
        import pstats
        print("Top 20 cumulative time hotspots:")
        stats = pstats.Stats(profiler)
        stats.strip_dirs().sort_stats("cumulative").print_stats(20)

    if args.output:
        with open(args.output, "w") as f:
            for line in lines:
                f.write(line + "\n")
        print(f"Results written to {args.output}")
    else:
        for line in lines:
            print(line)


if __name__ == "__main__":
    main()
