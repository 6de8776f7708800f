import argparse
import os
import sys
import traceback
from concurrent.futures import ThreadPoolExecutor
from functools import reduce

from tqdm import tqdm

from phpdepends.extractors.php_extractor import write_records
from phpdepends.registry.extractor_registry import get_extractor
from phpdepends.resolver.builtins import BuiltinTable
from phpdepends.resolver.module_resolver import ModuleResolver
from phpdepends.utils.dependency_set import DependencySet
from phpdepends.utils.file_walker import collect_files
from phpdepends.utils.networkx_graph import build_dependency_schema, build_graph_from_schema, write_graph

PROG = "phpdepends"
GRAPH_SUFFIXES = (".graphml", ".gpickle")


class UsageError(Exception):
    pass


class DependsArgumentParser(argparse.ArgumentParser):
    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def parse_suffixes(value):
    return [s for s in value.split(",") if s]


def build_parser():
    parser = DependsArgumentParser(
        prog=PROG,
        description="Figure out which PHP extensions a PHP project requires.",
    )
    parser.add_argument("paths", nargs="*", metavar="file-or-directory",
                        help="PHP files or directories to scan")
    parser.add_argument("--suffix", type=parse_suffixes,
                        help="Only process directory entries having suffix(es), e.g. --suffix=.php,.inc")
    parser.add_argument("--exclude", action="append", default=[],
                        help="gitwildmatch pattern to skip while walking directories (repeatable)")
    parser.add_argument("--gitignore", action="store_true",
                        help="Also skip what each scanned directory's .gitignore lists")
    parser.add_argument("--php-version", default=os.environ.get("PHPDEPENDS_PHP_VERSION"),
                        help="PHP version used to mark builtin extensions (env PHPDEPENDS_PHP_VERSION)")
    parser.add_argument("--symbols", default=os.environ.get("PHPDEPENDS_SYMBOLS"),
                        help="Extra symbol table JSON to extend the packaged one (env PHPDEPENDS_SYMBOLS)")
    parser.add_argument("--php", metavar="BINARY",
                        help="Introspect this PHP CLI instead of using the packaged symbol table")
    parser.add_argument("--dump-symbols", metavar="FILE",
                        help="Write the active symbol table to FILE and exit")
    parser.add_argument("--report", metavar="FILE",
                        help="Write every resolved symbol as JSON")
    parser.add_argument("--graph", metavar="FILE",
                        help="Write the file -> extension graph (.graphml or .gpickle)")
    parser.add_argument("--jobs", type=int, default=1,
                        help="Number of worker threads (default: 1)")
    parser.add_argument("--progress", action="store_true",
                        help="Show a progress bar on stderr")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Print each resolved symbol to stderr")
    return parser


def load_resolver(php_binary=None, symbols_path=None):
    if php_binary:
        resolver = ModuleResolver.from_php(php_binary)
    else:
        resolver = ModuleResolver.default()
    if symbols_path:
        resolver.merge(ModuleResolver.from_file(symbols_path))
    return resolver


def _scan_single_file_worker(args):
    file_path, resolver = args
    extractor = get_extractor("php", resolver)
    deps = extractor.process_file(file_path)
    return deps, extractor.extract_all_dependencies()


def scan_files(files, resolver, jobs=1, progress=False):
    """
    Scan every file and merge the per-file dependency sets.

    Returns the merged DependencySet and the resolution records of all files,
    in file order.
    """
    tasks_args = [(file_path, resolver) for file_path in files]
    if jobs > 1:
        with ThreadPoolExecutor(max_workers=jobs) as executor:
            results = executor.map(_scan_single_file_worker, tasks_args)
            results = list(tqdm(results, total=len(files), desc="Scanning", disable=not progress))
    else:
        results = [
            _scan_single_file_worker(task)
            for task in tqdm(tasks_args, desc="Scanning", disable=not progress)
        ]

    deps = reduce(lambda acc, res: acc.merge(res[0]), results, DependencySet())
    records = [rec for _, recs in results for rec in recs]
    return deps, records


def format_dependencies(deps, builtins):
    return [builtins.annotate(name) for name in deps.to_sorted_list()]


def run(args):
    if args.graph and not args.graph.endswith(GRAPH_SUFFIXES):
        raise UsageError(f"--graph must end with one of {', '.join(GRAPH_SUFFIXES)}")
    if args.jobs < 1:
        raise UsageError("--jobs must be at least 1")

    resolver = load_resolver(args.php, args.symbols)
    if args.dump_symbols:
        resolver.dump(args.dump_symbols)
        print(f"Wrote {args.dump_symbols}", file=sys.stderr)
        if not args.paths:
            return 0

    builtins = BuiltinTable.for_version(args.php_version or resolver.php_version)
    files = collect_files(args.paths, args.suffix, args.exclude, args.gitignore)
    deps, records = scan_files(files, resolver, jobs=args.jobs, progress=args.progress)

    if args.verbose:
        for rec in records:
            print(f"{rec['file_path']}:{rec['line']}: {rec['symbol']} ({rec['kind']}) -> {rec['module']}",
                  file=sys.stderr)
    if args.report:
        write_records(records, args.report)
    if args.graph:
        G = build_graph_from_schema(build_dependency_schema(records, builtins))
        write_graph(G, args.graph)

    lines = format_dependencies(deps, builtins)
    if lines:
        print("\n".join(lines))
    else:
        print(f"{PROG}: no results", file=sys.stderr)
    return 0


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.paths and not args.dump_symbols:
        parser.print_usage(sys.stderr)
        return 1

    try:
        return run(args)
    except UsageError as e:
        parser.print_usage(sys.stderr)
        print(f"{PROG}: error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        if args.verbose:
            print(traceback.format_exc(), file=sys.stderr)
        print(f"{PROG}: {type(e).__name__}: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
