#!/usr/bin/env python3

""" Primary entry point for radix tree benchmarks.
    Usage: python -m benchmarks [operation] [profiler] [args...] """

import subprocess
import sys

from benchmarks import tests
from benchmarks.profilers import DetailedProfiler, RawProfiler

PROFILERS = {cls.__name__: cls for cls in [RawProfiler, DetailedProfiler]}
SECTION_DELIM = '-' * 78


def main(script:str, operation="insert", *argv:str) -> int:
    """ Run one benchmark operation under one profiler if named, otherwise run it under each profiler in turn.
        Imports are cached after the first run, so each profiler gets its own subprocess. """
    if operation not in tests.OPERATIONS:
        print(f'Unknown benchmark: {operation}. Choices are: {", ".join(tests.OPERATIONS)}', file=sys.stderr)
        return 1
    if argv and argv[0] in PROFILERS:
        pf_name, *args = argv
        func = getattr(tests, operation)(*map(int, args))
        profiler = PROFILERS[pf_name]()
        for _ in range(tests.BEST_OF):
            profiler.run(func)
        results = profiler.format_best()
        print(f'Benchmark for {operation} using {pf_name}, best of {tests.BEST_OF}:\n\n{results}', end='')
        return 0
    print()
    for name in PROFILERS:
        cmd = (sys.executable, '-m', 'benchmarks', operation, name, *argv)
        result = subprocess.run(cmd, capture_output=True, text=True)
        print(f'{SECTION_DELIM}\n')
        print(result.stderr if result.returncode else result.stdout)
    print(SECTION_DELIM)
    return 0


if __name__ == '__main__':
    sys.exit(main(*sys.argv))
