""" Profilers for no-argument Python callables. Each keeps the stats from every run and reports on the fastest. """

from cProfile import Profile
from io import StringIO
import pstats
import time


class AbstractProfiler:

    def run(self, func) -> None:
        """ Call <func> and record details about its performance. """
        raise NotImplementedError

    def format_best(self) -> str:
        """ Format a string with the details about the quickest recorded run. """
        raise NotImplementedError


class RawProfiler(AbstractProfiler):
    """ Records wall-clock time only. """

    def __init__(self) -> None:
        self._times = []  # Time in seconds for each call to run().

    def run(self, func) -> None:
        start_time = time.perf_counter()
        func()
        self._times.append(time.perf_counter() - start_time)

    def format_best(self) -> str:
        return f'Total time = {min(self._times):.3f}s\n'


class DetailedProfiler(AbstractProfiler):
    """ Records time spent in each function called by the top-level one.
        Tree operations are made of many tiny calls, so profiling overhead is substantial. """

    def __init__(self, *, max_lines=30, sort_key='tottime') -> None:
        self._profiles = []          # Finished profile for each call to run().
        self._max_lines = max_lines  # Maximum number of functions to print profiles on.
        self._sort_key = sort_key    # pstats column to sort the printed functions by.

    def run(self, func) -> None:
        pr = Profile()
        pr.enable()
        func()
        pr.disable()
        pr.create_stats()
        self._profiles.append(pr)

    @staticmethod
    def _total_time(pr:Profile) -> float:
        """ The top-level call has the largest cumulative time, which covers the whole run. """
        return max(s[3] for s in pr.stats.values())

    def format_best(self) -> str:
        best_pr = min(self._profiles, key=self._total_time)
        s_buf = StringIO()
        ps = pstats.Stats(best_pr, stream=s_buf).strip_dirs().sort_stats(self._sort_key)
        ps.print_stats(self._max_lines)
        lines = s_buf.getvalue().splitlines()
        # Skip the pstats preamble up to the column headers.
        for i, line in enumerate(lines):
            if line.lstrip().startswith('ncalls'):
                lines = lines[i:]
                break
        return '\n'.join(line for line in lines if line.strip()) + '\n'
