""" Module for diagnostic logging. Components never import a logger; they are handed a string callable instead. """

import sys
from threading import Lock
from time import strftime
from typing import TextIO


class StreamLogger:
    """ Basic logger class. Writes to pre-opened text streams. Implements basic thread-safety. """

    def __init__(self, *streams:TextIO, time_fmt="[%b %d %Y %H:%M:%S]: ", repeat_mark="*") -> None:
        self._streams = [*streams]       # Writable/appendable text streams for logging.
        self._time_fmt = time_fmt        # Format for timestamps using time.strftime. If None, do not add timestamps.
        self._repeat_mark = repeat_mark  # Mark to replace repeated messages. If None, log all messages fully.
        self._last_message = ""          # Most recent unique message string.
        self._lock = Lock()              # Lock to ensure only one thread writes to the streams at a time.

    def add_stream(self, stream:TextIO) -> None:
        """ Add a text stream for logging. """
        with self._lock:
            self._streams.append(stream)

    def _replace_if_duplicate(self, message:str) -> str:
        """ Replace <message> with a short 'repeat' mark if identical to the last message to save space. """
        if message == self._last_message:
            message = self._repeat_mark
        else:
            self._last_message = message
        return message

    def _write_all(self, message:str) -> None:
        """ Write <message> to each stream in turn. """
        with self._lock:
            for stream in self._streams:
                try:
                    # Flush after every write so that messages don't get lost in the buffer on a crash.
                    stream.write(message)
                    stream.flush()
                except (OSError, ValueError):
                    # A closed or broken stream must not stop the others from getting the message.
                    continue

    def log(self, message:str) -> None:
        """ Filter, timestamp, and write <message> to all log streams with a trailing newline. """
        if self._repeat_mark is not None:
            message = self._replace_if_duplicate(message)
        if self._time_fmt is not None:
            message = strftime(self._time_fmt) + message
        self._write_all(message + '\n')

    def close(self) -> None:
        """ Close every stream except stdout and stderr, and stop logging. """
        with self._lock:
            for stream in self._streams:
                if stream not in (sys.stdout, sys.stderr):
                    stream.close()
            self._streams.clear()


def open_logger(*filenames:str, encoding='utf-8', to_stdout=False, to_stderr=False, **kwargs) -> StreamLogger:
    """ Open a logger that appends to text files and/or prints to system streams.
        Log files remain open until the logger is closed. """
    streams = [open(f, 'a', encoding=encoding) for f in filenames]
    if to_stdout:
        streams.append(sys.stdout)
    if to_stderr:
        streams.append(sys.stderr)
    return StreamLogger(*streams, **kwargs)
