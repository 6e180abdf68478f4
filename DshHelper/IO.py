"""
Open input and output streams by path

"-" (or None) is standard input/output. Compression is chosen by file
extension: .gz and .bgz are read with gzip and written as BGZF through
pysam, .bz2 is read and written with bz2.

Input is decoded as UTF-8 with undecodable bytes kept as surrogates, so
readers can report the line holding them through check_utf8.
"""
from contextlib import contextmanager, nullcontext
import bz2
import gzip
import io
import logging
import sys

import pysam

from DshHelper.Errors import ParseError

logger = logging.getLogger(__name__)

STDIO = "-"
GZIP_SUFFIXES = (".gz", ".bgz")
BZIP2_SUFFIXES = (".bz2",)
ENCODING = "utf-8"
DECODE_ERRORS = "surrogateescape"


class BgzfTextWriter:
    """
    Text interface on top of a pysam.BGZFile opened for writing
    """
    def __init__(self, path, encoding=ENCODING):
        self.raw = pysam.BGZFile(path, "wb")
        self.encoding = encoding

    def write(self, text):
        self.raw.write(text.encode(self.encoding))
        return len(text)

    def flush(self):
        self.raw.flush()

    def close(self):
        self.raw.close()

    @property
    def closed(self):
        return self.raw.closed

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()


def is_stdio(path):
    return path is None or f"{path}" == STDIO


def check_utf8(text):
    """
    Raise ParseError when text holds bytes that were not valid UTF-8
    """
    try:
        text.encode(ENCODING)
    except UnicodeEncodeError as e:
        bad = text[e.start:e.end].encode(ENCODING, DECODE_ERRORS)
        raise ParseError(f"invalid UTF-8 byte 0x{bad[0]:02x} at column "
            f"{e.start + 1}") from e
    return text


@contextmanager
def _stdin_text():
    fh = io.TextIOWrapper(sys.stdin.buffer, encoding=ENCODING,
        errors=DECODE_ERRORS)
    try:
        yield fh
    finally:
        # leave the underlying standard input open
        fh.detach()


def open_input(path=STDIO):
    """
    Context manager yielding a text stream; standard input is not closed
    """
    if is_stdio(path):
        return _stdin_text()
    name = f"{path}"
    if name.endswith(GZIP_SUFFIXES):
        logger.debug(f"reading gzip compressed input {name}")
        return gzip.open(name, "rt", encoding=ENCODING, errors=DECODE_ERRORS)
    if name.endswith(BZIP2_SUFFIXES):
        logger.debug(f"reading bzip2 compressed input {name}")
        return bz2.open(name, "rt", encoding=ENCODING, errors=DECODE_ERRORS)
    return open(name, encoding=ENCODING, errors=DECODE_ERRORS)


def open_output(path=STDIO):
    """
    Context manager yielding a writable text stream; standard output is
    flushed but not closed
    """
    if is_stdio(path):
        return nullcontext(sys.stdout)
    name = f"{path}"
    if name.endswith(GZIP_SUFFIXES):
        logger.debug(f"writing BGZF compressed output {name}")
        return BgzfTextWriter(name)
    if name.endswith(BZIP2_SUFFIXES):
        logger.debug(f"writing bzip2 compressed output {name}")
        return bz2.open(name, "wt")
    return open(name, "w", encoding=ENCODING)
