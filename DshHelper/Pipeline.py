"""
Streaming read -> filter -> write driver shared by all tools

A run moves through the states
  START -> HEADER_READ -> STREAMING -> DONE
and ends in ERROR when reading, filtering or writing fails. Input and
output are closed on every exit path.
"""
from collections import Counter
from contextlib import ExitStack
from enum import Enum
import logging

from DshHelper.Constants import INVALID_RECORDS_FAIL, INVALID_RECORDS_POLICIES
from DshHelper.Errors import ParseError, ScriptEvaluationError
from DshHelper.Formats import Comment
from DshHelper.IO import STDIO, open_input, open_output

logger = logging.getLogger(__name__)

State = Enum("State", ["START", "HEADER_READ", "STREAMING", "DONE", "ERROR"])


class Pipeline:
    """
    fmt - input Format
    filters - predicates combined with AND
    input_path, output_path - file names, "-" for standard input/output
    invalid_records - "fail" aborts on a malformed record, "skip" logs a
      warning and drops it
    output_format - Format used for writing, defaults to fmt

    Subclasses change what is written through rewrite_header, rewrite
    and finish.
    """
    # pass comments and unrecognized lines through
    keep_comments = True

    def __init__(self, fmt, filters=(), input_path=STDIO, output_path=STDIO,
    invalid_records=INVALID_RECORDS_FAIL, output_format=None):
        if invalid_records not in INVALID_RECORDS_POLICIES:
            raise ValueError(f"unknown invalid record policy: "
                f"{invalid_records}")
        self.format = fmt
        self.output_format = fmt if output_format is None else output_format
        self.filters = list(filters)
        self.input_path = input_path
        self.output_path = output_path
        self.invalid_records = invalid_records
        self.state = State.START
        self.counts = Counter()

    def rewrite_header(self, header):
        return header

    def rewrite(self, record):
        """
        Records to write in place of record
        """
        return (record,)

    def finish(self):
        """
        Records to write once the input is exhausted
        """
        return ()

    def accept(self, record):
        # evaluate every filter, stateful filters must see every record
        results = [f(record) for f in self.filters]
        return all(results)

    def _on_invalid(self, err):
        if self.invalid_records == INVALID_RECORDS_FAIL:
            raise err
        self.counts["skipped"] += 1
        logger.warning(f"skipping invalid record: {err}")

    def _emit(self, record, fout):
        if self.accept(record):
            self.output_format.write_record(record, fout)
            self.counts["written"] += 1
        else:
            self.counts["filtered"] += 1

    def process(self, fin, fout):
        """
        Run over already opened streams
        """
        if self.state is not State.START:
            raise RuntimeError("a pipeline can only be run once")
        try:
            items = self.format.read(fin, self._on_invalid)
            if self.format.has_header:
                n, header = next(items)
                self.output_format.write_header(self.rewrite_header(header),
                    fout)
            self.state = State.HEADER_READ
            self.state = State.STREAMING
            for n, item in items:
                if isinstance(item, Comment):
                    if self.keep_comments:
                        fout.write(f"{item}\n")
                    continue
                self.counts["read"] += 1
                try:
                    for record in self.rewrite(item):
                        self._emit(record, fout)
                except (ParseError, ScriptEvaluationError) as e:
                    if e.line_number is None and e.record_number is None:
                        if self.format.numbers_lines:
                            e.line_number = n
                        else:
                            e.record_number = n
                    raise
            for record in self.finish():
                self._emit(record, fout)
            fout.flush()
        except BaseException:
            self.state = State.ERROR
            raise
        self.state = State.DONE
        logger.info(f"read {self.counts['read']} records, wrote "
            f"{self.counts['written']}, filtered {self.counts['filtered']}, "
            f"skipped {self.counts['skipped']}")
        return self.counts

    def run(self):
        with ExitStack() as stack:
            try:
                fin = stack.enter_context(open_input(self.input_path))
                fout = stack.enter_context(open_output(self.output_path))
            except BaseException:
                self.state = State.ERROR
                raise
            return self.process(fin, fout)
