"""
Exceptions raised by the record readers, filters and command line tools
"""


class DshError(Exception):
    pass


class ArgumentError(DshError):
    """
    Bad option value, e.g. a malformed range or a script that does
    not compile
    """
    pass


class ParseError(DshError, ValueError):
    """
    Malformed header or record

    reason - what is wrong with the record
    token - the offending token, if known
    line_number - 1-based line number, set by the reader
    record_number - 1-based record number, used when lines are not
      meaningful (FASTA, FASTQ)
    record_type - format name used in the message
    """
    def __init__(self, reason, token=None, line_number=None,
    record_number=None, record_type=None):
        super().__init__(reason)
        self.reason = reason
        self.token = token
        self.line_number = line_number
        self.record_number = record_number
        self.record_type = record_type

    def __str__(self):
        what = "record" if self.record_type is None else \
            f"{self.record_type} record"
        msg = f"could not read {what}"
        if self.line_number is not None:
            msg += f" at line {self.line_number}"
        elif self.record_number is not None:
            msg += f" number {self.record_number}"
        msg += f": {self.reason}"
        if self.token is not None:
            msg += f" (offending token {self.token!r})"
        return msg


class ScriptEvaluationError(DshError):
    """
    Filter expression raised or did not evaluate to a boolean

    line_number, record_number - position of the record, as in ParseError
    """
    def __init__(self, expression, reason, line_number=None,
    record_number=None):
        super().__init__(reason)
        self.expression = expression
        self.reason = reason
        self.line_number = line_number
        self.record_number = record_number

    def __str__(self):
        msg = f"could not evaluate script {self.expression!r}"
        if self.line_number is not None:
            msg += f" at line {self.line_number}"
        elif self.record_number is not None:
            msg += f" on record {self.record_number}"
        return f"{msg}: {self.reason}"
