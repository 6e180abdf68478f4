import re

from DshHelper import __version__

VERSION = __version__

# chrom:start-end, 0-based half-open
RANGE_RE = re.compile(r"^(.*):([0-9]+)-([0-9]+)$")
RANGE_FORMAT_ERROR = ("invalid range format, expected chrom:start-end in "
    "0-based coordinates")

FASTA_LINE_WIDTH = 70

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2

INVALID_RECORDS_FAIL = "fail"
INVALID_RECORDS_SKIP = "skip"
INVALID_RECORDS_POLICIES = (INVALID_RECORDS_FAIL, INVALID_RECORDS_SKIP)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

MISSING = "."
ABSENT = "*"
