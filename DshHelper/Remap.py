"""
VCF rewrites that change the declared type of a field
"""
from dataclasses import replace
import logging

from DshHelper.Constants import MISSING
from DshHelper.Formats import VcfFormat
from DshHelper.Pipeline import Pipeline
from DshHelper.Vcf import MetaField

logger = logging.getLogger(__name__)

DB_FLAG_LINE = MetaField.format_line("INFO", "DB", "0", "Flag",
    "dbSNP membership")
DBSNP_LINE = MetaField.format_line("INFO", "dbsnp", "1", "String",
    "dbSNP identifier")
PS_CONVERSION_NOTE = " (converted from Type=String to Type=Integer)"


class RemapDbSnp(Pipeline):
    """
    INFO DB declared as String: DB becomes a flag and its value moves to
    a new dbsnp INFO field
    """
    def __init__(self, **kwargs):
        super().__init__(VcfFormat(), **kwargs)
        self.remap = False

    def rewrite_header(self, header):
        db = header.info.get("DB")
        if db is None or db.type != "String":
            logger.info("INFO DB is not declared with Type=String, "
                "records are written unchanged")
            return header
        self.remap = True
        return header.replace_line(db.line, (DB_FLAG_LINE, DBSNP_LINE))

    def rewrite(self, record):
        if not self.remap or "DB" not in record.info:
            return (record,)
        db = record.info["DB"]
        info = {}
        for k, v in record.info.items():
            if k == "DB":
                info["DB"] = ()
                # a DB flag has no identifier to move
                if db:
                    info["dbsnp"] = db
            elif k != "dbsnp" or not db:
                info[k] = v
        return (replace(record, info=info),)


class RemapPhaseSet(Pipeline):
    """
    FORMAT PS declared as String: phase set names are replaced by
    integers, numbered from 0 in order of first appearance
    """
    def __init__(self, **kwargs):
        super().__init__(VcfFormat(), **kwargs)
        self.remap = False
        self.phase_set_ids = {}

    def rewrite_header(self, header):
        ps = header.format.get("PS")
        if ps is None or ps.type != "String":
            logger.info("FORMAT PS is not declared with Type=String, "
                "records are written unchanged")
            return header
        self.remap = True
        description = (ps.description or "") + PS_CONVERSION_NOTE
        line = MetaField.format_line("FORMAT", "PS", "1", "Integer",
            description)
        return header.replace_line(ps.line, (line,))

    def phase_set_id(self, name):
        if name not in self.phase_set_ids:
            self.phase_set_ids[name] = len(self.phase_set_ids)
        return self.phase_set_ids[name]

    def rewrite(self, record):
        if not self.remap or not record.format or "PS" not in record.format:
            return (record,)
        genotypes = []
        for gt in record.genotypes:
            if gt.get("PS", MISSING) != MISSING:
                gt = dict(gt)
                gt["PS"] = f"{self.phase_set_id(gt['PS'])}"
            genotypes.append(gt)
        return (replace(record, genotypes=tuple(genotypes)),)
