"""
Restricted boolean expressions over a record

The expression sees the current record as r, e.g.
  r.mapq >= 30 and r.rname in ("chr1", "chr2")
  len(r.seq) > 100 and r.id.startswith("contig")
Only literals, operators, attribute access to public names, subscripts,
a few builtins and method calls on values reached through r are
allowed; string formatting and methods that modify containers are not.
Evaluation happens without builtins.
"""
import ast
import logging

from DshHelper.Errors import ArgumentError, ScriptEvaluationError

logger = logging.getLogger(__name__)

RECORD_NAME = "r"

FUNCTIONS = {
    "len": len,
    "abs": abs,
    "min": min,
    "max": max,
    "int": int,
    "float": float,
    "str": str,
    "any": any,
    "all": all,
    "sum": sum,
}

ALLOWED_NODES = (
    ast.Expression, ast.BoolOp, ast.And, ast.Or, ast.UnaryOp, ast.Not,
    ast.USub, ast.UAdd, ast.BinOp, ast.Add, ast.Sub, ast.Mult, ast.Div,
    ast.FloorDiv, ast.Mod, ast.Pow, ast.Compare, ast.Eq, ast.NotEq, ast.Lt,
    ast.LtE, ast.Gt, ast.GtE, ast.In, ast.NotIn, ast.Is, ast.IsNot,
    ast.IfExp, ast.Constant, ast.Name, ast.Load, ast.Attribute,
    ast.Subscript, ast.Slice, ast.Call, ast.keyword, ast.Tuple, ast.List,
    ast.Set,
)
# string formatting can reach private attributes through the template
FORMAT_METHODS = ("format", "format_map")
# container methods that change the record under test
MUTATING_METHODS = ("clear", "pop", "popitem", "update", "setdefault",
    "append", "extend", "insert", "remove", "add", "discard", "sort",
    "reverse")
BLOCKED_METHODS = FORMAT_METHODS + MUTATING_METHODS


def _validate(tree, source):
    for node in ast.walk(tree):
        if not isinstance(node, ALLOWED_NODES):
            raise ArgumentError(f"script {source!r}: "
                f"{type(node).__name__} is not allowed")
        if isinstance(node, ast.Name) and node.id != RECORD_NAME \
        and node.id not in FUNCTIONS:
            raise ArgumentError(f"script {source!r}: unknown name {node.id}")
        if isinstance(node, ast.Attribute) and node.attr.startswith("_"):
            raise ArgumentError(f"script {source!r}: private attribute "
                f"{node.attr} is not allowed")
        if isinstance(node, ast.keyword) and node.arg is None:
            raise ArgumentError(f"script {source!r}: ** arguments are not "
                "allowed")
        if isinstance(node, ast.Call) and isinstance(node.func, ast.Name) \
        and node.func.id not in FUNCTIONS:
            raise ArgumentError(f"script {source!r}: {node.func.id} is not "
                "callable")
        if isinstance(node, ast.Call) and isinstance(node.func, ast.Attribute) \
        and node.func.attr in BLOCKED_METHODS:
            raise ArgumentError(f"script {source!r}: {node.func.attr}() is "
                "not allowed")


class Expression:
    """
    Compiled predicate; calling it with a record returns a bool or raises
    ScriptEvaluationError
    """
    def __init__(self, source):
        self.source = source
        try:
            tree = ast.parse(source.strip(), mode="eval")
        except SyntaxError as e:
            raise ArgumentError(f"could not compile script {source!r}: "
                f"{e.msg}") from e
        _validate(tree, source)
        self._code = compile(tree, "<script>", "eval")
        logger.debug(f"compiled script {source!r}")

    def __call__(self, record):
        namespace = dict(FUNCTIONS)
        namespace[RECORD_NAME] = record
        try:
            result = eval(self._code, {"__builtins__": {}}, namespace)
        except Exception as e:
            raise ScriptEvaluationError(self.source,
                f"{type(e).__name__}: {e}") from e
        if not isinstance(result, bool):
            raise ScriptEvaluationError(self.source, "result is "
                f"{type(result).__name__}, expected bool")
        return result

    def __repr__(self):
        return f"Expression({self.source!r})"
