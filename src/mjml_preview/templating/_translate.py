"""Translate Handlebars-style template source into Jinja2 source.

Supported syntax:

- ``{{path.to.value}}`` escaped interpolation and ``{{{path}}}`` raw output
- ``{{#if x}}``, ``{{#unless x}}``, ``{{#ifEquals a b}}`` with ``{{else}}``
  and ``{{else if ...}}`` chains
- ``{{#each items}}`` with ``this``, ``@index``, ``@key``, ``@first``,
  ``@last`` and ``../`` parent access
- ``{{> name}}`` and ``{{include name}}`` partial inclusion
- inline helper calls ``{{helper arg1 arg2}}``
- comments ``{{! ... }}`` / ``{{!-- ... --}}`` and ``~`` whitespace control

Every lookup and helper call is routed through a runtime helper object bound
to the name ``_hb``; the root property set is bound to ``_hb_root``.
"""

import re
from dataclasses import dataclass, field

from mjml_preview.exceptions import TemplateCompileError

ROOT_NAME = "_hb_root"
HELPERS_NAME = "_hb"

INCLUDE_HELPER = "include"
CONDITIONAL_BLOCKS = frozenset({"if", "unless", "ifEquals"})
BLOCK_HELPERS = CONDITIONAL_BLOCKS | {"each"}

_TAG_RE = re.compile(
    r"""
    \{\{(?P<lstrip>~?)
    (?:
        !--(?P<long_comment>.*?)--
      | !(?P<comment>.*?)
      | \{(?P<raw>.*?)\}
      | (?P<body>.*?)
    )
    (?P<rstrip>~?)\}\}
    """,
    re.DOTALL | re.VERBOSE,
)

_ARG_RE = re.compile(
    r"""
    \s*
    (?:
        (?P<dq>"(?:[^"\\]|\\.)*")
      | (?P<sq>'(?:[^'\\]|\\.)*')
      | (?P<word>(?:[^\s\[\]"']|\[[^\]]*\])+)
    )
    """,
    re.VERBOSE,
)

_NUMBER_RE = re.compile(r"^-?\d+(?:\.\d+)?$")
_SEGMENT_RE = re.compile(r"\[([^\]]*)\]|([^./\[\]]+)")
_LITERALS = {"true": "true", "false": "false", "null": "none", "undefined": "none"}
_DATA_VARIABLES = {
    "@index": "loop.index0",
    "@first": "loop.first",
    "@last": "loop.last",
}


@dataclass(slots=True)
class _Block:
    name: str
    line: int
    scope_pushed: bool = False
    has_else: bool = False


@dataclass(slots=True)
class _Translator:
    source: str
    source_name: str
    helper_names: frozenset[str]
    out: list[str] = field(default_factory=list)
    blocks: list[_Block] = field(default_factory=list)
    scopes: list[str] = field(default_factory=lambda: [ROOT_NAME])
    keys: list[str] = field(default_factory=list)
    line: int = 1

    def error(self, message: str) -> TemplateCompileError:
        return TemplateCompileError(message, source=self.source_name, line=self.line)

    # -- arguments ---------------------------------------------------------

    def split_args(self, text: str) -> list[str]:
        args: list[str] = []
        pos = 0
        text = text.strip()
        while pos < len(text):
            match = _ARG_RE.match(text, pos)
            if match is None or match.end() == pos:
                msg = f"Cannot parse arguments: {text!r}"
                raise self.error(msg)
            args.append(match.group().strip())
            pos = match.end()
        return args

    def literal_name(self, token: str) -> str:
        if token[:1] in {'"', "'"}:
            return _unquote(token)
        return token

    def expression(self, token: str) -> str:
        if token[:1] in {'"', "'"}:
            return repr(_unquote(token))
        if token in _LITERALS:
            return _LITERALS[token]
        if _NUMBER_RE.match(token):
            return token
        if "=" in token or "(" in token or ")" in token:
            msg = f"Unsupported argument syntax: {token!r}"
            raise self.error(msg)
        return self.path(token)

    def path(self, token: str) -> str:
        if token.startswith("@"):
            return self.data_variable(token)

        depth = 0
        rest = token
        while rest.startswith("../"):
            depth += 1
            rest = rest[3:]
        if depth >= len(self.scopes):
            msg = f"Path {token!r} walks above the root context"
            raise self.error(msg)
        base = self.scopes[-1 - depth]
        if rest == ".":
            rest = ""

        segments = _split_path(rest)
        if segments is None:
            msg = f"Invalid path expression: {token!r}"
            raise self.error(msg)
        if segments and segments[0] in {"this", "."}:
            segments = segments[1:]
        return _lookup_chain(base, segments)

    def data_variable(self, token: str) -> str:
        if token.startswith("@root"):
            rest = token[len("@root") :].lstrip(".")
            segments = _split_path(rest) if rest else []
            if segments is None:
                msg = f"Invalid path expression: {token!r}"
                raise self.error(msg)
            return _lookup_chain(ROOT_NAME, segments)
        if not self.keys:
            msg = f"{token} is only available inside an each block"
            raise self.error(msg)
        if token == "@key":
            return self.keys[-1]
        if token in _DATA_VARIABLES:
            return _DATA_VARIABLES[token]
        msg = f"Unknown data variable: {token}"
        raise self.error(msg)

    # -- tags --------------------------------------------------------------

    def emit_text(self, text: str) -> None:
        if not text:
            return
        if "{" not in text:
            self.out.append(text)
        elif "endraw" in text:
            self.out.append('{{ "{" }}'.join(text.split("{")))
        else:
            self.out.append("{% raw %}" + text + "{% endraw %}")

    def emit_statement(self, statement: str) -> None:
        self.out.append("{% " + statement + " %}")

    def emit_output(self, expression: str) -> None:
        self.out.append("{{ " + expression + " }}")

    def handle_raw(self, body: str) -> None:
        args = self.split_args(body)
        if not args:
            msg = "Empty raw output tag"
            raise self.error(msg)
        self.emit_output(f"{HELPERS_NAME}.raw({self.call_expression(args)})")

    def call_expression(self, args: list[str]) -> str:
        name, rest = args[0], args[1:]
        if name == INCLUDE_HELPER:
            if len(rest) != 1:
                msg = "include expects exactly one partial name"
                raise self.error(msg)
            return f"{HELPERS_NAME}.include({self.literal_name(rest[0])!r})"
        if name in self.helper_names:
            call_args = "".join(", " + self.expression(arg) for arg in rest)
            return f"{HELPERS_NAME}.call({name!r}{call_args})"
        if rest:
            msg = f"Unknown helper: {name!r}"
            raise self.error(msg)
        return self.expression(name)

    def handle_body(self, body: str) -> None:
        body = body.strip()
        if not body:
            msg = "Empty mustache tag"
            raise self.error(msg)

        if body.startswith("#"):
            self.open_block(body[1:].strip())
        elif body.startswith("/"):
            self.close_block(body[1:].strip())
        elif body == "else" or body == "^":
            self.else_block(None)
        elif body.startswith("else "):
            self.else_block(body[len("else ") :].strip())
        elif body.startswith(">"):
            args = self.split_args(body[1:])
            if len(args) != 1:
                msg = "Partial tags expect exactly one partial name"
                raise self.error(msg)
            expression = f"{HELPERS_NAME}.include({self.literal_name(args[0])!r})"
            self.emit_output(expression)
        else:
            args = self.split_args(body)
            self.emit_output(self.call_expression(args))

    def condition(self, name: str, args: list[str]) -> str:
        if name == "ifEquals":
            if len(args) != 2:  # noqa: PLR2004
                msg = "ifEquals expects exactly two arguments"
                raise self.error(msg)
            left, right = (self.expression(arg) for arg in args)
            return f"{HELPERS_NAME}.equals({left}, {right})"
        if len(args) != 1:
            msg = f"{name} expects exactly one argument"
            raise self.error(msg)
        test = f"{HELPERS_NAME}.truthy({self.expression(args[0])})"
        return f"not {test}" if name == "unless" else test

    def open_block(self, body: str) -> None:
        args = self.split_args(body)
        if not args:
            msg = "Block tag without a helper name"
            raise self.error(msg)
        name, rest = args[0], args[1:]
        if name not in BLOCK_HELPERS:
            msg = f"Unknown block helper: {name!r}"
            raise self.error(msg)

        if name == "each":
            if len(rest) != 1:
                msg = "each expects exactly one argument"
                raise self.error(msg)
            iterable = self.expression(rest[0])
            depth = len(self.scopes)
            item, key = f"_hb_item{depth}", f"_hb_key{depth}"
            statement = f"for {key}, {item} in {HELPERS_NAME}.each({iterable})"
            self.emit_statement(statement)
            self.scopes.append(item)
            self.keys.append(key)
            self.blocks.append(_Block(name, self.line, scope_pushed=True))
            return

        self.emit_statement(f"if {self.condition(name, rest)}")
        self.blocks.append(_Block(name, self.line))

    def else_block(self, chained: str | None) -> None:
        if not self.blocks:
            msg = "{{else}} outside of a block"
            raise self.error(msg)
        block = self.blocks[-1]
        if block.has_else:
            msg = f"Duplicate {{{{else}}}} in {block.name} block"
            raise self.error(msg)

        if block.scope_pushed:
            if chained is not None:
                msg = "each blocks do not support chained else"
                raise self.error(msg)
            # the else branch of each runs in the enclosing context
            self.scopes.pop()
            self.keys.pop()
            block.scope_pushed = False
            block.has_else = True
            self.emit_statement("else")
            return

        if chained is None:
            block.has_else = True
            self.emit_statement("else")
            return

        args = self.split_args(chained)
        if not args or args[0] not in CONDITIONAL_BLOCKS:
            msg = f"Unsupported chained else: {chained!r}"
            raise self.error(msg)
        self.emit_statement(f"elif {self.condition(args[0], args[1:])}")

    def close_block(self, name: str) -> None:
        if not self.blocks:
            msg = f"Unexpected closing tag {{{{/{name}}}}}"
            raise self.error(msg)
        block = self.blocks.pop()
        if block.name != name:
            msg = (
                f"{{{{/{name}}}}} does not match {{{{#{block.name}}}}} "
                f"opened on line {block.line}"
            )
            raise self.error(msg)
        if block.scope_pushed:
            self.scopes.pop()
            self.keys.pop()
        self.emit_statement("endfor" if name == "each" else "endif")

    # -- driver ------------------------------------------------------------

    def literal(self, pos: int, end: int) -> str:
        text = self.source[pos:end]
        if "{{" in text:
            self.line += text[: text.index("{{")].count("\n")
            msg = "Unterminated mustache tag"
            raise self.error(msg)
        return text

    def run(self) -> str:
        pos = 0
        strip_next = False
        for match in _TAG_RE.finditer(self.source):
            text = self.literal(pos, match.start())
            if strip_next:
                text = text.lstrip()
            if match.group("lstrip"):
                text = text.rstrip()
            self.emit_text(text)
            self.line += self.source.count("\n", pos, match.start())

            if match.group("long_comment") is None and match.group("comment") is None:
                if match.group("raw") is not None:
                    self.handle_raw(match.group("raw"))
                else:
                    self.handle_body(match.group("body"))

            self.line += self.source.count("\n", match.start(), match.end())
            strip_next = bool(match.group("rstrip"))
            pos = match.end()

        text = self.literal(pos, len(self.source))
        self.emit_text(text.lstrip() if strip_next else text)

        if self.blocks:
            block = self.blocks[-1]
            self.line = block.line
            msg = f"Unclosed block {{{{#{block.name}}}}}"
            raise self.error(msg)
        return "".join(self.out)


def _unquote(token: str) -> str:
    return re.sub(r"\\(.)", r"\1", token[1:-1])


def _split_path(text: str) -> list[str] | None:
    segments: list[str] = []
    pos = 0
    while pos < len(text):
        if text[pos] in "./" and segments:
            pos += 1
        match = _SEGMENT_RE.match(text, pos)
        if match is None:
            return None
        segments.append(match.group(1) if match.group(1) is not None else match.group(2))
        pos = match.end()
    return segments


def _lookup_chain(base: str, segments: list[str]) -> str:
    expression = base
    for segment in segments:
        expression = f"{HELPERS_NAME}.lookup({expression}, {segment!r})"
    return expression


def translate(
    source: str,
    *,
    source_name: str = "<template>",
    helper_names: frozenset[str] = frozenset(),
) -> str:
    """Translate Handlebars-style template source into Jinja2 source.

    Args:
        source: The template text.
        source_name: Name used in error messages (usually the file path).
        helper_names: Names of inline helpers callable as ``{{name args}}``.

    Returns:
        Jinja2 template source.

    Raises:
        TemplateCompileError: If the template syntax is invalid.
    """
    return _Translator(source, source_name, helper_names).run()
