"""Front end turning source text into expression trees.

```
<statement> ::= <name> ":=" <term>     ; Define
              | <name> "::=" <term>    ; StaticDefine
              | <term>
<term>      ::= <atom>+                ; application, associating by left: a b c = ((a b) c)
              | <atom>* <abstraction>  ; abstraction bodies are greedy: λx.x y = λx.(x y) != (λx.x) y
<abstraction> ::= ("λ" | "\") <name> "." <term>
<atom>      ::= <name> | "(" <term> ")"

<comment>   ::= ";;" <char>*
```

Names are any run of characters other than whitespace, parentheses, "λ", "\", ".", ":" and ";". Multi-character names
are allowed, so applications must be separated by spaces or parentheses.
"""

import re

from lambdaeval.lang.error import ReaderError
from lambdaeval.pure.expression import App, Define, Lambda, StaticDefine, Var

COMMENT = ";;"
TOKEN = re.compile(r"(?P<lambda>[λ\\])|(?P<dot>\.)|(?P<open>\()|(?P<close>\))|(?P<name>[^\s().λ\\:;]+)|(?P<space>\s+)")
NAME = re.compile(r"[^\s().λ\\:;]+")


def tokenize(source, pos=0):
    """Returns list of (kind, text, start) for every non-whitespace token in source from pos onwards."""
    tokens = []
    while pos < len(source):
        match = TOKEN.match(source, pos)
        if match is None:
            raise ReaderError("'{}' contains stray character '{}'", (source, source[pos]), start=pos, end=pos + 1)
        if match.lastgroup != "space":
            tokens.append((match.lastgroup, match.group(), pos))
        pos = match.end()
    return tokens


class Reader:
    """Recursive descent over the tokens of a single term."""

    def __init__(self, source, offset=0):
        self.source = source
        self.tokens = tokenize(source, offset)
        self.pos = 0

    def error(self, msg, token=None):
        if token is None:
            start = len(self.source)
            return ReaderError(msg, self.source, start=max(start - 1, 0), end=start)
        __, text, start = token
        return ReaderError(msg, self.source, start=start, end=start + len(text))

    def peek(self):
        return self.tokens[self.pos] if self.pos < len(self.tokens) else None

    def expect(self, kind, msg):
        token = self.peek()
        if token is None or token[0] != kind:
            raise self.error(msg, token)
        self.pos += 1
        return token

    def read(self):
        """Reads the whole source as one term."""
        term = self.term()
        token = self.peek()
        if token is not None:
            raise self.error("'{}' has unmatched ')'", token)
        return term

    def term(self):
        items = []
        token = self.peek()
        while token is not None and token[0] != "close":
            if token[0] == "lambda":
                items.append(self.abstraction())
                break
            items.append(self.atom())
            token = self.peek()

        if not items:
            raise self.error("'{}' is missing a λ-term", token)

        term = items[0]
        for argument in items[1:]:
            term = App(term, argument)
        return term

    def abstraction(self):
        self.expect("lambda", "'{}' expected 'λ'")
        __, parameter, __ = self.expect("name", "'{}' has an abstraction without a bound variable")
        self.expect("dot", "'{}' expected '.' after bound variable")
        return Lambda(parameter, self.term())

    def atom(self):
        token = self.peek()
        if token[0] == "name":
            self.pos += 1
            return Var(token[1])
        elif token[0] == "open":
            self.pos += 1
            term = self.term()
            self.expect("close", "'{}' has mismatched parentheses")
            return term
        raise self.error("'{}' has a stray builtin", token)


def read_expression(source):
    """Returns the expression tree of a single λ-term."""
    return Reader(source).read()


def read_statement(source):
    """Returns the Define, StaticDefine or plain expression written in source."""
    for declare, cls in (("::=", StaticDefine), (":=", Define)):
        idx = source.find(declare)
        if idx == -1:
            continue

        name = source[:idx].strip()
        if not NAME.fullmatch(name):
            raise ReaderError("l-value of '{}' is not a valid variable", source, end=max(idx, 1))
        return cls(name, Reader(source, idx + len(declare)).read())

    return read_expression(source)


def strip_comment(line):
    """Gets rid of comments and trailing whitespace."""
    if COMMENT in line:
        line = line[:line.index(COMMENT)]
    return line.rstrip()


def read_program(text):
    """Returns list of (line_num, source, statement) for every statement in text. A statement whose parentheses are
    still open at the end of a line continues on the next one.
    """
    statements = []
    pending, start_num = "", None

    for line_num, line in enumerate(text.splitlines(), 1):
        line = strip_comment(line)
        if not pending and not line.strip():
            continue

        if not pending:
            start_num = line_num
        pending = f"{pending} {line.strip()}" if pending else line.strip()

        if pending.count("(") > pending.count(")"):
            continue

        statements.append((start_num, pending, read_statement(pending)))
        pending = ""

    if pending:
        raise ReaderError("'{}' has mismatched parentheses", pending, start=len(pending) - 1)
    return statements
