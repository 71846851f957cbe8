"""
Route compilation.

Turns a route's path and hostname templates into a ``CompiledRoute``:
an anchored regex for matching plus a token stream for generation.

A template such as ``/blog/{page}.{_format}`` is scanned for ``{name}``
placeholders. Each placeholder becomes a ``VariableToken`` carrying the
separator character in front of it (if any) and the regex body its value
must match; the text between placeholders becomes ``TextToken`` entries.
A trailing run of path variables that all have defaults is optional, both
when matching and when generating.
"""

import re
import sys
from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeAlias

from compass.exceptions import LogicError

if TYPE_CHECKING:
    from compass.route import Route


# Characters treated as separators in front of optional placeholders.
# Such a separator is left out together with the placeholder when the
# placeholder takes its default value.
SEPARATORS: str = "/,;.:-_~+*=@|"

# Innermost {name} placeholder; \w cannot match "{" or "}"
VARIABLE_PATTERN: re.Pattern[str] = re.compile(r"\{(\w+)\}")

PATH_SEPARATOR: str = "/"
HOSTNAME_SEPARATOR: str = "."


@dataclass(frozen=True, slots=True)
class TextToken:
    """Literal template text."""

    text: str


@dataclass(frozen=True, slots=True)
class VariableToken:
    """
    A ``{name}`` placeholder.

    ``prefix`` is the separator character that preceded the placeholder in
    the template (or ``""``), ``regex`` the body its value must match.
    """

    prefix: str
    regex: str
    name: str


Token: TypeAlias = TextToken | VariableToken


@dataclass(frozen=True, slots=True)
class CompiledRoute:
    """
    Immutable result of compiling a Route.

    ``tokens`` and ``hostname_tokens`` are stored tail-first so a generator
    can prepend each one to the URL built so far. The variable lists keep
    template (capture group) order.
    """

    static_prefix: str
    regex: re.Pattern[str]
    tokens: tuple[Token, ...]
    path_variables: tuple[str, ...]
    hostname_regex: re.Pattern[str] | None = None
    hostname_tokens: tuple[Token, ...] = ()
    hostname_variables: tuple[str, ...] = ()
    variables: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class _CompiledPattern:
    static_prefix: str
    regex: re.Pattern[str]
    tokens: tuple[Token, ...]
    variables: tuple[str, ...]


class RouteCompiler:
    """Compiles Route instances into CompiledRoute instances."""

    def compile(self, route: "Route") -> CompiledRoute:
        """
        Compile both templates of a route.

        Raises ``LogicError`` if a template references the same variable
        name more than once.
        """
        hostname_regex: re.Pattern[str] | None = None
        hostname_tokens: tuple[Token, ...] = ()
        hostname_variables: tuple[str, ...] = ()

        if route.hostname:
            result = self.compile_pattern(route, route.hostname, is_hostname=True)
            hostname_regex = result.regex
            hostname_tokens = result.tokens
            hostname_variables = result.variables

        result = self.compile_pattern(route, route.path, is_hostname=False)

        # Hostname variables first, first occurrence wins
        variables = tuple(dict.fromkeys(hostname_variables + result.variables))

        return CompiledRoute(
            static_prefix=result.static_prefix,
            regex=result.regex,
            tokens=result.tokens,
            path_variables=result.variables,
            hostname_regex=hostname_regex,
            hostname_tokens=hostname_tokens,
            hostname_variables=hostname_variables,
            variables=variables,
        )

    def compile_pattern(
        self,
        route: "Route",
        pattern: str,
        is_hostname: bool,
    ) -> _CompiledPattern:
        """Tokenize one template and build its anchored regex."""
        tokens: list[Token] = []
        variables: list[str] = []
        pos = 0
        default_separator = HOSTNAME_SEPARATOR if is_hostname else PATH_SEPARATOR

        for match in VARIABLE_PATTERN.finditer(pattern):
            var_name = match.group(1)
            preceding_text = pattern[pos:match.start()]
            pos = match.end()
            preceding_char = preceding_text[-1:]
            is_separator = preceding_char != "" and preceding_char in SEPARATORS

            if var_name in variables:
                raise LogicError(
                    f'Route pattern "{pattern}" cannot reference variable name '
                    f'"{var_name}" more than once.'
                )

            if is_separator and len(preceding_text) > 1:
                tokens.append(TextToken(preceding_text[:-1]))
            elif not is_separator and preceding_text:
                tokens.append(TextToken(preceding_text))

            regex = route.get_requirement(var_name)
            if regex is None:
                # Forbid the default separator and the next static separator,
                # so that {page} in "/{page}.{_format}" stops at the dot.
                next_separator = self.find_next_separator(pattern[pos:])
                excluded = re.escape(default_separator)
                if next_separator and next_separator != default_separator:
                    excluded += re.escape(next_separator)
                regex = f"[^{excluded}]+"

            tokens.append(
                VariableToken(
                    prefix=preceding_char if is_separator else "",
                    regex=regex,
                    name=var_name,
                )
            )
            variables.append(var_name)

        if pos < len(pattern):
            tokens.append(TextToken(pattern[pos:]))

        # Hostname variables are always mandatory
        first_optional = sys.maxsize
        if not is_hostname:
            for index in range(len(tokens) - 1, -1, -1):
                token = tokens[index]
                if isinstance(token, VariableToken) and route.has_default(token.name):
                    first_optional = index
                else:
                    break

        regex_source = "".join(
            self.compute_regex(tokens, index, first_optional)
            for index in range(len(tokens))
        )

        static_prefix = ""
        if tokens and isinstance(tokens[0], TextToken):
            static_prefix = tokens[0].text

        return _CompiledPattern(
            static_prefix=static_prefix,
            regex=re.compile(f"^{regex_source}$"),
            tokens=tuple(reversed(tokens)),
            variables=tuple(variables),
        )

    @staticmethod
    def find_next_separator(pattern: str) -> str:
        """Return the separator that follows a placeholder, or ``""``."""
        if not pattern:
            return ""
        # An immediately following placeholder is skipped over
        pattern = VARIABLE_PATTERN.sub("", pattern, count=1)
        if pattern and pattern[0] in SEPARATORS:
            return pattern[0]
        return ""

    @staticmethod
    def compute_regex(tokens: list[Token], index: int, first_optional: int) -> str:
        """Regex fragment for the token at ``index``."""
        token = tokens[index]

        if isinstance(token, TextToken):
            return re.escape(token.text)

        if index == 0 and first_optional == 0:
            # A lone optional variable: the separator is still required
            return f"{re.escape(token.prefix)}({token.regex})?"

        regex = f"{re.escape(token.prefix)}({token.regex})"
        if index >= first_optional:
            # Each optional token opens a non-capturing group; the last
            # token closes all of them.
            regex = "(?:" + regex
            if index == len(tokens) - 1:
                closing = len(tokens) - first_optional - (1 if first_optional == 0 else 0)
                regex += ")?" * closing
        return regex
