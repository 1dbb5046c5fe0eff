"""Serialize literal AST back to source syntax.

Converts Template and EncodedString nodes to source text. Useful for:
- Formatters and request file rewriters
- Diagnostics that quote the offending literal
- Property-based testing (roundtrip: parse → serialize → parse)

For any node produced by the parser, the output is exactly the source
text the node was parsed from.

Python 3.13+.
"""

from .ast import EncodedString, Expression, Interpolation, Template, TextElement
from .parser.primitives import decode_raw_text


class SerializationValidationError(ValueError):
    """Raised when AST validation fails during serialization.

    This error indicates the AST would not parse back to itself.
    Common causes:
    - TextElement whose raw text does not decode to its decoded text
    - Raw text containing a character that ends the literal ('#' unquoted,
      '"' quoted) or trailing spaces in an unquoted value
    - Raw text containing '{{' or ending with an unpaired '{'
    - Malformed AST nodes from programmatic construction
    """


def _validate_text(element: TextElement, *, quoted: bool) -> None:
    """Validate that a text element serializes to parseable source."""
    try:
        decoded = decode_raw_text(element.raw)
    except ValueError as e:
        msg = f"TextElement raw text {element.raw!r} is not valid literal text: {e}"
        raise SerializationValidationError(msg) from e

    if decoded != element.decoded:
        msg = (
            f"TextElement raw text {element.raw!r} decodes to {decoded!r}, "
            f"not {element.decoded!r}"
        )
        raise SerializationValidationError(msg)

    terminator = '"' if quoted else "#"
    if terminator in element.raw:
        msg = f"TextElement raw text {element.raw!r} contains unescaped {terminator!r}"
        raise SerializationValidationError(msg)

    if "{{" in element.raw:
        msg = f"TextElement raw text {element.raw!r} contains '{{{{'"
        raise SerializationValidationError(msg)

    # A raw '{' is only emitted together with the character after it.
    if element.raw.endswith("{"):
        msg = f"TextElement raw text {element.raw!r} ends with an unpaired '{{'"
        raise SerializationValidationError(msg)


def _validate_template(template: Template) -> None:
    for element in template.elements:
        if TextElement.guard(element):
            _validate_text(element, quoted=template.quoted)

    if template.quoted or not template.elements:
        return
    last = template.elements[-1]
    if TextElement.guard(last) and last.raw.endswith((" ", "\t")):
        msg = f"Unquoted template ends with whitespace: {last.raw!r}"
        raise SerializationValidationError(msg)


class TemplateSerializer:
    """Converts AST back to source string.

    Thread-safe serializer with no mutable instance state.
    All serialization state is local to the serialize() call.

    Usage:
        >>> from templit.syntax import parse_template, TemplateSerializer
        >>> template = parse_template('"Hi {{ name }}!"')
        >>> TemplateSerializer().serialize(template)
        '"Hi {{ name }}!"'
    """

    def serialize(self, node: Template | EncodedString, *, validate: bool = False) -> str:
        """Serialize a Template or EncodedString to source text.

        Args:
            node: Template or EncodedString AST node
            validate: If True, validate the node before serialization
                     (default: False). Checks that text elements round-trip.

        Returns:
            Source text

        Raises:
            SerializationValidationError: If validate=True and the node is invalid
        """
        output: list[str] = []
        match node:
            case Template():
                if validate:
                    _validate_template(node)
                self._serialize_template(node, output)
            case EncodedString():
                if validate:
                    self._validate_key(node)
                self._serialize_key(node, output)
        return "".join(output)

    def _serialize_template(self, node: Template, output: list[str]) -> None:
        if node.quoted:
            output.append('"')
        for element in node.elements:
            match element:
                case TextElement():
                    output.append(element.raw)
                case Interpolation():
                    self._serialize_expression(element.expression, output)
        if node.quoted:
            output.append('"')

    def _serialize_expression(self, expr: Expression, output: list[str]) -> None:
        output.append("{{")
        output.append(expr.space0.value)
        output.append(expr.variable.name)
        output.append(expr.space1.value)
        output.append("}}")

    def _serialize_key(self, node: EncodedString, output: list[str]) -> None:
        if node.quoted:
            output.append(f'"{node.raw}"')
        else:
            output.append(node.raw)

    def _validate_key(self, node: EncodedString) -> None:
        try:
            decoded = decode_raw_text(node.raw)
        except ValueError as e:
            msg = f"Key raw text {node.raw!r} is not valid literal text: {e}"
            raise SerializationValidationError(msg) from e
        if decoded != node.decoded:
            msg = f"Key raw text {node.raw!r} decodes to {decoded!r}, not {node.decoded!r}"
            raise SerializationValidationError(msg)


def serialize(node: Template | EncodedString, *, validate: bool = False) -> str:
    """Serialize a Template or EncodedString to source text.

    Convenience function for TemplateSerializer.serialize().

    Args:
        node: Template or EncodedString AST node
        validate: If True, validate the node before serialization (default: False)

    Returns:
        Source text

    Raises:
        SerializationValidationError: If validate=True and the node is invalid

    Example:
        >>> from templit.syntax import parse_template, serialize
        >>> template = parse_template("hello\\\\u{20}{{name}} # comment")
        >>> serialize(template)
        'hello\\\\u{20}{{name}}'
    """
    serializer = TemplateSerializer()
    return serializer.serialize(node, validate=validate)
