"""Normalize a concrete PHP tree into php-ast style abstract nodes.

A concrete entity converts to zero, one or many results:

* punctuation, keywords, comments and the open tag disappear;
* literals and bare names become scalars;
* wrapper nodes such as ``expression_statement`` hand their children's
  results straight to the parent;
* every other named node becomes an ``AbstractNode``.

Parse errors never stop the conversion. ``ERROR`` nodes are kept as nodes and
missing tokens are dropped, and both are reported as diagnostics.
"""

from collections.abc import Callable

from phpnav.core.cst import ConcreteEntity, ConcreteTree
from phpnav.core.versions import NULLSAFE_AST_VERSION
from phpnav.models import AbstractNode, Diagnostic, Scalar

Converted = list[AbstractNode | Scalar]

_KIND_NAMES: dict[str, str] = {
    "program": "AST_STMT_LIST",
    "compound_statement": "AST_STMT_LIST",
    "declaration_list": "AST_STMT_LIST",
    "variable_name": "AST_VAR",
    "member_access_expression": "AST_PROP",
    "member_call_expression": "AST_METHOD_CALL",
    "scoped_call_expression": "AST_STATIC_CALL",
    "scoped_property_access_expression": "AST_STATIC_PROP",
    "class_constant_access_expression": "AST_CLASS_CONST",
    "function_call_expression": "AST_CALL",
    "object_creation_expression": "AST_NEW",
    "assignment_expression": "AST_ASSIGN",
    "binary_expression": "AST_BINARY_OP",
    "unary_op_expression": "AST_UNARY_OP",
    "class_declaration": "AST_CLASS",
    "interface_declaration": "AST_CLASS",
    "trait_declaration": "AST_CLASS",
    "enum_declaration": "AST_CLASS",
    "method_declaration": "AST_METHOD",
    "function_definition": "AST_FUNC_DECL",
    "anonymous_function": "AST_CLOSURE",
    "anonymous_function_creation_expression": "AST_CLOSURE",
    "arrow_function": "AST_ARROW_FUNC",
    "formal_parameters": "AST_PARAM_LIST",
    "simple_parameter": "AST_PARAM",
    "arguments": "AST_ARG_LIST",
    "echo_statement": "AST_ECHO",
    "return_statement": "AST_RETURN",
    "if_statement": "AST_IF",
    "while_statement": "AST_WHILE",
    "for_statement": "AST_FOR",
    "foreach_statement": "AST_FOREACH",
    "array_creation_expression": "AST_ARRAY",
    "array_element_initializer": "AST_ARRAY_ELEM",
    "subscript_expression": "AST_DIM",
    "const_declaration": "AST_CONST_DECL",
    "const_element": "AST_CONST_ELEM",
    "property_declaration": "AST_PROP_GROUP",
    "property_element": "AST_PROP_ELEM",
    "qualified_name": "AST_NAME",
    "named_type": "AST_TYPE",
    "encapsed_string": "AST_ENCAPS_LIST",
    "string": "AST_ENCAPS_LIST",
}

# Kinds whose mapping depends on the target version: (before, from NULLSAFE_AST_VERSION on).
_NULLSAFE_KIND_NAMES: dict[str, tuple[str, str]] = {
    "nullsafe_member_access_expression": ("AST_PROP", "AST_NULLSAFE_PROP"),
    "nullsafe_member_call_expression": ("AST_METHOD_CALL", "AST_NULLSAFE_METHOD_CALL"),
}

_TRANSPARENT_KINDS = frozenset({"expression_statement", "parenthesized_expression", "argument"})

_DROPPED_KINDS = frozenset({"comment", "php_tag", "php_end_tag"})

_STRING_KINDS = frozenset({"string", "encapsed_string"})


def _parse_int(text: str) -> int | str:
    digits = text.replace("_", "")
    # Legacy octal: 0755
    if len(digits) > 1 and digits[0] == "0" and digits.isdigit():
        digits = "0o" + digits[1:]
    try:
        return int(digits, 0)
    except ValueError:
        return text


def _parse_float(text: str) -> float | str:
    try:
        return float(text.replace("_", ""))
    except ValueError:
        return text


_SCALAR_KINDS: dict[str, Callable[[str], Scalar]] = {
    "name": str,
    "integer": _parse_int,
    "float": _parse_float,
    "string_content": str,
    "string_value": str,
    "escape_sequence": str,
}


class TreeBuilder:
    """Convert a ``ConcreteTree`` into an abstract tree rooted at ``AST_STMT_LIST``.

    The walk is an explicit-stack post-order over the arena. Every entity's
    result passes through ``_after_convert`` once its children are done, so
    subclasses can inspect or annotate results bottom-up.
    """

    def __init__(self, tree: ConcreteTree, version: int) -> None:
        self.tree = tree
        self.version = version
        self.diagnostics: list[Diagnostic] = []

    def build(self) -> AbstractNode:
        results = self._convert(self.tree.root.index)
        if len(results) == 1 and isinstance(results[0], AbstractNode):
            return results[0]
        root = self.tree.root
        return self._make_node("AST_STMT_LIST", root, results)

    def _convert(self, index: int) -> Converted:
        results: dict[int, Converted] = {}
        stack: list[tuple[int, bool]] = [(index, False)]
        while stack:
            current, expanded = stack.pop()
            entity = self.tree[current]
            if expanded:
                children: Converted = []
                for child in entity.children:
                    children.extend(results.pop(child))
                results[current] = self._after_convert(current, self._convert_node(entity, children))
            elif entity.is_missing:
                self._report(entity, f"Missing '{entity.kind}'")
                results[current] = self._after_convert(current, [])
            elif entity.is_token and not entity.is_error:
                results[current] = self._after_convert(current, self._convert_token(entity))
            else:
                if entity.is_error:
                    self._report(entity, "Unexpected syntax")
                stack.append((current, True))
                stack.extend((child, False) for child in reversed(entity.children))
        return results[index]

    def _after_convert(self, index: int, converted: Converted) -> Converted:
        return converted

    def _convert_node(self, entity: ConcreteEntity, children: Converted) -> Converted:
        if entity.is_error:
            return [self._make_node("ERROR", entity, children)]
        if entity.kind in _TRANSPARENT_KINDS:
            return children
        if entity.kind in _STRING_KINDS:
            return self._convert_string(entity, children)
        return [self._make_node(self._kind_name(entity.kind), entity, children)]

    def _convert_token(self, entity: ConcreteEntity) -> Converted:
        if not entity.is_named or entity.kind in _DROPPED_KINDS:
            return []
        text = entity.text.decode("utf-8", errors="replace")
        scalar = _SCALAR_KINDS.get(entity.kind)
        if scalar is not None:
            return [scalar(text)]
        return [self._make_node(self._kind_name(entity.kind), entity, [])]

    def _convert_string(self, entity: ConcreteEntity, parts: Converted) -> Converted:
        if all(isinstance(p, str) for p in parts):
            return ["".join(str(p) for p in parts)]
        return [self._make_node(self._kind_name(entity.kind), entity, parts)]

    def _kind_name(self, kind: str) -> str:
        if kind in _NULLSAFE_KIND_NAMES:
            legacy, current = _NULLSAFE_KIND_NAMES[kind]
            return current if self.version >= NULLSAFE_AST_VERSION else legacy
        return _KIND_NAMES.get(kind, kind)

    def _make_node(self, kind: str, entity: ConcreteEntity, children: Converted) -> AbstractNode:
        return AbstractNode(
            kind=kind,
            line=entity.start_row + 1,
            start_byte=entity.start_byte,
            end_byte=entity.end_byte,
            children=children,
        )

    def _report(self, entity: ConcreteEntity, message: str) -> None:
        self.diagnostics.append(
            Diagnostic(
                message=message,
                start=entity.start_byte,
                length=entity.end_byte - entity.start_byte,
                line=entity.start_row + 1,
            )
        )
