from phpnav.core.converter import ConversionResult, NodeMappingConverter, convert
from phpnav.core.cst import ConcreteEntity, ConcreteTree, parse_concrete_tree
from phpnav.core.locator import NameTokenPolicy, SelectionPolicy, locate
from phpnav.core.versions import SUPPORTED_AST_VERSIONS, UnsupportedVersionError

__all__ = [
    "SUPPORTED_AST_VERSIONS",
    "ConcreteEntity",
    "ConcreteTree",
    "ConversionResult",
    "NameTokenPolicy",
    "NodeMappingConverter",
    "SelectionPolicy",
    "UnsupportedVersionError",
    "convert",
    "locate",
    "parse_concrete_tree",
]
