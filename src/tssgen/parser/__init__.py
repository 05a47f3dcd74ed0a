from tssgen.parser.errors import ParseError
from tssgen.parser.transformer import parse_css, split_selectors

__all__ = ["ParseError", "parse_css", "split_selectors"]
