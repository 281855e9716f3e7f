from onion.reader.parser import Parser, parse_one, parse_program

__all__ = ["Parser", "parse_one", "parse_program"]
