"""A small interactive command shell: tokenizer, parser, expansion and executor."""

__version__ = "0.1.0"